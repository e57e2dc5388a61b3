"""
Test suite for FigureReferenceResolver.

Tests run against a fixed set of migration-guide images whose ids and
caption figure numbers deliberately disagree for some entries.

System role: Verification of citation resolution
"""

import pytest

from docchat.core.references.figure_resolver import FigureReferenceResolver, caption_figure_number
from docchat.models.document import DocumentImage


@pytest.fixture
def resolver() -> FigureReferenceResolver:
    """Resolver with one assumed AWS figure."""
    return FigureReferenceResolver(product_name="RiverMeadow", assumed_figure_ids={"aws": [3]})


def _ids(references) -> list[int | None]:
    return [ref.id for ref in references]


def _image(image_id: int, caption: str) -> DocumentImage:
    return DocumentImage(
        id=image_id, document_id=1, image_path=f"/uploads/images/{image_id}.png", caption=caption
    )


class TestCaptionFigureNumber:

    def test_should_read_number_from_caption(self) -> None:
        assert caption_figure_number("Figure 7: Appliance") == 7

    def test_should_return_none_without_label(self) -> None:
        assert caption_figure_number("Appliance") is None
        assert caption_figure_number(None) is None


class TestExplicitFigures:
    """Test suite for "Figure N" mentions in the answer."""

    def test_id_match_should_beat_caption_match(self, resolver, sample_images) -> None:
        # Arrange
        answer = "The inventory is listed in Figure 7."

        # Act
        references = resolver.resolve(answer, "Where is the inventory?", sample_images)

        # Assert
        assert _ids(references) == [7]
        assert references[0].caption == "Figure 9: Source inventory screen"

    def test_caption_number_should_be_used_when_no_id_matches(self, resolver, sample_images) -> None:
        references = resolver.resolve("Refer to Figure 9 for details.", "Where?", sample_images)

        assert _ids(references) == [7]

    def test_mentions_should_keep_answer_order(self, resolver, sample_images) -> None:
        references = resolver.resolve("Start with Figure 3, then Figure 1.", "Steps?", sample_images)

        assert _ids(references) == [3, 1]

    def test_figure_one_should_not_match_figure_twelve_caption(self, resolver) -> None:
        # Arrange
        images = [DocumentImage(id=5, document_id=1, image_path="/uploads/images/5.png", caption="Figure 12: Network")]

        # Act
        references = resolver.resolve("Figure 1 covers this.", "Question", images)

        # Assert
        assert references == []

    def test_reference_should_carry_image_path(self, resolver, sample_images) -> None:
        references = resolver.resolve("See Figure 3.", "Question", sample_images)

        assert references[0].image_path == "/uploads/images/3.png"
        assert references[0].type == "image"


class TestCanonicalFigure:
    """Test suite for OS migration questions."""

    def test_os_migration_question_should_always_cite_canonical_figure(self, resolver, sample_images) -> None:
        # Act
        references = resolver.resolve(
            "The process has three steps.",
            "How does RiverMeadow OS migration work?",
            sample_images,
        )

        # Assert
        assert _ids(references) == [8]
        assert references[0].caption == "Figure 8: OS-based migration workflow"

    def test_product_migration_question_should_cite_canonical_figure(self, resolver, sample_images) -> None:
        references = resolver.resolve("It copies the workload.", "Explain RiverMeadow migration", sample_images)

        assert 8 in _ids(references)

    def test_missing_canonical_image_should_be_skipped(self, resolver, sample_images) -> None:
        images = [img for img in sample_images if img.id != 8]

        references = resolver.resolve("Three steps.", "How does OS migration work?", images)

        assert references == []


class TestCloudTopics:
    """Test suite for cloud provider questions."""

    def test_provider_question_should_cite_matching_captions(self, resolver, sample_images) -> None:
        references = resolver.resolve(
            "You need a service account.",
            "What are the Google Cloud appliance prerequisites?",
            sample_images,
        )

        assert _ids(references) == [12]

    def test_assumed_figure_should_be_used_when_no_caption_matches(self, resolver, sample_images) -> None:
        # Arrange
        images = [img for img in sample_images if img.id != 12]

        # Act
        references = resolver.resolve("Use the launch wizard.", "How do I launch on AWS?", images)

        # Assert
        assert _ids(references) == [3]

    def test_provider_without_trigger_should_not_cite(self, resolver, sample_images) -> None:
        references = resolver.resolve("Pricing varies.", "How much does Azure cost?", sample_images)

        assert references == []

    def test_caption_cited_earlier_should_suppress_assumed_figure(self, resolver) -> None:
        # Arrange
        images = [
            _image(3, "Figure 3: Migration wizard overview"),
            _image(5, "Figure 5: AWS appliance launch"),
        ]

        # Act
        references = resolver.resolve("Follow Figure 5.", "How do I launch the appliance on AWS?", images)

        # Assert
        assert _ids(references) == [5]

    def test_provider_inside_another_word_should_not_match_caption(self, resolver) -> None:
        # Arrange
        images = [
            _image(3, "Figure 3: Migration wizard overview"),
            _image(4, "Figure 4: Regional data laws"),
        ]

        # Act
        references = resolver.resolve("Use the launch wizard.", "How do I launch on AWS?", images)

        # Assert
        assert _ids(references) == [3]

    def test_plural_caption_keyword_should_match(self, resolver) -> None:
        images = [_image(6, "Figure 6: Deployment prerequisites checklist")]

        references = resolver.resolve("Check the list.", "What are the GCP prerequisites?", images)

        assert _ids(references) == [6]


class TestImplicitSweep:
    """Test suite for visual answers without explicit figure mentions."""

    def test_visual_answer_without_topics_should_return_first_three_images(self, resolver, sample_images) -> None:
        references = resolver.resolve("Here is the diagram you asked for.", "Explain it please", sample_images)

        assert _ids(references) == [1, 3, 7]

    def test_visual_question_should_prefer_topic_matches(self, resolver, sample_images) -> None:
        references = resolver.resolve(
            "You deploy it from the console.",
            "Show me the appliance deployment",
            sample_images,
        )

        assert _ids(references) == [12]

    def test_sweep_should_not_run_when_figures_already_matched(self, resolver, sample_images) -> None:
        references = resolver.resolve("As shown in Figure 3, start here.", "Show me a diagram", sample_images)

        assert _ids(references) == [3]

    def test_sweep_should_use_alt_text_when_caption_missing(self, resolver) -> None:
        # Arrange
        images = [DocumentImage(id=2, document_id=1, image_path="/uploads/images/2.png", alt_text="Console view")]

        # Act
        references = resolver.resolve("This diagram shows the console.", "What?", images)

        # Assert
        assert references[0].caption == "Console view"


class TestLiteralCaptions:

    def test_quoted_alt_text_should_be_cited(self, resolver, sample_images) -> None:
        references = resolver.resolve("Open the Migration wizard to begin.", "How do I begin?", sample_images)

        assert _ids(references) == [3]
        assert references[0].caption == "Migration wizard"

    def test_quoted_caption_should_be_cited(self, resolver, sample_images) -> None:
        references = resolver.resolve(
            "The guide includes Figure 1: Company logo at the top.", "What is on page one?", sample_images
        )

        assert _ids(references) == [1]


class TestResolveProperties:
    """Properties that hold for every input."""

    def test_ids_should_be_unique_across_stages(self, resolver, sample_images) -> None:
        # Arrange
        answer = "Figure 8 shows it. Again, Figure 8: OS-based migration workflow. Here is the diagram."

        # Act
        references = resolver.resolve(answer, "How does RiverMeadow OS migration work?", sample_images)

        # Assert
        ids = _ids(references)
        assert ids == [8]
        assert len(ids) == len(set(ids))

    def test_no_images_should_yield_empty_list(self, resolver) -> None:
        assert resolver.resolve("Here is the diagram. Figure 3.", "Show me a diagram", []) == []

    def test_plain_answer_should_yield_empty_list(self, resolver, sample_images) -> None:
        assert resolver.resolve("It takes about an hour.", "How long does it take?", sample_images) == []
