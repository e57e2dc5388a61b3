"""
Test suite for DiagramSpecSynthesizer.

Covers spec completeness for every category, context term extraction,
titles and unique ids.

System role: Verification of diagram spec synthesis
"""

import random

import pytest

from docchat.core.diagrams.catalog import CATALOG, FALLBACK_GLOSSARY
from docchat.core.diagrams.spec_synthesizer import DiagramSpecSynthesizer, to_base36
from docchat.models.diagram import DiagramCategory, DiagramIntent


def _intent(category: DiagramCategory, prompt: str = "Show RiverMeadow migration steps") -> DiagramIntent:
    return DiagramIntent(is_diagram_request=True, category=category, prompt=prompt)


class TestToBase36:
    """Test suite for to_base36."""

    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0"), (35, "z"), (36, "10"), (1295, "zz"), (46656, "1000")],
    )
    def test_to_base36_should_encode_known_values(self, value: int, expected: str) -> None:
        assert to_base36(value) == expected


class TestSynthesize:
    """Test suite for synthesize."""

    @pytest.mark.parametrize("category", list(DiagramCategory))
    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_synthesize_should_fill_every_field_for_every_category(
        self, category: DiagramCategory, seed: int
    ) -> None:
        """Every spec has elements and a full palette."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=random.Random(seed))

        # Act
        spec = synthesizer.synthesize(_intent(category))

        # Assert
        assert spec.category == category
        assert len(spec.elements) > 0
        assert spec.specific_type in CATALOG[category].specific_types
        assert spec.layout in CATALOG[category].layouts
        for color in (spec.color_palette.primary, spec.color_palette.secondary, spec.color_palette.accent):
            assert color.startswith("#") and len(color) == 7

    def test_synthesize_should_start_elements_with_chosen_set(self, stub_rng, fixed_clock) -> None:
        """Base element set comes first; context terms follow."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=stub_rng, clock=fixed_clock)

        # Act
        spec = synthesizer.synthesize(_intent(DiagramCategory.MIGRATION), ["Replication to Google Cloud"])

        # Assert
        base = CATALOG[DiagramCategory.MIGRATION].element_sets[0]
        assert spec.elements[: len(base)] == base
        assert "Replication" in spec.elements
        assert "Google Cloud" in spec.elements

    def test_synthesize_should_use_intent_snippets_when_none_given(self, stub_rng, fixed_clock) -> None:
        """The classifier's snippets are used by default."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=stub_rng, clock=fixed_clock)
        intent = DiagramIntent(
            is_diagram_request=True,
            category=DiagramCategory.CLOUD,
            prompt="draw it",
            context_snippets=("Kubernetes cluster",),
        )

        # Act
        spec = synthesizer.synthesize(intent)

        # Assert
        assert "Kubernetes" in spec.elements

    def test_unique_id_should_embed_epoch_millis(self, fixed_clock) -> None:
        """Ids are ``<epochMillis>-<rand36>-<rand36>``."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=random.Random(5), clock=fixed_clock)

        # Act
        spec = synthesizer.synthesize(_intent(DiagramCategory.PROCESS))

        # Assert
        millis, first, second = spec.unique_id.split("-")
        assert millis == "1704067200000"
        assert len(first) == 6 and len(second) == 6

    def test_unique_ids_should_differ_between_calls(self, fixed_clock) -> None:
        """Same millisecond, different random suffixes."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=random.Random(7), clock=fixed_clock)

        # Act
        ids = {synthesizer.synthesize(_intent(DiagramCategory.NETWORK)).unique_id for _ in range(20)}

        # Assert
        assert len(ids) == 20


class TestExtractContextTerms:
    """Test suite for extract_context_terms."""

    def test_empty_snippets_should_use_fallback_glossary(self, stub_rng) -> None:
        """No usable context still yields a label plus the revision term."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=stub_rng)

        # Act
        terms = synthesizer.extract_context_terms([], epoch_millis=1704067200000)

        # Assert
        assert terms[0] == FALLBACK_GLOSSARY[0]
        assert terms[-1].startswith("Revision ")
        assert len(terms) == 2

    def test_malformed_snippets_should_not_raise(self, stub_rng) -> None:
        """Non-string entries are skipped."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=stub_rng)

        # Act
        terms = synthesizer.extract_context_terms([None, 3, "   "], epoch_millis=1)

        # Assert
        assert terms[0] in FALLBACK_GLOSSARY

    def test_terms_should_be_capped_at_three(self, stub_rng) -> None:
        """Two context terms at most, plus the revision term."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=stub_rng)
        snippet = "Replication, Cutover, Discovery and Snapshot via the Migration Engine"

        # Act
        terms = synthesizer.extract_context_terms([snippet], epoch_millis=1704067200000)

        # Assert
        assert len(terms) == 3
        assert terms[:2] == ["Migration Engine", "Replication"]

    def test_excluded_terms_should_not_repeat(self, stub_rng) -> None:
        """Terms already in the element set are skipped."""
        # Arrange
        synthesizer = DiagramSpecSynthesizer(rng=stub_rng)

        # Act
        terms = synthesizer.extract_context_terms(
            ["Replication and Cutover"], epoch_millis=1, exclude=["Replication"]
        )

        # Assert
        assert "Replication" not in terms
        assert "Cutover" in terms


class TestBuildTitle:
    """Test suite for build_title."""

    def test_build_title_should_use_first_three_long_words(self) -> None:
        # Act
        title = DiagramSpecSynthesizer.build_title(
            _intent(DiagramCategory.MIGRATION, "Show me the RiverMeadow migration architecture diagram")
        )

        # Assert
        assert title == "Migration Diagram: Show RiverMeadow migration"

    def test_build_title_should_fall_back_to_category_label(self) -> None:
        # Act
        title = DiagramSpecSynthesizer.build_title(_intent(DiagramCategory.CLOUD, "a b c"))

        # Assert
        assert title == "Cloud Diagram"
