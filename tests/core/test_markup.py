"""
Test suite for diagram markup helpers.

Covers code-fence stripping, simple-markup validation and D2 repair.

System role: Verification of markup cleanup
"""

import pytest

from docchat.core.diagrams.fallback_templates import FALLBACK_TEMPLATES
from docchat.core.diagrams.markup import (
    comment_title,
    is_valid_simple_markup,
    preprocess_d2,
    strip_code_fences,
)
from docchat.models.diagram import DiagramCategory


class TestStripCodeFences:
    """Test suite for strip_code_fences."""

    @pytest.mark.parametrize(
        "raw",
        [
            "```d2\na -> b\n```",
            "```\na -> b\n```",
            "  a -> b  ",
        ],
    )
    def test_strip_code_fences_should_return_bare_markup(self, raw: str) -> None:
        assert strip_code_fences(raw) == "a -> b"

    def test_strip_code_fences_should_handle_none(self) -> None:
        assert strip_code_fences(None) == ""


class TestIsValidSimpleMarkup:
    """Test suite for is_valid_simple_markup."""

    def test_short_markup_should_be_rejected(self) -> None:
        assert is_valid_simple_markup("graph TD\nA-->B", min_length=40) is False

    def test_markup_without_header_should_be_rejected(self) -> None:
        markup = "A[Start] --> B[Middle] --> C[End] --> D[Done] --> E[Really done]"
        assert is_valid_simple_markup(markup, min_length=40) is False

    def test_flowchart_should_be_accepted(self) -> None:
        markup = "flowchart LR\n  A[Source Environment] --> B[Target Cloud]\n  B --> C[Validation]"
        assert is_valid_simple_markup(markup, min_length=40) is True

    def test_sequence_diagram_should_be_accepted(self) -> None:
        markup = "sequenceDiagram\n  participant User\n  participant Platform\n  User->>Platform: migrate"
        assert is_valid_simple_markup(markup, min_length=40) is True

    @pytest.mark.parametrize("category", list(DiagramCategory))
    def test_fallback_templates_should_be_valid(self, category: DiagramCategory) -> None:
        """Templates must pass the same validation as model output."""
        assert is_valid_simple_markup(FALLBACK_TEMPLATES[category], min_length=40) is True


class TestPreprocessD2:
    """Test suite for preprocess_d2."""

    def test_preprocess_should_remove_padding(self) -> None:
        # Arrange
        markup = "server: {\n  padding: 20\n  shape: rectangle\n}\n"

        # Act
        fixed = preprocess_d2(markup)

        # Assert
        assert "padding" not in fixed
        assert "shape: rectangle" in fixed

    def test_preprocess_should_close_unbalanced_braces(self) -> None:
        # Arrange
        markup = "cloud: {\n  vpc: {\n    app -> db\n"

        # Act
        fixed = preprocess_d2(markup)

        # Assert
        assert fixed.count("{") == fixed.count("}")

    def test_preprocess_should_keep_balanced_markup(self) -> None:
        assert preprocess_d2("a -> b\n") == "a -> b\n"


class TestCommentTitle:
    """Test suite for comment_title."""

    def test_comment_title_should_read_first_comment(self) -> None:
        assert comment_title("# Migration Overview\na -> b\n# second") == "Migration Overview"

    def test_comment_title_should_return_none_without_comment(self) -> None:
        assert comment_title("a -> b") is None
