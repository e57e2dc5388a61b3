"""
Test suite for the HTML diagram viewer.

System role: Verification of the HTML wrapper stage
"""

import pytest

from docchat.core.diagrams.html_viewer import MERMAID_SCRIPT_URL, build_viewer_html


class TestBuildViewerHtml:
    """Test suite for build_viewer_html."""

    def test_viewer_should_inline_svg_and_link_artifacts(self) -> None:
        # Act
        page = build_viewer_html(
            "Net", "#123456", "/api/v1/diagrams/source/a.d2", "/api/v1/diagrams/svg/a.svg",
            svg_markup="<svg id='inline'></svg>",
        )

        # Assert
        assert "<svg id='inline'></svg>" in page
        assert 'href="/api/v1/diagrams/source/a.d2"' in page
        assert 'href="/api/v1/diagrams/svg/a.svg"' in page
        assert MERMAID_SCRIPT_URL not in page
        assert "function zoom" in page

    def test_viewer_should_render_mermaid_client_side(self) -> None:
        # Act
        page = build_viewer_html("Flow", "#123456", "/s", "/v", mermaid_source="graph TD\nA --> B")

        # Assert
        assert '<pre class="mermaid">graph TD\nA --&gt; B</pre>' in page
        assert MERMAID_SCRIPT_URL in page

    def test_viewer_should_escape_title(self) -> None:
        page = build_viewer_html("<b>x</b>", "#000000", "/s", "/v", svg_markup="<svg/>")
        assert "&lt;b&gt;x&lt;/b&gt;" in page

    def test_viewer_should_require_a_body(self) -> None:
        with pytest.raises(ValueError):
            build_viewer_html("t", "#000000", "/s", "/v")

    def test_viewer_without_svg_should_omit_download_link(self) -> None:
        # Act
        page = build_viewer_html("Flow", "#123456", "/s", None, mermaid_source="pie\n  \"a\" : 1")

        # Assert
        assert "Download SVG" not in page
        assert 'href="/s"' in page
