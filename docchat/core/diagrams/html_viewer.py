"""
Interactive HTML diagram viewer.

A thin page over separately stored artifacts: it shows either the rendered
SVG inline or the Mermaid source rendered client-side, adds pan/zoom/drag
controls and links back to the source and SVG endpoints.

Dependencies: string.Template, html
System role: HTML wrapper stage of the render pipeline
"""

import html
from string import Template

MERMAID_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"

VIEWER_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>$title</title>
<style>
  body { margin: 0; font-family: Helvetica, Arial, sans-serif; background: #f6f7f9; }
  header { display: flex; gap: 8px; align-items: center; padding: 10px 16px;
           background: $primary; color: #fff; }
  header h1 { font-size: 16px; margin: 0 auto 0 0; }
  header button, header a { background: #fff; color: $primary; border: 0; border-radius: 4px;
           padding: 6px 10px; font-size: 13px; cursor: pointer; text-decoration: none; }
  #viewport { width: 100vw; height: calc(100vh - 48px); overflow: hidden; cursor: grab; }
  #canvas { transform-origin: 0 0; padding: 24px; display: inline-block; }
</style>
$head_extra
</head>
<body>
<header>
  <h1>$title</h1>
  <button type="button" onclick="zoom(1.2)">Zoom in</button>
  <button type="button" onclick="zoom(1 / 1.2)">Zoom out</button>
  <button type="button" onclick="resetView()">Reset</button>
$svg_link  <a href="$source_url" download>Download source</a>
</header>
<div id="viewport"><div id="canvas">$body</div></div>
<script>
  var scale = 1, x = 0, y = 0, dragging = false, startX = 0, startY = 0;
  var canvas = document.getElementById("canvas");
  var viewport = document.getElementById("viewport");
  function apply() { canvas.style.transform = "translate(" + x + "px," + y + "px) scale(" + scale + ")"; }
  function zoom(factor) { scale = Math.min(Math.max(scale * factor, 0.2), 8); apply(); }
  function resetView() { scale = 1; x = 0; y = 0; apply(); }
  viewport.addEventListener("wheel", function (e) { e.preventDefault(); zoom(e.deltaY < 0 ? 1.1 : 1 / 1.1); });
  viewport.addEventListener("mousedown", function (e) { dragging = true; startX = e.clientX - x; startY = e.clientY - y; viewport.style.cursor = "grabbing"; });
  window.addEventListener("mouseup", function () { dragging = false; viewport.style.cursor = "grab"; });
  window.addEventListener("mousemove", function (e) { if (dragging) { x = e.clientX - startX; y = e.clientY - startY; apply(); } });
</script>
$tail_extra
</body>
</html>
"""
)

MERMAID_HEAD = f'<script src="{MERMAID_SCRIPT_URL}"></script>'
MERMAID_TAIL = '<script>mermaid.initialize({ startOnLoad: true, securityLevel: "strict" });</script>'
SVG_LINK = '  <a href="{url}" download>Download SVG</a>\n'


def build_viewer_html(
    title: str,
    primary_color: str,
    source_url: str,
    svg_url: str | None,
    svg_markup: str | None = None,
    mermaid_source: str | None = None,
) -> str:
    """
    Render the viewer page.

    Exactly one of ``svg_markup`` (inline vector) or ``mermaid_source``
    (client-side renderer) is embedded; SVG wins when both are given. The
    SVG download link is left out when ``svg_url`` is None.

    Raises:
        ValueError: If neither body is provided
    """
    if svg_markup:
        body, head_extra, tail_extra = svg_markup, "", ""
    elif mermaid_source:
        body = f'<pre class="mermaid">{html.escape(mermaid_source)}</pre>'
        head_extra, tail_extra = MERMAID_HEAD, MERMAID_TAIL
    else:
        raise ValueError("Viewer needs either SVG markup or Mermaid source")

    return VIEWER_TEMPLATE.substitute(
        title=html.escape(title),
        primary=primary_color,
        svg_link=SVG_LINK.format(url=html.escape(svg_url, quote=True)) if svg_url else "",
        source_url=html.escape(source_url, quote=True),
        body=body,
        head_extra=head_extra,
        tail_extra=tail_extra,
    )
