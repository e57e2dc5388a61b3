"""
Diagram render pipeline.

LangGraph state machine turning a DiagramSpec into stored artifacts:

    structured_markup -> structured_render -> html_wrapper -> END
    structured_markup  (no markup)       -> simple_markup
    structured_render  (renderer failed) -> simple_markup
    simple_markup      (valid)           -> simple_render -> html_wrapper
    simple_markup      (invalid, failed) -> fallback_template -> simple_render

Recoverable errors (LLM failure, empty markup, renderer failure or
timeout) are recorded in state and move the request to the next tier.
Mermaid markup goes through mermaid-cli; when that fails the viewer still
renders the stored source client-side, so validated markup is never
swapped for the template. When the whole-request timeout fires, the
category template is written without calling any external tool.
DiagramRenderError is raised only when artifacts cannot be written.
PNG conversion is scheduled after an SVG exists and never awaited.

Dependencies: langgraph, asyncio, docchat.core.llm, docchat.core.diagrams
System role: Rendering stage of the diagram generation flow
"""

import asyncio
import logging
import operator
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, TypedDict

from langgraph.graph import END, StateGraph

from docchat.core.diagrams.artifact_store import ArtifactStore, artifact_url
from docchat.core.diagrams.fallback_templates import fallback_template
from docchat.core.diagrams.html_viewer import build_viewer_html
from docchat.core.diagrams.markup import (
    comment_title,
    is_valid_simple_markup,
    strip_code_fences,
)
from docchat.core.diagrams.prompts import (
    simple_system_prompt,
    spec_user_prompt,
    structured_system_prompt,
)
from docchat.core.diagrams.renderers import D2Renderer, MermaidRenderer, PngWriter
from docchat.core.exceptions import (
    DiagramRenderError,
    LLMProviderError,
    MarkupGenerationError,
    RendererError,
)
from docchat.models.diagram import DiagramArtifact, DiagramSpec, RenderTier

if TYPE_CHECKING:
    from docchat.core.llm.llm_provider import LLMProvider

logger = logging.getLogger(__name__)

RECOVERABLE_ERRORS = (LLMProviderError, MarkupGenerationError, RendererError, asyncio.TimeoutError)


class RenderState(TypedDict, total=False):
    """Graph state for one render request."""

    spec: DiagramSpec
    prompt: str
    stem: str
    tier: RenderTier
    language: str
    markup: str | None
    source_path: Path | None
    svg_path: Path | None
    html_path: Path | None
    errors: Annotated[list[str], operator.add]


def _error_entry(stage: str, error: BaseException) -> str:
    return f"{stage}: {type(error).__name__}: {error}"


class DiagramRenderPipeline:
    """Render specs through structured, simple and template tiers."""

    def __init__(
        self,
        llm: "LLMProvider",
        store: ArtifactStore,
        d2_renderer: D2Renderer,
        mermaid_renderer: MermaidRenderer | None = None,
        png_writer: PngWriter | None = None,
        product_name: str = "RiverMeadow",
        markup_temperature: float = 0.95,
        markup_max_tokens: int = 2000,
        min_markup_length: int = 40,
        pipeline_timeout_seconds: float = 90.0,
        public_base_path: str = "/api/v1/diagrams",
    ) -> None:
        """
        Initialize pipeline.

        Args:
            llm: Completion provider for both markup languages
            store: Artifact storage
            d2_renderer: Structured-markup renderer
            mermaid_renderer: Simple-markup renderer (mmdc by default)
            png_writer: Background rasterizer; None disables PNG output
            product_name: Product named in structured prompts
            markup_temperature: Sampling temperature for markup requests
            markup_max_tokens: Output cap for markup requests
            min_markup_length: Minimum accepted simple-markup length
            pipeline_timeout_seconds: Timeout for one whole render
            public_base_path: URL prefix for links inside the HTML viewer
        """
        self.llm = llm
        self.store = store
        self.d2_renderer = d2_renderer
        self.mermaid_renderer = mermaid_renderer or MermaidRenderer()
        self.png_writer = png_writer
        self.product_name = product_name
        self.markup_temperature = markup_temperature
        self.markup_max_tokens = markup_max_tokens
        self.min_markup_length = min_markup_length
        self.pipeline_timeout_seconds = pipeline_timeout_seconds
        self.public_base_path = public_base_path
        self._graph = self._build_graph()

    async def render(self, spec: DiagramSpec, prompt: str) -> DiagramArtifact:
        """
        Render one spec to source, SVG and HTML artifacts.

        Args:
            spec: Diagram spec from the synthesizer
            prompt: Original user prompt

        Returns:
            DiagramArtifact: Stored artifact paths; svg_path is None when only the
                viewer could render the markup, png_path may not exist yet

        Raises:
            DiagramRenderError: When artifacts cannot be written
        """
        stem = self.store.new_stem(spec.title)
        logger.info(f"{__name__}:render - START unique_id={spec.unique_id} stem={stem}")

        initial: RenderState = {"spec": spec, "prompt": prompt, "stem": stem, "errors": []}
        try:
            try:
                final = await asyncio.wait_for(
                    self._graph.ainvoke(initial),
                    timeout=self.pipeline_timeout_seconds,
                )
            except asyncio.TimeoutError:
                logger.warning(
                    f"{__name__}:render - timed out after {self.pipeline_timeout_seconds}s, "
                    f"writing category template"
                )
                final = await self._template_after_timeout(spec, prompt, stem)
        except (OSError, ValueError) as e:
            logger.error(f"{__name__}:render - {type(e).__name__}: {e}")
            raise DiagramRenderError(unique_id=spec.unique_id, details={"reason": str(e)}) from e

        svg_path = final.get("svg_path")
        png_path = None
        if self.png_writer is not None and svg_path is not None:
            self.png_writer.schedule(svg_path, svg_path.stem)
            png_path = self.store.path_for("png", svg_path.stem)

        artifact = DiagramArtifact(
            unique_id=spec.unique_id,
            title=spec.title,
            alt_text=self._alt_text(spec, final.get("markup")),
            category=spec.category,
            tier=final["tier"],
            language=final["language"],
            source_path=final["source_path"],
            svg_path=svg_path,
            png_path=png_path,
            html_path=final["html_path"],
        )
        logger.info(
            f"{__name__}:render - END tier={artifact.tier.value} svg={svg_path is not None} "
            f"recovered_errors={len(final.get('errors', []))}"
        )
        return artifact

    async def _template_after_timeout(self, spec: DiagramSpec, prompt: str, stem: str) -> RenderState:
        """Template source plus viewer under a derived stem the cancelled run never wrote."""
        state: RenderState = {
            "spec": spec,
            "prompt": prompt,
            "stem": f"{stem}_template",
            "errors": [f"pipeline: timed out after {self.pipeline_timeout_seconds}s"],
        }
        state.update(self.fallback_template_node(state))
        state["source_path"] = await self.store.write_text("mermaid", state["stem"], state["markup"])
        state["svg_path"] = None
        state.update(await self.html_wrapper_node(state))
        return state

    @staticmethod
    def _alt_text(spec: DiagramSpec, markup: str | None) -> str:
        hint = comment_title(markup or "") if markup else None
        subject = hint or spec.title
        return f"{spec.specific_type} of {subject} showing {', '.join(spec.elements[:4])}"

    def _build_graph(self):
        graph = StateGraph(RenderState)

        async def structured_markup_wrapper(state):
            return await self.structured_markup_node(state)

        async def structured_render_wrapper(state):
            return await self.structured_render_node(state)

        async def simple_markup_wrapper(state):
            return await self.simple_markup_node(state)

        async def fallback_template_wrapper(state):
            return self.fallback_template_node(state)

        async def simple_render_wrapper(state):
            return await self.simple_render_node(state)

        async def html_wrapper(state):
            return await self.html_wrapper_node(state)

        graph.add_node("structured_markup", structured_markup_wrapper)
        graph.add_node("structured_render", structured_render_wrapper)
        graph.add_node("simple_markup", simple_markup_wrapper)
        graph.add_node("fallback_template", fallback_template_wrapper)
        graph.add_node("simple_render", simple_render_wrapper)
        graph.add_node("html_wrapper", html_wrapper)

        graph.set_entry_point("structured_markup")
        graph.add_conditional_edges(
            "structured_markup",
            lambda state: "structured_render" if state.get("markup") else "simple_markup",
            {"structured_render": "structured_render", "simple_markup": "simple_markup"},
        )
        graph.add_conditional_edges(
            "structured_render",
            lambda state: "html_wrapper" if state.get("svg_path") else "simple_markup",
            {"html_wrapper": "html_wrapper", "simple_markup": "simple_markup"},
        )
        graph.add_conditional_edges(
            "simple_markup",
            lambda state: "simple_render" if state.get("markup") else "fallback_template",
            {"simple_render": "simple_render", "fallback_template": "fallback_template"},
        )
        graph.add_edge("fallback_template", "simple_render")
        graph.add_edge("simple_render", "html_wrapper")
        graph.add_edge("html_wrapper", END)

        return graph.compile()

    async def _request_markup(self, system_prompt: str, state: RenderState, language: str) -> str:
        raw = await self.llm.complete(
            system_prompt,
            spec_user_prompt(state["spec"], state["prompt"]),
            temperature=self.markup_temperature,
            max_tokens=self.markup_max_tokens,
        )
        markup = strip_code_fences(raw)
        if not markup:
            raise MarkupGenerationError("Model returned empty markup", language=language)
        return markup

    async def structured_markup_node(self, state: RenderState) -> dict:
        """Tier 1: ask for D2 markup."""
        spec = state["spec"]
        try:
            markup = await self._request_markup(
                structured_system_prompt(spec, self.product_name), state, language="d2"
            )
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"{__name__}:structured_markup_node - {type(e).__name__}: {e}")
            return {"markup": None, "errors": [_error_entry("structured_markup", e)]}
        return {"markup": markup, "language": "d2", "tier": RenderTier.STRUCTURED}

    async def structured_render_node(self, state: RenderState) -> dict:
        """Write the D2 source and render it with the external binary."""
        stem = state["stem"]
        source_path = await self.store.write_text("d2", stem, state["markup"])
        svg_path = self.store.path_for("svg", stem)
        try:
            await self.d2_renderer.render_svg(source_path, svg_path)
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"{__name__}:structured_render_node - {type(e).__name__}: {e}")
            # A killed renderer can leave a partial file behind.
            svg_path.unlink(missing_ok=True)
            return {"svg_path": None, "errors": [_error_entry("structured_render", e)]}
        return {"source_path": source_path, "svg_path": svg_path}

    async def simple_markup_node(self, state: RenderState) -> dict:
        """Tier 2: ask for Mermaid markup and validate it."""
        spec = state["spec"]
        try:
            markup = await self._request_markup(simple_system_prompt(spec), state, language="mermaid")
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"{__name__}:simple_markup_node - {type(e).__name__}: {e}")
            return {"markup": None, "errors": [_error_entry("simple_markup", e)]}

        if not is_valid_simple_markup(markup, self.min_markup_length):
            logger.warning(f"{__name__}:simple_markup_node - rejected markup chars={len(markup)}")
            return {
                "markup": None,
                "errors": [f"simple_markup: invalid markup ({len(markup)} chars)"],
            }
        return {"markup": markup, "language": "mermaid", "tier": RenderTier.SIMPLE}

    def fallback_template_node(self, state: RenderState) -> dict:
        """Tier 3: substitute the category template verbatim."""
        category = state["spec"].category
        logger.info(f"{__name__}:fallback_template_node - using template category={category.value}")
        return {
            "markup": fallback_template(category),
            "language": "mermaid",
            "tier": RenderTier.FALLBACK_TEMPLATE,
        }

    async def simple_render_node(self, state: RenderState) -> dict:
        """Store the Mermaid source and render it to SVG with mermaid-cli."""
        stem = state["stem"]
        source_path = await self.store.write_text("mermaid", stem, state["markup"])
        try:
            svg_path = await self.mermaid_renderer.render_svg(source_path, self.store.path_for("svg", stem))
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"{__name__}:simple_render_node - viewer only, {type(e).__name__}: {e}")
            return {
                "source_path": source_path,
                "svg_path": None,
                "errors": [_error_entry("simple_render", e)],
            }
        return {"source_path": source_path, "svg_path": svg_path}

    async def html_wrapper_node(self, state: RenderState) -> dict:
        """Write the viewer page linking back to the stored source and SVG."""
        spec = state["spec"]
        svg_path = state.get("svg_path")
        source_url = artifact_url(self.public_base_path, "source", state["source_path"])
        svg_url = artifact_url(self.public_base_path, "svg", svg_path) if svg_path else None

        if state["tier"] == RenderTier.STRUCTURED:
            svg_markup = await asyncio.to_thread(svg_path.read_text, encoding="utf-8")
            page = build_viewer_html(spec.title, spec.color_palette.primary, source_url, svg_url, svg_markup=svg_markup)
        else:
            page = build_viewer_html(
                spec.title, spec.color_palette.primary, source_url, svg_url, mermaid_source=state["markup"]
            )

        html_path = await self.store.write_text("html", state["stem"], page)
        return {"html_path": html_path}
