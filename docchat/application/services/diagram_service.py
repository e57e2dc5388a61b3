"""
Diagram generation service.

Runs classify, synthesize and render for one prompt and turns the stored
artifact into retrieval URLs and a chat citation.

Dependencies: docchat.core.diagrams, docchat.models.diagram
System role: Diagram generation orchestration layer
"""

import logging
from collections.abc import Sequence

from docchat.core.diagrams.artifact_store import artifact_url
from docchat.core.diagrams.intent_classifier import DiagramIntentClassifier
from docchat.core.diagrams.render_pipeline import DiagramRenderPipeline
from docchat.core.diagrams.spec_synthesizer import DiagramSpecSynthesizer
from docchat.core.exceptions import NotADiagramRequestError
from docchat.models.diagram import DiagramArtifact, DiagramGenerateResponse, DiagramIntent
from docchat.models.reference import ImageReference

logger = logging.getLogger(__name__)


class DiagramService:
    """Prompt to rendered diagram."""

    def __init__(
        self,
        classifier: DiagramIntentClassifier,
        synthesizer: DiagramSpecSynthesizer,
        pipeline: DiagramRenderPipeline,
        public_base_path: str = "/api/v1/diagrams",
    ) -> None:
        self.classifier = classifier
        self.synthesizer = synthesizer
        self.pipeline = pipeline
        self.public_base_path = public_base_path

    def classify(self, prompt: str, context_snippets: Sequence[str] | None = None) -> DiagramIntent:
        return self.classifier.classify(prompt, context_snippets)

    async def generate(
        self,
        prompt: str,
        context_snippets: Sequence[str] | None = None,
        force: bool = False,
        intent: DiagramIntent | None = None,
    ) -> DiagramGenerateResponse:
        """
        Generate one diagram.

        Args:
            prompt: User prompt
            context_snippets: Knowledge-base snippets for grounding
            force: Render even when the prompt is not a diagram request
            intent: Classification already computed by the caller

        Returns:
            DiagramGenerateResponse: Artifact metadata, URLs and citation

        Raises:
            NotADiagramRequestError: Prompt is not a diagram request and force is False
            DiagramRenderError: Every render tier failed
        """
        logger.info(f"{__name__}:generate - START force={force} prompt_chars={len(prompt)}")
        snippets = list(context_snippets or [])
        intent = intent or self.classify(prompt, snippets)

        if not intent.is_diagram_request:
            if not force:
                raise NotADiagramRequestError(prompt)
            intent = intent.model_copy(
                update={
                    "is_diagram_request": True,
                    "category": self.classifier.choose_category(prompt, snippets),
                    "confidence_signals": intent.confidence_signals | {"forced"},
                }
            )

        spec = self.synthesizer.synthesize(intent, snippets)
        artifact = await self.pipeline.render(spec, prompt)
        response = self.to_response(artifact)
        logger.info(f"{__name__}:generate - END unique_id={artifact.unique_id} tier={artifact.tier.value}")
        return response

    def to_response(self, artifact: DiagramArtifact) -> DiagramGenerateResponse:
        """Artifact paths as retrieval URLs plus the citation chat messages store."""
        # without an SVG the svg endpoint falls back to the viewer sharing the stem
        svg_name = artifact.svg_path or artifact.html_path.with_suffix(".svg")
        svg_url = artifact_url(self.public_base_path, "svg", svg_name)
        png_name = artifact.png_path or svg_name.with_suffix(".png")
        return DiagramGenerateResponse(
            unique_id=artifact.unique_id,
            title=artifact.title,
            alt_text=artifact.alt_text,
            category=artifact.category,
            tier=artifact.tier,
            source_url=artifact_url(self.public_base_path, "source", artifact.source_path),
            svg_url=svg_url,
            png_url=artifact_url(self.public_base_path, "png", png_name),
            html_url=artifact_url(self.public_base_path, "html", artifact.html_path),
            reference=ImageReference(id=None, image_path=svg_url, caption=artifact.title),
        )
