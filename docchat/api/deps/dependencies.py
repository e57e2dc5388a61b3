"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(LLM client, artifact store, render pipeline) live in ServiceCache;
request-scoped services are built per request around the DB session.

Dependencies: docchat.configs, docchat.core, docchat.application, docchat.boundary
System role: DI container for service injection
"""

import random

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.services import ChatService, DiagramService
from docchat.boundary.db import get_async_db
from docchat.configs import get_settings
from docchat.core.diagrams.artifact_store import ArtifactStore


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._rng = None
        self._llm_provider = None
        self._artifact_store = None
        self._png_writer = None
        self._diagram_service = None
        self._resolver = None
        self._mapper = None

    @property
    def rng(self) -> random.Random:
        """Shared random source for classifier, synthesizer and file stems."""
        if self._rng is None:
            self._rng = random.Random()
        return self._rng

    @property
    def llm_provider(self):
        """Get cached LLM provider."""
        if self._llm_provider is None:
            from docchat.core.llm.llm_provider import LLMProvider

            llm = get_settings().llm
            self._llm_provider = LLMProvider(
                model_id=llm.model_id,
                google_api_key=llm.google_api_key,
                timeout_seconds=llm.request_timeout_seconds,
            )
        return self._llm_provider

    @property
    def artifact_store(self) -> ArtifactStore:
        """Get cached artifact store."""
        if self._artifact_store is None:
            self._artifact_store = ArtifactStore(get_settings().diagrams.uploads_dir, rng=self.rng)
        return self._artifact_store

    @property
    def png_writer(self):
        """Get cached background PNG writer."""
        if self._png_writer is None:
            from docchat.core.diagrams.renderers import PngWriter

            self._png_writer = PngWriter(
                self.artifact_store,
                output_width=get_settings().diagrams.png_output_width,
            )
        return self._png_writer

    @property
    def diagram_service(self) -> DiagramService:
        """Get cached diagram service with its render pipeline."""
        if self._diagram_service is None:
            from docchat.core.diagrams import (
                DiagramIntentClassifier,
                DiagramRenderPipeline,
                DiagramSpecSynthesizer,
            )
            from docchat.core.diagrams.renderers import D2Renderer, MermaidRenderer

            settings = get_settings()
            diagrams = settings.diagrams
            pipeline = DiagramRenderPipeline(
                llm=self.llm_provider,
                store=self.artifact_store,
                d2_renderer=D2Renderer(
                    binary=diagrams.d2_binary,
                    wrapper_command=diagrams.wrapper_command,
                    theme=diagrams.d2_theme,
                    pad=diagrams.d2_pad,
                    timeout_seconds=diagrams.renderer_timeout_seconds,
                ),
                mermaid_renderer=MermaidRenderer(
                    command=diagrams.mermaid_command,
                    theme=diagrams.mermaid_theme,
                    timeout_seconds=diagrams.renderer_timeout_seconds,
                ),
                png_writer=self.png_writer,
                product_name=settings.references.product_name,
                markup_temperature=settings.llm.markup_temperature,
                markup_max_tokens=settings.llm.markup_max_tokens,
                min_markup_length=diagrams.min_markup_length,
                pipeline_timeout_seconds=diagrams.pipeline_timeout_seconds,
                public_base_path=diagrams.public_base_path,
            )
            self._diagram_service = DiagramService(
                classifier=DiagramIntentClassifier(settings.references.product_name, rng=self.rng),
                synthesizer=DiagramSpecSynthesizer(rng=self.rng),
                pipeline=pipeline,
                public_base_path=diagrams.public_base_path,
            )
        return self._diagram_service

    @property
    def resolver(self):
        """Get cached figure reference resolver."""
        if self._resolver is None:
            from docchat.core.references import FigureReferenceResolver

            references = get_settings().references
            self._resolver = FigureReferenceResolver(
                product_name=references.product_name,
                canonical_figure_id=references.canonical_figure_id,
                assumed_figure_ids=references.assumed_figure_ids,
            )
        return self._resolver

    @property
    def mapper(self):
        """Get cached document structure mapper."""
        if self._mapper is None:
            from docchat.core.references import DocumentStructureMapper

            self._mapper = DocumentStructureMapper(get_settings().references.canonical_figure_id)
        return self._mapper

    def clear(self) -> None:
        """Clear all cached instances."""
        self._rng = None
        self._llm_provider = None
        self._artifact_store = None
        self._png_writer = None
        self._diagram_service = None
        self._resolver = None
        self._mapper = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_artifact_store() -> ArtifactStore:
    """Get the artifact store used by the retrieval endpoints."""
    return get_service_cache().artifact_store


def get_diagram_service() -> DiagramService:
    """Get diagram service instance."""
    return get_service_cache().diagram_service


def get_chat_service(db: AsyncSession = Depends(get_async_db)) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ChatService: Chat service bound to this request's session
    """
    cache = get_service_cache()
    settings = get_settings()
    return ChatService(
        db=db,
        llm=cache.llm_provider,
        diagram_service=cache.diagram_service,
        resolver=cache.resolver,
        mapper=cache.mapper,
        llm_settings=settings.llm,
        reference_settings=settings.references,
    )
