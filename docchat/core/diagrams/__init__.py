"""
Diagram generation: intent classification, spec synthesis and rendering.
"""

from docchat.core.diagrams.intent_classifier import DiagramIntentClassifier
from docchat.core.diagrams.render_pipeline import DiagramRenderPipeline
from docchat.core.diagrams.spec_synthesizer import DiagramSpecSynthesizer

__all__ = ["DiagramIntentClassifier", "DiagramRenderPipeline", "DiagramSpecSynthesizer"]
