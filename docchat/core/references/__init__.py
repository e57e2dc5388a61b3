"""Citation resolution and document structure mapping."""

from docchat.core.references.figure_resolver import FigureReferenceResolver
from docchat.core.references.structure_mapper import DocumentStructureMapper

__all__ = ["DocumentStructureMapper", "FigureReferenceResolver"]
