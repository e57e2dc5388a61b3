"""
Diagram spec synthesizer.

Turns a classified intent plus knowledge-base snippets into a concrete,
immutable DiagramSpec. Selection is deliberately random so repeated
requests produce visually different diagrams; inject a seeded
``random.Random`` and a fixed clock to pin outcomes.

Dependencies: random, re, time, docchat.core.diagrams.catalog
System role: Second stage of diagram generation
"""

import logging
import random
import re
import string
import time
from collections.abc import Callable, Sequence

from docchat.core.diagrams.catalog import FALLBACK_GLOSSARY, TECHNICAL_GLOSSARY, get_catalog
from docchat.models.diagram import DiagramIntent, DiagramSpec

logger = logging.getLogger(__name__)

MAX_CONTEXT_TERMS = 3
TITLE_WORD_COUNT = 3
TITLE_MIN_WORD_LENGTH = 4

CAPITALIZED_PHRASE = re.compile(r"\b[A-Z][a-zA-Z0-9]+(?:\s+[A-Z][a-zA-Z0-9]+)+\b")
WORD = re.compile(r"[A-Za-z0-9][A-Za-z0-9'-]*")
BASE36_ALPHABET = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    """Render a non-negative int in lowercase base 36."""
    if value <= 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36_ALPHABET[rem])
    return "".join(reversed(digits))


class DiagramSpecSynthesizer:
    """Random-but-valid DiagramSpec builder."""

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize synthesizer.

        Args:
            rng: Random source for style selection and id suffixes
            clock: Returns epoch seconds; used for ids and the uniqueness term
        """
        self._rng = rng or random.Random()
        self._clock = clock

    def synthesize(
        self,
        intent: DiagramIntent,
        context_snippets: Sequence[str] | None = None,
    ) -> DiagramSpec:
        """
        Build a spec for the intent's category.

        Args:
            intent: Classifier output; its prompt feeds the title
            context_snippets: Knowledge-base snippets; falls back to the
                intent's own snippets when omitted

        Returns:
            DiagramSpec: Fully populated, non-empty element list
        """
        snippets = context_snippets if context_snippets is not None else intent.context_snippets
        catalog = get_catalog(intent.category)
        epoch_millis = int(self._clock() * 1000)

        specific_type = self._rng.choice(catalog.specific_types)
        palette = self._rng.choice(catalog.palettes)
        base_elements = self._rng.choice(catalog.element_sets)
        layout = self._rng.choice(catalog.layouts)

        elements = list(base_elements)
        for term in self.extract_context_terms(snippets, epoch_millis, exclude=elements):
            elements.append(term)

        spec = DiagramSpec(
            category=intent.category,
            specific_type=specific_type,
            color_palette=palette,
            elements=tuple(elements),
            layout=layout,
            title=self.build_title(intent),
            unique_id=f"{epoch_millis}-{self._rand36()}-{self._rand36()}",
        )
        logger.info(
            f"{__name__}:synthesize - category={spec.category.value} "
            f"type={spec.specific_type!r} layout={spec.layout} "
            f"elements={len(spec.elements)} unique_id={spec.unique_id}"
        )
        return spec

    def extract_context_terms(
        self,
        snippets: Sequence[str] | None,
        epoch_millis: int,
        exclude: Sequence[str] = (),
    ) -> list[str]:
        """
        Pick up to three extra element labels.

        Glossary hits come first, then capitalized phrases; the last slot
        always holds a timestamp-derived term. Malformed or empty snippets
        fall back to a generic glossary.
        """
        texts = [s for s in (snippets or ()) if isinstance(s, str) and s.strip()]
        joined = " ".join(texts)
        lowered = joined.lower()
        seen = {e.lower() for e in exclude}
        found: list[str] = []

        def _add(term: str) -> None:
            key = term.lower()
            if key not in seen and len(found) < MAX_CONTEXT_TERMS - 1:
                seen.add(key)
                found.append(term)

        for term in TECHNICAL_GLOSSARY:
            if term.lower() in lowered:
                _add(term)
        for match in CAPITALIZED_PHRASE.finditer(joined):
            _add(match.group(0))

        if not found:
            _add(self._rng.choice(FALLBACK_GLOSSARY))

        found.append(f"Revision {to_base36(epoch_millis)[-5:].upper()}")
        return found

    @staticmethod
    def build_title(intent: DiagramIntent) -> str:
        """Category name plus the first three prompt words longer than three characters."""
        words = [w for w in WORD.findall(intent.prompt) if len(w) >= TITLE_MIN_WORD_LENGTH]
        label = f"{intent.category.value.title()} Diagram"
        if not words:
            return label
        return f"{label}: {' '.join(words[:TITLE_WORD_COUNT])}"

    def _rand36(self) -> str:
        return to_base36(self._rng.getrandbits(31)).rjust(6, "0")[-6:]
