"""
Diagram intent classifier.

Decides whether a free-text prompt asks for a diagram and, if so, which
visual category it should take. Pure text heuristics; the only state is an
injectable random source used for the category jitter.

Dependencies: re, random, docchat.core.diagrams.catalog, docchat.models.diagram
System role: First stage of diagram generation
"""

import logging
import random
import re
from collections.abc import Sequence

from docchat.core.diagrams.catalog import CATALOG, SCORED_CATEGORIES
from docchat.models.diagram import DiagramCategory, DiagramIntent

logger = logging.getLogger(__name__)

INTERROGATIVE_PATTERN = re.compile(
    r"^\s*(what|how|why|when|where|who|can|is|are|do|does|which|could|would|should|will)\b",
    re.IGNORECASE,
)
VISUAL_REQUEST_PATTERN = re.compile(
    r"\b(show|create|draw|generate|visuali[sz]e)\b.*\b(diagram|chart|visual|graph|picture|image)s?\b",
    re.IGNORECASE | re.DOTALL,
)

PRIMARY_TERMS = ("flowchart", "diagram", "architecture", "chart")
SECONDARY_TERMS = (
    "picture", "image", "illustration", "visual", "graph", "visualization", "infographic",
)
ACTION_VERBS = ("visualize", "visualise", "draw", "illustrate", "sketch")

PRIMARY_WEIGHT = 2
SECONDARY_WEIGHT = 1
ACTION_WEIGHT = 1
DOMAIN_WEIGHT = 1
REQUEST_THRESHOLD = 2

CONTEXT_WEIGHT = 0.5
JITTER_RANGE = 0.8
SECOND_BEST_PROBABILITY = 0.2


def _contains_term(text: str, term: str) -> bool:
    """Whole-word (or whole-phrase) match, allowing a plural ``s``."""
    return re.search(rf"\b{re.escape(term)}s?\b", text) is not None


def _count_hits(text: str, terms: Sequence[str]) -> int:
    return sum(1 for term in terms if _contains_term(text, term))


class DiagramIntentClassifier:
    """Keyword-weighted diagram request detector with jittered category choice."""

    def __init__(
        self,
        product_name: str = "RiverMeadow",
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize classifier.

        Args:
            product_name: Product whose mention boosts diagram and migration scores
            rng: Random source for category jitter (seed it in tests)
        """
        self._product = product_name.lower()
        self._rng = rng or random.Random()

    def classify(
        self,
        prompt: str,
        context_snippets: Sequence[str] | None = None,
    ) -> DiagramIntent:
        """
        Classify a prompt.

        Args:
            prompt: Raw user utterance
            context_snippets: Optional knowledge-base snippets; they only
                influence the category, never the request decision

        Returns:
            DiagramIntent: Request flag, category and matched signal classes
        """
        snippets = tuple(s for s in (context_snippets or ()) if isinstance(s, str))
        text = (prompt or "").lower()
        signals: set[str] = set()

        has_visual_phrase = VISUAL_REQUEST_PATTERN.search(text) is not None
        if has_visual_phrase:
            signals.add("visual_request")

        if INTERROGATIVE_PATTERN.match(text) and not has_visual_phrase:
            logger.debug(f"{__name__}:classify - interrogative prompt, no visual phrase")
            return DiagramIntent(
                is_diagram_request=False,
                confidence_signals=frozenset({"interrogative"}),
                prompt=prompt or "",
                context_snippets=snippets,
            )

        score = 0
        primary_hits = _count_hits(text, PRIMARY_TERMS)
        secondary_hits = _count_hits(text, SECONDARY_TERMS)
        action_hits = _count_hits(text, ACTION_VERBS)
        if primary_hits:
            signals.add("primary")
        if secondary_hits:
            signals.add("secondary")
        if action_hits:
            signals.add("action")
        score += primary_hits * PRIMARY_WEIGHT
        score += secondary_hits * SECONDARY_WEIGHT
        score += action_hits * ACTION_WEIGHT

        has_product = self._product in text
        has_migration = "migration" in text
        if has_product or has_migration:
            signals.add("domain")
        score += DOMAIN_WEIGHT * (int(has_product) + int(has_migration))

        is_request = score >= REQUEST_THRESHOLD
        has_visual_term = primary_hits > 0 or secondary_hits > 0
        if (has_migration and "diagram" in text) or (has_product and has_visual_term):
            signals.add("override")
            is_request = True

        category = DiagramCategory.PROCESS
        if is_request:
            category = self.choose_category(prompt, snippets)

        logger.info(
            f"{__name__}:classify - is_request={is_request} score={score} "
            f"category={category.value} signals={sorted(signals)}"
        )
        return DiagramIntent(
            is_diagram_request=is_request,
            category=category,
            confidence_signals=frozenset(signals),
            prompt=prompt or "",
            context_snippets=snippets,
        )

    def choose_category(
        self,
        prompt: str,
        context_snippets: Sequence[str] | None = None,
    ) -> DiagramCategory:
        """
        Score the scored categories and pick one.

        Score is prompt keyword hits plus half the context hits plus jitter in
        [0, 0.8). Only categories with at least one keyword hit compete; with
        20% probability the runner-up wins. Falls back to PROCESS.

        Args:
            prompt: Raw user utterance
            context_snippets: Optional knowledge-base snippets

        Returns:
            DiagramCategory: Selected category
        """
        text = (prompt or "").lower()
        context = " ".join(s for s in (context_snippets or ()) if isinstance(s, str)).lower()

        scored: list[tuple[float, DiagramCategory]] = []
        for category in SCORED_CATEGORIES:
            keywords = CATALOG[category].keywords
            base = float(_count_hits(text, keywords))
            if category is DiagramCategory.MIGRATION and self._product in text:
                base += DOMAIN_WEIGHT
            if context:
                base += CONTEXT_WEIGHT * _count_hits(context, keywords)
            jitter = self._rng.random() * JITTER_RANGE
            if base > 0:
                scored.append((base + jitter, category))

        if not scored:
            return DiagramCategory.PROCESS

        scored.sort(key=lambda item: item[0], reverse=True)
        if len(scored) > 1 and self._rng.random() < SECOND_BEST_PROBABILITY:
            return scored[1][1]
        return scored[0][1]
