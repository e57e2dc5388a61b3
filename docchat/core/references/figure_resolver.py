"""
Figure reference resolver.

Turns an assistant answer plus the document's images into citations.
Five stages run in a fixed order and feed one list; an image id is added
at most once across all of them:

1. explicit "Figure N" mentions in the answer (id match beats caption match)
2. canonical figure forced for OS migration questions
3. cloud-provider topic questions (captions first, then assumed ids)
4. implicit visual answers or visual questions, only when nothing matched yet
5. captions or alt texts quoted verbatim in the answer

resolve() is total: no match yields an empty list.

Dependencies: re, docchat.core.references.topic_vocabulary
System role: Citation post-processing for chat answers
"""

import logging
import re
from collections.abc import Mapping, Sequence

from docchat.core.references.topic_vocabulary import contains_term, extract_topics, starts_word
from docchat.models.document import DocumentImage
from docchat.models.reference import ImageReference

logger = logging.getLogger(__name__)

FIGURE_PATTERN = re.compile(r"figure\s+(\d+)", re.IGNORECASE)

OS_MIGRATION_PHRASES = ("os migration", "os-based migration")
CLOUD_PROVIDERS = ("google cloud", "gcp", "aws", "azure")
CLOUD_TOPIC_TRIGGERS = ("prerequisite", "appliance", "launch")
CLOUD_CAPTION_KEYWORDS = ("appliance", "prerequisite", "launch")
MAX_TOPIC_CAPTION_MATCHES = 2

IMPLICIT_VISUAL_PHRASES = (
    "here is the diagram", "this diagram shows", "see the figure", "as shown in", "show me",
)
VISUAL_REQUEST_TERMS = (
    "diagram", "image", "figure", "chart", "graph", "picture", "illustration", "show me", "visual",
)
MAX_IMPLICIT_MATCHES = 3


def caption_figure_number(caption: str | None) -> int | None:
    """Figure number embedded in a caption such as ``Figure 7: Appliance``."""
    match = FIGURE_PATTERN.search(caption or "")
    return int(match.group(1)) if match else None


class _Collector:
    """Ordered citation list keyed by image id."""

    def __init__(self) -> None:
        self.references: list[ImageReference] = []
        self._ids: set[int | None] = set()

    def __len__(self) -> int:
        return len(self.references)

    def has(self, image: DocumentImage) -> bool:
        return image.id in self._ids

    def add(self, image: DocumentImage, caption: str, stage: str) -> bool:
        if image.id in self._ids:
            return False
        self._ids.add(image.id)
        self.references.append(ImageReference(id=image.id, image_path=image.image_path, caption=caption))
        logger.debug(f"{__name__}:resolve - {stage} added image_id={image.id}")
        return True


class FigureReferenceResolver:
    """Match answer text and user prompt against a document's images."""

    def __init__(
        self,
        product_name: str = "RiverMeadow",
        canonical_figure_id: int = 8,
        assumed_figure_ids: Mapping[str, Sequence[int]] | None = None,
    ) -> None:
        """
        Initialize resolver.

        Args:
            product_name: Product whose migration questions force the canonical figure
            canonical_figure_id: Image id attached to every OS migration answer
            assumed_figure_ids: Cloud topic to last-resort image ids
        """
        self.product_name = product_name.lower()
        self.canonical_figure_id = canonical_figure_id
        self.assumed_figure_ids = {k.lower(): list(v) for k, v in (assumed_figure_ids or {}).items()}

    def resolve(
        self,
        answer_text: str,
        user_prompt: str,
        candidate_images: Sequence[DocumentImage],
    ) -> list[ImageReference]:
        """
        Build citations for one answer.

        Args:
            answer_text: Assistant answer
            user_prompt: Question that produced the answer
            candidate_images: Images of the document, in display order

        Returns:
            list[ImageReference]: Citations with unique ids, possibly empty
        """
        answer = answer_text or ""
        prompt = user_prompt or ""
        images = list(candidate_images)
        collected = _Collector()

        self._explicit_figures(answer, images, collected)
        self._forced_canonical(prompt, images, collected)
        self._cloud_topics(prompt, images, collected)
        self._implicit_sweep(answer, prompt, images, collected)
        self._literal_captions(answer, images, collected)

        logger.info(
            f"{__name__}:resolve - candidates={len(images)} references={len(collected)}"
        )
        return collected.references

    def _explicit_figures(self, answer: str, images: list[DocumentImage], collected: _Collector) -> None:
        numbers: list[int] = []
        for match in FIGURE_PATTERN.finditer(answer):
            number = int(match.group(1))
            if number not in numbers:
                numbers.append(number)

        for number in numbers:
            image = next((img for img in images if img.id == number), None)
            if image is None:
                image = next((img for img in images if self._caption_names_figure(img, number)), None)
            if image is not None:
                collected.add(image, image.caption or f"Figure {number}", "explicit")

    @staticmethod
    def _caption_names_figure(image: DocumentImage, number: int) -> bool:
        if not image.caption:
            return False
        if caption_figure_number(image.caption) == number:
            return True
        return re.search(rf"figure {number}(?!\d)", image.caption.lower()) is not None

    def _forced_canonical(self, prompt: str, images: list[DocumentImage], collected: _Collector) -> None:
        text = prompt.lower()
        forced = any(phrase in text for phrase in OS_MIGRATION_PHRASES) or (
            self.product_name in text and "migration" in text
        )
        if not forced:
            return
        image = next((img for img in images if img.id == self.canonical_figure_id), None)
        if image is not None:
            collected.add(image, image.caption or image.alt_text or f"Figure {image.id}", "canonical")

    def _cloud_topics(self, prompt: str, images: list[DocumentImage], collected: _Collector) -> None:
        providers = [p for p in CLOUD_PROVIDERS if contains_term(prompt, p)]
        triggers = [t for t in CLOUD_TOPIC_TRIGGERS if starts_word(prompt, t)]
        if not providers or not triggers:
            return

        # captions cited by an earlier stage still count as matches
        matched = 0
        for image in images:
            if matched >= MAX_TOPIC_CAPTION_MATCHES:
                break
            if self._cloud_caption(image.caption, providers):
                matched += 1
                collected.add(image, image.caption, "cloud_topic")
        if matched:
            return

        by_id = {img.id: img for img in images}
        for provider in providers:
            for image_id in self.assumed_figure_ids.get(provider, []):
                image = by_id.get(image_id)
                if image is not None and not collected.has(image):
                    collected.add(image, image.caption or image.alt_text or f"Figure {image.id}", "assumed")
                    return

    @staticmethod
    def _cloud_caption(caption: str | None, providers: list[str]) -> bool:
        if not caption:
            return False
        return any(contains_term(caption, p) for p in providers) or any(
            starts_word(caption, keyword) for keyword in CLOUD_CAPTION_KEYWORDS
        )

    def _implicit_sweep(
        self,
        answer: str,
        prompt: str,
        images: list[DocumentImage],
        collected: _Collector,
    ) -> None:
        answer_lower = answer.lower()
        prompt_lower = prompt.lower()
        implied = any(phrase in answer_lower for phrase in IMPLICIT_VISUAL_PHRASES)
        asked = any(term in prompt_lower for term in VISUAL_REQUEST_TERMS)
        if not (implied or asked) or len(collected) or not images:
            return

        topics = extract_topics(prompt)
        scored = []
        for position, image in enumerate(images):
            text = f"{image.caption or ''} {image.alt_text or ''}"
            score = sum(1 for topic in topics if contains_term(text, topic))
            if score:
                scored.append((-score, position, image))
        scored.sort(key=lambda item: (item[0], item[1]))
        chosen = [image for _score, _position, image in scored[:MAX_IMPLICIT_MATCHES]]
        if not chosen:
            chosen = images[:MAX_IMPLICIT_MATCHES]

        for image in chosen:
            collected.add(image, image.caption or image.alt_text or "Document image", "implicit")

    @staticmethod
    def _literal_captions(answer: str, images: list[DocumentImage], collected: _Collector) -> None:
        for image in images:
            if image.caption and image.caption in answer:
                collected.add(image, image.caption, "literal")
            elif image.alt_text and image.alt_text in answer:
                collected.add(image, image.alt_text, "literal")
