"""
Document structure mapper.

Places each document image in the section of the document text it
illustrates and scores how important its context is. Explicit figure
markers left by ingestion (``[Figure 3]``, ``Figure 3: ...``) are used
first; remaining images are matched to sections by caption term overlap
and left out when nothing scores above the threshold.

The importance score only ranks which image contexts go into the chat
prompt. It plays no part in citation resolution.

Dependencies: re, dataclasses, docchat.core.references
System role: Context assembly for document-scoped chat
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from docchat.core.references.figure_resolver import caption_figure_number
from docchat.core.references.topic_vocabulary import IMPORTANCE_TERMS, contains_term
from docchat.models.document import DocumentImage, ImageContextInfo

logger = logging.getLogger(__name__)

MARKDOWN_HEADING = re.compile(r"^(#{1,6})\s+(.+?)\s*#*$")
NUMBERED_HEADING = re.compile(r"^(\d+(?:\.\d+)*)\.?\s+([A-Z][^.!?]{2,80})$")
FIGURE_MARKER = re.compile(r"^\[?\s*(?:figure|fig\.)\s+(\d+)\s*(?:\]|:|\.|-|$)", re.IGNORECASE)
WORD = re.compile(r"[a-z][a-z0-9-]+")

WINDOW_LINES = 3
MAX_SURROUNDING_CHARS = 600
MIN_KEYWORD_LENGTH = 4
MIN_CONTENT_SCORE = 2.0

STOPWORDS = frozenset({
    "figure", "image", "with", "from", "this", "that", "these", "those", "into",
    "your", "about", "page", "shows", "showing", "screen", "view", "using",
})

CANONICAL_BOOST = 0.4
FIGURE_NUMBER_CUTOFF = 2
FIGURE_NUMBER_BOOST = 0.1
BASE_IMPORTANCE = 0.1
TERM_BOOST = 0.05
MAX_TERM_BOOST = 0.3
LONG_CONTEXT_CHARS = 300
LONG_CONTEXT_BOOST = 0.1
CONTENT_SCORE_SCALE = 10.0
MAX_CONTENT_BOOST = 0.2


@dataclass
class _Block:
    section: str | None
    subheading: str | None
    lines: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(self.lines)


def _heading(line: str) -> tuple[str, bool] | None:
    """``(title, is_top_level)`` for heading lines, else None."""
    markdown = MARKDOWN_HEADING.match(line)
    if markdown:
        return markdown.group(2), len(markdown.group(1)) <= 2

    numbered = NUMBERED_HEADING.match(line)
    if numbered:
        return f"{numbered.group(1)} {numbered.group(2)}", "." not in numbered.group(1)

    letters = [ch for ch in line if ch.isalpha()]
    if 4 <= len(line) <= 80 and len(letters) >= 3 and line == line.upper() and not line.endswith("."):
        return line, True
    return None


def _keywords(image: DocumentImage) -> list[str]:
    text = f"{image.caption or ''} {image.alt_text or ''}".lower()
    words = []
    for word in WORD.findall(text):
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOPWORDS and word not in words:
            words.append(word)
    return words


class DocumentStructureMapper:
    """Map document images to sections and rank their context."""

    def __init__(self, canonical_figure_id: int = 8) -> None:
        self.canonical_figure_id = canonical_figure_id

    def map_images_to_sections(
        self,
        document_text: str,
        images: Sequence[DocumentImage],
    ) -> dict[int, ImageContextInfo]:
        """
        Locate every image that can be placed in the document.

        Args:
            document_text: Extracted plain text of the document
            images: Document images

        Returns:
            dict[int, ImageContextInfo]: Image id to context; unplaced images are absent
        """
        lines = [line.strip() for line in (document_text or "").splitlines()]
        blocks, markers = self._scan(lines)
        result: dict[int, ImageContextInfo] = {}

        for number, (line_index, section, subheading) in markers.items():
            image = self._image_for_figure(number, images)
            if image is None or image.id in result:
                continue
            surrounding = self._window(lines, line_index)
            result[image.id] = ImageContextInfo(
                section=section,
                context=subheading,
                figure_number=number,
                surrounding_text=surrounding,
                importance=self._importance(image.id, number, surrounding, None),
            )

        for image in images:
            if image.id in result:
                continue
            best = self._best_block(image, blocks)
            if best is None:
                continue
            block, score = best
            surrounding = block.text[:MAX_SURROUNDING_CHARS]
            number = caption_figure_number(image.caption)
            result[image.id] = ImageContextInfo(
                section=block.section,
                context=block.subheading,
                figure_number=number,
                surrounding_text=surrounding,
                importance=self._importance(image.id, number, surrounding, score),
            )

        logger.info(f"{__name__}:map_images_to_sections - images={len(images)} mapped={len(result)}")
        return result

    @staticmethod
    def _scan(lines: list[str]) -> tuple[list[_Block], dict[int, tuple[int, str | None, str | None]]]:
        blocks = [_Block(section=None, subheading=None)]
        markers: dict[int, tuple[int, str | None, str | None]] = {}
        section: str | None = None
        subheading: str | None = None

        for index, line in enumerate(lines):
            if not line:
                continue
            marker = FIGURE_MARKER.match(line)
            if marker:
                markers.setdefault(int(marker.group(1)), (index, section, subheading))
                continue
            heading = _heading(line)
            if heading:
                title, top_level = heading
                if top_level:
                    section, subheading = title, None
                else:
                    subheading = title
                blocks.append(_Block(section=section, subheading=subheading, lines=[title]))
                continue
            blocks[-1].lines.append(line)

        return [block for block in blocks if block.lines], markers

    @staticmethod
    def _image_for_figure(number: int, images: Sequence[DocumentImage]) -> DocumentImage | None:
        by_caption = next((img for img in images if caption_figure_number(img.caption) == number), None)
        if by_caption is not None:
            return by_caption
        return next((img for img in images if img.id == number), None)

    @staticmethod
    def _window(lines: list[str], index: int) -> str:
        start = max(0, index - WINDOW_LINES)
        around = [line for line in lines[start:index + WINDOW_LINES + 1] if line]
        return " ".join(around)[:MAX_SURROUNDING_CHARS]

    @staticmethod
    def _score_block(keywords: list[str], block: _Block) -> float:
        text = block.text.lower()
        score = 0.0
        for keyword in keywords:
            count = text.count(keyword)
            if not count:
                continue
            score += 1.0
            score += 0.5 * min(count - 1, 3)
            if contains_term(text, keyword):
                score += 1.0
        return score

    def _best_block(self, image: DocumentImage, blocks: list[_Block]) -> tuple[_Block, float] | None:
        keywords = _keywords(image)
        if not keywords:
            return None
        best: tuple[_Block, float] | None = None
        for block in blocks:
            score = self._score_block(keywords, block)
            if score > MIN_CONTENT_SCORE and (best is None or score > best[1]):
                best = (block, score)
        return best

    def _importance(
        self,
        image_id: int,
        figure_number: int | None,
        surrounding: str,
        content_score: float | None,
    ) -> float:
        importance = BASE_IMPORTANCE
        if image_id == self.canonical_figure_id:
            importance += CANONICAL_BOOST
        if figure_number is not None and figure_number > FIGURE_NUMBER_CUTOFF:
            importance += FIGURE_NUMBER_BOOST
        term_hits = sum(1 for term in IMPORTANCE_TERMS if contains_term(surrounding, term))
        importance += min(term_hits * TERM_BOOST, MAX_TERM_BOOST)
        if len(surrounding) > LONG_CONTEXT_CHARS:
            importance += LONG_CONTEXT_BOOST
        if content_score is not None:
            importance += min(content_score / CONTENT_SCORE_SCALE, MAX_CONTENT_BOOST)
        return round(min(max(importance, 0.0), 1.0), 3)


def top_contexts(
    contexts: dict[int, ImageContextInfo],
    limit: int,
) -> list[tuple[int, ImageContextInfo]]:
    """Highest-importance contexts first; ties keep image id order."""
    ordered = sorted(contexts.items(), key=lambda item: (-item[1].importance, item[0]))
    return ordered[:limit]
