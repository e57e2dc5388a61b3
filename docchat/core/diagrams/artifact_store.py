"""
Diagram artifact storage.

Append-only file layout under the uploads root:

    uploads/
        d2/        structured markup
        mermaid/   simple markup
        svg/       vector output
        png/       raster output (best-effort, written later)
        html/      interactive viewers

All artifacts of one render share a stem ``<slug>_<epochMillis>_<rand6>``.
Files are created exclusively and never rewritten.

Dependencies: asyncio, pathlib, docchat.core.diagrams.spec_synthesizer
System role: Durable storage and lookup for generated diagrams
"""

import asyncio
import logging
import random
import re
import time
from collections.abc import Callable
from pathlib import Path

from docchat.core.diagrams.spec_synthesizer import to_base36

logger = logging.getLogger(__name__)

MARKUP_KINDS = ("d2", "mermaid")
ARTIFACT_KINDS = (*MARKUP_KINDS, "svg", "png", "html")
SLUG_MAX_LENGTH = 40


def slugify(value: str, default: str = "diagram") -> str:
    """Lowercase, non-alphanumerics collapsed to underscores."""
    slug = re.sub(r"[^a-z0-9]+", "_", (value or "").lower()).strip("_")
    return slug[:SLUG_MAX_LENGTH].rstrip("_") or default


def safe_file_name(file_name: str) -> str:
    """Reduce a client-supplied name to its basename."""
    return Path(file_name.replace("\\", "/")).name


class ArtifactStore:
    """Write-once artifact directories rooted at the uploads folder."""

    def __init__(
        self,
        root: Path,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize store.

        Args:
            root: Uploads root directory
            rng: Random source for stem suffixes
            clock: Returns epoch seconds for stem timestamps
        """
        self.root = Path(root)
        self._rng = rng or random.Random()
        self._clock = clock

    def ensure_directories(self) -> None:
        """Create the root and every artifact subdirectory."""
        for kind in ARTIFACT_KINDS:
            self.directory(kind).mkdir(parents=True, exist_ok=True)

    def directory(self, kind: str) -> Path:
        if kind not in ARTIFACT_KINDS:
            raise ValueError(f"Unknown artifact kind: {kind}")
        return self.root / kind

    def new_stem(self, label: str) -> str:
        """``<slug>_<epochMillis>_<rand6>``, unique per render."""
        epoch_millis = int(self._clock() * 1000)
        suffix = to_base36(self._rng.getrandbits(31)).rjust(6, "0")[-6:]
        return f"{slugify(label)}_{epoch_millis}_{suffix}"

    def path_for(self, kind: str, stem: str) -> Path:
        extension = "mmd" if kind == "mermaid" else kind
        return self.directory(kind) / f"{stem}.{extension}"

    async def write_text(self, kind: str, stem: str, content: str) -> Path:
        """Create a new text artifact; raises FileExistsError rather than overwrite."""
        path = self.path_for(kind, stem)
        await asyncio.to_thread(self._write_exclusive, path, content.encode("utf-8"))
        logger.debug(f"{__name__}:write_text - wrote {path}")
        return path

    async def write_bytes(self, kind: str, stem: str, content: bytes) -> Path:
        """Create a new binary artifact; raises FileExistsError rather than overwrite."""
        path = self.path_for(kind, stem)
        await asyncio.to_thread(self._write_exclusive, path, content)
        logger.debug(f"{__name__}:write_bytes - wrote {path}")
        return path

    @staticmethod
    def _write_exclusive(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "xb") as handle:
            handle.write(content)

    def find(self, kind: str, file_name: str) -> Path | None:
        """Existing artifact of one kind by file name, or None."""
        candidate = self.directory(kind) / safe_file_name(file_name)
        return candidate if candidate.is_file() else None

    def find_source(self, file_name: str) -> Path | None:
        """Markup file by name, searching every markup directory."""
        for kind in MARKUP_KINDS:
            found = self.find(kind, file_name)
            if found:
                return found
        return None

    def find_svg(self, file_name: str) -> Path | None:
        """
        SVG lookup with fallbacks for stale chat links.

        Tries the exact name, then the name without a trailing ``.xml``,
        then the ``.html`` viewer sharing the stem.
        """
        name = safe_file_name(file_name)
        exact = self.find("svg", name)
        if exact:
            return exact

        if name.lower().endswith(".xml"):
            without_xml = self.find("svg", name[: -len(".xml")])
            if without_xml:
                return without_xml

        stem = name.split(".", 1)[0]
        return self.find("html", f"{stem}.html")


def artifact_url(base_path: str, endpoint: str, path: Path) -> str:
    """Retrieval URL for a stored artifact, e.g. ``/api/v1/diagrams/svg/<name>``."""
    return f"{base_path.rstrip('/')}/{endpoint}/{path.name}"
