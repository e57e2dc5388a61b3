"""
External diagram renderers.

D2Renderer shells out to the ``d2`` binary, falling back to a wrapper
command that first repairs common markup problems. MermaidRenderer runs
mermaid-cli (``mmdc``) for the simple-markup tiers. Every subprocess runs
under a hard timeout; timeouts, missing binaries and non-zero exits all
become RendererError so the pipeline can fall back.

PngWriter rasterizes finished SVGs with cairosvg on a detached task. Its
failures are logged and dropped.

Dependencies: asyncio, tempfile, cairosvg, docchat.core.diagrams.markup
System role: Rendering back-ends for the diagram pipeline
"""

import asyncio
import contextlib
import logging
import tempfile
from collections.abc import Sequence
from pathlib import Path

import cairosvg

from docchat.core.diagrams.artifact_store import ArtifactStore
from docchat.core.diagrams.markup import preprocess_d2
from docchat.core.exceptions import RendererError

logger = logging.getLogger(__name__)


async def run_command(args: Sequence[str], timeout: float, renderer: str) -> None:
    """
    Run a renderer subprocess with a hard timeout.

    The child is killed whenever this coroutine stops waiting for it: on
    its own timeout and also when the caller cancels it.

    Args:
        args: Executable and arguments
        timeout: Seconds before the process is killed
        renderer: Name used in errors and logs

    Raises:
        RendererError: On missing executable, timeout or non-zero exit
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (FileNotFoundError, PermissionError) as e:
        raise RendererError(f"Renderer not available: {args[0]}", renderer=renderer) from e

    try:
        _stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise RendererError(
            f"Renderer timed out after {timeout}s",
            renderer=renderer,
            details={"timeout_seconds": timeout},
        ) from e
    finally:
        if process.returncode is None:
            logger.warning(f"{__name__}:run_command - killing {renderer} pid={process.pid}")
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()

    if process.returncode != 0:
        raise RendererError(
            "Renderer exited with an error",
            renderer=renderer,
            returncode=process.returncode,
            details={"stderr": stderr.decode("utf-8", errors="replace")[-500:]},
        )


class D2Renderer:
    """Render D2 source to SVG with the primary binary, then the wrapper."""

    def __init__(
        self,
        binary: str = "d2",
        wrapper_command: Sequence[str] | None = None,
        theme: int = 3,
        pad: int = 30,
        timeout_seconds: float = 20.0,
    ) -> None:
        self.binary = binary
        self.wrapper_command = list(wrapper_command or [])
        self.theme = theme
        self.pad = pad
        self.timeout_seconds = timeout_seconds

    def _style_options(self) -> list[str]:
        return [f"--theme={self.theme}", f"--pad={self.pad}"]

    async def render_svg(self, source_path: Path, svg_path: Path) -> Path:
        """
        Render ``source_path`` into ``svg_path``.

        Raises:
            RendererError: When both the binary and the wrapper fail
        """
        logger.info(f"{__name__}:render_svg - START source={source_path.name}")
        try:
            await self._run_primary(source_path, svg_path)
        except RendererError as primary_error:
            logger.warning(f"{__name__}:render_svg - primary renderer failed: {primary_error}")
            if not self.wrapper_command:
                raise
            await self._run_wrapper(source_path, svg_path)

        if not svg_path.is_file():
            raise RendererError("Renderer produced no output file", renderer=self.binary)
        logger.info(f"{__name__}:render_svg - END svg={svg_path.name}")
        return svg_path

    async def _run_primary(self, source_path: Path, svg_path: Path) -> None:
        await run_command(
            [self.binary, str(source_path), str(svg_path), *self._style_options()],
            timeout=self.timeout_seconds,
            renderer=self.binary,
        )

    async def _run_wrapper(self, source_path: Path, svg_path: Path) -> None:
        # Repairs go to a scratch copy; stored sources are never rewritten.
        content = await asyncio.to_thread(source_path.read_text, encoding="utf-8")
        with tempfile.TemporaryDirectory(prefix="docchat_d2_") as scratch:
            fixed_path = Path(scratch) / source_path.name
            await asyncio.to_thread(fixed_path.write_text, preprocess_d2(content), encoding="utf-8")
            await run_command(
                [*self.wrapper_command, str(fixed_path), str(svg_path), *self._style_options()],
                timeout=self.timeout_seconds,
                renderer="wrapper",
            )

class MermaidRenderer:
    """Render Mermaid source to SVG with mermaid-cli (``mmdc``)."""

    def __init__(
        self,
        command: Sequence[str] | None = None,
        theme: str = "default",
        background: str = "white",
        timeout_seconds: float = 20.0,
    ) -> None:
        self.command = list(command or ["mmdc"])
        self.theme = theme
        self.background = background
        self.timeout_seconds = timeout_seconds

    async def render_svg(self, source_path: Path, svg_path: Path) -> Path:
        """
        Render ``source_path`` into ``svg_path``.

        Raises:
            RendererError: When mmdc is missing, times out, fails or writes nothing
        """
        logger.info(f"{__name__}:MermaidRenderer.render_svg - START source={source_path.name}")
        try:
            await run_command(
                [
                    *self.command,
                    "-i", str(source_path),
                    "-o", str(svg_path),
                    "-t", self.theme,
                    "-b", self.background,
                ],
                timeout=self.timeout_seconds,
                renderer="mmdc",
            )
        except RendererError:
            svg_path.unlink(missing_ok=True)
            raise
        if not svg_path.is_file():
            raise RendererError("Renderer produced no output file", renderer="mmdc")
        logger.info(f"{__name__}:MermaidRenderer.render_svg - END svg={svg_path.name}")
        return svg_path



class PngWriter:
    """Detached SVG to PNG conversion."""

    def __init__(self, store: ArtifactStore, output_width: int = 1600) -> None:
        self._store = store
        self._output_width = output_width
        self._tasks: set[asyncio.Task] = set()

    async def convert(self, svg_path: Path, stem: str) -> Path:
        """Rasterize one SVG and store it as ``png/<stem>.png``."""
        svg_bytes = await asyncio.to_thread(svg_path.read_bytes)
        png_bytes = await asyncio.to_thread(
            cairosvg.svg2png,
            bytestring=svg_bytes,
            output_width=self._output_width,
        )
        return await self._store.write_bytes("png", stem, png_bytes)

    def schedule(self, svg_path: Path, stem: str) -> asyncio.Task:
        """
        Start conversion without awaiting it.

        The task is referenced until done so it is not garbage collected;
        any exception is logged and dropped.
        """
        task = asyncio.create_task(self.convert(svg_path, stem), name=f"png:{stem}")
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"{__name__}:png - cancelled {task.get_name()}")
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"{__name__}:png - {task.get_name()} failed: {type(error).__name__}: {error}")
        else:
            logger.info(f"{__name__}:png - wrote {task.result()}")

    async def drain(self) -> None:
        """Wait for in-flight conversions (used at shutdown and in tests)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
