"""
Local filesystem emission backend.

Writes go to a temporary file next to the destination which is then renamed
over it, so a failed write never leaves a truncated build file behind.
"""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os

from ..core.exceptions import EmissionError
from ..core.logging import get_logger
from .interface import EmissionBackend

logger = get_logger(__name__)


class LocalEmissionBackend(EmissionBackend):
    """Filesystem emission backend."""

    async def _ensure_parent(self, path: Path) -> None:
        """Ensure parent directory exists.

        Args:
            path: The file path whose parent directory should be created.
        """
        parent = path.parent
        if not parent.exists():
            await aiofiles.os.makedirs(parent, exist_ok=True)

    async def write_text(self, path: Path, content: str) -> Path:
        """Write text content to the filesystem.

        Args:
            path: Destination file.
            content: Complete file contents.

        Returns:
            The path written.

        Raises:
            EmissionError: If the directory or the file cannot be written.
        """
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            await self._ensure_parent(path)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path.exists():
                await aiofiles.os.remove(tmp_path)
            raise EmissionError(
                message=f"error writing {path}: {e.strerror or e}",
                path=str(path),
                cause=e,
            ) from e

        logger.debug("Wrote file", path=str(path), hash=self.compute_hash(content)[:16])
        return path


class MemoryEmissionBackend(EmissionBackend):
    """Keeps written files in a dict; used for dry runs."""

    def __init__(self) -> None:
        self.files: dict[Path, str] = {}

    async def write_text(self, path: Path, content: str) -> Path:
        self.files[path] = content
        return path
