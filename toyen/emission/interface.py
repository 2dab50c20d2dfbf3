"""
Emission backend interface.

Defines where the compiled build file and its depfile end up, so the
pipeline can write to disk in production and to memory in tests.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from pathlib import Path


class EmissionBackend(ABC):
    """Abstract writer for the build file and the depfile."""

    @abstractmethod
    async def write_text(self, path: Path, content: str) -> Path:
        """Write ``content`` to ``path`` atomically.

        Args:
            path: Destination file.
            content: Complete file contents.

        Returns:
            The path written.

        Raises:
            EmissionError: If the file cannot be written.
        """
        ...

    @staticmethod
    def compute_hash(content: str) -> str:
        """Compute SHA-256 hash of text content.

        Args:
            content: Text to hash.

        Returns:
            Hexadecimal SHA-256 digest.
        """
        return hashlib.sha256(content.encode("utf-8")).hexdigest()
