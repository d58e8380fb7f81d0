"""Markdown vault access."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from ledgernotes.domain.errors import NotFoundError, vault_not_found

logger = logging.getLogger(__name__)


class Vault:
    """A directory tree of markdown notes."""

    def __init__(self, root: str | Path):
        """Initialize vault.

        Args:
            root: Vault directory

        Raises:
            NotFoundError: If the directory does not exist
        """
        self.root = Path(root)
        if not self.root.is_dir():
            raise NotFoundError(vault_not_found(str(root)))

    def markdown_files(self, folder: str = "") -> list[str]:
        """List markdown files whose vault-relative path starts with ``folder``.

        Paths use forward slashes and are sorted.
        """
        paths = sorted(p.relative_to(self.root).as_posix() for p in self.root.rglob("*.md") if p.is_file())
        return [p for p in paths if p.startswith(folder)]

    def read(self, path: str) -> str:
        """Read a vault file as UTF-8 text."""
        return (self.root / path).read_text(encoding="utf-8")

    def read_or_skip(self, path: str) -> Optional[str]:
        """Read a vault file, or return None if it is gone or not UTF-8."""
        try:
            return self.read(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", path, e)
            return None

    async def read_all(self, paths: list[str]) -> list[Optional[str]]:
        """Read several files off the event loop, in the given order.

        Unreadable files come back as None.
        """
        return await asyncio.gather(*(asyncio.to_thread(self.read_or_skip, p) for p in paths))
