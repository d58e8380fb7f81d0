"""Journal refresh from the vault."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from ledgernotes.domain.extractor import extract_candidate_lines
from ledgernotes.domain.ledger import Ledger
from ledgernotes.domain.vault import Vault

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefreshReport:
    """Outcome of one refresh cycle."""

    files: int
    lines: int
    entries: int


class RefreshService:
    """Rebuilds a ledger from the markdown files of a vault folder."""

    def __init__(self, vault: Vault):
        """Initialize refresh service.

        Args:
            vault: Vault to scan
        """
        self.vault = vault
        self._lock = asyncio.Lock()

    async def refresh(self, ledger: Ledger, ledger_folder: str = "") -> RefreshReport:
        """Reset the ledger and ingest every candidate line under the folder.

        Refresh cycles on the same service never overlap.
        """
        async with self._lock:
            paths = self.vault.markdown_files(ledger_folder)
            contents = await self.vault.read_all(paths)

            ledger.reset()
            file_count = 0
            line_count = 0
            for path, content in zip(paths, contents):
                if content is None:
                    continue
                file_count += 1
                lines = extract_candidate_lines(content)
                logger.debug("%s: %d candidate lines", path, len(lines))
                line_count += len(lines)
                await ledger.ingest(lines)

            report = RefreshReport(files=file_count, lines=line_count, entries=len(ledger))
            logger.info(
                "Refreshed ledger: %d files, %d lines, %d entries",
                report.files,
                report.lines,
                report.entries,
            )
            return report

    async def watch(
        self,
        ledger: Ledger,
        ledger_folder: str,
        interval: float,
        on_refresh: Optional[Callable[[RefreshReport], Awaitable[None] | None]] = None,
        cycles: Optional[int] = None,
    ) -> int:
        """Refresh every ``interval`` seconds.

        A cycle that fails with an OS error is logged and the loop goes on.

        Args:
            ledger: Ledger to rebuild
            ledger_folder: Vault folder prefix
            interval: Seconds between refreshes
            on_refresh: Called with each report, may be a coroutine function
            cycles: Stop after this many refreshes (run forever if None)

        Returns:
            Number of cycles run
        """
        done = 0
        while cycles is None or done < cycles:
            if done:
                await asyncio.sleep(interval)
            done += 1
            try:
                report = await self.refresh(ledger, ledger_folder)
            except OSError:
                logger.exception("Refresh cycle %d failed", done)
                continue
            if on_refresh is not None:
                outcome = on_refresh(report)
                if asyncio.iscoroutine(outcome):
                    await outcome
        return done
