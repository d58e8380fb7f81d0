"""In-memory journal built from parsed ledger lines."""

import asyncio
import logging
from datetime import date, datetime
from typing import Iterable, Optional

from ledgernotes.domain.aliases import apply_aliases
from ledgernotes.domain.entities import JournalEntry, LedgerConfig, Posting
from ledgernotes.parsing.base import LineParser
from ledgernotes.parsing.results import TransactionResult

logger = logging.getLogger(__name__)


class Ledger:
    """Owns the journal: an insertion-ordered list of parsed transactions.

    A refresh cycle is ``reset()`` followed by ``ingest()``. Lines that do
    not parse into a transaction are skipped without raising.
    """

    def __init__(self, config: LedgerConfig, parser: LineParser):
        """Initialize an empty ledger.

        Args:
            config: Parser configuration (currency, timezone, aliases)
            parser: Line parser used for every candidate line
        """
        self.config = config
        self.parser = parser
        self._entries: list[JournalEntry] = []

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        """Journal entries in the order they were ingested."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        """Discard every journal entry."""
        self._entries = []

    async def ingest(self, lines: Iterable[str]) -> int:
        """Parse candidate lines and append the transactions to the journal.

        All lines are parsed concurrently; entries are appended in input
        order once every parse has finished.

        Args:
            lines: Candidate ledger lines

        Returns:
            Number of entries appended
        """
        lines = list(lines)
        results = await asyncio.gather(*(self._parse(line) for line in lines))
        added = 0
        for entry in results:
            if entry is not None:
                self._entries.append(entry)
                added += 1
        logger.debug("Ingested %d of %d lines", added, len(lines))
        return added

    async def _parse(self, line: str) -> Optional[JournalEntry]:
        text = apply_aliases(line, self.config.account)
        try:
            result = await self.parser.parse(text, self.config)
        except Exception:
            logger.debug("Parser failed on %r", text, exc_info=True)
            return None

        if not isinstance(result, TransactionResult):
            logger.debug("Skipping %r: %s", text, result)
            return None
        try:
            return to_journal_entry(result)
        except (ValueError, TypeError, AttributeError) as e:
            logger.debug("Skipping %r: %s", text, e)
            return None

    def export(self, start_date: date, end_date: date) -> str:
        """Render the entries dated within [start_date, end_date].

        Each entry's beancount text is followed by a blank line. Returns an
        empty string when no entry falls within the range.
        """
        return "".join(
            entry.beancount + "\n\n"
            for entry in self._entries
            if start_date <= entry.date <= end_date
        )


def to_journal_entry(result: TransactionResult) -> JournalEntry:
    """Convert a parser transaction result into a journal entry.

    Raises:
        ValueError: If the result date is not a YYYY-MM-DD date
        TypeError: If a field has the wrong type, such as a None date
    """
    return JournalEntry(
        date=datetime.strptime(result.date, "%Y-%m-%d").date(),
        payee=result.payee,
        postings=tuple(Posting(account=p.account, amount=p.amount) for p in result.data),
        narration=result.narration,
        tags=frozenset(result.tags),
        links=frozenset(result.links),
        beancount=result.output,
    )
