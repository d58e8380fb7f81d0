"""Abstract line parser interface."""

from abc import ABC, abstractmethod

from ledgernotes.domain.entities import LedgerConfig
from ledgernotes.parsing.results import ParseResult


class LineParser(ABC):
    """Turns one shorthand ledger line into a parse result."""

    @abstractmethod
    async def parse(self, line: str, config: LedgerConfig) -> ParseResult:
        """Parse a line.

        Implementations report unparseable input as an ``ErrorResult``
        instead of raising.
        """
        pass
