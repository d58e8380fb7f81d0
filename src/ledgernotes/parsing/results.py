"""Result variants returned by a line parser.

Callers discriminate on the concrete type, never on the presence of an
attribute.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class PostingData:
    """Account and signed amount of one parsed leg."""

    account: str
    amount: Decimal


@dataclass(frozen=True)
class GenericResult:
    """A recognised directive that is not a transaction (open, balance, comment)."""

    date: str
    output: str


@dataclass(frozen=True)
class TransactionResult:
    """A parsed transaction.

    ``date`` is kept as the ISO string produced by the parser; turning it
    into a calendar date is the journal's job.
    """

    date: str
    payee: str
    narration: str
    tags: tuple[str, ...]
    links: tuple[str, ...]
    output: str
    data: tuple[PostingData, ...]


@dataclass(frozen=True)
class ErrorResult:
    """The line could not be parsed."""

    message: str


ParseResult = Union[GenericResult, TransactionResult, ErrorResult]
