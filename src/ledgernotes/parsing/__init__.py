"""Shorthand line parsing for ledgernotes."""

from ledgernotes.parsing.base import LineParser
from ledgernotes.parsing.results import (
    ErrorResult,
    GenericResult,
    ParseResult,
    PostingData,
    TransactionResult,
)
from ledgernotes.parsing.shorthand import ShorthandParser

__all__ = [
    "LineParser",
    "ShorthandParser",
    "ParseResult",
    "GenericResult",
    "TransactionResult",
    "ErrorResult",
    "PostingData",
]
