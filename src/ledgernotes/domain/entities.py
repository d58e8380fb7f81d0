"""Domain model entities for ledgernotes.

These are pure data classes representing ledger concepts, independent of
the database schema and of the parser that produces them.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

from ledgernotes.domain.errors import ConfigurationError

BEANCOUNT_MODE = "beancount"

ALIAS_KEY_PATTERN = re.compile(r"^\w[\w-]*$")


@dataclass(frozen=True)
class LedgerConfig:
    """Parser configuration shared by every line of a refresh cycle.

    ``account`` maps short alias keys to full account paths. The mapping is
    copied into a read-only view, so a config can be handed to concurrent
    parses without being changed underneath them.
    """

    currency: str
    timezone: str
    account: Mapping[str, str] = field(default_factory=dict)
    mode: str = BEANCOUNT_MODE
    indent: int = 4

    def __post_init__(self):
        if self.mode != BEANCOUNT_MODE:
            raise ConfigurationError(f"Unsupported output mode '{self.mode}'")
        if not self.currency:
            raise ConfigurationError("Currency must not be empty")
        for key, value in self.account.items():
            if not isinstance(key, str) or not ALIAS_KEY_PATTERN.match(key):
                raise ConfigurationError(f"Invalid account alias key {key!r}")
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"Account alias '{key}' has no account path")
        object.__setattr__(self, "account", MappingProxyType(dict(self.account)))


@dataclass(frozen=True)
class Posting:
    """One leg of a transaction. Negative amounts leave the account."""

    account: str
    amount: Decimal


@dataclass(frozen=True)
class JournalEntry:
    """A successfully parsed transaction held by the journal."""

    date: date
    payee: str
    postings: tuple[Posting, ...]
    narration: str
    tags: frozenset[str]
    links: frozenset[str]
    beancount: str

    @property
    def debits(self) -> tuple[Posting, ...]:
        """Postings with a non-negative amount."""
        return tuple(p for p in self.postings if p.amount >= 0)

    @property
    def credits(self) -> tuple[Posting, ...]:
        """Postings with a negative amount, as positive magnitudes."""
        return tuple(Posting(p.account, -p.amount) for p in self.postings if p.amount < 0)


@dataclass(frozen=True)
class Settings:
    """Persisted plugin settings."""

    ledger_folder: str
    refresh_interval: int
    currency: str
    timezone: str
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AccountAlias:
    """Shorthand key for a full account path."""

    id: int
    alias: str
    account: str
    created_at: datetime
