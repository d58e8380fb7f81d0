"""Account alias substitution and alias management."""

import re
from typing import Mapping, Optional

from ledgernotes.database.base import Database
from ledgernotes.domain.entities import ALIAS_KEY_PATTERN, AccountAlias as AccountAliasEntity
from ledgernotes.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    alias_not_found,
    duplicate_alias,
    invalid_alias_line,
)

# Defaults offered by the settings screen: the four accounting categories
# plus Wants/Needs splits of Expenses.
DEFAULT_ALIASES = [
    ("start", "Equity:Starting-Balance"),
    ("a", "Assets"),
    ("l", "Liabilities"),
    ("x", "Expenses"),
    ("i", "Income"),
    ("w", "Expenses:Wants"),
    ("n", "Expenses:Needs"),
]


def apply_aliases(line: str, aliases: Mapping[str, str]) -> str:
    """Replace every whole-word ``key:`` with ``account:``.

    ``food:`` is replaced for alias ``food`` but ``foodie:`` and
    ``seafood:`` are left alone.
    """
    for key, account in aliases.items():
        pattern = re.compile(r"\b" + re.escape(key) + ":")
        line = pattern.sub(lambda _match: account + ":", line)
    return line


def parse_alias_text(text: str) -> dict[str, str]:
    """Parse ``alias = Account:Path`` lines into a mapping.

    Blank lines are ignored. Later definitions of the same alias win.

    Raises:
        ValidationError: If a line is not a valid alias definition
    """
    aliases = {}
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        key, sep, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not ALIAS_KEY_PATTERN.match(key) or not value:
            raise ValidationError(invalid_alias_line(line_number, line))
        aliases[key] = value
    return aliases


def format_alias_text(aliases: Mapping[str, str]) -> str:
    """Inverse of parse_alias_text."""
    return "\n".join(f"{key} = {value}" for key, value in aliases.items())


class AliasService:
    """Service for managing account aliases."""

    def __init__(self, db: Database):
        """Initialize alias service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_alias(self, alias: str, account: str) -> int:
        """Create an account alias.

        Args:
            alias: Short key used in notes (e.g. "x")
            account: Full account path (e.g. "Expenses")

        Returns:
            Alias ID

        Raises:
            ValidationError: If the key or account is malformed
            ConflictError: If the alias already exists
        """
        alias, account = alias.strip(), account.strip()
        _validate(alias, account)
        if self.db.get_alias(alias) is not None:
            raise ConflictError(duplicate_alias(alias))
        return self.db.create_alias(alias=alias, account=account)

    def get_alias(self, alias: str) -> Optional[AccountAliasEntity]:
        """Get alias by key."""
        return self.db.get_alias(alias)

    def list_aliases(self) -> list[AccountAliasEntity]:
        """List all aliases ordered by key."""
        return self.db.list_aliases()

    def get_mapping(self) -> dict[str, str]:
        """Return aliases as a key -> account mapping."""
        return {a.alias: a.account for a in self.db.list_aliases()}

    def update_alias(self, alias: str, account: str) -> None:
        """Point an existing alias at a different account.

        Raises:
            NotFoundError: If the alias does not exist
        """
        account = account.strip()
        _validate(alias, account)
        if self.db.get_alias(alias) is None:
            raise NotFoundError(alias_not_found(alias))
        self.db.update_alias(alias=alias, account=account)

    def rename_alias(self, alias: str, new_alias: str) -> None:
        """Rename an alias key, keeping its account.

        Raises:
            NotFoundError: If the alias does not exist
            ConflictError: If the new key is already taken
        """
        existing = self.db.get_alias(alias)
        if existing is None:
            raise NotFoundError(alias_not_found(alias))
        _validate(new_alias, existing.account)
        if new_alias != alias and self.db.get_alias(new_alias) is not None:
            raise ConflictError(duplicate_alias(new_alias))
        self.db.rename_alias(alias=alias, new_alias=new_alias)

    def delete_alias(self, alias: str) -> None:
        """Delete an alias.

        Raises:
            NotFoundError: If the alias does not exist
        """
        if self.db.get_alias(alias) is None:
            raise NotFoundError(alias_not_found(alias))
        self.db.delete_alias(alias)

    def import_text(self, text: str, replace: bool = False) -> int:
        """Create or update aliases from ``alias = Account:Path`` text.

        Args:
            text: Alias definitions, one per line
            replace: Remove aliases that are not in the text

        Returns:
            Number of aliases created or updated
        """
        aliases = parse_alias_text(text)
        existing = self.get_mapping()
        if replace:
            for key in existing:
                if key not in aliases:
                    self.db.delete_alias(key)

        changed = 0
        for key, account in aliases.items():
            if key not in existing:
                self.db.create_alias(alias=key, account=account)
                changed += 1
            elif existing[key] != account:
                self.db.update_alias(alias=key, account=account)
                changed += 1
        return changed


def _validate(alias: str, account: str) -> None:
    if not ALIAS_KEY_PATTERN.match(alias):
        raise ValidationError(
            f"Invalid alias '{alias}': use letters, digits, '_' or '-' and start with a letter or digit"
        )
    if not account:
        raise ValidationError(f"Alias '{alias}' needs an account path")
