"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgernotes.domain.entities import AccountAlias, Settings


class Database(ABC):
    """Abstract database interface for ledgernotes."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self) -> Optional[Settings]:
        """Get stored settings, or None if never saved."""
        pass

    @abstractmethod
    def save_settings(
        self, ledger_folder: str, refresh_interval: int, currency: str, timezone: str
    ) -> None:
        """Create or replace the stored settings."""
        pass

    # Account alias operations
    @abstractmethod
    def create_alias(self, alias: str, account: str) -> int:
        """Create an account alias. Returns alias ID."""
        pass

    @abstractmethod
    def get_alias(self, alias: str) -> Optional[AccountAlias]:
        """Get alias by key."""
        pass

    @abstractmethod
    def list_aliases(self) -> list[AccountAlias]:
        """List all aliases ordered by key."""
        pass

    @abstractmethod
    def update_alias(self, alias: str, account: str) -> None:
        """Change the account an alias points to."""
        pass

    @abstractmethod
    def rename_alias(self, alias: str, new_alias: str) -> None:
        """Change an alias key."""
        pass

    @abstractmethod
    def delete_alias(self, alias: str) -> None:
        """Delete an alias."""
        pass
