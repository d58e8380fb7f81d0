"""Generic SQLAlchemy database implementation."""

from typing import Optional
from sqlalchemy.orm import Session

from ledgernotes.database.base import Database
from ledgernotes.database.models import (
    SETTINGS_ROW_ID,
    AccountAlias,
    SettingsRow,
    create_session_factory,
)
from ledgernotes.database.mappers import alias_to_domain, settings_to_domain
from ledgernotes.domain.entities import (
    AccountAlias as DomainAccountAlias,
    Settings as DomainSettings,
)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Settings operations
    def get_settings(self) -> Optional[DomainSettings]:
        """Get stored settings, or None if never saved."""
        session = self._get_session()
        row = session.query(SettingsRow).filter(SettingsRow.id == SETTINGS_ROW_ID).first()
        if row is None:
            return None
        return settings_to_domain(row)

    def save_settings(
        self, ledger_folder: str, refresh_interval: int, currency: str, timezone: str
    ) -> None:
        """Create or replace the stored settings."""
        session = self._get_session()
        row = session.query(SettingsRow).filter(SettingsRow.id == SETTINGS_ROW_ID).first()
        if row is None:
            row = SettingsRow(id=SETTINGS_ROW_ID)
            session.add(row)
        row.ledger_folder = ledger_folder
        row.refresh_interval = refresh_interval
        row.currency = currency
        row.timezone = timezone
        session.commit()

    # Account alias operations
    def create_alias(self, alias: str, account: str) -> int:
        """Create an account alias. Returns alias ID."""
        session = self._get_session()
        row = AccountAlias(alias=alias, account=account)
        session.add(row)
        session.commit()
        return row.id

    def get_alias(self, alias: str) -> Optional[DomainAccountAlias]:
        """Get alias by key."""
        session = self._get_session()
        row = session.query(AccountAlias).filter(AccountAlias.alias == alias).first()
        if row is None:
            return None
        return alias_to_domain(row)

    def list_aliases(self) -> list[DomainAccountAlias]:
        """List all aliases ordered by key."""
        session = self._get_session()
        rows = session.query(AccountAlias).order_by(AccountAlias.alias).all()
        return [alias_to_domain(row) for row in rows]

    def update_alias(self, alias: str, account: str) -> None:
        """Change the account an alias points to."""
        session = self._get_session()
        row = session.query(AccountAlias).filter(AccountAlias.alias == alias).first()
        if row is None:
            raise ValueError(f"Account alias '{alias}' not found")
        row.account = account
        session.commit()

    def rename_alias(self, alias: str, new_alias: str) -> None:
        """Change an alias key."""
        session = self._get_session()
        row = session.query(AccountAlias).filter(AccountAlias.alias == alias).first()
        if row is None:
            raise ValueError(f"Account alias '{alias}' not found")

        existing = (
            session.query(AccountAlias)
            .filter(AccountAlias.alias == new_alias, AccountAlias.id != row.id)
            .first()
        )
        if existing is not None:
            raise ValueError(f"Account alias '{new_alias}' already exists")

        row.alias = new_alias
        session.commit()

    def delete_alias(self, alias: str) -> None:
        """Delete an alias."""
        session = self._get_session()
        row = session.query(AccountAlias).filter(AccountAlias.alias == alias).first()
        if row is None:
            raise ValueError(f"Account alias '{alias}' not found")
        session.delete(row)
        session.commit()
