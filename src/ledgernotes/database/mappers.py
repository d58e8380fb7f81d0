"""Mapper functions to convert between domain models and SQLAlchemy models."""

from ledgernotes.domain import entities as domain
from ledgernotes.database.models import (
    AccountAlias as ORMAccountAlias,
    SettingsRow as ORMSettingsRow,
)


def settings_to_domain(orm_settings: ORMSettingsRow) -> domain.Settings:
    """Convert SQLAlchemy SettingsRow model to domain Settings entity."""
    return domain.Settings(
        ledger_folder=orm_settings.ledger_folder,
        refresh_interval=orm_settings.refresh_interval,
        currency=orm_settings.currency,
        timezone=orm_settings.timezone,
        updated_at=orm_settings.updated_at,
    )


def alias_to_domain(orm_alias: ORMAccountAlias) -> domain.AccountAlias:
    """Convert SQLAlchemy AccountAlias model to domain AccountAlias entity."""
    return domain.AccountAlias(
        id=orm_alias.id,
        alias=orm_alias.alias,
        account=orm_alias.account,
        created_at=orm_alias.created_at,
    )
