"""Settings domain service."""

import re
from typing import Optional

from dateutil import tz

from ledgernotes.database.base import Database
from ledgernotes.domain.aliases import AliasService
from ledgernotes.domain.entities import LedgerConfig, Settings
from ledgernotes.domain.errors import ValidationError

DEFAULT_SETTINGS = Settings(
    ledger_folder="",
    refresh_interval=15,
    currency="PHP",
    timezone="Asia/Manila",
)

MIN_REFRESH_INTERVAL = 3
MAX_REFRESH_INTERVAL = 30

CURRENCY_PATTERN = re.compile(r"^[A-Z][A-Z0-9'._-]{0,22}[A-Z0-9]$")


class SettingsService:
    """Service for reading and changing plugin settings."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db
        self.alias_service = AliasService(db)

    def get_settings(self) -> Settings:
        """Return stored settings, falling back to the defaults."""
        settings = self.db.get_settings()
        return settings if settings is not None else DEFAULT_SETTINGS

    def update_settings(
        self,
        ledger_folder: Optional[str] = None,
        refresh_interval: Optional[int] = None,
        currency: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> Settings:
        """Update the given settings, leaving the others unchanged.

        Returns:
            The settings after the update

        Raises:
            ValidationError: If a value is out of range or malformed
        """
        current = self.get_settings()
        ledger_folder = current.ledger_folder if ledger_folder is None else ledger_folder.strip()
        refresh_interval = current.refresh_interval if refresh_interval is None else refresh_interval
        currency = current.currency if currency is None else currency.strip().upper()
        timezone = current.timezone if timezone is None else timezone.strip()

        validate_refresh_interval(refresh_interval)
        validate_currency(currency)
        validate_timezone(timezone)

        self.db.save_settings(
            ledger_folder=ledger_folder,
            refresh_interval=refresh_interval,
            currency=currency,
            timezone=timezone,
        )
        return self.get_settings()

    def build_config(self) -> LedgerConfig:
        """Build the parser configuration from settings and aliases."""
        settings = self.get_settings()
        return LedgerConfig(
            currency=settings.currency,
            timezone=settings.timezone,
            account=self.alias_service.get_mapping(),
        )


def validate_refresh_interval(seconds: int) -> None:
    """Raise ValidationError unless the interval is within the allowed range."""
    if not MIN_REFRESH_INTERVAL <= seconds <= MAX_REFRESH_INTERVAL:
        raise ValidationError(
            f"Refresh interval must be between {MIN_REFRESH_INTERVAL} and "
            f"{MAX_REFRESH_INTERVAL} seconds, got {seconds}"
        )


def validate_currency(currency: str) -> None:
    """Raise ValidationError unless the currency looks like an ISO 4217 code."""
    if not CURRENCY_PATTERN.match(currency):
        raise ValidationError(f"Invalid currency '{currency}': use a code like PHP or USD")


def validate_timezone(timezone: str) -> None:
    """Raise ValidationError unless the timezone is a known IANA name."""
    if not timezone or tz.gettz(timezone) is None:
        raise ValidationError(
            f"Unknown timezone '{timezone}': use an IANA name like Asia/Manila"
        )
