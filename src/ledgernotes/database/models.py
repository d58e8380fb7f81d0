"""SQLAlchemy models for ledgernotes database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

SETTINGS_ROW_ID = 1


class SettingsRow(Base):
    """Plugin settings model. The table holds a single row."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    ledger_folder = Column(String, nullable=False, default="")
    refresh_interval = Column(Integer, nullable=False)
    currency = Column(String, nullable=False)
    timezone = Column(String, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class AccountAlias(Base):
    """Account alias model."""

    __tablename__ = "account_aliases"

    id = Column(Integer, primary_key=True)
    alias = Column(String, unique=True, nullable=False)
    account = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
