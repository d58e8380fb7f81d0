"""Shared pytest fixtures for ledgernotes tests."""

import asyncio
import tempfile
import os
from decimal import Decimal
import pytest

from ledgernotes.database.factories import create_sqlite_database
from ledgernotes.domain.aliases import AliasService
from ledgernotes.domain.entities import LedgerConfig
from ledgernotes.domain.settings import SettingsService
from ledgernotes.parsing.base import LineParser
from ledgernotes.parsing.results import ErrorResult, PostingData, TransactionResult


class StubParser(LineParser):
    """Line parser returning canned results and recording what it was given."""

    def __init__(self, results=None, delays=None):
        self.results = dict(results or {})
        self.delays = dict(delays or {})
        self.calls = []

    async def parse(self, line, config):
        self.calls.append(line)
        if line in self.delays:
            await asyncio.sleep(self.delays[line])
        result = self.results.get(line, ErrorResult(message=f"no canned result for {line!r}"))
        if isinstance(result, Exception):
            raise result
        return result


def make_transaction(
    date="2023-04-01",
    payee="Coffee Shop",
    narration="",
    postings=(("Assets:Cash", "-150"), ("Expenses:Needs:Food", "150")),
    output=None,
):
    """Build a TransactionResult as a parser would return it."""
    if output is None:
        output = f'{date} * "{payee}" "{narration}"'
    return TransactionResult(
        date=date,
        payee=payee,
        narration=narration,
        tags=(),
        links=(),
        output=output,
        data=tuple(PostingData(account, Decimal(amount)) for account, amount in postings),
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def alias_service(temp_db):
    """Create an AliasService with a temporary database."""
    return AliasService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def config():
    """Ledger configuration with the aliases used across tests."""
    return LedgerConfig(
        currency="PHP",
        timezone="Asia/Manila",
        account={"food": "Expenses:Needs:Food", "cash": "Assets:Cash"},
    )


@pytest.fixture
def stub_parser():
    """Create an empty StubParser; tests fill in ``results``."""
    return StubParser()


@pytest.fixture
def vault_dir(tmp_path):
    """Create a small vault of markdown notes."""
    root = tmp_path / "vault"
    (root / "Finance").mkdir(parents=True)
    (root / "Journal").mkdir()
    (root / "Finance" / "april.md").write_text(
        "# April\n"
        "\n"
        "- 2023-04-01 @Cafe Latte 150 a:Cash > n:Food\n"
        "- 2023-04-02 Groceries a:Bank > 800 n:Food + 200 w:Snacks\n"
        "- 2023-04-03 just a note without an arrow\n"
        "- 2023-04-04 Broken 12 a:Cash > nowhere\n",
        encoding="utf-8",
    )
    (root / "Finance" / "may.md").write_text(
        "* 2023-05-10 \"Landlord\" \"May rent\" a:Bank > 12000 x:Rent\n",
        encoding="utf-8",
    )
    (root / "Journal" / "diary.md").write_text(
        "- 2023-04-05 Movie 300 a:Cash > w:Fun\n",
        encoding="utf-8",
    )
    (root / "Finance" / "notes.txt").write_text("- 2023-04-06 Ignored 1 a:Cash > n:Food\n")
    return root


@pytest.fixture
def default_aliases(alias_service):
    """Create the default aliases."""
    from ledgernotes.domain.aliases import DEFAULT_ALIASES

    for alias, account in DEFAULT_ALIASES:
        alias_service.create_alias(alias, account)
    return dict(DEFAULT_ALIASES)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
