"""Tests for the in-memory journal."""

import asyncio
import dataclasses
from datetime import date, timedelta
from decimal import Decimal

import pytest

from conftest import StubParser, make_transaction
from ledgernotes.domain.entities import LedgerConfig, Posting
from ledgernotes.domain.errors import ConfigurationError
from ledgernotes.domain.extractor import extract_candidate_lines
from ledgernotes.domain.ledger import Ledger, to_journal_entry
from ledgernotes.parsing.results import ErrorResult, GenericResult, TransactionResult


def ingest(ledger, lines):
    return asyncio.run(ledger.ingest(lines))


class TestIngest:
    """Tests for Ledger.ingest."""

    def test_aliases_are_substituted_before_parsing(self, config, stub_parser):
        """The parser receives the expanded line."""
        ledger = Ledger(config, stub_parser)
        ingest(ledger, ["2023-04-01 Coffee Shop > food: 150"])

        assert stub_parser.calls == ["2023-04-01 Coffee Shop > Expenses:Needs:Food: 150"]

    def test_alias_prefix_of_another_word_is_not_substituted(self, config, stub_parser):
        """'foodie:' is not the 'food' alias."""
        ledger = Ledger(config, stub_parser)
        ingest(ledger, ["2023-04-01 foodie: 150 > cash: 1"])

        assert stub_parser.calls == ["2023-04-01 foodie: 150 > Assets:Cash: 1"]

    def test_only_transactions_are_kept(self, config, stub_parser):
        """Generic results, errors and parser exceptions are skipped."""
        stub_parser.results = {
            "txn": make_transaction(),
            "open": GenericResult(date="2023-04-01", output="2023-04-01 open Assets:Cash"),
            "bad": ErrorResult(message="nope"),
            "boom": RuntimeError("parser crashed"),
        }
        ledger = Ledger(config, stub_parser)

        added = ingest(ledger, ["open", "bad", "txn", "boom", "unknown"])

        assert added == 1
        assert len(ledger) == 1
        assert ledger.entries[0].payee == "Coffee Shop"

    def test_malformed_result_date_skips_entry(self, config, stub_parser):
        """A transaction with an unusable date is dropped, the rest is kept."""
        stub_parser.results = {
            "bad date": make_transaction(date="2023-02-30"),
            "good": make_transaction(date="2023-04-02"),
        }
        ledger = Ledger(config, stub_parser)

        ingest(ledger, ["bad date", "good"])

        assert [e.date for e in ledger.entries] == [date(2023, 4, 2)]

    def test_malformed_result_fields_skip_entry(self, config, stub_parser):
        """Results with missing fields are dropped without losing the batch."""
        no_tags = TransactionResult(
            date="2023-04-03",
            payee="",
            narration="",
            tags=None,
            links=(),
            output="",
            data=(),
        )
        no_postings = dataclasses.replace(no_tags, tags=(), data=(None,))
        stub_parser.results = {
            "no date": make_transaction(date=None),
            "no tags": no_tags,
            "no postings": no_postings,
            "good": make_transaction(date="2023-04-02"),
        }
        ledger = Ledger(config, stub_parser)

        added = ingest(ledger, ["no date", "no tags", "no postings", "good"])

        assert added == 1
        assert [e.date for e in ledger.entries] == [date(2023, 4, 2)]

    def test_entries_follow_input_order(self, config):
        """Entries are appended in input order even if parses finish out of order."""
        parser = StubParser(
            results={f"line {i}": make_transaction(payee=f"P{i}") for i in range(4)},
            delays={"line 0": 0.05, "line 1": 0.0, "line 2": 0.02, "line 3": 0.01},
        )
        ledger = Ledger(config, parser)

        ingest(ledger, [f"line {i}" for i in range(4)])

        assert [e.payee for e in ledger.entries] == ["P0", "P1", "P2", "P3"]

    def test_ingest_appends_across_calls(self, config, stub_parser):
        """Several ingest calls accumulate into one journal."""
        stub_parser.results = {"a": make_transaction(payee="A"), "b": make_transaction(payee="B")}
        ledger = Ledger(config, stub_parser)

        ingest(ledger, ["a"])
        ingest(ledger, ["b"])

        assert [e.payee for e in ledger.entries] == ["A", "B"]

    def test_entries_are_immutable(self, config, stub_parser):
        """Journal entries cannot be modified."""
        stub_parser.results = {"txn": make_transaction()}
        ledger = Ledger(config, stub_parser)
        ingest(ledger, ["txn"])

        with pytest.raises(Exception):
            ledger.entries[0].payee = "Other"


class TestReset:
    """Tests for Ledger.reset."""

    def test_reset_clears_journal(self, config, stub_parser):
        """Reset empties the journal and export then returns nothing."""
        stub_parser.results = {"txn": make_transaction()}
        ledger = Ledger(config, stub_parser)
        ingest(ledger, ["txn"])

        ledger.reset()

        assert len(ledger) == 0
        assert ledger.export(date.min, date.max) == ""

    def test_reset_is_idempotent(self, config, stub_parser):
        """Resetting an empty ledger is harmless."""
        ledger = Ledger(config, stub_parser)
        ledger.reset()
        ledger.reset()
        assert ledger.entries == ()


class TestExport:
    """Tests for Ledger.export."""

    @pytest.fixture
    def ledger(self, config):
        parser = StubParser(
            results={
                d: make_transaction(date=d, output=f"entry {d}")
                for d in ["2023-03-31", "2023-04-01", "2023-04-15", "2023-04-30", "2023-05-01"]
            }
        )
        ledger = Ledger(config, parser)
        ingest(ledger, ["2023-04-15", "2023-03-31", "2023-04-30", "2023-05-01", "2023-04-01"])
        return ledger

    def test_bounds_are_inclusive(self, ledger):
        """Entries on either bound are included, a day outside is not."""
        text = ledger.export(date(2023, 4, 1), date(2023, 4, 30))
        assert text == "entry 2023-04-15\n\nentry 2023-04-30\n\nentry 2023-04-01\n\n"

    def test_one_day_outside_is_excluded(self, ledger):
        """Shrinking the range by a day drops the boundary entries."""
        text = ledger.export(date(2023, 4, 1) + timedelta(days=1), date(2023, 4, 30) - timedelta(days=1))
        assert text == "entry 2023-04-15\n\n"

    def test_no_match_returns_empty_string(self, ledger):
        """An empty range exports nothing."""
        assert ledger.export(date(2022, 1, 1), date(2022, 12, 31)) == ""

    def test_export_does_not_mutate(self, ledger):
        """Export is read-only."""
        before = ledger.entries
        ledger.export(date(2023, 4, 1), date(2023, 4, 30))
        assert ledger.entries == before


class TestJournalEntry:
    """Tests for result conversion and posting views."""

    def test_conversion_keeps_fields(self):
        """All parser fields end up on the entry."""
        result = make_transaction(narration="Latte")
        entry = to_journal_entry(result)

        assert entry.date == date(2023, 4, 1)
        assert entry.payee == "Coffee Shop"
        assert entry.narration == "Latte"
        assert entry.beancount == result.output
        assert entry.postings == (
            Posting("Assets:Cash", Decimal("-150")),
            Posting("Expenses:Needs:Food", Decimal("150")),
        )

    def test_debit_credit_partition(self):
        """Credits are sign-flipped, debits keep their sign."""
        entry = to_journal_entry(
            make_transaction(postings=(("Assets:Cash", "-200"), ("Expenses:Food", "200")))
        )

        assert entry.credits == (Posting("Assets:Cash", Decimal("200")),)
        assert entry.debits == (Posting("Expenses:Food", Decimal("200")),)

    def test_partition_preserves_postings(self):
        """Debits plus negated credits give back the signed postings."""
        entry = to_journal_entry(
            make_transaction(
                postings=(("Assets:Bank", "-1000"), ("Expenses:Food", "800"), ("Expenses:Fun", "200"))
            )
        )
        rebuilt = list(entry.debits) + [Posting(p.account, -p.amount) for p in entry.credits]
        assert sorted(rebuilt, key=lambda p: p.account) == sorted(entry.postings, key=lambda p: p.account)


class TestLedgerConfig:
    """Tests for LedgerConfig validation."""

    def test_account_mapping_is_read_only(self, config):
        """The alias mapping cannot be changed after construction."""
        with pytest.raises(TypeError):
            config.account["food"] = "Expenses:Other"

    def test_mapping_is_copied(self):
        """Changing the source dict does not affect the config."""
        aliases = {"a": "Assets"}
        config = LedgerConfig(currency="USD", timezone="UTC", account=aliases)
        aliases["a"] = "Liabilities"
        assert config.account["a"] == "Assets"

    @pytest.mark.parametrize("account", [{"": "Assets"}, {"a b": "Assets"}, {"a": ""}, {"a": None}])
    def test_malformed_mapping_raises(self, account):
        """Invalid alias mappings are configuration errors."""
        with pytest.raises(ConfigurationError):
            LedgerConfig(currency="USD", timezone="UTC", account=account)

    def test_mode_is_fixed(self):
        """Only beancount output is supported."""
        with pytest.raises(ConfigurationError):
            LedgerConfig(currency="USD", timezone="UTC", mode="ledger")


def test_end_to_end_scenario(stub_parser):
    """Markdown line -> alias substitution -> parse -> journal -> export."""
    config = LedgerConfig(
        currency="PHP",
        timezone="Asia/Manila",
        account={"food": "Expenses:Needs:Food", "cash": "Assets:Cash"},
    )
    rendered = '2023-04-01 * "Coffee Shop"\n    Assets:Cash  -150.00 PHP\n    Expenses:Needs:Food  150.00 PHP'
    stub_parser.results = {
        "2023-04-01 Coffee Shop > Expenses:Needs:Food: 150": make_transaction(output=rendered)
    }
    ledger = Ledger(config, stub_parser)

    lines = extract_candidate_lines("- 2023-04-01 Coffee Shop > food: 150")
    ingest(ledger, lines)

    assert len(ledger) == 1
    assert ledger.entries[0].date == date(2023, 4, 1)
    assert ledger.export(date(2023, 4, 1), date(2023, 4, 1)) == rendered + "\n\n"
    assert ledger.export(date(2023, 4, 2), date(2023, 4, 30)) == ""
