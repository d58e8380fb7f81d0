"""Shorthand ledger line parser.

Understands the compact notation people type into notes and renders it as
beancount text:

    2024-01-15 @Starbucks Latte 150 Assets:Cash > Expenses:Food
    2024-01-15 "Grocer" "Weekly run" #home Assets:Bank > 80 Expenses:Food + 20 Expenses:Home
    2024-01-15 Transfer | Assets:Bank -500 | Assets:Cash
    2024-01-01 open Assets:Cash PHP
    2024-01-31 balance Assets:Cash 1200 PHP

Account tokens that are alias keys (``cash > food``) resolve to their
account. Amounts without a currency use the configured currency and lines
without a date are dated today in the configured timezone.
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from beancount.core import account as account_lib
from beancount.core import amount, data
from beancount.core.account_types import DEFAULT_ACCOUNT_TYPES
from beancount.parser.printer import format_entry
from dateutil import tz

from ledgernotes.domain.entities import LedgerConfig
from ledgernotes.parsing.base import LineParser
from ledgernotes.parsing.results import (
    ErrorResult,
    GenericResult,
    ParseResult,
    PostingData,
    TransactionResult,
)

logger = logging.getLogger(__name__)

TOKEN = re.compile(r'@"[^"]*"|"[^"]*"|[|>]|[^\s|>]+')
DATE_TOKEN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
NUMBER_TOKEN = re.compile(r"^[+-]?(\d[\d,]*)?(\.\d+)?$")
CURRENCY_TOKEN = re.compile(r"^[A-Z][A-Z0-9'._-]{0,22}[A-Z0-9]$")
FLAGS = ("*", "!")
COMMENT_PREFIXES = (";", "//")
DIRECTIVES = ("open", "close", "balance")
SOURCE_NAME = "<ledgernotes>"


class ShorthandError(Exception):
    """Raised internally when a line cannot be turned into an entry."""


class ShorthandParser(LineParser):
    """Line parser for the costflow-style shorthand."""

    async def parse(self, line: str, config: LedgerConfig) -> ParseResult:
        return self.parse_line(line, config)

    def parse_line(self, line: str, config: LedgerConfig) -> ParseResult:
        """Parse a line synchronously.

        Args:
            line: Shorthand text, ``key:`` aliases already substituted
            config: Ledger configuration

        Returns:
            GenericResult, TransactionResult or ErrorResult
        """
        text = line.strip()
        try:
            if not text:
                raise ShorthandError("Empty line")
            if text.startswith(COMMENT_PREFIXES):
                return self._comment(text, config)

            tokens = TOKEN.findall(text)
            entry_date = _today(config)
            if DATE_TOKEN.match(tokens[0]):
                entry_date = _parse_date(tokens.pop(0))
            if not tokens:
                raise ShorthandError("Nothing to parse after the date")

            if tokens[0] in DIRECTIVES:
                return self._directive(tokens, entry_date, config)
            if "|" in tokens:
                return self._pipe_transaction(tokens, entry_date, config)
            if ">" in tokens:
                return self._arrow_transaction(tokens, entry_date, config)
            raise ShorthandError("No postings found")
        except ShorthandError as e:
            logger.debug("Could not parse %r: %s", line, e)
            return ErrorResult(message=str(e))

    # Generic results
    def _comment(self, text: str, config: LedgerConfig) -> GenericResult:
        body = text[2:] if text.startswith("//") else text[1:]
        return GenericResult(date=_today(config).isoformat(), output=f"; {body.strip()}")

    def _directive(self, tokens: list[str], entry_date: date, config: LedgerConfig) -> GenericResult:
        name, args = tokens[0], tokens[1:]
        if not args:
            raise ShorthandError(f"'{name}' needs an account")
        account = _check_account(args[0], config)
        meta = data.new_metadata(SOURCE_NAME, 0)

        if name == "open":
            currencies = [c for arg in args[1:] for c in arg.split(",") if c]
            for currency in currencies:
                _check_currency(currency)
            entry = data.Open(meta, entry_date, account, currencies or None, None)
        elif name == "close":
            entry = data.Close(meta, entry_date, account)
        else:
            if len(args) < 2:
                raise ShorthandError("'balance' needs an amount")
            number = _parse_number(args[1])
            if number is None:
                raise ShorthandError(f"Invalid amount '{args[1]}'")
            currency = _check_currency(args[2]) if len(args) > 2 else config.currency
            entry = data.Balance(
                meta, entry_date, account, amount.Amount(_normalize(number), currency), None, None
            )

        return GenericResult(date=entry_date.isoformat(), output=_render(entry, config))

    # Transactions
    def _arrow_transaction(
        self, tokens: list[str], entry_date: date, config: LedgerConfig
    ) -> TransactionResult:
        if tokens.count(">") > 1:
            raise ShorthandError("Only one '>' is allowed")
        split = tokens.index(">")
        left, right = tokens[:split], tokens[split + 1 :]
        if not left:
            raise ShorthandError("Missing source account")
        if not right:
            raise ShorthandError("Missing destination account")

        source = left[-1]
        total: Optional[Decimal] = None
        currency: Optional[str] = None
        head = left[:-1]
        if len(left) >= 2 and _parse_number(left[-2]) is not None:
            total = _parse_number(left[-2])
            head = left[:-2]
        elif (
            len(left) >= 3
            and CURRENCY_TOKEN.match(left[-2])
            and _parse_number(left[-3]) is not None
        ):
            total = _parse_number(left[-3])
            currency = left[-2]
            head = left[:-3]

        legs = [_parse_leg(leg) for leg in _split_tokens(right, "+")]
        missing = [leg for leg in legs if leg[1] is None]
        known = sum((leg[1] for leg in legs if leg[1] is not None), Decimal(0))

        if total is None:
            if missing:
                raise ShorthandError("Amount missing")
            total = known
        elif len(missing) > 1:
            raise ShorthandError("Only one destination may omit its amount")
        elif missing:
            legs = [
                (account, total - known if number is None else number, leg_currency)
                for account, number, leg_currency in legs
            ]
        elif known != total:
            raise ShorthandError(f"Destinations add up to {known}, expected {total}")

        currency = _single_currency([currency] + [leg[2] for leg in legs], config)
        postings = [(_check_account(source, config), -total)]
        postings.extend((_check_account(account, config), number) for account, number, _ in legs)
        return self._transaction(head, postings, currency, entry_date, config)

    def _pipe_transaction(
        self, tokens: list[str], entry_date: date, config: LedgerConfig
    ) -> TransactionResult:
        segments = _split_tokens(tokens, "|")
        head, legs = segments[0], [_parse_leg(leg) for leg in segments[1:]]
        if len(legs) < 2:
            raise ShorthandError("A transaction needs at least two postings")

        missing = [leg for leg in legs if leg[1] is None]
        if len(missing) > 1:
            raise ShorthandError("Only one posting may omit its amount")
        known = sum((leg[1] for leg in legs if leg[1] is not None), Decimal(0))
        if missing:
            legs = [
                (account, -known if number is None else number, leg_currency)
                for account, number, leg_currency in legs
            ]
        elif known != 0:
            raise ShorthandError(f"Postings do not balance, residual {known}")

        currency = _single_currency([leg[2] for leg in legs], config)
        postings = [(_check_account(account, config), number) for account, number, _ in legs]
        return self._transaction(head, postings, currency, entry_date, config)

    def _transaction(
        self,
        head: list[str],
        postings: list[tuple[str, Decimal]],
        currency: str,
        entry_date: date,
        config: LedgerConfig,
    ) -> TransactionResult:
        flag, payee, narration, tags, links = _parse_header(head)
        txn = data.Transaction(
            data.new_metadata(SOURCE_NAME, 0),
            entry_date,
            flag,
            payee or None,
            narration,
            frozenset(tags),
            frozenset(links),
            [
                data.Posting(account, amount.Amount(_normalize(number), currency), None, None, None, None)
                for account, number in postings
            ],
        )
        return TransactionResult(
            date=entry_date.isoformat(),
            payee=payee,
            narration=narration,
            tags=tuple(tags),
            links=tuple(links),
            output=_render(txn, config),
            data=tuple(PostingData(account, _normalize(number)) for account, number in postings),
        )


def _today(config: LedgerConfig) -> date:
    return datetime.now(tz.gettz(config.timezone)).date()


def _parse_date(token: str) -> date:
    try:
        return datetime.strptime(token, "%Y-%m-%d").date()
    except ValueError:
        raise ShorthandError(f"Invalid date '{token}'")


def _parse_number(token: str) -> Optional[Decimal]:
    if not NUMBER_TOKEN.match(token) or not any(c.isdigit() for c in token):
        return None
    try:
        return Decimal(token.replace(",", ""))
    except InvalidOperation:
        return None


def _normalize(number: Decimal) -> Decimal:
    """Show at least two decimal places, keep any extra precision."""
    if number.as_tuple().exponent > -2:
        return number.quantize(Decimal("0.01"))
    return number


def _check_account(name: str, config: LedgerConfig) -> str:
    """Return the account for a token, looking bare aliases up first."""
    name = config.account.get(name, name)
    if not account_lib.is_valid(name) or account_lib.root(1, name) not in DEFAULT_ACCOUNT_TYPES:
        raise ShorthandError(f"Invalid account '{name}'")
    return name


def _check_currency(token: str) -> str:
    if not CURRENCY_TOKEN.match(token):
        raise ShorthandError(f"Invalid currency '{token}'")
    return token


def _single_currency(currencies: list[Optional[str]], config: LedgerConfig) -> str:
    used = {c for c in currencies if c}
    if len(used) > 1:
        raise ShorthandError(f"Mixed currencies are not supported: {', '.join(sorted(used))}")
    return used.pop() if used else config.currency


def _split_tokens(tokens: list[str], separator: str) -> list[list[str]]:
    groups: list[list[str]] = [[]]
    for token in tokens:
        if token == separator:
            groups.append([])
        else:
            groups[-1].append(token)
    return groups


def _parse_leg(tokens: list[str]) -> tuple[str, Optional[Decimal], Optional[str]]:
    """Parse ``[AMOUNT [CUR]] ACCOUNT`` or ``ACCOUNT [AMOUNT [CUR]]``."""
    number: Optional[Decimal] = None
    currency: Optional[str] = None
    accounts = []
    i = 0
    while i < len(tokens):
        parsed = _parse_number(tokens[i])
        if parsed is not None and number is None:
            number = parsed
            if i + 1 < len(tokens) and CURRENCY_TOKEN.match(tokens[i + 1]):
                currency = tokens[i + 1]
                i += 1
        else:
            accounts.append(tokens[i])
        i += 1
    if len(accounts) != 1:
        raise ShorthandError(f"Expected one account in '{' '.join(tokens)}'")
    return accounts[0], number, currency


def _parse_header(tokens: list[str]) -> tuple[str, str, str, list[str], list[str]]:
    flag = "*"
    if tokens and tokens[0] in FLAGS:
        flag, tokens = tokens[0], tokens[1:]

    payee = None
    quoted = []
    words = []
    tags = []
    links = []
    for token in tokens:
        if token.startswith("#") and len(token) > 1:
            tags.append(token[1:])
        elif token.startswith("^") and len(token) > 1:
            links.append(token[1:])
        elif token.startswith("@") and len(token) > 1 and payee is None:
            payee = token[1:].strip('"')
        elif token.startswith('"'):
            quoted.append(token.strip('"'))
        else:
            words.append(token)

    if payee is None and len(quoted) >= 2:
        payee = quoted.pop(0)
    narration = " ".join(quoted + words)
    return flag, payee or "", narration, tags, links


def _render(entry, config: LedgerConfig) -> str:
    return format_entry(entry, prefix=" " * config.indent).rstrip("\n")
