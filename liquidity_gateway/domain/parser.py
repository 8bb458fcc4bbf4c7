"""Statement normalizer - raw CSV rows to canonical transactions"""

import csv
import io
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional, Sequence
from liquidity_gateway.domain.models import ParsedCSV, Transaction
from liquidity_gateway.domain.exceptions import (
    EmptyOrUnparseableError,
    InvalidBalanceError,
    MissingColumnError,
    NoValidTransactionsError,
)

DATE_HEADERS = ("date", "transaction_date", "trans_date")
DESCRIPTION_HEADERS = ("description", "memo", "details", "payee", "name")
AMOUNT_HEADERS = ("amount", "transaction_amount", "debit/credit", "value")
BALANCE_HEADERS = ("balance", "running_balance", "available_balance")

_HEADER_SEPARATORS = re.compile(r"[\s_]+")
_AMOUNT_NOISE = re.compile(r"[$€£¥,\s]")
_PLAIN_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def normalize_header(raw: str) -> str:
    """Case, whitespace and underscore insensitive header key"""
    return _HEADER_SEPARATORS.sub("_", raw.strip().lower())


def parse_amount(raw: str) -> Optional[Decimal]:
    """Strip currency symbols, thousands separators and whitespace, then parse"""
    cleaned = _AMOUNT_NOISE.sub("", raw or "")
    # plain notation only, no exponents
    if not _PLAIN_DECIMAL.fullmatch(cleaned):
        return None
    return Decimal(cleaned)


def parse_date(raw: str) -> Optional[date]:
    """ISO-8601 first (time of day and offset dropped, trailing Z allowed), then MM/DD/YYYY"""
    cleaned = (raw or "").strip()
    if not cleaned:
        return None

    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass
    if cleaned[-1] in "Zz":
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(cleaned).date()
    except ValueError:
        pass
    try:
        return datetime.strptime(cleaned, "%m/%d/%Y").date()
    except ValueError:
        return None


def parse_balance_input(raw: str) -> Decimal:
    """
    Validate a manually entered balance.

    Raises:
        InvalidBalanceError: When the input is not a finite number
    """
    value = parse_amount(raw)
    if value is None:
        raise InvalidBalanceError(f"Not a valid balance amount: {raw!r}")
    return value


def _find_header(headers: Sequence[str], synonyms: Sequence[str]) -> Optional[str]:
    for header in headers:
        if normalize_header(header) in synonyms:
            return header
    return None


def normalize_rows(headers: Sequence[str], rows: Iterable[Mapping[str, str]]) -> ParsedCSV:
    """
    Map raw rows onto the transaction schema.

    Requirements:
    - All required columns resolved before any row is read
    - Rows with an unparseable date or amount are dropped silently
      (footer and subtotal lines)
    - With a balance column, the balance on the latest dated row becomes the
      starting balance (first row seen wins for that date)

    Raises:
        MissingColumnError: No header matches date, description or amount
        EmptyOrUnparseableError: No data rows at all
        NoValidTransactionsError: Every row was dropped
    """
    date_key = _find_header(headers, DATE_HEADERS)
    if date_key is None:
        raise MissingColumnError("date")
    description_key = _find_header(headers, DESCRIPTION_HEADERS)
    if description_key is None:
        raise MissingColumnError("description")
    amount_key = _find_header(headers, AMOUNT_HEADERS)
    if amount_key is None:
        raise MissingColumnError("amount")
    balance_key = _find_header(headers, BALANCE_HEADERS)

    rows = list(rows)
    if not rows:
        raise EmptyOrUnparseableError()

    transactions: List[Transaction] = []
    latest_date: Optional[date] = None
    latest_balance: Optional[Decimal] = None

    for row in rows:
        txn_date = parse_date(row.get(date_key) or "")
        amount = parse_amount(row.get(amount_key) or "")
        if txn_date is None or amount is None:
            continue

        description = (row.get(description_key) or "").strip()
        transactions.append(Transaction(date=txn_date, description=description, amount=amount))

        if balance_key is not None:
            balance = parse_amount(row.get(balance_key) or "")
            if balance is not None and (latest_date is None or txn_date > latest_date):
                latest_date = txn_date
                latest_balance = balance

    if not transactions:
        raise NoValidTransactionsError()

    has_balance_column = latest_balance is not None
    return ParsedCSV(
        transactions=transactions,
        has_balance_column=has_balance_column,
        starting_balance=latest_balance,
    )


def parse_csv_text(text: str) -> ParsedCSV:
    """Tokenize a CSV export (header row first) and normalize it"""
    if not text or not text.strip():
        raise EmptyOrUnparseableError()

    try:
        reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
        headers = reader.fieldnames or []
        rows = [
            row for row in reader
            if any(isinstance(value, str) and value.strip() for value in row.values())
        ]
    except csv.Error as e:
        raise EmptyOrUnparseableError() from e

    if not headers:
        raise EmptyOrUnparseableError()

    return normalize_rows(headers, rows)
