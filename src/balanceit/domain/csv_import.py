"""CSV import domain service.

Three file shapes are understood:

* trial balance (``tb``): code,name,type,category,debit,credit[,note]
* general ledger (``gl``): date,code,name,type,category,description,debit,credit
* bank statement: date,description,amount

Ledger files are aggregated per account code and replace the whole ledger.
Bank statements are returned as ephemeral lines for reconciliation.
"""

import csv
import logging
import time
from dataclasses import replace
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional

from balanceit.domain.classification import parse_account_type
from balanceit.domain.currency import convert_to_base
from balanceit.domain.entities import (
    Account,
    BankTransaction,
    ImportBatch,
    Transaction,
)
from balanceit.domain.errors import ValidationError, missing_columns
from balanceit.domain.ledger import LedgerService
from balanceit.utils.amount_parser import parse_amount_or_zero, round_money
from balanceit.utils.date_parser import today_iso

logger = logging.getLogger(__name__)

LEDGER_REQUIRED_COLUMNS = ("code", "name", "type", "category", "debit", "credit")
BANK_REQUIRED_COLUMNS = ("date", "amount")
GL_PLACEHOLDER_NOTE = "Aggregated from transaction upload"
NOTE_SEPARATOR = "; "


class ImportMode(str, Enum):
    """Ledger CSV shapes."""

    TRIAL_BALANCE = "tb"
    GENERAL_LEDGER = "gl"


def imported_account_id(code: str) -> str:
    return f"imported-acc-{code}"


def _read_rows(lines: Iterable[str]) -> tuple[list[str], list[tuple[int, list[str]]]]:
    """Split CSV text into lowercased headers and numbered non-blank rows."""
    reader = csv.reader(lines, skipinitialspace=True)
    rows = list(reader)
    if len(rows) < 2:
        raise ValidationError("File appears to be empty or missing data.")

    headers = [h.strip().lstrip("\ufeff").lower() for h in rows[0]]
    data = [
        (number, row)
        for number, row in enumerate(rows[1:], start=1)
        if any(cell.strip() for cell in row)
    ]
    return headers, data


def _cell(headers: list[str], row: list[str], column: str) -> str:
    """Value of a named column in a row, or an empty string."""
    if column not in headers:
        return ""
    index = headers.index(column)
    if index >= len(row):
        return ""
    return row[index].strip()


def _require_columns(headers: list[str], required: Iterable[str]) -> None:
    missing = [column for column in required if column not in headers]
    if missing:
        raise ValidationError(missing_columns(missing))


def _merge_note(current: str, addition: str) -> str:
    """Append a note part once, dropping the aggregation placeholder."""
    parts = [
        p
        for p in current.split(NOTE_SEPARATOR)
        if p.strip() and p != GL_PLACEHOLDER_NOTE
    ]
    if addition in parts:
        return current
    parts.append(addition)
    return NOTE_SEPARATOR.join(parts)


def parse_ledger_rows(
    lines: Iterable[str],
    mode: ImportMode | str,
    file_currency: Optional[str] = None,
    rate: Optional[Decimal] = None,
) -> ImportBatch:
    """Parse trial balance or general ledger CSV text into an import batch.

    Rows sharing an account code are aggregated: debit and credit are summed,
    later non-empty name and category win, and notes are joined with "; ".
    In general ledger mode each row also becomes one transaction.

    When a rate is given, each row is converted to base currency before it is
    aggregated, so an account's totals always equal the sum of its converted
    transactions.

    Args:
        lines: CSV text, one line per item
        mode: "tb" for trial balance, "gl" for general ledger
        file_currency: Currency the file's amounts are in
        rate: Rate converting file_currency into base currency

    Raises:
        ValidationError: If the file is empty or lacks required columns
    """
    mode = ImportMode(mode)
    headers, rows = _read_rows(lines)
    _require_columns(headers, LEDGER_REQUIRED_COLUMNS)

    stamp = int(time.time() * 1000)
    accounts: dict[str, dict[str, Any]] = {}
    transactions: list[Transaction] = []

    for number, row in rows:
        code = _cell(headers, row, "code")
        if not code:
            continue

        original_debit = round_money(parse_amount_or_zero(_cell(headers, row, "debit")))
        original_credit = round_money(parse_amount_or_zero(_cell(headers, row, "credit")))
        if rate is not None:
            debit = convert_to_base(original_debit, rate)
            credit = convert_to_base(original_credit, rate)
        else:
            debit, credit = original_debit, original_credit
        name = _cell(headers, row, "name")
        category = _cell(headers, row, "category")
        if "description" in headers:
            note = _cell(headers, row, "description")
        else:
            note = _cell(headers, row, "note")

        existing = accounts.get(code)
        if existing is not None:
            existing["debit"] += debit
            existing["credit"] += credit
            if name:
                existing["name"] = name
            if category:
                existing["category"] = category
            if note:
                existing["note"] = _merge_note(existing["note"], note)
        else:
            placeholder = GL_PLACEHOLDER_NOTE if mode == ImportMode.GENERAL_LEDGER else ""
            accounts[code] = {
                "id": imported_account_id(code),
                "code": code,
                "name": name,
                "type": parse_account_type(_cell(headers, row, "type")),
                "category": category,
                "debit": debit,
                "credit": credit,
                "note": note or placeholder,
            }

        if mode == ImportMode.GENERAL_LEDGER:
            transaction = Transaction(
                id=f"trans-{number}-{stamp}",
                account_id=imported_account_id(code),
                date=_cell(headers, row, "date") or today_iso(),
                description=note or name,
                amount=_row_amount(debit, credit),
            )
            if rate is not None:
                transaction = replace(
                    transaction,
                    original_amount=_row_amount(original_debit, original_credit),
                    original_currency=file_currency,
                    exchange_rate=rate,
                )
            transactions.append(transaction)

    if rate is not None:
        suffix = f"(Imported from {file_currency} @ {rate})"
        for fields in accounts.values():
            fields["note"] = f"{fields['note']} {suffix}" if fields["note"] else suffix

    batch = ImportBatch(
        accounts=tuple(
            Account(**{**fields, "note": fields["note"] or None})
            for fields in accounts.values()
        ),
        transactions=tuple(transactions),
    )
    logger.debug(
        "Parsed %s file: %d accounts, %d transactions",
        mode.value,
        len(batch.accounts),
        len(batch.transactions),
    )
    return batch


def _row_amount(debit: Decimal, credit: Decimal) -> Decimal:
    """Signed amount of a general ledger row."""
    if debit > 0 and credit == 0:
        return debit
    if credit > 0 and debit == 0:
        return -credit
    return debit - credit


def parse_bank_rows(lines: Iterable[str]) -> list[BankTransaction]:
    """Parse bank statement CSV text into statement lines, one per row.

    Rows without a date are skipped. Amounts that fail to parse count as zero.

    Raises:
        ValidationError: If the file is empty or lacks date/amount columns
    """
    headers, rows = _read_rows(lines)
    _require_columns(headers, BANK_REQUIRED_COLUMNS)

    stamp = int(time.time() * 1000)
    statement = []
    for number, row in rows:
        date_value = _cell(headers, row, "date")
        if not date_value:
            continue
        if "description" in headers:
            description = _cell(headers, row, "description")
        else:
            description = "Bank Transaction"
        statement.append(
            BankTransaction(
                id=f"bank-{number}-{stamp}",
                date=date_value,
                description=description,
                amount=parse_amount_or_zero(_cell(headers, row, "amount")),
            )
        )
    return statement


class CSVImportService:
    """Service for importing CSV files into the ledger."""

    def __init__(self, ledger: LedgerService):
        """Initialize CSV import service.

        Args:
            ledger: Ledger service that receives imported batches
        """
        self.ledger = ledger

    def _open(self, csv_file_path: str):
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")
        return open(csv_path, "r", encoding="utf-8-sig", newline="")

    def file_rate(self, file_currency: Optional[str]) -> Optional[Decimal]:
        """Rate converting a file's amounts into base currency.

        Returns None when the file has no declared currency or is already
        in base currency, in which case amounts are imported as they are.
        """
        if not file_currency or file_currency.upper() == self.ledger.base_currency:
            return None
        return self.ledger.currency_table.rate_for(file_currency.upper())

    def parse_ledger_file(
        self,
        csv_file_path: str,
        mode: ImportMode | str,
        file_currency: Optional[str] = None,
    ) -> ImportBatch:
        """Parse a trial balance or general ledger file without importing it.

        Amounts are converted from file_currency into base currency once,
        here, at import time.

        Raises:
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        rate = self.file_rate(file_currency)
        code = file_currency.upper() if rate is not None else None
        with self._open(csv_file_path) as f:
            return parse_ledger_rows(f, mode, file_currency=code, rate=rate)

    def parse_bank_statement(self, csv_file_path: str) -> list[BankTransaction]:
        """Parse a bank statement file.

        Raises:
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        with self._open(csv_file_path) as f:
            return parse_bank_rows(f)

    def import_ledger(
        self,
        csv_file_path: str,
        mode: ImportMode | str,
        file_currency: Optional[str] = None,
    ) -> dict[str, Any]:
        """Import a ledger file, replacing the current ledger.

        The file is fully parsed before anything is replaced, so a failure
        leaves the ledger untouched.

        Args:
            csv_file_path: Path to CSV file
            mode: "tb" for trial balance, "gl" for general ledger
            file_currency: Currency the file's amounts are in

        Returns:
            Dict with import statistics:
            - accounts: number of accounts imported
            - transactions: number of transactions imported
            - debit_total / credit_total: imported totals
            - balanced: whether the imported totals agree

        Raises:
            ValidationError: If required columns are missing or file is empty
            FileNotFoundError: If CSV file doesn't exist
        """
        batch = self.parse_ledger_file(csv_file_path, mode, file_currency)
        if not batch.accounts:
            raise ValidationError("File contains no accounts")

        self.ledger.import_ledger(batch.accounts, batch.transactions)
        return {
            "accounts": len(batch.accounts),
            "transactions": len(batch.transactions),
            "debit_total": batch.debit_total,
            "credit_total": batch.credit_total,
            "balanced": abs(batch.debit_total - batch.credit_total) < Decimal("0.01"),
        }
