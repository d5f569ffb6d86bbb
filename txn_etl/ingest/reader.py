"""
CSV reader for raw transaction exports.

Turns each data row into a Record. Rows that cannot be typed are skipped and
counted; they never reach the cleaning stage.
"""

from __future__ import annotations

import csv
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import structlog

from txn_etl.core.errors import SourceReadError
from txn_etl.models.record import Record

logger = structlog.get_logger(__name__)


DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d-%m-%Y")

# Bytes that failed to decode survive as lone surrogates (errors="surrogateescape").
UNDECODABLE = re.compile("[\udc80-\udcff]")

COLUMNS = (
    "transaction_id",
    "customer_id",
    "full_name",
    "phone",
    "email",
    "amount",
    "currency",
    "transaction_date",
    "transaction_type",
    "country",
)


class MalformedRowError(ValueError):
    """Raised for a row that cannot be turned into a Record."""

    pass


@dataclass
class ReadResult:
    """Records read from one file plus the number of skipped rows."""

    records: list[Record] = field(default_factory=list)
    skipped_rows: int = 0


def parse_date(value: str) -> Optional[date]:
    """
    Parse a date in one of the supported layouts.

    - "2024-03-15" (ISO)
    - "03/15/2024" (US)
    - "15-03-2024" (day first)

    Returns None for an empty cell; raises MalformedRowError otherwise.
    """
    value = value.strip()
    if not value:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise MalformedRowError(f"Unparseable date: {value}")


def parse_amount(value: str) -> Decimal:
    """Parse an amount, tolerating "$" and thousands separators."""
    cleaned = value.strip().replace("$", "").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise MalformedRowError(f"Unparseable amount: {value!r}") from e
    if not amount.is_finite():
        raise MalformedRowError(f"Unparseable amount: {value!r}")
    return amount


def parse_row(fields: list[str]) -> Record:
    """Build a Record from the ten positional CSV fields."""
    if any(UNDECODABLE.search(f) for f in fields):
        raise MalformedRowError("Row contains bytes that are not valid text")
    if len(fields) < len(COLUMNS):
        raise MalformedRowError(
            f"Insufficient fields: expected {len(COLUMNS)}, got {len(fields)}"
        )
    values = dict(zip(COLUMNS, (f.strip() for f in fields)))

    return Record(
        transaction_id=values["transaction_id"],
        customer_id=values["customer_id"],
        full_name=values["full_name"],
        phone=values["phone"],
        email=values["email"],
        amount=parse_amount(values["amount"]),
        currency=values["currency"].upper(),
        transaction_date=parse_date(values["transaction_date"]),
        transaction_type=values["transaction_type"],
        country=values["country"],
    )


def _printable(text: str) -> str:
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


class CSVReader:
    """Reads raw transactions from a comma-separated file with a header row."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read(self, path: str | Path) -> ReadResult:
        """
        Read every row of a CSV file.

        Args:
            path: File to read

        Returns:
            Parsed records and the skipped-row count

        Raises:
            SourceReadError: If the file is missing, unreadable or empty
        """
        path = Path(path)
        result = ReadResult()

        try:
            with path.open(newline="", encoding=self.encoding, errors="surrogateescape") as fh:
                reader = csv.reader(fh)
                header = next(reader, None)
                if header is None:
                    raise SourceReadError(f"CSV file is empty: {path}")

                for fields in reader:
                    if not any(f.strip() for f in fields):
                        continue
                    try:
                        result.records.append(parse_row(fields))
                    except (MalformedRowError, ValueError) as e:
                        logger.warning(
                            "csv.row_skipped",
                            line=reader.line_num,
                            row=_printable(",".join(fields)),
                            error=str(e),
                        )
                        result.skipped_rows += 1
        except (OSError, csv.Error) as e:
            raise SourceReadError(f"Cannot read {path}: {e}") from e

        logger.info(
            "csv.read_completed",
            path=str(path),
            records=len(result.records),
            skipped=result.skipped_rows,
        )
        return result
