import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import txn_etl` works when running pytest from root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from txn_etl.core.config import Settings  # noqa: E402
from txn_etl.models.record import Record  # noqa: E402


SAMPLE_CSV = """transaction_id,customer_id,full_name,phone,email,amount,currency,transaction_date,transaction_type,country
TXN001,CUST001,JOHN SMITH,5551234567,JOHN@EXAMPLE.COM,12000.00,USD,2024-03-15,cash,us
TXN002,CUST002,mary jones,+1 (555) 987-6543,mary@example.com,"$1,000.00",eur,03/16/2024,WIRE,DE
TXN003,CUST003,Kim Lee,12345,kim@example.com,250.00,USD,17-03-2024,ACH,KP
TXN004,,No Customer,5550000000,none@example.com,100.00,USD,2024-03-18,ACH,US
TXN005,CUST005,Bad Email,5550000001,not-an-email,100.00,USD,2024-03-18,ACH,US
TXN006,CUST006,"Smith, Anna",5550000002,anna@example.com,9500.00,USD,2024-03-19,CASH,US
TXN006,CUST006,Anna Smith,5550000002,anna@example.com,9500.00,USD,2024-03-19,CASH,US
TXN007,CUST007,Negative Amount,5550000003,neg@example.com,-50.00,USD,2024-03-20,ACH,US
TXN008,CUST008,Bad Date,5550000004,bad@example.com,10.00,USD,2024-99-99,ACH,US
TXN009,CUST009,Short Row
TXN010,CUST010,Big Wire,5550000005,big@example.com,60000.00,GBP,2024-03-21,WIRE,GB
"""


@pytest.fixture
def make_record():
    """Factory for a valid raw record; keyword arguments override fields."""

    def _make(**overrides) -> Record:
        values = dict(
            transaction_id="TXN001",
            customer_id="CUST001",
            full_name="john smith",
            phone="5551234567",
            email="john@example.com",
            amount=Decimal("500.00"),
            currency="USD",
            transaction_date=date(2024, 3, 15),
            transaction_type="WIRE",
            country="US",
        )
        values.update(overrides)
        return Record(**values)

    return _make


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "transactions.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'transactions.db'}"


@pytest.fixture
def settings(tmp_path: Path, database_url: str) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=database_url,
        REPORT_DIR=str(tmp_path / "reports"),
        WRITE_REPORT=False,
        LOAD_BATCH_SIZE=2,
    )
