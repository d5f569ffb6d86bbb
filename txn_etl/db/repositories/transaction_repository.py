"""Transaction repository with upsert and verification queries."""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import case, distinct, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from txn_etl.db.models.transaction import TransactionRow
from txn_etl.db.repository import BaseRepository
from txn_etl.models.record import Record


@dataclass
class LoadSummary:
    """Result of the post-load verification query."""

    total: int = 0
    flagged: int = 0
    total_amount: Decimal = Decimal("0.00")
    unique_countries: int = 0


class TransactionRepository(BaseRepository[TransactionRow]):
    """Repository for TransactionRow with specialized queries."""

    async def get_by_transaction_id(self, transaction_id: str) -> Optional[TransactionRow]:
        """Get a stored row by its transaction ID."""
        return await self.get_by_field("transaction_id", transaction_id)

    async def get_flagged(self) -> List[TransactionRow]:
        """Get every row that needs compliance review."""
        query = (
            select(self.model)
            .where(self.model.flagged.is_(True))
            .order_by(self.model.transaction_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def upsert_many(self, records: Sequence[Record]) -> int:
        """
        Insert records, replacing any stored row with the same transaction ID.

        Args:
            records: Transformed records

        Returns:
            Number of rows written
        """
        if not records:
            return 0

        rows = [TransactionRow.values_from_record(r) for r in records]
        dialect = self.session.bind.dialect.name if self.session.bind else "sqlite"

        if dialect in ("sqlite", "postgresql"):
            insert = sqlite_insert if dialect == "sqlite" else pg_insert
            stmt = insert(TransactionRow).values(rows)
            updatable = {
                column: getattr(stmt.excluded, column)
                for column in rows[0]
                if column != "transaction_id"
            }
            stmt = stmt.on_conflict_do_update(
                index_elements=[TransactionRow.transaction_id], set_=updatable
            )
            await self.session.execute(stmt)
        else:
            for values in rows:
                await self.session.merge(TransactionRow(**values))

        await self.session.flush()
        return len(rows)

    async def verification_summary(self) -> LoadSummary:
        """
        Summarize the stored table.

        Returns:
            Row count, flagged count, summed amount and distinct countries
        """
        query = select(
            func.count(),
            func.coalesce(func.sum(case((self.model.flagged.is_(True), 1), else_=0)), 0),
            func.coalesce(func.sum(self.model.amount_usd), 0),
            func.count(distinct(self.model.country)),
        ).select_from(self.model)

        result = await self.session.execute(query)
        total, flagged, amount, countries = result.one()
        return LoadSummary(
            total=int(total or 0),
            flagged=int(flagged or 0),
            total_amount=Decimal(str(amount or 0)).quantize(Decimal("0.01")),
            unique_countries=int(countries or 0),
        )
