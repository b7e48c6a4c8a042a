"""SMS transaction repository with per-user queries."""

from decimal import Decimal
from typing import Dict, List, Optional
from sqlalchemy import select, func

from fintrack.db.models.sms_transaction import SmsTransaction
from fintrack.db.repository import BaseRepository
from fintrack.sms.models import Direction, TransactionRecord, TransferMode


class SmsTransactionRepository(BaseRepository[SmsTransaction]):
    """Repository for SmsTransaction model, keyed by user and direction."""

    async def save_record(self, user_id: str, record: TransactionRecord) -> SmsTransaction:
        """
        Store an extracted record in the user's debit or credit collection.

        Args:
            user_id: Authenticated user identifier
            record: Extracted transaction

        Returns:
            Created row
        """
        return await self.create(
            user_id=user_id,
            direction=record.direction.collection,
            amount=record.amount,
            account_reference=record.account_reference,
            counterparty_name=record.counterparty_name,
            transfer_mode=record.transfer_mode.value,
            payment_identifier=record.payment_identifier,
            reference_number=record.reference_number,
            available_balance=record.available_balance,
            observed_at=record.observed_at,
            recorded_at=record.recorded_at,
        )

    async def get_for_user(
        self,
        user_id: str,
        direction: Optional[Direction] = None,
        limit: Optional[int] = None,
    ) -> List[SmsTransaction]:
        """
        Get a user's transactions, newest first.

        Args:
            user_id: Authenticated user identifier
            direction: Restrict to one collection
            limit: Maximum number of rows to return

        Returns:
            List of rows
        """
        query = select(self.model).where(self.model.user_id == user_id)
        if direction is not None:
            query = query.where(self.model.direction == direction.collection)
        query = query.order_by(self.model.recorded_at.desc(), self.model.id.desc())
        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_totals(self, user_id: str) -> Dict[str, Dict[str, object]]:
        """
        Count and sum a user's transactions per collection.

        Returns:
            {"debit": {"count": n, "total": Decimal}, "credit": {...}}
        """
        query = (
            select(
                self.model.direction,
                func.count(self.model.id),
                func.coalesce(func.sum(self.model.amount), 0),
            )
            .where(self.model.user_id == user_id)
            .group_by(self.model.direction)
        )
        result = await self.session.execute(query)

        totals: Dict[str, Dict[str, object]] = {
            direction.collection: {"count": 0, "total": Decimal("0.00")}
            for direction in Direction
        }
        for direction, count, total in result.all():
            totals[direction] = {
                "count": count,
                "total": Decimal(str(total)).quantize(Decimal("0.01")),
            }
        return totals

    @staticmethod
    def to_record(row: SmsTransaction) -> TransactionRecord:
        """Rebuild the immutable record from a stored row."""
        return TransactionRecord(
            direction=Direction(row.direction.upper()),
            amount=Decimal(str(row.amount)).quantize(Decimal("0.01")),
            account_reference=row.account_reference,
            counterparty_name=row.counterparty_name,
            transfer_mode=TransferMode(row.transfer_mode),
            payment_identifier=row.payment_identifier,
            reference_number=row.reference_number,
            available_balance=(
                Decimal(str(row.available_balance)).quantize(Decimal("0.01"))
                if row.available_balance is not None
                else None
            ),
            observed_at=row.observed_at,
            recorded_at=row.recorded_at,
        )
