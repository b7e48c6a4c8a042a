"""Model for transactions extracted from SMS alerts."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from sqlalchemy import String, DateTime, Numeric, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.db.base import Base


class SmsTransaction(Base):
    """
    Stores one extracted transaction for one user.

    Rows are grouped per user by ``direction`` ("debit" / "credit"), which
    mirrors the separate debit and credit collections kept for each user.
    """

    __tablename__ = "sms_transactions"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Owner and collection
    user_id: Mapped[str] = mapped_column(
        String(128), nullable=False, index=True,
        comment="Authenticated user the message belongs to"
    )
    direction: Mapped[str] = mapped_column(
        String(16), nullable=False,
        comment="Collection name: 'debit' or 'credit'"
    )

    # Extracted fields
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2), nullable=False,
        comment="Transaction amount"
    )
    account_reference: Mapped[str] = mapped_column(
        String(64), nullable=False, default="",
        comment="Masked account suffix or digit run"
    )
    counterparty_name: Mapped[str] = mapped_column(
        String(255), nullable=False, default="Unknown",
        comment="Merchant, person or payment handle"
    )
    transfer_mode: Mapped[str] = mapped_column(
        String(16), nullable=False, default="OTHER",
        comment="Payment rail (UPI, NEFT, IMPS, RTGS, OTHER)"
    )
    payment_identifier: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
        comment="Handle in name@domain form"
    )
    reference_number: Mapped[str] = mapped_column(
        String(64), nullable=False, default="",
        comment="Bank or rail reference number"
    )
    available_balance: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=18, scale=2), nullable=True,
        comment="Balance quoted in the message"
    )

    # Timestamps
    observed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        comment="When the transaction textually occurred"
    )
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
        comment="When the message was processed"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        Index("idx_sms_transaction_user_direction", "user_id", "direction"),
    )

    def __repr__(self) -> str:
        return (
            f"<SmsTransaction(id={self.id}, user_id={self.user_id}, "
            f"direction={self.direction}, amount={self.amount})>"
        )
