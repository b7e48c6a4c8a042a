"""Data models for SMS transaction extraction."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Whether funds left (DEBIT) or entered (CREDIT) the tracked account."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    @property
    def collection(self) -> str:
        """Storage collection name for records of this direction."""
        return self.value.lower()


class TransferMode(str, Enum):
    """Payment rail named in the message."""

    UPI = "UPI"
    NEFT = "NEFT"
    IMPS = "IMPS"
    RTGS = "RTGS"
    OTHER = "OTHER"


class TransactionRecord(BaseModel):
    """Structured transaction extracted from a single message.

    Instances are frozen: every field is fixed when the extractor builds the
    record and no partially resolved record is ever handed out.
    """

    model_config = ConfigDict(frozen=True)

    direction: Direction = Field(..., description="Debit or credit")
    amount: Decimal = Field(
        ..., ge=0, max_digits=18, decimal_places=2, description="Transaction amount"
    )
    account_reference: str = Field(default="", description="Masked account suffix or digit run")
    counterparty_name: str = Field(default="Unknown", description="Merchant, person or payment handle")
    transfer_mode: TransferMode = Field(default=TransferMode.OTHER, description="Payment rail")
    payment_identifier: str = Field(default="", description="Handle in name@domain form")
    reference_number: str = Field(default="", description="Bank or rail reference number")
    available_balance: Decimal | None = Field(default=None, description="Balance quoted in the message")
    observed_at: datetime = Field(..., description="When the transaction textually occurred")
    recorded_at: datetime = Field(..., description="When the message was processed")


class SmsMessage(BaseModel):
    """Incoming message body."""

    message: str = Field(..., description="Raw message text")


class IngestRequest(SmsMessage):
    """Incoming message to be extracted and stored for a user."""

    user_id: str = Field(..., min_length=1, max_length=128, description="Authenticated user identifier")


class ClassificationResponse(BaseModel):
    """Result of the financial-message check."""

    is_financial: bool


class ExtractionResponse(BaseModel):
    """Result of a dry-run extraction. Nothing is persisted."""

    is_financial: bool
    transaction: TransactionRecord | None = None


class ProcessingResult(BaseModel):
    """Outcome of running one message through the host pipeline."""

    status: Literal["skipped", "failed_extraction", "stored", "store_failed"]
    user_id: str
    transaction: TransactionRecord | None = None
    record_id: int | None = Field(default=None, description="Primary key of the stored row")
    reason: str | None = Field(default=None, description="Why no record was stored")
