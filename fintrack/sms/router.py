"""FastAPI router for SMS classification, extraction and ingestion."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from fintrack.core.config import get_settings
from fintrack.db.unit_of_work import UnitOfWork
from fintrack.db.repositories import SmsTransactionRepository
from fintrack.sms.config import SmsConfig
from fintrack.sms.models import (
    ClassificationResponse,
    Direction,
    ExtractionResponse,
    IngestRequest,
    ProcessingResult,
    SmsMessage,
    TransactionRecord,
)
from fintrack.sms.processor import SmsProcessor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sms", tags=["sms"])

# Global processor instance (set by main app, created lazily otherwise)
_processor: SmsProcessor | None = None


def set_processor(processor: SmsProcessor | None) -> None:
    """Set the global processor instance."""
    global _processor
    _processor = processor


def get_processor() -> SmsProcessor:
    """Return the global processor, building one from settings if needed."""
    global _processor
    if _processor is None:
        _processor = SmsProcessor(SmsConfig.from_settings(get_settings()))
    return _processor


class StoredTransaction(BaseModel):
    """A stored record with its row id."""

    id: int
    transaction: TransactionRecord


class UserTransactionsResponse(BaseModel):
    """Response listing a user's stored transactions."""

    user_id: str
    direction: Direction | None = None
    count: int
    transactions: list[StoredTransaction]
    totals: dict[str, dict]


@router.post("/classify", response_model=ClassificationResponse)
async def classify_message(
    payload: SmsMessage, processor: SmsProcessor = Depends(get_processor)
):
    """Check whether a message looks financial."""
    return ClassificationResponse(is_financial=processor.classifier.is_financial(payload.message))


@router.post("/extract", response_model=ExtractionResponse)
async def extract_message(
    payload: SmsMessage, processor: SmsProcessor = Depends(get_processor)
):
    """Classify and extract a message without storing anything."""
    if not processor.classifier.is_financial(payload.message):
        return ExtractionResponse(is_financial=False)
    return ExtractionResponse(
        is_financial=True, transaction=processor.extractor.extract(payload.message)
    )


@router.post("/ingest", response_model=ProcessingResult, status_code=status.HTTP_200_OK)
async def ingest_message(
    payload: IngestRequest, processor: SmsProcessor = Depends(get_processor)
):
    """Run a message through the full pipeline and store the record for the user.

    Returns:
        Processing result (status is one of skipped, failed_extraction,
        stored, store_failed)
    """
    return await processor.process(payload.message, payload.user_id)


@router.get("/users/{user_id}/transactions", response_model=UserTransactionsResponse)
async def list_user_transactions(
    user_id: str,
    direction: Direction | None = Query(default=None, description="DEBIT or CREDIT"),
    limit: int = Query(default=50, ge=1, le=500),
):
    """List a user's stored transactions, newest first."""
    try:
        async with UnitOfWork() as uow:
            rows = await uow.transactions.get_for_user(user_id, direction=direction, limit=limit)
            totals = await uow.transactions.get_totals(user_id)
    except Exception as e:
        logger.error(f"[SMS] Failed to load transactions for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load transactions",
        )

    return UserTransactionsResponse(
        user_id=user_id,
        direction=direction,
        count=len(rows),
        transactions=[
            StoredTransaction(id=row.id, transaction=SmsTransactionRepository.to_record(row))
            for row in rows
        ],
        totals={
            name: {"count": data["count"], "total": str(data["total"])}
            for name, data in totals.items()
        },
    )


@router.get("/metrics")
async def get_metrics(processor: SmsProcessor = Depends(get_processor)):
    """Return processing counters since startup."""
    return processor.metrics.snapshot().to_dict()
