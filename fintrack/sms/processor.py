"""Host pipeline: classify, extract and store one inbound message."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fintrack.db.unit_of_work import UnitOfWork
from fintrack.sms.classifier import KeywordClassifier
from fintrack.sms.extractor import TransactionExtractor
from fintrack.sms.metrics import ProcessingMetrics
from fintrack.sms.models import ProcessingResult

if TYPE_CHECKING:
    from fintrack.sms.config import SmsConfig

logger = logging.getLogger(__name__)


class SmsProcessor:
    """Run messages through the classifier and extractor and store the result.

    Messages are handled one at a time and independently. Nothing is
    deduplicated here; delivering the same message twice stores two rows.
    """

    def __init__(self, config: SmsConfig, metrics: ProcessingMetrics | None = None):
        """Initialize processor.

        Args:
            config: SMS module configuration
            metrics: Shared metrics tracker (a private one is created if omitted)
        """
        self.config = config
        self.classifier = KeywordClassifier(config.classifier)
        self.extractor = TransactionExtractor(config.extractor)
        self.metrics = metrics or ProcessingMetrics()

    async def process(self, body: str, user_id: str) -> ProcessingResult:
        """Process one message for one user.

        Pipeline:
        1. Keyword classification (non-financial messages are skipped)
        2. Field extraction (no amount means no record)
        3. Storage in the user's debit or credit collection

        Store failures are logged and reported in the result, never retried
        and never raised.

        Args:
            body: Raw message text
            user_id: Authenticated user the message belongs to

        Returns:
            ProcessingResult describing the outcome
        """
        self.metrics.record_received()
        if self.config.processor.log_message_bodies:
            logger.debug(f"[SMS] Processing message for user {user_id}: {body!r}")

        if not self.classifier.is_financial(body):
            self.metrics.record_skipped()
            logger.debug(f"[SMS] Not a financial message, skipping (user {user_id})")
            return ProcessingResult(
                status="skipped", user_id=user_id, reason="Not a financial message"
            )

        record = self.extractor.extract(body)
        if record is None:
            self.metrics.record_extraction_failed()
            logger.warning(f"[SMS] Could not extract transaction details (user {user_id})")
            return ProcessingResult(
                status="failed_extraction",
                user_id=user_id,
                reason="No transaction amount found",
            )

        self.metrics.record_extracted(record)

        try:
            async with UnitOfWork() as uow:
                row = await uow.transactions.save_record(user_id, record)
                record_id = row.id
        except Exception as e:
            self.metrics.record_store_failed(f"{type(e).__name__}: {e}")
            logger.error(f"[SMS] Failed to save transaction for user {user_id}: {e}", exc_info=True)
            return ProcessingResult(
                status="store_failed",
                user_id=user_id,
                transaction=record,
                reason=f"Store error: {type(e).__name__}",
            )

        self.metrics.record_stored()
        logger.info(
            f"[SMS] ✓ Transaction saved: {record.direction.value} Rs.{record.amount} "
            f"| user={user_id} | id={record_id} | mode={record.transfer_mode.value}"
        )
        return ProcessingResult(
            status="stored", user_id=user_id, transaction=record, record_id=record_id
        )
