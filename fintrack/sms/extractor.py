"""Combine per-field resolutions into a single transaction record."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from fintrack.sms import resolvers
from fintrack.sms.config import ExtractorConfig
from fintrack.sms.models import TransactionRecord

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionExtractor:
    """Regex-based extractor for bank and wallet SMS alerts.

    The extractor holds no per-message state; one instance can serve any
    number of threads or tasks at once.
    """

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize extractor.

        Args:
            config: Extractor configuration
            clock: Source of the processing instant stamped on each record
        """
        self.config = config or ExtractorConfig()
        self.clock = clock

    def extract(self, text: str) -> TransactionRecord | None:
        """Extract a transaction record from a message body.

        Amount is the only mandatory field. Every other field falls back to its
        default when unresolved. Any fault while parsing is logged and turned
        into None; this method never raises.

        Args:
            text: Raw message body (already classified as financial)

        Returns:
            TransactionRecord, or None if no record can be built
        """
        if not text:
            return None

        if len(text) > self.config.max_message_length:
            logger.warning(
                f"Message too long to scan: {len(text)} > {self.config.max_message_length} chars"
            )
            return None

        try:
            return self._build_record(text)
        except Exception as e:
            logger.error(
                f"Error extracting transaction details: {type(e).__name__}: {e}",
                exc_info=True,
            )
            return None

    def _build_record(self, text: str) -> TransactionRecord | None:
        amount = resolvers.resolve_amount(text)
        if amount is None:
            logger.warning("Could not extract amount from message")
            return None

        direction = resolvers.resolve_direction(text)
        payment_identifier = resolvers.resolve_payment_identifier(text)
        now = self.clock()

        record = TransactionRecord(
            direction=direction,
            amount=amount,
            account_reference=resolvers.resolve_account_reference(text),
            counterparty_name=resolvers.resolve_counterparty(text, payment_identifier),
            transfer_mode=resolvers.resolve_transfer_mode(text),
            payment_identifier=payment_identifier,
            reference_number=resolvers.resolve_reference_number(text),
            available_balance=resolvers.resolve_available_balance(text),
            observed_at=now,
            recorded_at=now,
        )

        logger.debug(
            f"Extracted transaction: {record.direction.value} {record.amount} "
            f"mode={record.transfer_mode.value} counterparty={record.counterparty_name!r}"
        )
        return record


_default_extractor = TransactionExtractor()


def extract(text: str) -> TransactionRecord | None:
    """Extract a record with the default configuration."""
    return _default_extractor.extract(text)
