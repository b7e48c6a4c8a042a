"""Metrics tracking for SMS processing."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from fintrack.sms.models import TransactionRecord
from fintrack.sms.resolvers import UNKNOWN_COUNTERPARTY

logger = logging.getLogger(__name__)


@dataclass
class ProcessingSnapshot:
    """Point-in-time copy of the processing counters."""

    started_at: datetime
    messages_received: int
    messages_skipped: int
    extraction_failed: int
    records_extracted: int
    records_stored: int
    store_failed: int

    by_direction: dict[str, int] = field(default_factory=dict)
    by_transfer_mode: dict[str, int] = field(default_factory=dict)
    unknown_counterparty_count: int = 0

    last_error: str | None = None

    @property
    def extraction_rate(self) -> float:
        """Share of financial messages that produced a record."""
        attempted = self.records_extracted + self.extraction_failed
        return self.records_extracted / attempted if attempted else 0.0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        data["extraction_rate"] = round(self.extraction_rate, 4)
        return data


class ProcessingMetrics:
    """Counters for every outcome of the SMS pipeline."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Clear all counters."""
        self._started_at = datetime.now(timezone.utc)
        self._counts: Counter[str] = Counter()
        self._by_direction: Counter[str] = Counter()
        self._by_mode: Counter[str] = Counter()
        self._last_error: str | None = None
        logger.debug("SMS processing metrics reset")

    def record_received(self) -> None:
        self._counts["received"] += 1

    def record_skipped(self) -> None:
        self._counts["skipped"] += 1

    def record_extraction_failed(self) -> None:
        self._counts["extraction_failed"] += 1

    def record_extracted(self, record: TransactionRecord) -> None:
        """Record a successful extraction and which fields it resolved."""
        self._counts["extracted"] += 1
        self._by_direction[record.direction.value] += 1
        self._by_mode[record.transfer_mode.value] += 1
        if record.counterparty_name == UNKNOWN_COUNTERPARTY:
            self._counts["unknown_counterparty"] += 1

    def record_stored(self) -> None:
        self._counts["stored"] += 1

    def record_store_failed(self, error: str) -> None:
        self._counts["store_failed"] += 1
        self._last_error = error

    def snapshot(self) -> ProcessingSnapshot:
        """Return a copy of the current counters."""
        return ProcessingSnapshot(
            started_at=self._started_at,
            messages_received=self._counts["received"],
            messages_skipped=self._counts["skipped"],
            extraction_failed=self._counts["extraction_failed"],
            records_extracted=self._counts["extracted"],
            records_stored=self._counts["stored"],
            store_failed=self._counts["store_failed"],
            by_direction=dict(self._by_direction),
            by_transfer_mode=dict(self._by_mode),
            unknown_counterparty_count=self._counts["unknown_counterparty"],
            last_error=self._last_error,
        )
