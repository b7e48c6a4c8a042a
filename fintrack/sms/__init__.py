"""SMS transaction extraction module for Smart Finance Tracker.

This module handles:
- Keyword classification of financial messages
- Per-field regex resolution (direction, amount, account, rail, counterparty)
- Combining resolutions into an immutable transaction record
- The host pipeline that stores records per user
"""

from typing import TYPE_CHECKING

from fintrack.sms.classifier import is_financial
from fintrack.sms.extractor import extract
from fintrack.sms.models import Direction, TransactionRecord, TransferMode

# Lazy imports to keep the pure core free of database imports
if TYPE_CHECKING:
    from fintrack.sms.config import SmsConfig
    from fintrack.sms.processor import SmsProcessor


def __getattr__(name: str):
    if name == "SmsConfig":
        from fintrack.sms.config import SmsConfig

        return SmsConfig
    if name == "SmsProcessor":
        from fintrack.sms.processor import SmsProcessor

        return SmsProcessor
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "is_financial",
    "extract",
    "Direction",
    "TransactionRecord",
    "TransferMode",
    "SmsConfig",
    "SmsProcessor",
]
