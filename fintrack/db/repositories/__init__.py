"""Repository exports."""

from .sms_transaction_repository import SmsTransactionRepository

__all__ = ["SmsTransactionRepository"]
