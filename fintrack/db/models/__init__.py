"""Database models for the Smart Finance Tracker."""

from .sms_transaction import SmsTransaction

__all__ = ["SmsTransaction"]
