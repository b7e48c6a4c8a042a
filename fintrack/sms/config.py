"""Configuration for the SMS classifier, extractor and processor."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_FINANCIAL_KEYWORDS = [
    "debited",
    "credited",
    "spent",
    "received",
    "payment",
    "transferred",
    "transaction",
    "upi",
    "neft",
    "imps",
    "withdrawn",
    "deposited",
    "balance",
    "rs",
    "inr",
    "₹",
]


class ClassifierConfig(BaseModel):
    """Configuration for the keyword classifier."""

    keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FINANCIAL_KEYWORDS),
        description="Lower-case substrings that mark a message as financial",
    )


class ExtractorConfig(BaseModel):
    """Configuration for field extraction."""

    max_message_length: int = Field(
        default=2000,
        ge=160,
        le=100_000,
        description="Longest body that is scanned; longer input yields no record",
    )


class ProcessorConfig(BaseModel):
    """Configuration for the host pipeline."""

    log_message_bodies: bool = Field(
        default=False, description="Include raw message bodies in debug logs"
    )


class SmsConfig(BaseModel):
    """Complete SMS module configuration."""

    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    processor: ProcessorConfig = Field(default_factory=ProcessorConfig)

    @classmethod
    def from_settings(cls, settings) -> SmsConfig:
        """Create SmsConfig from app settings."""
        return cls(
            extractor=ExtractorConfig(max_message_length=settings.SMS_MAX_MESSAGE_LENGTH),
            processor=ProcessorConfig(log_message_bodies=settings.SMS_LOG_MESSAGE_BODIES),
        )
