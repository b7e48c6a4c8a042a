"""Keyword filter deciding whether a message is financial at all."""

from __future__ import annotations

import logging

from fintrack.sms.config import ClassifierConfig

logger = logging.getLogger(__name__)


class KeywordClassifier:
    """Case-insensitive substring filter over a fixed financial vocabulary.

    Recall comes first: a false positive only costs one extraction attempt
    that may return nothing.
    """

    def __init__(self, config: ClassifierConfig | None = None):
        """Initialize classifier.

        Args:
            config: Classifier configuration (defaults to the built-in vocabulary)
        """
        self.config = config or ClassifierConfig()
        self._keywords = tuple(keyword.lower() for keyword in self.config.keywords)

    def matched_keyword(self, text: str) -> str | None:
        """Return the first vocabulary entry found in text, or None."""
        lower_text = (text or "").lower()
        for keyword in self._keywords:
            if keyword in lower_text:
                return keyword
        return None

    def is_financial(self, text: str) -> bool:
        """Check whether text looks like a financial message.

        Args:
            text: Raw message body

        Returns:
            True on the first keyword hit, False if none match
        """
        keyword = self.matched_keyword(text)
        if keyword is None:
            logger.debug("Not a financial message, no keyword matched")
            return False
        logger.debug(f"Financial message, matched keyword: {keyword!r}")
        return True


_default_classifier = KeywordClassifier()


def is_financial(text: str) -> bool:
    """Check text against the default vocabulary."""
    return _default_classifier.is_financial(text)
