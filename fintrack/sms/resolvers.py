"""Per-field resolvers for SMS transaction extraction.

Each resolver takes the raw message text and returns one field value, or the
field's default when nothing matches. Resolvers do not depend on each other,
except that counterparty resolution falls back to an already resolved payment
identifier.

Every pattern here is either free of nested quantifiers or has its repeating
spans bounded, so a scan stays linear in the message length.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Callable

from fintrack.sms.models import Direction, TransferMode

UNKNOWN_COUNTERPARTY = "Unknown"
TWO_PLACES = Decimal("0.01")

# ============================================================================
# Direction
# ============================================================================

CREDIT_KEYWORDS = ("credited", "credit", "received rs", "received a payment")
DEBIT_KEYWORDS = ("debited", "debit", "spent", "paid", "sent rs")

# Evaluated top to bottom, first hit wins. CREDIT sits above DEBIT, so a
# message carrying both vocabularies resolves to CREDIT.
DIRECTION_RULES: list[tuple[Direction, tuple[str, ...]]] = [
    (Direction.CREDIT, CREDIT_KEYWORDS),
    (Direction.DEBIT, DEBIT_KEYWORDS),
]

# Messages with no direction vocabulary at all are filed as debits.
DEFAULT_DIRECTION = Direction.DEBIT


def resolve_direction(text: str) -> Direction:
    """Resolve debit/credit from the lower-cased message."""
    lower_text = text.lower()
    for direction, keywords in DIRECTION_RULES:
        if any(keyword in lower_text for keyword in keywords):
            return direction
    return DEFAULT_DIRECTION


# ============================================================================
# Amount
# ============================================================================

AMOUNT_PATTERN = re.compile(
    r"(?:rs\.?|inr|₹)\s*([\d,]+(?:\.\d{1,2})?)"  # Rs.1,234.50 / INR 500 / ₹99
    r"|(?:debited|credited|sent|received)\s+(?:by\s+)?([\d,]+(?:\.\d{1,2})?)",  # debited by 35.0
    re.IGNORECASE,
)


def parse_decimal(raw: str) -> Decimal:
    """Convert a captured number with digit-group commas to a 2-place Decimal.

    Raises:
        decimal.InvalidOperation: If nothing numeric is left after stripping commas,
            or the value has too many digits for two-place precision
    """
    return Decimal(raw.replace(",", "").strip()).quantize(TWO_PLACES)


def resolve_amount(text: str) -> Decimal | None:
    """Resolve the transaction amount.

    The earliest match of either alternative wins. A zero amount counts as
    unresolved.

    Returns:
        Amount quantized to 2 places, or None if no usable amount was found
    """
    match = AMOUNT_PATTERN.search(text)
    if not match:
        return None

    raw = match.group(1) or match.group(2)
    if not raw:
        return None

    amount = parse_decimal(raw)
    if amount == 0:
        return None
    return amount


# ============================================================================
# Account reference and payment identifier
# ============================================================================

ACCOUNT_PATTERN = re.compile(
    r"\b(?:a/c|acct|account|ac)\s*(?:no|number|#)?\s*[.:]*\s*(X+\d+|\d{4,})",
    re.IGNORECASE,
)

PAYMENT_ID_PATTERN = re.compile(
    r"([a-zA-Z0-9][a-zA-Z0-9._-]{0,63}@[a-zA-Z0-9][a-zA-Z0-9.-]{0,63})"
)


def resolve_account_reference(text: str) -> str:
    """Resolve the masked account token (XX1234) or bare account digits."""
    match = ACCOUNT_PATTERN.search(text)
    return match.group(1) if match else ""


def resolve_payment_identifier(text: str) -> str:
    """Resolve the first name@domain style payment handle."""
    match = PAYMENT_ID_PATTERN.search(text)
    if not match:
        return ""
    # "...from abc@okaxis." ends a sentence, the dot is not part of the handle
    return match.group(1).rstrip(".-")


# ============================================================================
# Transfer mode
# ============================================================================

def _rail_token(name: str) -> re.Pattern[str]:
    # Not glued to a word character or "@" on either side, so "merchant@upi" is
    # a handle and not a rail mention while "26-05-25.UPI Ref" still counts.
    return re.compile(rf"(?<![A-Za-z0-9_@]){name}(?![A-Za-z0-9_@])", re.IGNORECASE)


# Evaluated top to bottom, first hit wins.
TRANSFER_MODE_RULES: list[tuple[TransferMode, re.Pattern[str]]] = [
    (TransferMode.UPI, _rail_token("UPI")),
    (TransferMode.NEFT, _rail_token("NEFT")),
    (TransferMode.IMPS, _rail_token("IMPS")),
    (TransferMode.RTGS, _rail_token("RTGS")),
]


def resolve_transfer_mode(text: str) -> TransferMode:
    """Resolve the payment rail, OTHER when none is named."""
    for mode, pattern in TRANSFER_MODE_RULES:
        if pattern.search(text):
            return mode
    return TransferMode.OTHER


# ============================================================================
# Counterparty
# ============================================================================

GENERIC_COUNTERPARTY_PATTERN = re.compile(
    r"\b(?:to|from)\s+([a-zA-Z0-9@._\s-]{1,60}?)\s+(?:on|thru|via|ref)",
    re.IGNORECASE,
)
TRANSFER_COUNTERPARTY_PATTERN = re.compile(
    r"\btrf\s+to\s+([a-zA-Z\s]{1,60}?)\s+(?:refno|ref)",
    re.IGNORECASE,
)
UPI_COUNTERPARTY_PATTERN = re.compile(
    r"\bfor\s+upi\s+to\s+([a-zA-Z\s]{1,60}?)\s+on",
    re.IGNORECASE,
)
_WHITESPACE_RUN = re.compile(r"\s+")


def match_generic_counterparty(text: str) -> str | None:
    """'to|from <name> on|thru|via|ref' (Kotak style)."""
    match = GENERIC_COUNTERPARTY_PATTERN.search(text)
    if not match:
        return None
    name = match.group(1).strip()
    if "@" not in name:
        name = _WHITESPACE_RUN.sub(" ", name)
    return name or None


def match_transfer_counterparty(text: str) -> str | None:
    """'trf to <name> Refno' (SBI style)."""
    match = TRANSFER_COUNTERPARTY_PATTERN.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


def match_upi_counterparty(text: str) -> str | None:
    """'for UPI to <name> on' (IPPB style)."""
    match = UPI_COUNTERPARTY_PATTERN.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


# Tried in order, the first matcher returning a name wins.
COUNTERPARTY_MATCHERS: list[Callable[[str], str | None]] = [
    match_generic_counterparty,
    match_transfer_counterparty,
    match_upi_counterparty,
]


def resolve_counterparty(text: str, payment_identifier: str = "") -> str:
    """Resolve the other party through the matcher chain.

    Args:
        text: Raw message body
        payment_identifier: Handle resolved from the same message, used when no
            matcher captures a name

    Returns:
        Counterparty name, the payment identifier, or "Unknown"
    """
    for matcher in COUNTERPARTY_MATCHERS:
        name = matcher(text)
        if name:
            return name
    if payment_identifier:
        return payment_identifier
    return UNKNOWN_COUNTERPARTY


# ============================================================================
# Reference number and available balance
# ============================================================================

REFERENCE_PATTERNS = [
    re.compile(r"\bUPI\s*Ref\.?\s*(?:No\.?)?\s*[:#]?\s*([A-Za-z0-9]+)", re.IGNORECASE),
    re.compile(
        r"\bRef(?:erence|no)?\.?\s*(?:No\.?|Number)?\s*[:#]?\s*([A-Za-z0-9]+)",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:IMPS|NEFT|RTGS)\s*[:/-]?\s*([A-Za-z0-9]+)", re.IGNORECASE),
]
MIN_REFERENCE_LENGTH = 6

BALANCE_PATTERNS = [
    re.compile(
        r"\b(?:avl|avail|available)\.?\s*bal(?:ance)?\.?\s*(?:is\s*)?[:-]?\s*"
        r"(?:rs\.?|inr|₹)?\s*([\d,]*\d(?:\.\d{1,2})?)",
        re.IGNORECASE,
    ),
    re.compile(
        r"\bbal(?:ance)?\.?\s*(?:is\s*)?[:-]?\s*(?:rs\.?|inr|₹)\s*([\d,]*\d(?:\.\d{1,2})?)",
        re.IGNORECASE,
    ),
]


def _looks_like_reference(token: str) -> bool:
    return len(token) >= MIN_REFERENCE_LENGTH and any(ch.isdigit() for ch in token)


def resolve_reference_number(text: str) -> str:
    """Resolve the transaction reference (UPI Ref, Refno, NEFT id...)."""
    for pattern in REFERENCE_PATTERNS:
        for match in pattern.finditer(text):
            token = match.group(1)
            if _looks_like_reference(token):
                return token
    return ""


def resolve_available_balance(text: str) -> Decimal | None:
    """Resolve the balance quoted after the transaction, if any.

    A quoted figure too large for two-place Decimal precision is treated as
    unresolved rather than failing the whole record.
    """
    for pattern in BALANCE_PATTERNS:
        match = pattern.search(text)
        if match:
            try:
                return parse_decimal(match.group(1))
            except InvalidOperation:
                return None
    return None
