"""Input checks that run before any request leaves the process.

Every function raises ``ValidationError`` with a message that is safe to show
to the person who typed the value.
"""

import re
from decimal import Decimal
from typing import Any

from sacco_sdk.exceptions import ValidationError
from sacco_sdk.types import Currency


_OTP_PATTERN = re.compile(r"[0-9]{6}")

# Plain decimal notation, sent to Bitnob exactly as typed
_AMOUNT_PATTERN = re.compile(r"[0-9]*\.?[0-9]+")

SUPPORTED_CURRENCIES = ", ".join(Currency)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(message: str, *values: Any) -> None:
    if any(_is_blank(v) for v in values):
        raise ValidationError(message)


def normalize_currency(currency: Any) -> Currency:
    """Upper-case and check a currency code against the supported set."""

    if _is_blank(currency):
        raise ValidationError("Currency is required")

    code = str(currency).strip().upper()

    try:
        return Currency(code)

    except ValueError:
        raise ValidationError(
            f"Currency must be one of: {SUPPORTED_CURRENCIES}",
            error="Invalid currency",
        ) from None


def normalize_amount(amount: Any) -> str:
    """Check that an amount is a finite positive decimal and return it as a string."""

    if _is_blank(amount) or isinstance(amount, bool):
        raise ValidationError(
            "Amount must be a valid positive number", error="Invalid amount"
        )

    text = str(amount).strip()

    if not _AMOUNT_PATTERN.fullmatch(text) or Decimal(text) <= 0:
        raise ValidationError(
            "Amount must be a valid positive number", error="Invalid amount"
        )

    return text


def normalize_recipient(recipient: Any) -> str:
    if not isinstance(recipient, str) or not recipient.strip():
        raise ValidationError(
            "Recipient must be a valid email, phone number, or wallet address",
            error="Invalid recipient",
        )

    return recipient.strip()


def check_otp(otp: Any) -> str:
    if not isinstance(otp, str) or not _OTP_PATTERN.fullmatch(otp):
        raise ValidationError("OTP must be a 6-digit number", error="Invalid OTP format")

    return otp


def check_reference(reference: Any) -> str:
    if _is_blank(reference) or not isinstance(reference, str):
        raise ValidationError("Transaction reference is required")

    return reference.strip()
