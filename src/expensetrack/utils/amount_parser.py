"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from expensetrack.domain.errors import ValidationError

CENTS = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an expense amount string into a two-place Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded to cents

    Raises:
        ValidationError: If the string cannot be parsed, is negative, or
            does not fit the stored precision
    """
    if not amount_str or not amount_str.strip():
        raise ValidationError("Empty amount string")

    # Remove whitespace
    cleaned = amount_str.strip()

    # Remove currency symbols
    cleaned = re.sub(r"[$€£¥]", "", cleaned)

    # Remove thousands separators
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValidationError(f"Could not parse amount '{amount_str}': {e!r}")

    if not amount.is_finite():
        raise ValidationError(f"Amount must be a finite number, got '{amount_str}'")
    if amount < 0:
        raise ValidationError(f"Amount cannot be negative, got '{amount_str}'")

    amount = amount.quantize(CENTS)
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Amount cannot exceed {MAX_AMOUNT}, got '{amount_str}'")
    return amount
