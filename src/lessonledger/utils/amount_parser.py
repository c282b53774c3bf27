"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "€123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is not a finite number
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    amount_str = amount_str.replace(",", "")
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")

    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a number")

    return -amount if is_negative else amount


def parse_count(count_str: str) -> int:
    """Parse a non-negative whole lesson count.

    Raises:
        ValueError: If the string is not a non-negative integer
    """
    count_str = (count_str or "").strip()
    try:
        count = int(count_str)
    except ValueError:
        raise ValueError(f"Could not parse count '{count_str}'")
    if count < 0:
        raise ValueError(f"Count must be non-negative, got {count}")
    return count


def format_amount(amount: Decimal) -> str:
    """Format an amount without trailing zeros: 16 -> "16", 16.50 -> "16.5"."""
    if amount == amount.to_integral_value():
        return str(int(amount))
    return format(amount.normalize(), "f")
