"""Decimal helpers for currency amounts"""

from decimal import Decimal, InvalidOperation
from typing import Union

from wealth_core.domain.exceptions import InvalidInputError


def to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    """
    Coerce an amount to Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than its
    binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidInputError(f"Not an amount: {value!r}")
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise InvalidInputError(f"Not an amount: {value!r}") from e

    if not result.is_finite():
        raise InvalidInputError(f"Amount must be finite: {value!r}")
    return result

