# storefront/utils/validators.py
import math
from typing import Any


def to_number(value: Any) -> float | None:
    """
    Numeric coercion for loosely typed payload values.
    Returns None for anything that is not a finite number
    (None, "", "abc", nan, inf, booleans).
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        num = float(value)
    except (TypeError, ValueError):
        return None

    return num if math.isfinite(num) else None


def to_product_id(value: Any) -> int | None:
    #"1" and 1 are the same product
    num = to_number(value)
    if num is None or not num.is_integer():
        return None
    return int(num)
