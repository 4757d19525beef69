import json
import math
from typing import Any

from boutique.core.modules.product.models import Size
from boutique.errors import ValidationError


def parse_price(value: Any) -> float:
    """Coerce a submitted price to a finite number.

    Raises:
        ValidationError: If the value is not numeric
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid price: '{value}'")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid price: '{value}'") from None
    if not math.isfinite(price):
        raise ValidationError(f"Invalid price: '{value}'")
    return price


def parse_size(value: Any) -> Size:
    """Parse sizes sent as a JSON string or as an already decoded structure.

    Raises:
        ValidationError: If the value is not JSON or not an array/object
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid size: {e.msg}") from None
    if not isinstance(value, list | dict):
        raise ValidationError("Invalid size: expected a JSON array or object")
    return value
