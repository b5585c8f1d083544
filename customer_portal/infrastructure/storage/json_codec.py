"""JSON text that keeps Decimal values exact in both directions"""

import json
import re
import uuid
from decimal import Decimal
from typing import Any


def loads(text: str | bytes) -> Any:
    """Parse JSON, reading every non-integer number as a Decimal"""
    return json.loads(text, parse_float=Decimal)


def dumps(value: Any, indent: int | None = None) -> str:
    """
    Serialize to JSON, writing Decimal values as numbers with their exact digits.

    Raises:
        ValueError: A Decimal or float is NaN or infinite
        TypeError: Value holds something JSON cannot represent
    """
    # Decimals are swapped for unique placeholder strings, then the quoted
    # placeholders are replaced by the decimal text in the encoded output
    marker = uuid.uuid4().hex
    numbers: list[str] = []

    def mark(item: Any) -> Any:
        if isinstance(item, Decimal):
            if not item.is_finite():
                raise ValueError(f"Out of range decimal value: {item}")
            numbers.append(str(item))
            return f"{marker}{len(numbers) - 1}"
        if isinstance(item, dict):
            return {key: mark(v) for key, v in item.items()}
        if isinstance(item, (list, tuple)):
            return [mark(v) for v in item]
        return item

    text = json.dumps(mark(value), ensure_ascii=False, indent=indent, allow_nan=False)
    if not numbers:
        return text
    return re.sub(f'"{marker}(\\d+)"', lambda m: numbers[int(m.group(1))], text)
