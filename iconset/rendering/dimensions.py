"""
Scaling of width/height values that may carry units.

    calculate_dimension(48, 36 / 48)              -> 36
    calculate_dimension("1em", 20 / 24)           -> "0.84em"
    calculate_dimension("calc(100% - 48px)", 0.75) -> "calc(75% - 36px)"
"""

import math
import re
from typing import Any, Union

Number = Union[int, float]

# Any run of digits and dots containing at least one digit, optionally negative
_NUMBER_TOKEN = re.compile(r'-?[0-9.]*[0-9]+[0-9.]*')


def format_number(value: Any) -> str:
    """Render a number the way it appears in SVG attributes.

    Integral floats lose their ".0": 12.0 -> "12", 17.78 -> "17.78".
    Non-numbers are passed through str().
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _scale(number: float, ratio: float, precision: int) -> Number:
    return math.ceil(number * ratio * precision) / precision


def _parse_token(token: str) -> float:
    # "1.2.3" style tokens: keep the longest valid float prefix
    match = re.match(r'-?\d*(?:\.\d+)?', token)
    text = match.group(0) if match else ''
    try:
        return float(text)
    except ValueError:
        return 0.0


def calculate_dimension(size: Any, ratio: float, precision: int = 100) -> Any:
    """Scale a size by `ratio`, keeping its representation.

    Numbers are multiplied and rounded up to 1/precision. In strings every
    numeric token is scaled in place and everything around it (units,
    calc() wrappers, operators) is kept. Other values, and strings without
    numbers, are returned unchanged.

    Args:
        size: Number or CSS-like length string
        ratio: Scale factor
        precision: Rounding precision (100 -> two decimals)

    Returns:
        Scaled value of the same kind as `size`
    """
    if ratio == 1:
        return size

    if isinstance(size, bool):
        return size

    if isinstance(size, (int, float)):
        return _scale(size, ratio, precision)

    if not isinstance(size, str):
        return size

    tokens = list(_NUMBER_TOKEN.finditer(size))
    if not tokens:
        return size

    parts = []
    start = 0
    for token in tokens:
        parts.append(size[start:token.start()])
        parts.append(format_number(_scale(_parse_token(token.group(0)), ratio, precision)))
        start = token.end()
    parts.append(size[start:])

    return ''.join(parts)
