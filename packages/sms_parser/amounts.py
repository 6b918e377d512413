"""Lenient parsing of amount text captured from SMS bodies."""

import math
import re
from typing import Union

import structlog

logger = structlog.get_logger()

# Longest leading decimal number with an optional exponent, the way the
# mobile client read amounts.
_LEADING_NUMBER = re.compile(
    r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII
)


def _invalid(raw) -> float:
    logger.warning("invalid_amount_format", amount=raw)
    return 0.0


def parse_amount(raw: Union[str, int, float, None]) -> float:
    """Convert captured amount text to a float without ever raising.

    Comma separators are stripped and the leading number is read, so
    "1,500.00" gives 1500.0, "1.500.00" gives 1.5 and "1e3" gives 1000.0.
    Anything without a leading number, or anything that is not finite
    (NaN, or digits that overflow a float), degrades to 0.0 and logs a
    warning.
    """
    if isinstance(raw, bool):
        return _invalid(raw)
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return _invalid(raw)
        return value if math.isfinite(value) else _invalid(raw)

    text = str(raw or "").replace(",", "")
    match = _LEADING_NUMBER.match(text)
    if not match:
        return _invalid(raw)
    value = float(match.group(1))
    return value if math.isfinite(value) else _invalid(raw)
