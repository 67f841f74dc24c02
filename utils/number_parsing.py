from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional


_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_int_prefix(value: Any) -> Optional[int]:
    """Parse the leading base-10 integer of a value.

    '10000' -> 10000, ' 42 followers' -> 42, '2020-01' -> 2020.
    Returns None when the value does not start with digits.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    m = _LEADING_INT.match(str(value))
    if not m:
        return None
    return int(m.group(1))


def parse_followers(value: Any) -> int:
    parsed = parse_int_prefix(value)
    if parsed is None or parsed < 0:
        return 0
    return parsed


def parse_founding_year(value: Any, today: Optional[date] = None) -> int:
    # A zero year counts as missing
    parsed = parse_int_prefix(value)
    if not parsed:
        return (today or date.today()).year
    return parsed
