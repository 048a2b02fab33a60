"""Sorting helpers for route names."""

from __future__ import annotations

import re
from typing import Tuple

_DIGITS = re.compile(r"(\d+)")


def natural_key(value: str) -> Tuple[Tuple[int, int, str], ...]:
    """Sort key that compares embedded numbers numerically.

    >>> sorted(["10", "2", "1M"], key=natural_key)
    ['1M', '2', '10']
    """
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part.casefold())
        for part in _DIGITS.split(value)
        if part
    )
