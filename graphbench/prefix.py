"""Prefix sums, string splitting and small sampling helpers."""

from __future__ import annotations

import random
import re
from itertools import accumulate
from typing import Iterable, Sequence

_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_UNITS = (("G", 10**9), ("M", 10**6), ("K", 10**3))


def prefix_sum(values: Iterable[int]) -> list[int]:
    """Exclusive prefix sum with the grand total appended (length n + 1)."""
    return list(accumulate(values, initial=0))


def contains(items: Iterable, key) -> bool:
    """Whether ``key`` occurs in ``items``."""
    return key in items


def parse_symmetric_size(value: str) -> int:
    """Parse a size such as ``"2G"``, ``"512M"``, ``"64K"`` or ``"100"`` into bytes.

    The leading number is truncated to an integer before the unit is applied.
    """
    if value is None:
        raise ValueError("size value is required")
    units = next((factor for letter, factor in _UNITS if letter in value), 1)
    match = _LEADING_NUMBER.match(value)
    number = float(match.group(0)) if match else 0.0
    if number < 0:
        raise ValueError(f"size must not be negative: {value!r}")
    return int(number) * units


def split(text: str, delimiters: str = " ") -> list[str]:
    """Split ``text`` on any character in ``delimiters``, dropping empty tokens."""
    if not delimiters:
        return [text] if text else []
    pattern = "[" + re.escape(delimiters) + "]+"
    return [token for token in re.split(pattern, text) if token]


def select_k_items(k: int, begin: int, end: int, rng: random.Random | None = None) -> list[int]:
    """Reservoir-sample ``k`` distinct integers from ``range(begin, end)``."""
    if k < 0 or k > end - begin:
        raise ValueError(f"cannot select {k} items from [{begin}, {end})")
    rng = rng or random.Random()
    reservoir = list(range(begin, begin + k))
    for position, item in enumerate(range(begin + k, end), start=k):
        j = rng.randrange(position + 1)
        if j < k:
            reservoir[j] = item
    return reservoir


def find_ceil(arr: Sequence[int], r: int, low: int, high: int) -> int:
    """Index of the smallest element of sorted ``arr[low..high]`` that is >= ``r``, or -1."""
    while low < high:
        mid = low + ((high - low) >> 1)
        if r > arr[mid]:
            low = mid + 1
        else:
            high = mid
    return low if arr[low] >= r else -1


def select_one_item(dist: Sequence[int], rng: random.Random | None = None) -> int:
    """Pick an index with probability proportional to the frequencies in ``dist``."""
    if not dist:
        raise ValueError("distribution is empty")
    offsets = list(accumulate(dist))
    total = offsets[-1]
    if total <= 0:
        raise ValueError("distribution must have a positive total")
    rng = rng or random.Random()
    r = rng.randrange(total) + 1
    return find_ceil(offsets, r, 0, len(offsets) - 1)