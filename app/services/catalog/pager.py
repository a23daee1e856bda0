import math
from collections.abc import Sequence
from typing import TypeVar

from app.core.config import settings

T = TypeVar("T")


def page_count(length: int, size: int = settings.PAGE_SIZE) -> int:
    """Number of pages for ``length`` items; an empty sequence still has one page."""
    return max(1, math.ceil(length / size))


def clamp_page(page: int, count: int) -> int:
    return max(1, min(count, page))


def page_slice(items: Sequence[T], page: int, size: int = settings.PAGE_SIZE) -> list[T]:
    """Items on the 1-based ``page``. The caller is responsible for keeping ``page`` in range."""
    start = (page - 1) * size
    return list(items[start : page * size])


def showing_range(page: int, size: int, total: int) -> tuple[int, int]:
    """1-based first and last positions shown on ``page`` ("Showing first–last of total")."""
    first = (page - 1) * size + 1
    last = min(page * size, total)
    return first, last
