"""Ordered-alternative matching."""

from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

Matcher = Callable[[T], Optional[str]]


def first_match(matchers: Iterable[Matcher], value: T) -> Optional[str]:
    """Return the result of the first matcher that produces one.

    Matchers are tried in order and evaluation stops at the first hit, so
    alternatives can be appended without touching the caller.
    """
    for matcher in matchers:
        result = matcher(value)
        if result is not None:
            return result
    return None
