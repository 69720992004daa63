"""Window matching."""

from typing import assert_never

from .models import ByApplicationId, ByClass, ByTitle, Identifier, WindowRecord

__all__ = ["eq_ignore_ascii_case", "matches"]

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


def eq_ignore_ascii_case(value1: str, value2: str) -> bool:
    """Compare two strings, folding only ASCII letters.

    Unlike ``str.lower`` or ``str.casefold``, non-ASCII characters must be
    identical: ``"É"`` does not match ``"é"``.
    """
    return len(value1) == len(value2) and value1.translate(_ASCII_LOWER) == value2.translate(_ASCII_LOWER)


def _field_matches(value: str | None, expected: str) -> bool:
    return value is not None and eq_ignore_ascii_case(value, expected)


def matches(window: WindowRecord, identifier: Identifier) -> bool:
    """Return True if `window` is selected by `identifier`.

    A missing title, app_id or class never matches.
    """
    match identifier:
        case ByTitle(value):
            return _field_matches(window.title, value)
        case ByApplicationId(value):
            return _field_matches(window.app_id, value)
        case ByClass(value):
            return _field_matches(window.window_class, value)
        case _:
            assert_never(identifier)
