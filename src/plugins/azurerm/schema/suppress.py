"""Diff suppression predicates for site_config fields."""

from typing import Any


def case_difference(key: str, old: Any, new: Any) -> bool:
    """
    Report two values as equivalent when they differ only by case.

    Args:
        key: Name of the compared field (kept for a uniform predicate signature)
        old: Value currently recorded
        new: Value supplied by the user or returned by the API

    Returns:
        True if the difference should be suppressed
    """
    if not isinstance(old, str) or not isinstance(new, str):
        return old == new
    return old.lower() == new.lower()
