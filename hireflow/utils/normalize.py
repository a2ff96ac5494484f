"""
Normalization helpers for skill tokens and location strings.

Profiles and postings may hold skills either as a list or as a single
comma-separated string; everything is compared in the normalized form.
"""

from typing import Any, Iterable, Optional

from hireflow.utils.constants import DEFAULT_LOCATION


def normalize_tokens(value: Any, unique: bool = True) -> list[str]:
    """
    Normalize a skill list to lower-cased, trimmed tokens.

    Args:
        value: A list of strings, a comma-separated string, or None
        unique: Drop repeated tokens, keeping the first occurrence

    Returns:
        Tokens in input order with empties removed
    """
    if value is None:
        return []
    if isinstance(value, str):
        raw: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        raw = value
    else:
        return []

    tokens = [str(item).strip().lower() for item in raw if item is not None]
    tokens = [token for token in tokens if token]
    if unique:
        return list(dict.fromkeys(tokens))
    return tokens


def normalize_location(value: Optional[str]) -> str:
    """Lower-case and trim a location, treating a blank value as remote."""
    if value is None or not str(value).strip():
        value = DEFAULT_LOCATION
    return str(value).strip().lower()


def coerce_years(value: Any) -> float:
    """Convert an experience value to a non-negative number of years."""
    try:
        years = float(value)
    except (TypeError, ValueError):
        return 0.0
    if years != years or years < 0:  # NaN or negative
        return 0.0
    return years
