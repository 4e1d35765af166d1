"""Clamping of user-entered scores, percentages and voter counts."""

import math

from core.constants import MAX_PERCENTAGE, MAX_VOTE


def _parse_number(raw: object) -> float | None:
    """Parse user input as a finite number, or None if it isn't one."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def _number_text(number: float) -> str:
    return str(int(number)) if number.is_integer() else str(number)


def _clamp_text(raw: object, maximum: int) -> str | None:
    number = _parse_number(raw)
    if number is None:
        return None
    if number > maximum:
        return str(maximum)
    if number < 0:
        return "0"
    if isinstance(raw, str):
        return raw.strip()
    return _number_text(number)


def clamp_score(raw: object) -> str | None:
    """Clamp a category score to [0, MAX_VOTE].

    Returns the score text to store, or None for empty or non-numeric
    input, which means "no score" rather than zero.
    """
    return _clamp_text(raw, MAX_VOTE)


def clamp_percentage(raw: object) -> str | None:
    """Clamp a chat positive percentage to [0, MAX_PERCENTAGE]."""
    return _clamp_text(raw, MAX_PERCENTAGE)


def clamp_voters(raw: object) -> int | None:
    """Clamp a chat voter count to a non-negative integer."""
    number = _parse_number(raw)
    if number is None:
        return None
    return max(0, math.floor(number))
