"""Aggregate scores for the current selection.

Every function here is pure: the selection is only read, and all results
are returned as fixed-precision decimal strings (or None when there is
nothing to aggregate).
"""

import math
from collections.abc import Iterable

from core.constants import CALCULATIONS_PRECISION, CHAT_SCALE
from core.models import AggregateBundle, Category, Selection, SelectionEntry


def _parse_score(value: str | None) -> float | None:
    """Parse a stored score, or None if it is missing, empty or not a number."""
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _to_float(value: str | None) -> float:
    """Parse a stored score for summation. Empty or missing counts as 0."""
    number = _parse_score(value)
    return 0.0 if number is None else number


def _format(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def category_averages(
    selection: Selection, categories: Iterable[Category], precision: int
) -> dict[Category, str | None]:
    """Average each category over the candidates that scored it.

    A category nobody scored has no average (None), rather than 0. Empty
    or non-numeric scores count as not scored.
    """
    averages: dict[Category, str | None] = {}
    for category in categories:
        parsed = (_parse_score(entry.get_vote(category)) for entry in selection.values())
        scores = [score for score in parsed if score is not None]
        if not scores:
            averages[category] = None
            continue
        averages[category] = _format(sum(scores) / len(scores), precision)
    return averages


def candidate_total(
    entry: SelectionEntry, categories: Iterable[Category], precision: int
) -> str | None:
    """Sum of one candidate's scores over the given categories.

    Known limitation: a candidate whose scores are all zero gets no total,
    exactly like a candidate with no scores at all. A literal "0" and a
    missing score cannot be told apart here.
    """
    scores = [_to_float(entry.get_vote(category)) for category in categories]
    if not any(scores):
        return None
    return _format(sum(scores), precision)


def judges_score(averages: dict[Category, str | None], precision: int) -> str | None:
    """Sum (not average) of the defined category averages."""
    defined = [average for average in averages.values() if average is not None]
    if not defined:
        return None
    return _format(sum(float(average) for average in defined), precision)


def chat_score(
    selection: Selection, judges: str | None, precision: int
) -> str | None:
    """Crowd vote on the CHAT_SCALE, weighted by number of voters.

    Only candidates with both a voter count and a positive percentage take
    part. The chat score is withheld until the judges score exists, and is
    None when the qualifying voter counts sum to zero.
    """
    if judges is None:
        return None

    contributions = 0.0
    weights = 0
    qualifying = 0
    for entry in selection.values():
        chat = entry.chat_votes
        if chat is None or chat.voters is None or chat.positive_percentage is None:
            continue
        qualifying += 1
        weights += chat.voters
        contributions += chat.voters * _to_float(chat.positive_percentage) / 100 * CHAT_SCALE

    if not qualifying or weights == 0:
        return None
    return _format(contributions / weights, precision)


def final_score(
    totals: dict[str, str | None],
    judges: str | None,
    chat: str | None,
    precision: int,
) -> str | None:
    """Blend the candidate totals with the chat score.

    The chat score counts as one more judge alongside each candidate total.
    Without a chat score the final score is just the judges score.
    """
    if chat is None or judges is None:
        return judges
    defined = [float(total) for total in totals.values() if total is not None]
    return _format((sum(defined) + float(chat)) / (len(defined) + 1), precision)


def compute_aggregates(
    selection: Selection,
    categories: Iterable[Category] = tuple(Category),
    precision: int = CALCULATIONS_PRECISION,
) -> AggregateBundle:
    """Compute every aggregate for a selection.

    Args:
        selection: The candidates under scoring and their entries
        categories: Rubric categories to average, in display order
        precision: Number of decimal places of every formatted result

    Returns:
        AggregateBundle with per-category averages, per-candidate totals,
        and the judges, chat and final scores
    """
    categories = tuple(categories)
    averages = category_averages(selection, categories, precision)
    totals = {
        candidate_id: candidate_total(entry, categories, precision)
        for candidate_id, entry in selection.items()
    }
    judges = judges_score(averages, precision)
    chat = chat_score(selection, judges, precision)

    return AggregateBundle(
        category_averages=averages,
        candidate_totals=totals,
        judges_score=judges,
        chat_score=chat,
        final_score=final_score(totals, judges, chat, precision),
    )
