"""Shared test helpers."""

import pytest

from core.models import Candidate, ChatVote, Selection, SelectionEntry


def make_selection(
    votes_table: dict[str, dict[str, str]],
    chat_votes: dict[str, ChatVote] | None = None,
) -> Selection:
    """Build a Selection from a compact scores table.

    Args:
        votes_table: {candidate_id: {category: score}}, in selection order
        chat_votes: Optional {candidate_id: ChatVote}

    Returns:
        Selection with an entry per candidate in votes_table.
    """
    chat_votes = chat_votes or {}
    selection = Selection()
    for candidate_id, votes in votes_table.items():
        selection = selection.with_entry(candidate_id, SelectionEntry(
            votes=votes,
            chat_votes=chat_votes.get(candidate_id),
        ))
    return selection


@pytest.fixture
def candidates():
    return [
        Candidate(id="a", name="Alice", type="judge"),
        Candidate(id="b", name="Bob", type="judge", image="https://example.com/b.png"),
        Candidate(id="c", name="Carol", type="guest judge"),
    ]
