"""JSON encoding of a Selection for persistence and submission.

The layout mirrors what the browser kept in local storage:

    {"<candidate id>": {"votes": {"technique": "8"},
                        "chatVotes": {"voters": 10, "positivePercentage": "80"}}}

Keys appear in selection order, and optional fields are omitted when absent.
"""

import json
from typing import Any

from core.models import Category, ChatVote, Selection, SelectionEntry
from core.selection.clamp import clamp_percentage, clamp_score


class MalformedSelectionError(ValueError):
    """Raised when persisted bytes do not describe a valid Selection."""
    pass


def selection_to_dict(selection: Selection) -> dict[str, Any]:
    """Convert a Selection to a JSON-serializable dictionary."""
    result: dict[str, Any] = {}
    for candidate_id, entry in selection.items():
        data: dict[str, Any] = {}
        if entry.votes is not None:
            data["votes"] = {category.value: vote for category, vote in entry.votes.items()}
        if entry.chat_votes is not None:
            chat: dict[str, Any] = {}
            if entry.chat_votes.voters is not None:
                chat["voters"] = entry.chat_votes.voters
            if entry.chat_votes.positive_percentage is not None:
                chat["positivePercentage"] = entry.chat_votes.positive_percentage
            data["chatVotes"] = chat
        result[candidate_id] = data
    return result


def encode_selection(selection: Selection) -> bytes:
    return json.dumps(selection_to_dict(selection)).encode("utf-8")


def _parse_votes(raw: Any) -> dict[Category, str]:
    if not isinstance(raw, dict):
        raise MalformedSelectionError(f"votes must be an object, got {type(raw).__name__}")
    votes: dict[Category, str] = {}
    for key, value in raw.items():
        try:
            category = Category(key)
        except ValueError as e:
            raise MalformedSelectionError(f"Unknown category: {key!r}") from e
        if not isinstance(value, str):
            raise MalformedSelectionError(f"Score for {key!r} must be a string")
        # clamped like user input; empty or non-numeric scores are dropped
        score = clamp_score(value)
        if score is not None:
            votes[category] = score
    return votes


def _parse_chat_votes(raw: Any) -> ChatVote:
    if not isinstance(raw, dict):
        raise MalformedSelectionError(f"chatVotes must be an object, got {type(raw).__name__}")
    voters = raw.get("voters")
    percentage = raw.get("positivePercentage")
    # bool is an int subclass; reject it explicitly
    if voters is not None and (isinstance(voters, bool) or not isinstance(voters, int) or voters < 0):
        raise MalformedSelectionError(f"voters must be a non-negative integer, got {voters!r}")
    if percentage is not None and not isinstance(percentage, str):
        raise MalformedSelectionError(f"positivePercentage must be a string, got {percentage!r}")
    return ChatVote(voters=voters, positive_percentage=clamp_percentage(percentage))


def selection_from_dict(data: Any) -> Selection:
    """Build a Selection from its dictionary form.

    Raises:
        MalformedSelectionError: If any part of the data has the wrong shape
    """
    if not isinstance(data, dict):
        raise MalformedSelectionError(f"Selection must be an object, got {type(data).__name__}")

    selection = Selection()
    for candidate_id, raw_entry in data.items():
        if not isinstance(raw_entry, dict):
            raise MalformedSelectionError(f"Entry for {candidate_id!r} must be an object")
        votes = _parse_votes(raw_entry["votes"]) if "votes" in raw_entry else None
        chat_votes = _parse_chat_votes(raw_entry["chatVotes"]) if "chatVotes" in raw_entry else None
        selection = selection.with_entry(
            candidate_id, SelectionEntry(votes=votes, chat_votes=chat_votes)
        )
    return selection


def decode_selection(data: bytes) -> Selection:
    """Decode persisted bytes into a Selection.

    Raises:
        MalformedSelectionError: If the bytes are not valid UTF-8 JSON or do
            not describe a Selection
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedSelectionError(f"Invalid selection data: {e}") from e
    return selection_from_dict(raw)
