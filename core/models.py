"""Core data models for candidates, selections and aggregate scores."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Self


class Category(str, Enum):
    """Fixed rubric dimensions, in display order."""
    TECHNIQUE = "technique"
    INTERPRETATION = "interpretation"
    STAGE_PRESENCE = "stage_presence"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[Category, str] = {
    Category.TECHNIQUE: "Technique",
    Category.INTERPRETATION: "Interpretation",
    Category.STAGE_PRESENCE: "Stage presence",
}


@dataclass(frozen=True)
class Candidate:
    """A candidate record owned by the candidate registry.

    Attributes:
        id: Stable identifier
        name: Display name
        type: Free-form kind of candidate as recorded by the registry
        image: Optional public URL or path of the candidate picture
    """
    id: str
    name: str
    type: str
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.type, "image": self.image}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            type=str(data.get("type", "")),
            image=data.get("image") or None,
        )


@dataclass(frozen=True)
class ChatVote:
    """Crowd vote for one candidate.

    An empty ChatVote still means the chat panel is open for the candidate,
    which is different from having no ChatVote at all.
    """
    voters: int | None = None
    positive_percentage: str | None = None


@dataclass(frozen=True)
class SelectionEntry:
    """In-progress scores for one selected candidate.

    Attributes:
        votes: Category -> score string in [0, 10]. A missing key means no
            score was entered for that category; it is not the same as zero.
        chat_votes: Crowd vote, or None if the chat panel was never opened
    """
    votes: Mapping[Category, str] | None = None
    chat_votes: ChatVote | None = None

    def __post_init__(self):
        if self.votes is not None:
            votes = {Category(category): vote for category, vote in self.votes.items()}
            object.__setattr__(self, "votes", MappingProxyType(votes))

    def __hash__(self) -> int:
        votes = tuple(sorted(self.votes.items())) if self.votes is not None else None
        return hash((votes, self.chat_votes))

    def get_vote(self, category: Category) -> str | None:
        if self.votes is None:
            return None
        return self.votes.get(category)


@dataclass(frozen=True)
class Selection(Mapping[str, SelectionEntry]):
    """Immutable ordered mapping of candidate id -> SelectionEntry.

    Insertion order is the display order. All "mutations" return a new
    Selection and leave this one untouched.

    Example:
        >>> selection = Selection().with_entry("a", SelectionEntry())
        >>> list(selection)
        ['a']
    """
    _entries: tuple[tuple[str, SelectionEntry], ...] = field(default=())

    @classmethod
    def from_mapping(cls, entries: Mapping[str, SelectionEntry]) -> Self:
        return cls(tuple(entries.items()))

    def __getitem__(self, candidate_id: str) -> SelectionEntry:
        for key, entry in self._entries:
            if key == candidate_id:
                return entry
        raise KeyError(candidate_id)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Selection):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def with_entry(self, candidate_id: str, entry: SelectionEntry) -> Self:
        """Return a copy with the entry replaced in place, or appended if new."""
        if candidate_id in self:
            return type(self)(tuple(
                (key, entry if key == candidate_id else existing)
                for key, existing in self._entries
            ))
        return type(self)(self._entries + ((candidate_id, entry),))

    def without(self, candidate_id: str) -> Self:
        """Return a copy with the entry for candidate_id removed."""
        return type(self)(tuple(
            (key, entry) for key, entry in self._entries if key != candidate_id
        ))


@dataclass(frozen=True)
class AggregateBundle:
    """Aggregates computed from a Selection. Every value is a fixed-precision
    decimal string, or None when there is nothing to aggregate.

    Attributes:
        category_averages: Category -> average score among candidates that
            scored it
        candidate_totals: candidate id -> sum of that candidate's scores
        judges_score: Sum of the defined category averages
        chat_score: Crowd vote on the same 0-30 scale, weighted by voters
        final_score: Candidate totals and chat score averaged together, the
            chat score counting as one extra judge
    """
    category_averages: dict[Category, str | None]
    candidate_totals: dict[str, str | None]
    judges_score: str | None = None
    chat_score: str | None = None
    final_score: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "categoryAverages": {c.value: v for c, v in self.category_averages.items()},
            "candidateTotals": dict(self.candidate_totals),
            "judgesScore": self.judges_score,
            "chatScore": self.chat_score,
            "finalScore": self.final_score,
        }
