"""Orchestrator: keep aggregates in step with the selection and save votes."""

from typing import Any, Protocol

from core.aggregation import compute_aggregates
from core.constants import CALCULATIONS_PRECISION
from core.models import AggregateBundle, Category, Selection
from core.selection.store import SelectionStore


class Submitter(Protocol):
    def submit(self, candidate_name: str, selection: Selection) -> Any: ...


class ScoringSession:
    """One judges' scoring table.

    Recomputes the aggregates every time the store changes, so `aggregates`
    always matches `store.snapshot()`. Holds the free-text name of what is
    being voted on, which is sent along with the selection on save.

    Example:
        >>> session = ScoringSession(store, SubmissionClient("https://example.com"))
        >>> session.start()
        >>> session.store.set_category_score("c1", Category.TECHNIQUE, "8")
        >>> session.aggregates.judges_score
        '8.00'
    """

    def __init__(
        self,
        store: SelectionStore,
        submitter: Submitter,
        categories: tuple[Category, ...] = tuple(Category),
        precision: int = CALCULATIONS_PRECISION,
    ):
        self.store = store
        self.submitter = submitter
        self.categories = categories
        self.precision = precision
        self.candidate_name = ""
        self.aggregates = self._compute(store.snapshot())
        self._unsubscribe = store.subscribe(self._on_change)

    def _compute(self, selection: Selection) -> AggregateBundle:
        return compute_aggregates(selection, self.categories, self.precision)

    def _on_change(self, selection: Selection) -> None:
        self.aggregates = self._compute(selection)

    def start(self) -> AggregateBundle:
        """Restore the persisted selection and compute its aggregates."""
        self.aggregates = self._compute(self.store.hydrate())
        return self.aggregates

    def close(self) -> None:
        self._unsubscribe()

    def clear(self, keep_chat_panels: bool = False) -> None:
        self.store.remove_all(keep_chat_panels)
        self.candidate_name = ""

    def save(self) -> Any:
        """Submit the current selection under candidate_name.

        On success the scores are cleared (chat panels stay open) and the
        name is reset. On failure nothing changes.

        Raises:
            SubmissionError: If the submission fails
        """
        result = self.submitter.submit(self.candidate_name, self.store.snapshot())
        self.clear(keep_chat_panels=True)
        return result
