"""The selection store: owns the Selection and every change made to it."""

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import replace

from core.constants import SELECTION_STORAGE_KEY
from core.models import Candidate, Category, ChatVote, Selection, SelectionEntry
from core.selection.clamp import clamp_percentage, clamp_score, clamp_voters
from core.selection.codec import MalformedSelectionError, decode_selection, encode_selection
from core.selection.storage import ByteStore

logger = logging.getLogger(__name__)

Listener = Callable[[Selection], None]


class SelectionStore:
    """Holds the current Selection, applies changes and persists them.

    Every change replaces the Selection with a new immutable snapshot, hands
    it to the persistence executor and then notifies subscribers. Writes are
    fire-and-forget: they run on the given executor, or on a single worker
    thread owned by the store, and a failed write is logged and otherwise
    ignored. Writes never land out of order: a snapshot older than the last
    one written is dropped. The in-memory Selection is always authoritative.

    Changes that target a candidate which is not selected are ignored.
    Out-of-range numbers are clamped rather than rejected.
    """

    def __init__(
        self,
        byte_store: ByteStore,
        candidates: Iterable[Candidate] = (),
        executor: Executor | None = None,
        storage_key: str = SELECTION_STORAGE_KEY,
    ):
        self._byte_store = byte_store
        self._candidates: list[Candidate] = list(candidates)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="selection-persist"
        )
        self.storage_key = storage_key
        self._selection = Selection()
        self._listeners: list[Listener] = []
        self._write_lock = threading.Lock()
        self._sequence = 0
        self._written_sequence = 0
        self._last_write: Future | None = None

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def snapshot(self) -> Selection:
        return self._selection

    @property
    def candidates(self) -> list[Candidate]:
        return list(self._candidates)

    def available_candidates(self) -> list[Candidate]:
        """Candidates from the registry that are not selected yet, in registry order."""
        return [c for c in self._candidates if c.id not in self._selection]

    def set_candidates(self, candidates: Iterable[Candidate]) -> None:
        """Replace the candidate list, e.g. after the registry gained a candidate.

        Selected entries are kept even if their candidate disappeared from
        the list.
        """
        self._candidates = list(candidates)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def hydrate(self) -> Selection:
        """Load the persisted Selection.

        Missing, unreadable or malformed data all give an empty Selection.
        If the result is empty and candidates are known, the first candidate
        is selected.
        """
        selection = Selection()
        try:
            data = self._byte_store.load(self.storage_key)
        except Exception:
            logger.warning("Could not read persisted selection %r", self.storage_key, exc_info=True)
            data = None

        if data is not None:
            try:
                selection = decode_selection(data)
            except MalformedSelectionError as e:
                logger.warning("Ignoring malformed persisted selection: %s", e)

        self._selection = selection
        if not selection and self._candidates:
            self._commit(Selection().with_entry(self._candidates[0].id, SelectionEntry()))
        return self._selection

    def flush(self, timeout: float | None = None) -> None:
        """Wait until the latest snapshot has been handed to the byte store."""
        if self._last_write is not None:
            self._last_write.result(timeout)

    def close(self) -> None:
        """Flush pending writes and stop the store's own worker thread."""
        self.flush()
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def _write(self, sequence: int, data: bytes) -> None:
        with self._write_lock:
            if sequence <= self._written_sequence:
                return
            try:
                self._byte_store.save(self.storage_key, data)
            except Exception:
                logger.exception("Failed to persist selection %r", self.storage_key)
            self._written_sequence = sequence

    def _persist(self, selection: Selection) -> None:
        self._sequence += 1
        data = encode_selection(selection)
        try:
            self._last_write = self._executor.submit(self._write, self._sequence, data)
        except RuntimeError:
            logger.exception("Could not schedule persistence of selection %r", self.storage_key)

    def _commit(self, selection: Selection) -> Selection:
        if selection == self._selection:
            return self._selection
        self._selection = selection
        self._persist(selection)
        for listener in list(self._listeners):
            try:
                listener(selection)
            except Exception:
                logger.exception("Selection listener %r failed", listener)
        return selection

    def _update_entry(
        self, candidate_id: str, update: Callable[[SelectionEntry], SelectionEntry]
    ) -> Selection:
        if candidate_id not in self._selection:
            logger.debug("Ignoring change to unselected candidate %r", candidate_id)
            return self._selection
        entry = self._selection[candidate_id]
        return self._commit(self._selection.with_entry(candidate_id, update(entry)))

    # ------------------------------------------------------------------
    # Selecting candidates
    # ------------------------------------------------------------------

    def add_candidate(self, candidate_id: str) -> Selection:
        """Append a candidate with an empty entry. Does nothing if already selected."""
        if candidate_id in self._selection:
            return self._selection
        if not any(c.id == candidate_id for c in self._candidates):
            logger.debug("Ignoring unknown candidate %r", candidate_id)
            return self._selection
        return self._commit(self._selection.with_entry(candidate_id, SelectionEntry()))

    def remove_candidate(self, candidate_id: str) -> Selection:
        return self._commit(self._selection.without(candidate_id))

    def remove_all(self, keep_chat_panels: bool = False) -> Selection:
        """Clear every score.

        Args:
            keep_chat_panels: If True, keep the selected candidates and re-open
                an empty chat panel for those that had one. If False, go back
                to just the first candidate of the list (or nothing at all if
                the list is empty).
        """
        if keep_chat_panels:
            cleared = Selection()
            for candidate_id, entry in self._selection.items():
                if entry.chat_votes is not None:
                    cleared = cleared.with_entry(candidate_id, SelectionEntry(chat_votes=ChatVote()))
                else:
                    cleared = cleared.with_entry(candidate_id, SelectionEntry())
            return self._commit(cleared)

        if self._candidates:
            return self._commit(Selection().with_entry(self._candidates[0].id, SelectionEntry()))
        return self._commit(Selection())

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def set_category_score(
        self, candidate_id: str, category: Category | str, raw_value: object
    ) -> Selection:
        """Set one category score, clamped to [0, MAX_VOTE].

        Empty or non-numeric input removes the score for that category.
        """
        category = Category(category)
        value = clamp_score(raw_value)

        def update(entry: SelectionEntry) -> SelectionEntry:
            votes = dict(entry.votes or {})
            if value is None:
                if category not in votes:
                    return entry
                del votes[category]
            else:
                votes[category] = value
            return replace(entry, votes=votes)

        return self._update_entry(candidate_id, update)

    def open_chat_panel(self, candidate_id: str) -> Selection:
        def update(entry: SelectionEntry) -> SelectionEntry:
            if entry.chat_votes is not None:
                return entry
            return replace(entry, chat_votes=ChatVote())

        return self._update_entry(candidate_id, update)

    def set_chat_voters(self, candidate_id: str, count: object) -> Selection:
        """Set the number of chat voters, clamped to a non-negative integer."""
        voters = clamp_voters(count)

        def update(entry: SelectionEntry) -> SelectionEntry:
            chat = entry.chat_votes or ChatVote()
            return replace(entry, chat_votes=replace(chat, voters=voters))

        return self._update_entry(candidate_id, update)

    def set_chat_positive_percentage(self, candidate_id: str, raw_value: object) -> Selection:
        """Set the share of positive chat votes, clamped to [0, MAX_PERCENTAGE]."""
        percentage = clamp_percentage(raw_value)

        def update(entry: SelectionEntry) -> SelectionEntry:
            chat = entry.chat_votes or ChatVote()
            return replace(entry, chat_votes=replace(chat, positive_percentage=percentage))

        return self._update_entry(candidate_id, update)
