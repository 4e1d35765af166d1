"""Tests for the scoring session orchestrator."""

from unittest.mock import MagicMock

import pytest

from core.models import Category, ChatVote, Selection, SelectionEntry
from core.selection.storage import MemoryByteStore
from core.selection.store import SelectionStore
from core.session import ScoringSession
from core.submission import SubmissionError

TECH = Category.TECHNIQUE
INTERP = Category.INTERPRETATION


@pytest.fixture
def submitter():
    return MagicMock()


@pytest.fixture
def session(candidates, submitter):
    session = ScoringSession(SelectionStore(MemoryByteStore(), candidates), submitter)
    session.start()
    return session


def score_two_candidates(session):
    store = session.store
    store.add_candidate("b")
    store.set_category_score("a", TECH, "8")
    store.set_category_score("a", INTERP, "6")
    store.set_category_score("b", TECH, "4")
    store.set_category_score("b", INTERP, "10")


class TestAggregates:
    def test_start(self, session):
        assert list(session.store.snapshot()) == ["a"]
        assert session.aggregates.judges_score is None

    def test_recomputed_on_every_change(self, session):
        score_two_candidates(session)
        aggregates = session.aggregates
        assert aggregates.category_averages[TECH] == "6.00"
        assert aggregates.category_averages[INTERP] == "8.00"
        assert aggregates.judges_score == "14.00"
        assert aggregates.candidate_totals == {"a": "14.00", "b": "14.00"}

    def test_chat_vote(self, session):
        score_two_candidates(session)
        session.store.open_chat_panel("a")
        session.store.set_chat_voters("a", 10)
        session.store.set_chat_positive_percentage("a", "80")
        assert session.aggregates.chat_score == "24.00"
        assert session.aggregates.final_score == "17.33"

    def test_precision(self, candidates, submitter):
        session = ScoringSession(
            SelectionStore(MemoryByteStore(), candidates), submitter, precision=1
        )
        session.start()
        session.store.set_category_score("a", TECH, "7")
        assert session.aggregates.judges_score == "7.0"

    def test_close_stops_updates(self, session):
        session.close()
        session.store.set_category_score("a", TECH, "7")
        assert session.aggregates.judges_score is None


class TestSave:
    def test_hands_off_name_and_selection(self, session, submitter):
        score_two_candidates(session)
        session.candidate_name = "Act #3"
        expected = session.store.snapshot()
        session.save()
        submitter.submit.assert_called_once_with("Act #3", expected)

    def test_clears_scores_but_keeps_chat_panels(self, session):
        score_two_candidates(session)
        session.store.set_chat_voters("b", 7)
        session.candidate_name = "Act #3"
        session.save()
        assert session.candidate_name == ""
        assert session.store.snapshot() == Selection.from_mapping({
            "a": SelectionEntry(),
            "b": SelectionEntry(chat_votes=ChatVote()),
        })
        assert session.aggregates.judges_score is None

    def test_failure_keeps_state(self, session, submitter):
        score_two_candidates(session)
        session.candidate_name = "Act #3"
        before = session.store.snapshot()
        submitter.submit.side_effect = SubmissionError("HTTP error submitting vote: 500")
        with pytest.raises(SubmissionError):
            session.save()
        assert session.store.snapshot() == before
        assert session.candidate_name == "Act #3"
        assert session.aggregates.judges_score == "14.00"


class TestClear:
    def test_clear(self, session):
        score_two_candidates(session)
        session.candidate_name = "Act #3"
        session.clear()
        assert session.candidate_name == ""
        assert list(session.store.snapshot()) == ["a"]
        assert session.aggregates.candidate_totals == {"a": None}
