"""Tests for the candidate registry loader."""

import json

import pytest

from core.models import Candidate
from core.registry import CandidateRegistryError, load_candidates, parse_candidates


def write_registry(tmp_path, records):
    path = tmp_path / "candidates.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


class TestLoadCandidates:
    def test_keeps_order(self, tmp_path):
        path = write_registry(tmp_path, [
            {"id": "z", "name": "Zoe", "type": "judge"},
            {"id": "a", "name": "Alice", "type": "judge", "image": "a.png"},
        ])
        assert load_candidates(path) == [
            Candidate(id="z", name="Zoe", type="judge"),
            Candidate(id="a", name="Alice", type="judge", image="a.png"),
        ]

    def test_empty_registry(self, tmp_path):
        assert load_candidates(write_registry(tmp_path, [])) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(CandidateRegistryError, match="Could not read"):
            load_candidates(tmp_path / "missing.json")


class TestParseCandidates:
    def test_invalid_json(self):
        with pytest.raises(CandidateRegistryError, match="Invalid"):
            parse_candidates(b"[")

    def test_not_a_list(self):
        with pytest.raises(CandidateRegistryError, match="list"):
            parse_candidates(b'{"id": "a"}')

    def test_record_not_an_object(self):
        with pytest.raises(CandidateRegistryError, match="#1"):
            parse_candidates(b'["a"]')

    def test_missing_name(self):
        with pytest.raises(CandidateRegistryError, match="name"):
            parse_candidates(b'[{"id": "a"}]')

    def test_duplicate_id(self):
        with pytest.raises(CandidateRegistryError, match="Duplicate"):
            parse_candidates(b'[{"id": "a", "name": "A"}, {"id": "a", "name": "B"}]')
