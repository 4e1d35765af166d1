"""Tests for the demo candidate registry generator."""

from seed_candidates import generate_candidates


class TestGenerateCandidates:
    def test_count_and_uniqueness(self):
        candidates = generate_candidates(6)
        assert len(candidates) == 6
        assert len({c.id for c in candidates}) == 6
        assert len({c.name for c in candidates}) == 6

    def test_deterministic(self):
        assert generate_candidates(4, seed=1) == generate_candidates(4, seed=1)

    def test_last_is_guest_judge(self):
        candidates = generate_candidates(3)
        assert [c.type for c in candidates] == ["judge", "judge", "guest judge"]
