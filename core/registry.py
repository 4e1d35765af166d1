"""Candidate registry: the ordered list of candidates that can be scored."""

import json
from pathlib import Path

from core.models import Candidate


class CandidateRegistryError(ValueError):
    """Raised when a candidate registry file cannot be read."""
    pass


def parse_candidates(content: bytes) -> list[Candidate]:
    """Parse a JSON list of candidate records, keeping their order.

    Raises:
        CandidateRegistryError: If the content is not a list of records with
            at least an id and a name, or if an id appears twice
    """
    try:
        records = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CandidateRegistryError(f"Invalid candidate registry: {e}") from e

    if not isinstance(records, list):
        raise CandidateRegistryError("Candidate registry must be a JSON list")

    candidates = []
    seen: set[str] = set()
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise CandidateRegistryError(f"Candidate #{i + 1} is not an object")
        try:
            candidate = Candidate.from_dict(record)
        except KeyError as e:
            raise CandidateRegistryError(f"Candidate #{i + 1} is missing {e}") from e
        if candidate.id in seen:
            raise CandidateRegistryError(f"Duplicate candidate id: {candidate.id!r}")
        seen.add(candidate.id)
        candidates.append(candidate)

    return candidates


def load_candidates(path: str | Path) -> list[Candidate]:
    """Load candidates from a registry file."""
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        raise CandidateRegistryError(f"Could not read candidate registry {path}: {e}") from e
    return parse_candidates(content)
