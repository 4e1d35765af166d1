"""Generate a demo candidate registry.

Creates fake candidate records using faker with a fixed seed, so the same
arguments always produce the same file.

Usage:
    python scripts/seed_candidates.py
    python scripts/seed_candidates.py -n 8 -o candidates.json
"""

import argparse
import json
import sys
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import Candidate  # noqa: E402

DEFAULT_OUTPUT = Path(__file__).parent.parent / "candidates.json"

SEED = 20260201

CANDIDATE_TYPES = ["judge", "guest judge"]


def generate_candidates(count: int, seed: int = SEED) -> list[Candidate]:
    """Generate count candidates with unique names and ids."""
    fake = Faker()
    Faker.seed(seed)

    candidates = []
    names: set[str] = set()
    while len(candidates) < count:
        name = fake.name()
        if name in names:
            continue
        names.add(name)
        candidates.append(Candidate(
            id=fake.uuid4(),
            name=name,
            type=CANDIDATE_TYPES[0] if len(candidates) < count - 1 else CANDIDATE_TYPES[1],
        ))
    return candidates


def main():
    parser = argparse.ArgumentParser(description="Generate a demo candidate registry")
    parser.add_argument("-n", "--count", type=int, default=3,
                        help="Number of candidates (default: 3)")
    parser.add_argument("-o", "--output", type=Path, default=DEFAULT_OUTPUT,
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--seed", type=int, default=SEED)
    args = parser.parse_args()

    if args.count < 1:
        parser.error("--count must be at least 1")

    candidates = generate_candidates(args.count, args.seed)
    args.output.write_text(
        json.dumps([c.to_dict() for c in candidates], indent=2) + "\n",
        encoding="utf-8",
    )
    print(f"Wrote {len(candidates)} candidates to {args.output}")


if __name__ == "__main__":
    main()
