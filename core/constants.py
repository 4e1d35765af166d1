"""Scoring and storage settings shared across the core package."""

# Decimal places of every formatted aggregate. Stored scores keep the text
# they were entered with; only the computed output is rounded.
CALCULATIONS_PRECISION = 2

MAX_VOTE = 10
MAX_PERCENTAGE = 100

# Chat votes are scaled to the judges' range: 3 categories x MAX_VOTE.
CHAT_SCALE = 30

SELECTION_STORAGE_KEY = "selectedCandidates"

SUBMISSION_PATH = "/api/vote"
SUBMISSION_TIMEOUT = 30.0
