"""Hands a finished vote over to the vote-saving endpoint."""

import logging
from typing import Any

import httpx

from core.constants import SUBMISSION_PATH, SUBMISSION_TIMEOUT
from core.models import Selection
from core.selection.codec import selection_to_dict

logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    """Error while submitting a vote."""
    pass


def build_payload(candidate_name: str, selection: Selection) -> dict[str, Any]:
    """Build the JSON body for a vote. The label is passed through verbatim."""
    return {"candidateName": candidate_name, "vote": selection_to_dict(selection)}


class SubmissionClient:
    """Posts votes as JSON to SUBMISSION_PATH on the given server.

    There is no retry: a failed submission is reported to the caller, who
    still has the selection and can try again.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = SUBMISSION_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    def submit(self, candidate_name: str, selection: Selection) -> Any:
        """Submit a vote.

        Returns:
            The decoded JSON response body, or None if the body is empty

        Raises:
            SubmissionError: If the request fails or the server rejects it
        """
        payload = build_payload(candidate_name, selection)
        try:
            with httpx.Client(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = client.post(SUBMISSION_PATH, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Vote rejected with HTTP %s", e.response.status_code)
            raise SubmissionError(f"HTTP error submitting vote: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning("Could not submit vote: %s", e)
            raise SubmissionError(f"Error submitting vote: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
