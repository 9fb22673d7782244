"""Client for the answer verification endpoint."""

import logging
import os
from typing import Any

import httpx

from site_explorer.errors import ReportError

logger = logging.getLogger(__name__)


class AnswerReporter:
    """Submit a question-id -> answer mapping for verification.

    Posts ``{"task": ..., "apikey": ..., "answer": {...}}`` as JSON and
    returns the endpoint's decoded response.

    Args:
        url: Verification endpoint.
        task: Task identifier sent with the answers.
        api_key: API key (defaults to REPORT_API_KEY env var).
        timeout: Request timeout in seconds.
        transport: Optional custom transport (used by tests).
    """

    def __init__(
        self,
        url: str,
        task: str,
        *,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or os.environ.get("REPORT_API_KEY")
        if not self._api_key:
            raise ValueError("Report API key required. Pass api_key or set REPORT_API_KEY env var.")
        self._url = url
        self._task = task
        self._timeout = timeout
        self._transport = transport

    async def submit(self, answers: dict[str, str]) -> Any:
        """Send the answers and return the verification response.

        Raises:
            ReportError: If the request fails or the endpoint rejects it.
        """
        payload = {"task": self._task, "apikey": self._api_key, "answer": answers}
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(self._url, json=payload)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise ReportError(f"Report submission failed: {e}") from e

        logger.info("Submitted %d answer(s) for task %s", len(answers), self._task)
        try:
            return response.json()
        except ValueError:
            return response.text
