"""Claude-backed answering oracle."""

import logging
import os

import anthropic

from site_explorer.data import APICallUsage, Usage
from site_explorer.errors import OracleError

logger = logging.getLogger(__name__)


class ClaudeOracle:
    """Answer prompts using Anthropic's Claude API.

    Every call's token usage is accumulated in :attr:`usage`.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_tokens: Maximum tokens per response.
        temperature: Sampling temperature.
    """

    def __init__(
        self,
        *,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.0,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._usage = Usage()

    @property
    def usage(self) -> Usage:
        return self._usage

    async def answer(self, prompt: str, system_instruction: str | None = None) -> str:
        """Send a single-turn prompt to Claude and return the text response.

        Args:
            prompt: User prompt.
            system_instruction: Optional system prompt.

        Returns:
            Concatenated text of all text blocks in the response.

        Raises:
            OracleError: If the API call fails.
        """
        kwargs: dict[str, object] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_instruction:
            kwargs["system"] = system_instruction

        try:
            response = await self._client.messages.create(**kwargs)  # type: ignore[call-overload]
        except anthropic.APIError as e:
            raise OracleError(f"Claude request failed: {e}") from e

        self._usage.api_calls.append(
            APICallUsage(
                model=self._model,
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
                cache_creation_input_tokens=getattr(
                    response.usage, "cache_creation_input_tokens", 0
                )
                or 0,
                cache_read_input_tokens=getattr(response.usage, "cache_read_input_tokens", 0)
                or 0,
            )
        )

        response_text = ""
        for block in response.content:
            if hasattr(block, "text"):
                response_text += block.text
        return response_text
