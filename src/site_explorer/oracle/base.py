"""Protocols for the external oracles the explorer consults."""

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from site_explorer.data import Usage


class AnsweringOracle(Protocol):
    """Interface for a text-generation service that turns prompts into text."""

    @property
    def usage(self) -> Usage:
        """Usage accumulated across all calls so far."""
        ...

    async def answer(self, prompt: str, system_instruction: str | None = None) -> str:
        """Generate a free-text response for a prompt.

        Args:
            prompt: User prompt. May request strict JSON output.
            system_instruction: Optional system prompt.

        Returns:
            The raw response text.

        Raises:
            OracleError: If the underlying call fails.
        """
        ...


class EmbeddingOracle(Protocol):
    """Interface for a text embedding service with fixed dimensionality."""

    @property
    def usage(self) -> Usage:
        """Usage accumulated across all calls so far."""
        ...

    async def embed(self, text: str) -> NDArray[np.float32]:
        """Embed a single text.

        Args:
            text: Text to embed.

        Returns:
            1-D array of shape (embedding_dim,).

        Raises:
            OracleError: If the embedding cannot be computed.
        """
        ...
