"""Text embedding oracle backed by sentence-transformers."""

import asyncio

import numpy as np
from numpy.typing import NDArray
from sentence_transformers import SentenceTransformer

from site_explorer.data import Usage
from site_explorer.errors import OracleError


class SentenceTransformerEmbedder:
    """Embedder using the sentence-transformers library.

    Encoding runs in a worker thread so concurrent ``embed`` calls do not
    block the event loop.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2") -> None:
        self._model: SentenceTransformer = SentenceTransformer(model_name)
        self._usage = Usage()

    @property
    def usage(self) -> Usage:
        return self._usage

    def embed_batch(self, texts: list[str]) -> NDArray[np.float32]:
        """Embed a batch of texts.

        Returns:
            Array of shape (len(texts), embedding_dim).
        """
        embeddings: NDArray[np.float32] = self._model.encode(texts, convert_to_numpy=True).astype(
            np.float32
        )
        self._usage.embedding_requests += len(texts)
        return embeddings

    async def embed(self, text: str) -> NDArray[np.float32]:
        """Embed a single text.

        Raises:
            OracleError: If the model fails to encode the text.
        """
        try:
            embeddings = await asyncio.to_thread(self.embed_batch, [text])
        except Exception as e:
            raise OracleError(f"Embedding failed: {e}") from e
        return embeddings[0]
