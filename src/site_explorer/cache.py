"""Per-question chunk cache with brute-force cosine similarity search."""

import logging

import numpy as np
from numpy.typing import NDArray

from site_explorer.data import ContentChunk
from site_explorer.oracle.base import EmbeddingOracle

logger = logging.getLogger(__name__)


def cosine_similarity(a: NDArray[np.float32], b: NDArray[np.float32]) -> float:
    """Cosine similarity of two vectors; 0.0 if either has zero magnitude."""
    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


class ChunkCache:
    """Holds every processed chunk of the current question, keyed by id.

    Similarity lookup is a linear scan over cached embeddings; per-question
    working sets are small enough that no vector index is needed.

    Args:
        embedder: Embedding oracle used to embed query texts.
    """

    def __init__(self, embedder: EmbeddingOracle) -> None:
        self._embedder = embedder
        self._chunks: dict[str, ContentChunk] = {}

    def __len__(self) -> int:
        return len(self._chunks)

    def add(self, chunk: ContentChunk) -> None:
        self._chunks[chunk.id] = chunk

    async def find_similar(
        self,
        text: str,
        threshold: float = 0.8,
        *,
        exclude_id: str | None = None,
    ) -> list[ContentChunk]:
        """Return cached chunks whose similarity to ``text`` is above ``threshold``.

        Args:
            text: Query text, embedded via the embedding oracle.
            threshold: Strict lower bound on cosine similarity.
            exclude_id: Chunk id to leave out of the results.

        Returns:
            Matching chunks in cache insertion order. Chunks without an
            embedding are ignored.

        Raises:
            OracleError: If the query text cannot be embedded.
        """
        query = await self._embedder.embed(text)
        similar: list[ContentChunk] = []
        for chunk in self._chunks.values():
            if chunk.embedding is None or chunk.id == exclude_id:
                continue
            if cosine_similarity(query, chunk.embedding) > threshold:
                similar.append(chunk)
        return similar
