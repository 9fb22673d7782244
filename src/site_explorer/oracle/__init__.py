"""Answering and embedding oracles."""

from site_explorer.oracle.base import AnsweringOracle, EmbeddingOracle
from site_explorer.oracle.claude import ClaudeOracle
from site_explorer.oracle.contracts import OracleFormatError, parse_oracle_json
from site_explorer.oracle.embeddings import SentenceTransformerEmbedder

__all__ = [
    "AnsweringOracle",
    "ClaudeOracle",
    "EmbeddingOracle",
    "OracleFormatError",
    "SentenceTransformerEmbedder",
    "parse_oracle_json",
]
