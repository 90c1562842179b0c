"""
Static Q&A knowledge base with a TF-IDF index for retrieval-augmented prompts.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
from loguru import logger
from pydantic import ValidationError
from sklearn.feature_extraction.text import TfidfVectorizer

from yako.models.schemas import KnowledgeEntry


def load_entries(path: Path) -> List[KnowledgeEntry]:
    """Read ``[{"question": ..., "answer": ...}, ...]`` from a JSON file."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"expected a JSON list, got {type(raw).__name__}")
    return [KnowledgeEntry(**item) for item in raw]


class KnowledgeBase:
    """In-memory TF-IDF index over question + answer documents."""

    def __init__(self, entries: Sequence[KnowledgeEntry] = ()):
        self.entries: List[KnowledgeEntry] = list(entries)
        self._vectorizer: Optional[TfidfVectorizer] = None
        self._matrix = None
        if self.entries:
            self._build_index()

    @classmethod
    def from_file(cls, path) -> "KnowledgeBase":
        """Load the knowledge base; a missing or malformed file yields an empty store."""
        try:
            entries = load_entries(Path(path))
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Could not load knowledge base from {path}: {e}")
            return cls()
        logger.info(f"Loaded knowledge base with {len(entries)} entries.")
        return cls(entries)

    def __len__(self) -> int:
        return len(self.entries)

    def _build_index(self) -> None:
        documents = [f"{e.question} {e.answer}" for e in self.entries]
        vectorizer = TfidfVectorizer(lowercase=True, stop_words="english")
        try:
            self._matrix = vectorizer.fit_transform(documents)
        except ValueError as e:
            # Raised when every document is stop words only
            logger.warning(f"Knowledge base has no indexable vocabulary: {e}")
            return
        self._vectorizer = vectorizer

    def scores(self, query: str) -> np.ndarray:
        """Cosine similarity between ``query`` and every document, in load order."""
        if self._vectorizer is None or not query:
            return np.zeros(len(self.entries))
        query_vec = self._vectorizer.transform([query])
        return (self._matrix @ query_vec.T).toarray().ravel()

    def retrieve(self, query: str, top_k: int = 1) -> List[str]:
        """
        Return the answers of the ``top_k`` best-scoring entries, best first.
        Entries that share no vocabulary with the query are never returned.
        """
        if not self.entries or top_k <= 0:
            return []

        scores = self.scores(query)
        # Stable sort keeps load order between equal scores
        ranked = np.argsort(-scores, kind="stable")[:top_k]
        return [self.entries[i].answer for i in ranked if scores[i] > 0]
