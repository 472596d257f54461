from __future__ import annotations
import logging
import math
from typing import Sequence
import numpy as np
from .config import RankConfig

logger = logging.getLogger(__name__)

def lexical_similarity(words1: Sequence[str], words2: Sequence[str]) -> float:
    """|A ∩ B| / (ln(|A|+1) * ln(|B|+1)) over the distinct words of each sentence."""
    if not words1 or not words2:
        return 0.0
    set1, set2 = set(words1), set(words2)
    overlap = len(set1 & set2)
    return overlap / (math.log(len(set1) + 1) * math.log(len(set2) + 1))

def lexical_similarity_matrix(token_lists: Sequence[Sequence[str]]) -> np.ndarray:
    """Symmetric matrix; upper triangle computed and mirrored, diagonal 1.0."""
    n = len(token_lists)
    M = np.eye(n, dtype=float)
    for i in range(n):
        for j in range(i + 1, n):
            M[i, j] = M[j, i] = lexical_similarity(token_lists[i], token_lists[j])
    return M

def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"vector shapes differ: {a.shape} vs {b.shape}")
    denom = float(np.linalg.norm(a) * np.linalg.norm(b))
    if denom == 0.0:
        raise ValueError("zero-length vector")
    return float(np.dot(a, b) / denom)

def vector_similarity_matrix(vectors: Sequence[np.ndarray], cfg: RankConfig = None) -> np.ndarray:
    """
    Cosine similarity for every ordered pair (i, j), i != j.
    A pair that cannot be computed gets cfg.fallback_similarity instead of
    aborting the whole pass.
    """
    cfg = cfg or RankConfig()
    n = len(vectors)
    M = np.eye(n, dtype=float)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            try:
                M[i, j] = cosine_similarity(vectors[i], vectors[j])
            except (ValueError, TypeError) as e:
                logger.warning("similarity (%d, %d) failed, using %.2f: %s", i, j, cfg.fallback_similarity, e)
                M[i, j] = cfg.fallback_similarity
    return M
