from __future__ import annotations
from typing import List
import numpy as np
from .config import RankConfig

def textrank_scores(simM: np.ndarray, cfg: RankConfig = None) -> List[float]:
    """
    TextRank over a sentence similarity matrix.

    Formula: S(i) = (1-d) + d × Σ_{j≠i} sim(j, i) × S(j)

    Args:
        simM: square similarity matrix; the diagonal is ignored
        cfg: damping factor and iteration count

    Returns:
        One score per sentence. Every score is >= 1 - d once an iteration
        has run, provided similarities are non-negative.

    The iteration count is fixed (10 by default); there is no convergence
    check, so results match a fixed-step run rather than a true fixed point.
    """
    cfg = cfg or RankConfig()
    W = np.array(simM, dtype=float, copy=True)
    n = W.shape[0] if W.ndim == 2 else 0
    if n == 0:
        return []
    np.fill_diagonal(W, 0.0)

    scores = np.ones(n)
    for _ in range(cfg.iterations):
        # incoming weight for i is column i
        scores = (1.0 - cfg.damping) + cfg.damping * (W.T @ scores)
    return scores.tolist()
