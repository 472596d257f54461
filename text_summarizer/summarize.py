from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
import numpy as np
from .config import PreprocessConfig, RankConfig, clamp_sentence_count, DEFAULT_SENTENCES
from .datatypes import Document
from .preprocessing import preprocess_text
from .similarity import lexical_similarity_matrix
from .scoring import textrank_scores

logger = logging.getLogger(__name__)

@dataclass
class RankedText:
    doc: Document
    simM: np.ndarray
    scores: List[float]

def select_top_indices(scores: Sequence[float], k: int) -> List[int]:
    """Indices of the k best scores, in source order. Ties keep source order."""
    ranked = sorted(range(len(scores)), key=lambda i: scores[i], reverse=True)[:k]
    return sorted(ranked)

def generate_summary(sentences: Sequence[str], scores: Sequence[float], k: int) -> str:
    selected = select_top_indices(scores, k)
    return " ".join(sentences[i] for i in selected)

def rank_text(text: str, cfg: Optional[PreprocessConfig] = None, rank_cfg: Optional[RankConfig] = None) -> RankedText:
    """Split, build the lexical similarity matrix and run TextRank."""
    doc = preprocess_text(text, cfg=cfg or PreprocessConfig())
    simM = lexical_similarity_matrix([s.tokens for s in doc.sentences])
    scores = textrank_scores(simM, rank_cfg)
    return RankedText(doc=doc, simM=simM, scores=scores)

def summarize(text: str, sentence_count: int = DEFAULT_SENTENCES,
              cfg: Optional[PreprocessConfig] = None, rank_cfg: Optional[RankConfig] = None) -> str:
    """Extractive summary of the `sentence_count` most central sentences.

    Text with no more sentences than requested comes back unchanged.
    """
    k = clamp_sentence_count(sentence_count)
    doc = preprocess_text(text, cfg=cfg or PreprocessConfig())
    if len(doc.sentences) <= k:
        return text
    simM = lexical_similarity_matrix([s.tokens for s in doc.sentences])
    scores = textrank_scores(simM, rank_cfg)
    logger.debug("ranked %d sentences", len(scores), extra={"sentences": len(scores)})
    return generate_summary([s.text for s in doc.sentences], scores, k)
