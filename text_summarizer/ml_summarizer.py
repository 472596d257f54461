"""Extractive summarizer that ranks sentences by encoder-vector similarity."""

from __future__ import annotations
import logging
from typing import Optional

from .config import PreprocessConfig, RankConfig, clamp_sentence_count, DEFAULT_SENTENCES
from .errors import InvalidInputError
from .models import get_model
from .preprocessing import split_sentences
from .scoring import textrank_scores
from .session import ModelSession
from .similarity import vector_similarity_matrix
from .summarize import generate_summary, summarize

logger = logging.getLogger(__name__)


class MLSummarizer:
    def __init__(self, session: ModelSession, cfg: Optional[PreprocessConfig] = None,
                 rank_cfg: Optional[RankConfig] = None) -> None:
        self.session = session
        self.cfg = cfg or PreprocessConfig()
        self.rank_cfg = rank_cfg or RankConfig()

    def summarize(self, text: str, model_id: str, sentence_count: int = DEFAULT_SENTENCES) -> str:
        info = get_model(model_id)
        if info.is_placeholder:
            raise InvalidInputError("Please select a summarization model first")
        if not info.uses_ml:
            return summarize(text, sentence_count, cfg=self.cfg, rank_cfg=self.rank_cfg)

        # abstractive models only differ by how long they take here
        self.session.wait(info.processing_delay)

        k = clamp_sentence_count(sentence_count)
        sentences = split_sentences(text, self.cfg)
        if len(sentences) <= k:
            return text

        vectors = self.session.embed(info, sentences)
        simM = vector_similarity_matrix(list(vectors), self.rank_cfg)
        scores = textrank_scores(simM, self.rank_cfg)
        logger.debug("ranked %d sentences with %s", len(sentences), info.name,
                     extra={"model_id": info.id, "sentences": len(sentences)})
        return generate_summary(sentences, scores, k)
