"""Runs the whole pipeline for one request: key elements, basic and enhanced summaries."""

from __future__ import annotations
import logging
import random
import time
from typing import List, Optional

from .config import Settings, clamp_sentence_count, settings as default_settings
from .datatypes import KeyElements, SummaryResult
from .errors import InvalidInputError
from .key_elements import extract_key_elements
from .llm_handler import LLMHandler
from .ml_summarizer import MLSummarizer
from .models import ModelInfo, get_model
from .rewriter import TextRewriter, basic_cleanup, split_sentences
from .session import ModelSession

logger = logging.getLogger(__name__)

THEME_WEIGHT = 2.0
ENTITY_WEIGHT = 1.5
IN_BASIC_WEIGHT = 3.0
EDGE_POSITION_WEIGHT = 0.5


def coverage_scores(sentences: List[str], key_elements: KeyElements, basic_summary: str) -> List[float]:
    """How much of the key elements each sentence carries, favouring the basic summary's picks."""
    themes = [t.lower() for t in key_elements.theme_texts()]
    entities = [e.lower() for e in key_elements.entity_texts()]
    n = len(sentences)
    scores = []
    for idx, sentence in enumerate(sentences):
        lower = sentence.lower()
        score = THEME_WEIGHT * sum(1 for t in themes if t in lower)
        score += ENTITY_WEIGHT * sum(1 for e in entities if e in lower)
        if sentence in basic_summary:
            score += IN_BASIC_WEIGHT
        if idx < 2:
            score += EDGE_POSITION_WEIGHT
        if idx >= n - 2:
            score += EDGE_POSITION_WEIGHT
        scores.append(score)
    return scores


def coverage_summary(text: str, key_elements: KeyElements, basic_summary: str, sentence_count: int) -> str:
    sentences = split_sentences(text)
    if not sentences:
        return basic_summary
    scores = coverage_scores(sentences, key_elements, basic_summary)
    k = max(2, sentence_count - 1)
    picked = sorted(sorted(range(len(sentences)), key=lambda i: scores[i], reverse=True)[:k])
    cleaned = [basic_cleanup(sentences[i]) for i in picked]
    return " ".join(s for s in cleaned if s) or basic_summary


class SummaryGenerator:
    def __init__(self, session: Optional[ModelSession] = None, settings: Optional[Settings] = None,
                 rng: Optional[random.Random] = None, llm: Optional[LLMHandler] = None) -> None:
        self.settings = settings or default_settings
        self.session = session or ModelSession(delay_scale=self.settings.delay_scale)
        self.rng = rng or random.Random(self.settings.seed)
        self.llm = llm or LLMHandler(TextRewriter(self.rng), wait=self.session.wait)
        self.ml = MLSummarizer(self.session)

    def generate_all_summaries(self, text: str, model_id: Optional[str] = None,
                               sentence_count: Optional[int] = None) -> SummaryResult:
        """Key elements, basic and enhanced summary of `text` with `model_id`.

        Raises InvalidInputError before any work for empty text or the
        placeholder model; model load and embedding errors propagate.
        """
        if not text or not text.strip():
            raise InvalidInputError("Please enter some text to summarize")
        info = get_model(model_id or self.settings.default_model)
        if info.is_placeholder:
            raise InvalidInputError("Please select a summarization model first")
        k = clamp_sentence_count(self.settings.sentence_count if sentence_count is None else sentence_count)

        start = time.perf_counter()
        key_elements = extract_key_elements(text)
        basic = self.ml.summarize(text, info.id, k)
        enhanced = self.generate_enhanced_summary(text, basic, key_elements, info, k)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info("summaries ready", extra={"model_id": info.id, "sentences": k,
                                              "elapsed_ms": round(elapsed_ms, 1)})
        return SummaryResult(basic_summary=basic, enhanced_summary=enhanced, key_elements=key_elements,
                             model_id=info.id, elapsed_ms=elapsed_ms)

    def generate_enhanced_summary(self, text: str, basic_summary: str, key_elements: KeyElements,
                                  info: ModelInfo, sentence_count: int) -> str:
        if info.abstractive:
            return self.llm.generate_abstractive_summary(key_elements, basic_summary or text, sentence_count)
        return coverage_summary(text, key_elements, basic_summary, sentence_count)
