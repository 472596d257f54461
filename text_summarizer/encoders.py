"""Simulated sentence encoders.

Real encoders are out of scope; each kind is a hashed bag-of-features
projection with a fixed width, so vectors are deterministic and sentences
sharing words or character runs land close together.
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, List, Protocol, Sequence

import numpy as np
from sklearn.feature_extraction.text import HashingVectorizer

from .errors import UnsupportedModelError
from .models import EncoderKind

logger = logging.getLogger(__name__)


class Encoder(Protocol):
    kind: EncoderKind
    dimension: int

    def embed(self, sentences: Sequence[str]) -> np.ndarray:
        """One row of length `dimension` per sentence."""
        ...


class HashingEncoder:
    def __init__(self, kind: EncoderKind, dimension: int, analyzer: str = "word", ngram_range=(1, 1)) -> None:
        self.kind = kind
        self.dimension = dimension
        self._vectorizer = HashingVectorizer(
            n_features=dimension,
            analyzer=analyzer,
            ngram_range=ngram_range,
            alternate_sign=False,
            norm="l2",
            stop_words="english" if analyzer == "word" else None,
        )

    def embed(self, sentences: Sequence[str]) -> np.ndarray:
        if not sentences:
            return np.zeros((0, self.dimension))
        return self._vectorizer.transform(list(sentences)).toarray()

    def __repr__(self) -> str:
        return f"HashingEncoder(kind={self.kind.value}, dimension={self.dimension})"


def _load_use() -> Encoder:
    return HashingEncoder(EncoderKind.USE, 512, analyzer="word", ngram_range=(1, 2))

def _load_bert() -> Encoder:
    return HashingEncoder(EncoderKind.BERT, 768, analyzer="char_wb", ngram_range=(3, 5))

def _load_qna() -> Encoder:
    return HashingEncoder(EncoderKind.QNA, 512, analyzer="char_wb", ngram_range=(2, 4))


ENCODER_LOADERS: Dict[EncoderKind, Callable[[], Encoder]] = {
    EncoderKind.USE: _load_use,
    EncoderKind.BERT: _load_bert,
    EncoderKind.QNA: _load_qna,
}

# kinds that degrade to another kind when their own loader fails
FALLBACKS: Dict[EncoderKind, EncoderKind] = {EncoderKind.BERT: EncoderKind.USE}


def create_encoder(kind: EncoderKind, loaders: Dict[EncoderKind, Callable[[], Encoder]] = None) -> Encoder:
    loaders = ENCODER_LOADERS if loaders is None else loaders
    loader = loaders.get(kind)
    if loader is None:
        raise UnsupportedModelError(str(getattr(kind, "value", kind)))
    try:
        return loader()
    except Exception as e:
        fallback = FALLBACKS.get(kind)
        if fallback is None or fallback not in loaders:
            raise
        logger.warning("%s encoder failed to load (%s), falling back to %s", kind.value, e, fallback.value)
        return loaders[fallback]()


def embed_sentences(encoder: Encoder, sentences: List[str]) -> np.ndarray:
    vectors = np.asarray(encoder.embed(sentences), dtype=float)
    if vectors.ndim != 2 or vectors.shape[0] != len(sentences):
        raise ValueError(f"expected {len(sentences)} vectors, got shape {vectors.shape}")
    return vectors
