from __future__ import annotations
import logging
import time
from typing import Callable, List, Optional

import numpy as np

from .encoders import Encoder, create_encoder, embed_sentences
from .errors import EmbeddingError, ModelLoadError, UnsupportedModelError
from .models import EncoderKind, ModelInfo, get_model

logger = logging.getLogger(__name__)


class ModelSession:
    """Holds at most one loaded encoder.

    Loading a different model evicts the current one. `delay_scale`
    multiplies the simulated load delays; 0 turns them off.
    """

    def __init__(self, encoder_factory: Callable[[EncoderKind], Encoder] = create_encoder,
                 delay_scale: float = 1.0, sleep: Callable[[float], None] = time.sleep) -> None:
        self._factory = encoder_factory
        self._delay_scale = delay_scale
        self._sleep = sleep
        self._encoder: Optional[Encoder] = None
        self._model_id: Optional[str] = None

    @property
    def model_id(self) -> Optional[str]:
        return self._model_id

    @property
    def encoder(self) -> Optional[Encoder]:
        return self._encoder

    def is_loaded(self, model_id: str) -> bool:
        return self._encoder is not None and self._model_id == model_id

    def wait(self, seconds: float) -> None:
        if seconds > 0 and self._delay_scale > 0:
            self._sleep(seconds * self._delay_scale)

    def load(self, model_id: str) -> Encoder:
        if self.is_loaded(model_id):
            return self._encoder
        info = get_model(model_id)
        if not info.uses_ml or info.encoder is None:
            raise UnsupportedModelError(info.name)

        self.evict()
        logger.info("loading %s", info.name, extra={"model_id": info.id})
        self.wait(info.load_delay)
        try:
            encoder = self._factory(info.encoder)
        except UnsupportedModelError:
            raise
        except Exception as e:
            logger.exception("failed to load %s", info.name)
            raise ModelLoadError(info.name, str(e)) from e
        if encoder is None:
            raise ModelLoadError(info.name)

        self._encoder = encoder
        self._model_id = info.id
        logger.info("%s loaded and ready", info.name, extra={"model_id": info.id})
        return encoder

    def evict(self) -> None:
        if self._encoder is not None:
            logger.info("evicting %s", self._model_id, extra={"model_id": self._model_id})
        self._encoder = None
        self._model_id = None

    def is_available(self, model_id: str) -> bool:
        """Try to load `model_id`; False instead of raising when it can't be."""
        try:
            self.load(model_id)
        except (ModelLoadError, UnsupportedModelError):
            return False
        return True

    def embed(self, info: ModelInfo, sentences: List[str]) -> np.ndarray:
        encoder = self.load(info.id)
        try:
            vectors = embed_sentences(encoder, sentences)
        except Exception as e:
            logger.error("embedding failed for %s: %s", info.name, e, extra={"model_id": info.id})
            raise EmbeddingError(info.name, str(e)) from e
        if vectors.shape[0] == 0:
            raise EmbeddingError(info.name, "Failed to generate sentence embeddings")
        return vectors
