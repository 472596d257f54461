from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

MIN_SENTENCES = 1
MAX_SENTENCES = 10
DEFAULT_SENTENCES = 3

@dataclass
class PreprocessConfig:
    min_sentence_length: int = 10   # pieces must be strictly longer than this
    min_token_length: int = 2
    remove_stopwords: bool = True

@dataclass
class RankConfig:
    damping: float = 0.85
    iterations: int = 10           # fixed; no convergence check
    fallback_similarity: float = 0.1

def clamp_sentence_count(k: Optional[int]) -> int:
    if k is None:
        return DEFAULT_SENTENCES
    return max(MIN_SENTENCES, min(MAX_SENTENCES, int(k)))


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file."""

    default_model: str = Field(default="local", alias="SUMMARIZER_DEFAULT_MODEL")
    sentence_count: int = Field(default=DEFAULT_SENTENCES, alias="SUMMARIZER_SENTENCE_COUNT")
    # None keeps template selection unseeded
    seed: Optional[int] = Field(default=None, alias="SUMMARIZER_SEED")
    # multiplier on every simulated delay; 0 disables them
    delay_scale: float = Field(default=1.0, alias="SUMMARIZER_DELAY_SCALE")
    similarity_threshold: float = Field(default=0.1, alias="SUMMARIZER_SIMILARITY_THRESHOLD")
    log_level: str = Field(default="INFO", alias="SUMMARIZER_LOG_LEVEL")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore", "populate_by_name": True}

    @property
    def clamped_sentence_count(self) -> int:
        return clamp_sentence_count(self.sentence_count)


settings = Settings()
