"""Static metadata for every selectable summarization model."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class Backend(str, Enum):
    STATISTICAL = "statistical"
    ENCODER = "encoder"


class EncoderKind(str, Enum):
    USE = "use"     # universal sentence encoder
    BERT = "bert"
    QNA = "qna"     # MobileBERT question-answering encoder


TIERS = ("professional", "premium", "standard")


@dataclass(frozen=True)
class ModelInfo:
    id: str
    name: str
    size: str
    size_class: str
    speed: str
    speed_class: str
    quality: str
    memory: str
    description: str
    backend: Backend = Backend.STATISTICAL
    encoder: Optional[EncoderKind] = None
    tier: str = "standard"
    load_delay: float = 0.0        # seconds, simulated
    processing_delay: float = 0.0  # seconds, simulated
    abstractive: bool = False
    warning: Optional[str] = None
    is_placeholder: bool = False

    @property
    def uses_ml(self) -> bool:
        return self.backend is Backend.ENCODER


_MODELS: Dict[str, ModelInfo] = {m.id: m for m in (
    ModelInfo(
        id="gpt2", name="GPT-2 Small", size="548MB", size_class="xxl",
        speed="Very Slow", speed_class="veryslow", quality="Excellent", memory="1.5GB+",
        description="Powerful generative model capable of creating more abstractive summaries rather than "
                    "just extractive ones. Produces human-like text that can rephrase and restructure content.",
        backend=Backend.ENCODER, encoder=EncoderKind.USE, tier="professional",
        load_delay=3.0, processing_delay=2.0, abstractive=True,
        warning="This model requires significant memory and processing power. "
                "May cause slowdown on less powerful devices.",
    ),
    ModelInfo(
        id="bart", name="BART Large", size="432MB", size_class="xl",
        speed="Slow", speed_class="slow", quality="Excellent", memory="1GB+",
        description="Bidirectional and Auto-Regressive Transformer specifically trained for text summarization "
                    "tasks. Provides high-quality summaries with good semantic coherence and factual correctness.",
        backend=Backend.ENCODER, encoder=EncoderKind.USE, tier="professional",
        load_delay=2.5, processing_delay=1.0, abstractive=True,
    ),
    ModelInfo(
        id="t5", name="T5 Base", size="242MB", size_class="xl",
        speed="Medium-Slow", speed_class="slow", quality="Very High", memory="800MB+",
        description="Text-to-Text Transfer Transformer trained on multiple NLP tasks including summarization. "
                    "Provides well-structured summaries with good content selection capabilities.",
        backend=Backend.ENCODER, encoder=EncoderKind.USE, tier="premium",
        load_delay=2.0, processing_delay=1.0, abstractive=True,
    ),
    ModelInfo(
        id="bert", name="BERT Base", size="109MB", size_class="lg",
        speed="Medium", speed_class="medium", quality="High", memory="500MB+",
        description="Full BERT model with powerful language understanding capabilities. Provides high-quality "
                    "semantic analysis for effective extractive summarization.",
        backend=Backend.ENCODER, encoder=EncoderKind.BERT, tier="premium",
    ),
    ModelInfo(
        id="use", name="Universal Sentence Encoder", size="33MB", size_class="lg",
        speed="Medium", speed_class="medium", quality="High", memory="400MB+",
        description="Uses semantic embeddings to understand the meaning of sentences. Provides high-quality "
                    "summaries that capture the document's key concepts and relationships.",
        backend=Backend.ENCODER, encoder=EncoderKind.USE,
    ),
    ModelInfo(
        id="mobilebert", name="MobileBERT", size="21MB", size_class="md",
        speed="Medium-Fast", speed_class="medium", quality="Good", memory="250MB+",
        description="A compressed BERT model optimized for constrained environments. Provides good understanding "
                    "of text context and relationships while using less memory than full BERT models.",
        backend=Backend.ENCODER, encoder=EncoderKind.QNA,
    ),
    ModelInfo(
        id="tinybert", name="TinyBERT", size="12MB", size_class="sm",
        speed="Fast", speed_class="fast", quality="Good", memory="150MB+",
        description="A highly compressed BERT model designed for efficiency. Provides a good balance between "
                    "performance and resource usage.",
        backend=Backend.ENCODER, encoder=EncoderKind.USE,
    ),
    ModelInfo(
        id="local", name="Statistical Processor", size="0MB", size_class="xs",
        speed="Very Fast", speed_class="fast", quality="Basic", memory="<50MB",
        description="Uses no ML models, just statistical analysis of text. Very fast but produces simpler "
                    "summaries based on word overlap and position.",
    ),
    ModelInfo(
        id="placeholder", name="Select a model", size="-", size_class="xs",
        speed="-", speed_class="medium", quality="-", memory="-",
        description="Please select a summarization model to begin.",
        is_placeholder=True,
    ),
)}

DEFAULT_MODEL_ID = "local"
PLACEHOLDER_MODEL_ID = "placeholder"


def get_model(model_id: Optional[str]) -> ModelInfo:
    """Metadata for `model_id`; unknown ids fall back to the statistical model."""
    return _MODELS.get(model_id or "", _MODELS[DEFAULT_MODEL_ID])


def all_models() -> List[ModelInfo]:
    return list(_MODELS.values())


def models_by_tier() -> Dict[str, List[ModelInfo]]:
    groups: Dict[str, List[ModelInfo]] = {tier: [] for tier in TIERS}
    for m in _MODELS.values():
        if m.is_placeholder:
            continue
        groups.setdefault(m.tier, []).append(m)
    return {tier: models for tier, models in groups.items() if models}
