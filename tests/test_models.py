"""Tests for the model registry, encoders, model session and encoder-backed summarizer."""

import numpy as np
import pytest

from text_summarizer.encoders import ENCODER_LOADERS, HashingEncoder, create_encoder
from text_summarizer.errors import EmbeddingError, InvalidInputError, ModelLoadError, UnsupportedModelError
from text_summarizer.ml_summarizer import MLSummarizer
from text_summarizer.models import TIERS, Backend, EncoderKind, all_models, get_model, models_by_tier
from text_summarizer.preprocessing import split_sentences
from text_summarizer.session import ModelSession
from text_summarizer.summarize import summarize


class FixedEncoder:
    """Encoder stub returning a fixed number of rows."""

    kind = EncoderKind.USE
    dimension = 4

    def __init__(self, rows=None):
        self.rows = rows

    def embed(self, sentences):
        rows = len(sentences) if self.rows is None else self.rows
        return np.ones((rows, self.dimension))


class TestRegistry:
    """Static model metadata."""

    def test_unknown_id_falls_back_to_local(self):
        assert get_model("no-such-model").id == "local"
        assert get_model(None).id == "local"

    def test_local_is_statistical(self):
        info = get_model("local")
        assert info.backend is Backend.STATISTICAL
        assert not info.uses_ml

    def test_abstractive_models(self):
        assert {m.id for m in all_models() if m.abstractive} == {"gpt2", "bart", "t5"}

    def test_bert_uses_bert_encoder(self):
        assert get_model("bert").encoder is EncoderKind.BERT
        assert get_model("mobilebert").encoder is EncoderKind.QNA

    def test_tiers_exclude_placeholder(self):
        groups = models_by_tier()
        assert set(groups) <= set(TIERS)
        ids = [m.id for models in groups.values() for m in models]
        assert "placeholder" not in ids
        assert "local" in [m.id for m in groups["standard"]]


class TestEncoders:
    """Simulated hashing encoders."""

    def test_use_encoder_shape(self):
        encoder = create_encoder(EncoderKind.USE)
        vectors = encoder.embed(["Cats purr loudly.", "Dogs bark at night."])
        assert vectors.shape == (2, 512)

    def test_bert_encoder_width(self):
        assert create_encoder(EncoderKind.BERT).dimension == 768

    def test_same_sentence_same_vector(self):
        encoder = HashingEncoder(EncoderKind.QNA, 64, analyzer="char_wb", ngram_range=(2, 4))
        vectors = encoder.embed(["Solar power grows.", "Solar power grows."])
        assert np.allclose(vectors[0], vectors[1])
        assert np.linalg.norm(vectors[0]) == pytest.approx(1.0)

    def test_bert_falls_back_to_use(self):
        def broken():
            raise RuntimeError("weights missing")

        loaders = {EncoderKind.BERT: broken, EncoderKind.USE: ENCODER_LOADERS[EncoderKind.USE]}
        assert create_encoder(EncoderKind.BERT, loaders).kind is EncoderKind.USE

    def test_no_fallback_for_qna(self):
        def broken():
            raise RuntimeError("weights missing")

        with pytest.raises(RuntimeError):
            create_encoder(EncoderKind.QNA, {EncoderKind.QNA: broken, EncoderKind.USE: ENCODER_LOADERS[EncoderKind.USE]})

    def test_missing_loader_is_unsupported(self):
        with pytest.raises(UnsupportedModelError):
            create_encoder(EncoderKind.QNA, {})


class TestModelSession:
    """At most one encoder loaded at a time."""

    def test_load_and_evict(self, session):
        session.load("use")
        assert session.is_loaded("use")
        session.load("bert")
        assert session.model_id == "bert"
        assert not session.is_loaded("use")
        session.evict()
        assert session.encoder is None

    def test_reload_same_model_reuses_encoder(self, session):
        first = session.load("tinybert")
        assert session.load("tinybert") is first

    def test_statistical_model_is_unsupported(self, session):
        with pytest.raises(UnsupportedModelError):
            session.load("local")

    def test_factory_failure_is_load_error(self):
        def broken(kind):
            raise RuntimeError("out of memory")

        session = ModelSession(encoder_factory=broken, delay_scale=0)
        with pytest.raises(ModelLoadError, match="Failed to load the Universal Sentence Encoder model"):
            session.load("use")
        assert not session.is_available("use")

    def test_load_delay_is_scaled(self):
        sleeps = []
        session = ModelSession(delay_scale=0.5, sleep=sleeps.append)
        session.load("gpt2")
        assert sleeps == [1.5]

    def test_zero_scale_never_sleeps(self):
        sleeps = []
        session = ModelSession(delay_scale=0, sleep=sleeps.append)
        session.load("bart")
        session.wait(2.0)
        assert sleeps == []

    def test_bad_vector_count_is_embedding_error(self):
        session = ModelSession(encoder_factory=lambda kind: FixedEncoder(rows=1), delay_scale=0)
        with pytest.raises(EmbeddingError, match="Error processing text with"):
            session.embed(get_model("use"), ["One sentence here.", "Two sentences here."])

    def test_no_vectors_is_embedding_error(self):
        session = ModelSession(encoder_factory=lambda kind: FixedEncoder(), delay_scale=0)
        with pytest.raises(EmbeddingError):
            session.embed(get_model("use"), [])


class TestMLSummarizer:
    """Encoder-backed extractive summaries."""

    def test_picks_sentences_from_text(self, session, article):
        result = MLSummarizer(session).summarize(article, "use", 2)
        picked = [s for s in split_sentences(article) if s in result]
        assert len(picked) == 2

    def test_short_text_unchanged(self, session):
        text = "A single sentence about encoders."
        assert MLSummarizer(session).summarize(text, "bert", 3) == text

    def test_local_model_matches_statistical(self, session, animals):
        assert MLSummarizer(session).summarize(animals, "local", 2) == summarize(animals, 2)

    def test_placeholder_rejected(self, session, animals):
        with pytest.raises(InvalidInputError):
            MLSummarizer(session).summarize(animals, "placeholder", 2)

    def test_identical_vectors_keep_first_sentences(self, animals):
        session = ModelSession(encoder_factory=lambda kind: FixedEncoder(), delay_scale=0)
        assert MLSummarizer(session).summarize(animals, "use", 2) == "Cats are mammals. Dogs are mammals."
