from .datatypes import Sentence, Document, Edge, Graph, KeyElements, ScoredTerm, SummaryResult
from .config import PreprocessConfig, RankConfig, Settings
from .errors import SummarizerError, InvalidInputError, ModelLoadError, EmbeddingError, UnsupportedModelError
from .preprocessing import preprocess_text, split_sentences
from .key_elements import extract_key_elements
from .graphing import build_graph
from .scoring import textrank_scores
from .summarize import summarize, generate_summary, rank_text
from .models import Backend, EncoderKind, ModelInfo, get_model, models_by_tier
from .session import ModelSession
from .generator import SummaryGenerator
