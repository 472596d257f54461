from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional

@dataclass
class Sentence:
    idx: int
    text: str
    tokens: List[str] = field(default_factory=list)  # lowercased, stopword-free

@dataclass
class Document:
    raw_text: str
    sentences: List[Sentence]

class PosTag(str, Enum):
    NOUN = "NOUN"
    PROPN = "PROPN"
    ADJ = "ADJ"
    DET = "DET"
    STOP = "STOP"
    OTHER = "OTHER"

@dataclass(frozen=True)
class TaggedWord:
    word: str
    lower: str
    tag: PosTag
    is_stopword: bool
    is_capitalized: bool
    is_sentence_start: bool

@dataclass
class TaggedSentence:
    text: str
    words: List[TaggedWord]

@dataclass
class ScoredTerm:
    text: str
    relevance: int  # 1..5

@dataclass
class KeyElements:
    themes: List[ScoredTerm] = field(default_factory=list)
    entities: List[ScoredTerm] = field(default_factory=list)
    categories: Dict[str, List[ScoredTerm]] = field(default_factory=dict)
    terms: List[ScoredTerm] = field(default_factory=list)
    key_points: List[str] = field(default_factory=list)

    def theme_texts(self, limit: Optional[int] = None) -> List[str]:
        items = self.themes if limit is None else self.themes[:limit]
        return [t.text for t in items]

    def entity_texts(self, limit: Optional[int] = None) -> List[str]:
        items = self.entities if limit is None else self.entities[:limit]
        return [e.text for e in items]

@dataclass
class SummaryResult:
    basic_summary: str
    enhanced_summary: str
    key_elements: KeyElements
    model_id: str = "local"
    elapsed_ms: float = 0.0

@dataclass
class Edge:
    i: int
    j: int
    weight: float  # similarity

@dataclass
class Graph:
    nodes: List[Sentence]
    edges: List[Edge]  # undirected weighted edges

SimilarityMatrix = List[List[float]]
