"""Rule-based content analysis: topics, names, structure, tone and type of a text."""

from __future__ import annotations
import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .tagging import sentence_spans

_TOPIC_RE = re.compile(
    r"\b(?:[a-z]+ ){0,2}(?:information|technology|communication|data|process|system|method|approach|"
    r"research|content|concept|principle|theory|model|framework|analysis|development|management|strategy|"
    r"solution|world|exchange|media|platforms|tools|algorithms|language|processing|summarization)\b"
)
_NAME_CHUNK = r"[A-Z][a-zÀ-ÿ]+"
_FULL_NAME_RE = re.compile(
    rf"\b({_NAME_CHUNK}(?:\s+(?:{_NAME_CHUNK}|d[aeo]\s+{_NAME_CHUNK}|d[aeo]|van|von|del|la|el|bin|ibn|al))+)\b"
)
_PROPER_NOUN_RE = re.compile(rf"\b{_NAME_CHUNK}(?:\s+{_NAME_CHUNK})*\b")
_NAME_RE = re.compile(rf"\b{_NAME_CHUNK}(?:\s+{_NAME_CHUNK}){{1,3}}\b")
_COMPLEX_NAME_RE = re.compile(
    rf"\b{_NAME_CHUNK}(?:\s+(?:{_NAME_CHUNK}|d[aeo]\s+{_NAME_CHUNK}|d[aeo]|van|von|del|la))+\b"
)
_PRONOUN_RE = re.compile(r"^(The|A|An|This|That|These|Those|It|They|We|I|You|He|She)$")
_ORDINAL_RE = re.compile(r"\b(first|second|third|finally|moreover|furthermore|in addition|another|importantly)\b", re.I)
_CONTRAST_RE = re.compile(r"\b(however|nevertheless|conversely|in contrast|on the other hand)\b", re.I)
_CONNECTIVE_RE = re.compile(
    r"\b(therefore|thus|consequently|as a result|however|moreover|furthermore|in conclusion|to summarize|finally)\b",
    re.I,
)
_WORD_RE = re.compile(r"\b[\w']+\b")

ACTION_VERBS = (
    "discuss", "explore", "analyze", "present", "describe", "explain", "demonstrate", "show",
    "highlight", "emphasize", "suggest", "reveal", "indicate", "provide", "address", "examine",
    "investigate", "develop", "create", "enhance",
)
RELATIONSHIPS = {
    "causal": ("because", "therefore", "thus", "as a result", "consequently", "due to", "leads to"),
    "contrast": ("however", "although", "despite", "while", "whereas", "nevertheless", "in contrast"),
    "addition": ("furthermore", "moreover", "additionally", "in addition", "also", "besides"),
    "example": ("for example", "for instance", "such as", "specifically", "particularly"),
    "emphasis": ("importantly", "significantly", "notably", "crucially", "essentially"),
}
POSITIVE_WORDS = ("good", "great", "excellent", "positive", "valuable", "beneficial",
                  "advantage", "improvement", "enhance", "solution")
NEGATIVE_WORDS = ("bad", "problem", "challenge", "difficult", "issue", "concern",
                  "negative", "risk", "threat", "disadvantage")
DESCRIPTIVE_WORDS = ("is", "are", "was", "were", "appears", "seems", "looks", "contains", "includes", "consists")
PERSUASIVE_WORDS = ("should", "must", "need to", "important", "essential", "critical",
                    "argue", "argument", "claim", "support", "evidence", "prove")
PRECISE_TERMS = ("specifically", "precisely", "exactly", "clearly", "demonstrates", "proves")
VAGUE_TERMS = ("sort of", "kind of", "maybe", "perhaps", "might", "could be", "somewhat")
BIO_WORDS = ("born", "died", "career", "life", "biography")
TECHNICAL_WORDS = ("data", "algorithm", "system", "technology", "software")
ACADEMIC_WORDS = ("research", "study", "analysis", "literature")


@dataclass
class ContentAnalysis:
    key_topics: List[str] = field(default_factory=list)
    supporting_topics: List[str] = field(default_factory=list)
    main_entities: List[str] = field(default_factory=list)
    key_positions: List[int] = field(default_factory=list)
    action_verbs: List[str] = field(default_factory=list)
    relationship_terms: Dict[str, List[str]] = field(default_factory=dict)
    sentiment: str = "neutral"
    is_descriptive: bool = False
    is_persuasive: bool = False
    complexity: str = "medium"


@dataclass
class ContentProfile:
    content_type: str
    estimated_reading_minutes: int
    complexity: str


def _count_word(pattern_word: str, lower_text: str, suffix: str = "") -> int:
    return len(re.findall(rf"\b{re.escape(pattern_word)}{suffix}\b", lower_text))


def _count_exact(term: str, text: str) -> int:
    return len(re.findall(rf"\b{re.escape(term)}\b", text))


def extract_entities(text: str) -> List[str]:
    """Capitalised names ordered by how often they occur."""
    found = [m for m in _FULL_NAME_RE.findall(text) if len(m) > 2]
    found += [m for m in _PROPER_NOUN_RE.findall(text) if len(m) > 2 and not _PRONOUN_RE.match(m)]
    counts: Counter = Counter()
    for entity in found:
        counts[entity] += _count_exact(entity, text)
    return [e for e, _ in counts.most_common()]


def extract_topics(text: str) -> List[str]:
    lower = text.lower()
    entity_set = {e.lower() for e in extract_entities(text)}
    positions: Dict[str, List[int]] = {}
    for m in _TOPIC_RE.finditer(lower):
        phrase = m.group(0).strip()
        if len(phrase) > 5 and not any(phrase in e for e in entity_set):
            positions.setdefault(phrase, []).append(m.start())

    def score(topic: str) -> float:
        occ = positions[topic]
        avg_position = sum(occ) / (len(occ) * len(lower))
        return len(occ) * (1 - avg_position * 0.5)

    return sorted(positions, key=score, reverse=True)


def structurally_important(sentences: Sequence[str]) -> List[int]:
    if not sentences:
        return []
    important = [0]
    if len(sentences) > 1:
        important.append(len(sentences) - 1)
    for idx, sentence in enumerate(sentences[1:-1], start=1):
        if _ORDINAL_RE.search(sentence) or _CONTRAST_RE.search(sentence):
            important.append(idx)
    return important


def extract_action_verbs(text: str) -> List[str]:
    lower = text.lower()
    found = []
    for verb in ACTION_VERBS:
        if any(f" {form} " in lower for form in (verb, verb + "s", verb + "ed", verb + "ing")):
            found.append(verb)
    return found


def find_relationship_terms(text: str) -> Dict[str, List[str]]:
    lower = text.lower()
    found: Dict[str, List[str]] = {}
    for kind, terms in RELATIONSHIPS.items():
        hits = [t for t in terms if t in lower]
        if hits:
            found[kind] = hits
    return found


def detect_sentiment(text: str) -> str:
    lower = text.lower()
    positive = sum(_count_word(w, lower, r"\w*") for w in POSITIVE_WORDS)
    negative = sum(_count_word(w, lower, r"\w*") for w in NEGATIVE_WORDS)
    if positive > negative * 1.5:
        return "positive"
    if negative > positive * 1.5:
        return "negative"
    return "neutral"


def _indicator_density(text: str, indicators: Sequence[str]) -> int:
    lower = text.lower()
    return sum(_count_word(w, lower) for w in indicators)


def is_descriptive(text: str) -> bool:
    return _indicator_density(text, DESCRIPTIVE_WORDS) > len(text.split()) / 25


def is_persuasive(text: str) -> bool:
    return _indicator_density(text, PERSUASIVE_WORDS) > len(text.split()) / 30


def assess_complexity(text: str) -> str:
    sentences = sentence_spans(text)
    words = _WORD_RE.findall(text)
    if not sentences or not words:
        return "medium"
    avg_words = len(words) / len(sentences)
    avg_length = sum(len(w) for w in words) / len(words)
    score = avg_words / 10 + avg_length / 4
    if score > 3:
        return "high"
    if score < 2:
        return "low"
    return "medium"


def analyze_text(text: str, sentences: Optional[Sequence[str]] = None) -> ContentAnalysis:
    if sentences is None:
        sentences = sentence_spans(text)
    topics = extract_topics(text)
    return ContentAnalysis(
        key_topics=topics[:3],
        supporting_topics=topics[3:],
        main_entities=extract_entities(text)[:3],
        key_positions=structurally_important(sentences),
        action_verbs=extract_action_verbs(text)[:5],
        relationship_terms=find_relationship_terms(text),
        sentiment=detect_sentiment(text),
        is_descriptive=is_descriptive(text),
        is_persuasive=is_persuasive(text),
        complexity=assess_complexity(text),
    )


def assess_confidence(sentence: str, analysis: Optional[ContentAnalysis] = None) -> float:
    """Heuristic 0.1..0.9 score of how well a sentence stands on its own."""
    analysis = analysis or ContentAnalysis()
    lower = sentence.lower()
    confidence = 0.5
    if re.match(r"^[A-Z].+[.!?]$", sentence):
        confidence += 0.1
    n_words = len(sentence.split())
    if n_words > 30:
        confidence -= 0.1
    if n_words < 8:
        confidence -= 0.05
    if any(t in lower for t in PRECISE_TERMS):
        confidence += 0.05
    if any(t in lower for t in VAGUE_TERMS):
        confidence -= 0.05
    if analysis.key_topics:
        hits = sum(1 for t in analysis.key_topics if t.lower() in lower)
        confidence += 0.05 * min(3, hits)
    if analysis.main_entities and any(e in sentence for e in analysis.main_entities):
        confidence += 0.1
    positions = analysis.key_positions
    if positions and (0 in positions or len(positions) - 1 in positions):
        confidence += 0.1
    if _CONNECTIVE_RE.search(sentence):
        confidence += 0.05
    return max(0.1, min(0.9, confidence))


def detect_content_type(text: str) -> str:
    names = list(dict.fromkeys(_COMPLEX_NAME_RE.findall(text) + _NAME_RE.findall(text)))
    lower = text.lower()
    has_bio = any(w in lower for w in BIO_WORDS)
    if has_bio:
        for name in names:
            last = name.split()[-1]
            mentions = _count_exact(name, text) + (_count_exact(last, text) if len(last) > 2 else 0)
            if mentions >= 3:
                return "biographical"
    if sum(_count_word(w, lower, r"\w*") for w in TECHNICAL_WORDS) > 3:
        return "technical"
    if sum(_count_word(w, lower, r"\w*") for w in ACADEMIC_WORDS) > 3:
        return "academic"
    return "general"


def analyze_content(text: str) -> ContentProfile:
    content_type = detect_content_type(text)
    return ContentProfile(
        content_type=content_type,
        estimated_reading_minutes=math.ceil(len(text.split()) / 200),
        complexity="high" if content_type in ("technical", "academic") else "moderate",
    )
