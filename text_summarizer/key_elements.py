"""Key themes, entities, categories and key points of a text."""

from __future__ import annotations
import logging
import re
from collections import Counter
from typing import Dict, List, Sequence, Tuple
from .datatypes import KeyElements, PosTag, ScoredTerm, TaggedSentence
from .features import compute_tfidf, ranked_phrases, ranked_single_terms, relevance, tier_max
from .tagging import STOPWORDS, sentence_spans, tag_parts_of_speech

logger = logging.getLogger(__name__)

TECHNICAL_TERMS = (
    'natural language processing', 'machine learning', 'artificial intelligence',
    'text summarization', 'information retrieval', 'information extraction',
    'text analytics', 'neural networks', 'deep learning', 'nlp', 'ai',
)

# checked in order; first match wins
CATEGORY_KEYWORDS: Dict[str, Sequence[str]] = {
    'technology': (
        'digital', 'online', 'technology', 'social media', 'platform', 'machine', 'algorithm',
        'internet', 'computer', 'software', 'device', 'app', 'artificial intelligence',
        'ai', 'tech', 'web', 'electronic', 'data', 'system', 'network', 'mobile',
    ),
    'communication': (
        'communication', 'information', 'media', 'content', 'message', 'exchange',
        'sharing', 'discuss', 'chat', 'conversation', 'expression', 'article', 'news',
        'document', 'text', 'write', 'read', 'language', 'sentence', 'word',
    ),
    'information processing': (
        'process', 'distill', 'summarize', 'summarization', 'extract', 'capture',
        'identify', 'analyze', 'understand', 'summary', 'key point', 'essence',
        'important', 'critical', 'essential', 'natural language processing',
    ),
    'education': (
        'education', 'learning', 'teaching', 'student', 'school', 'university',
        'knowledge', 'academic', 'study', 'research', 'training',
    ),
}
OTHER_CATEGORY = 'other'

_TIER_LIMITS = ((4, 3), (3, 4), (2, 5), (1, 3))  # (n, how many themes to keep)
MAX_ENTITIES = 10
MAX_KEY_POINTS = 5


def _keyword_pattern(keyword: str) -> re.Pattern:
    k = re.escape(keyword)
    return re.compile(rf"\b{k}|{k}s?\b|{k}ing\b|{k}ed\b")

_CATEGORY_PATTERNS = {
    category: [_keyword_pattern(k) for k in keywords]
    for category, keywords in CATEGORY_KEYWORDS.items()
}
_GAZETTEER_PATTERNS = [(t, re.compile(rf"\b{re.escape(t)}\b")) for t in TECHNICAL_TERMS]


def categorize(item_text: str) -> str:
    lower = item_text.lower()
    for category, patterns in _CATEGORY_PATTERNS.items():
        if any(p.search(lower) for p in patterns):
            return category
    return OTHER_CATEGORY


def categorize_elements(themes: List[ScoredTerm], entities: List[ScoredTerm]) -> Dict[str, List[ScoredTerm]]:
    result: Dict[str, List[ScoredTerm]] = {}
    for item in [*themes, *entities]:
        result.setdefault(categorize(item.text), []).append(item)
    return result


def rank_tiers(tagged: List[TaggedSentence]) -> Tuple[Dict[int, List[Tuple[str, float]]], float]:
    """Ranked candidates per n-gram size and the shared normalisation maximum."""
    ranked = {1: ranked_single_terms(compute_tfidf(tagged))}
    for n in (2, 3, 4):
        ranked[n] = ranked_phrases(tagged, n)
    max_score = max(tier_max(ranked[n], n) for n in (1, 2, 3, 4))
    return ranked, max_score


def extract_themes(ranked: Dict[int, List[Tuple[str, float]]], max_score: float) -> List[ScoredTerm]:
    # longer phrases first so they win relevance ties
    themes = []
    for n, limit in _TIER_LIMITS:
        themes.extend(ScoredTerm(text=t, relevance=relevance(s, n, max_score)) for t, s in ranked[n][:limit])
    return sorted(themes, key=lambda t: t.relevance, reverse=True)


def extract_terms(ranked: Dict[int, List[Tuple[str, float]]], max_score: float) -> List[ScoredTerm]:
    """Single terms ranked 4..12 (the top three already appear as themes)."""
    return [ScoredTerm(text=t, relevance=relevance(s, 1, max_score)) for t, s in ranked[1][3:12]]


def count_entities(tagged: List[TaggedSentence]) -> Counter:
    counts: Counter = Counter()
    for sentence in tagged:
        current: List[str] = []
        for w in sentence.words:
            if w.tag is PosTag.PROPN or (current and w.is_capitalized and not w.is_sentence_start):
                current.append(w.word)
            elif current:
                counts[" ".join(current)] += 1
                current = []
        if current:
            counts[" ".join(current)] += 1

        lower = sentence.text.lower()
        for term, pattern in _GAZETTEER_PATTERNS:
            if pattern.search(lower):
                counts[term] += 1
    return counts


def extract_entities(tagged: List[TaggedSentence]) -> List[ScoredTerm]:
    entities = []
    for entity, count in count_entities(tagged).most_common(MAX_ENTITIES):
        if len(entity) <= 2 or entity.lower() in STOPWORDS:
            continue
        entities.append(ScoredTerm(text=entity, relevance=max(1, min(5, count + 2))))
    return entities


def extract_key_points(text: str, keywords: List[str], max_sentences: int = MAX_KEY_POINTS) -> List[str]:
    sentences = sentence_spans(text)
    lowered_keys = [k.lower() for k in keywords]
    scored = []
    for index, sentence in enumerate(sentences):
        score = 0.0
        lower = sentence.lower()
        if index == 0:
            score += 2
        if index == len(sentences) - 1:
            score += 1.5
        for key in lowered_keys:
            pos = lower.find(key)
            if pos != -1:
                score += 1
                if pos < len(lower) / 2:
                    score += 0.5
        word_count = len(sentence.split())
        if 10 <= word_count <= 25:
            score += 0.5
        elif word_count > 40:
            score -= 1
        scored.append((index, sentence.strip(), score))

    top = sorted((s for s in scored if s[2] > 0), key=lambda s: s[2], reverse=True)[:max_sentences]
    return [text for _, text, _ in sorted(top, key=lambda s: s[0])]


def extract_key_elements(text: str) -> KeyElements:
    tagged = tag_parts_of_speech(text)
    ranked, max_score = rank_tiers(tagged)
    themes = extract_themes(ranked, max_score)
    entities = extract_entities(tagged)
    keywords = [t.text for t in themes] + [e.text for e in entities]
    elements = KeyElements(
        themes=themes,
        entities=entities,
        categories=categorize_elements(themes, entities),
        terms=extract_terms(ranked, max_score),
        key_points=extract_key_points(text, keywords),
    )
    logger.debug("extracted %d themes, %d entities from %d sentences",
                 len(themes), len(entities), len(tagged))
    return elements
