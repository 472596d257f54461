from __future__ import annotations
from typing import Dict, List, Tuple
from collections import Counter
import math
from .datatypes import PosTag, TaggedSentence
from .tagging import STOPWORDS

MIN_TERM_LENGTH = 3

# n-gram size -> weight applied to the tier maximum before normalisation
TIER_WEIGHTS = {1: 1.0, 2: 1.5, 3: 2.0, 4: 2.5}

def _term_counts(tagged: List[TaggedSentence]) -> Tuple[Counter, Counter]:
    tf: Counter = Counter()
    df: Counter = Counter()
    for sentence in tagged:
        seen = set()
        for w in sentence.words:
            if w.is_stopword or len(w.lower) < MIN_TERM_LENGTH:
                continue
            tf[w.lower] += 1
            if w.lower not in seen:
                df[w.lower] += 1
                seen.add(w.lower)
    return tf, df

def compute_tfidf(tagged: List[TaggedSentence]) -> Dict[str, float]:
    """
    TF-IDF over the sentence collection, each sentence being one 'document':
      TF  = raw count across all sentences
      IDF = ln(N / (DF + 1))
    A term present in every sentence gets a slightly negative IDF.
    """
    tf, df = _term_counts(tagged)
    n_docs = len(tagged)
    return {t: tf[t] * math.log(n_docs / (df[t] + 1)) for t in tf}

def extract_quality_ngrams(tagged: List[TaggedSentence], n: int) -> Dict[str, int]:
    """Count n-grams whose edges are not stopwords, that carry at most n//3
    stopwords and contain at least one NOUN/PROPN."""
    ngrams: Counter = Counter()
    for sentence in tagged:
        words = sentence.words
        for i in range(len(words) - n + 1):
            seq = words[i:i + n]
            if seq[0].is_stopword or seq[-1].is_stopword:
                continue
            if sum(1 for w in seq if w.is_stopword) > n // 3:
                continue
            if not any(w.tag in (PosTag.NOUN, PosTag.PROPN) for w in seq):
                continue
            phrase = " ".join(w.word for w in seq)
            if n > 1 and len(phrase) < n * 2:
                continue
            ngrams[phrase] += 1
    return dict(ngrams)

def filter_meaningful_phrases(candidates: List[Tuple[str, float]], min_length: int = 2) -> List[Tuple[str, float]]:
    kept = []
    for phrase, score in candidates:
        if len(phrase) < min_length * 3:
            continue
        words = phrase.lower().split()
        if all(w in STOPWORDS for w in words):
            continue
        if words[-1] in STOPWORDS and len(words) <= 3:
            continue
        kept.append((phrase, score))
    return kept

def ranked_single_terms(tfidf: Dict[str, float]) -> List[Tuple[str, float]]:
    items = [(t, s) for t, s in tfidf.items() if len(t) > MIN_TERM_LENGTH and t not in STOPWORDS]
    return sorted(items, key=lambda x: x[1], reverse=True)

def ranked_phrases(tagged: List[TaggedSentence], n: int) -> List[Tuple[str, float]]:
    filtered = filter_meaningful_phrases(list(extract_quality_ngrams(tagged, n).items()), min_length=n)
    return sorted(filtered, key=lambda x: x[1], reverse=True)

def tier_max(ranked: List[Tuple[str, float]], n: int) -> float:
    if not ranked:
        return 1.0
    return ranked[0][1] * TIER_WEIGHTS[n]

def relevance(score: float, n: int, max_score: float) -> int:
    """ceil(score * weight / max * 5), kept within 1..5."""
    value = math.ceil((score * TIER_WEIGHTS[n]) / max_score * 5)
    return max(1, min(5, value))
