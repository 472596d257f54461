"""Coarse part-of-speech tagging from suffix and position heuristics."""

from __future__ import annotations
import re
from typing import List, Optional
from .datatypes import PosTag, TaggedSentence, TaggedWord

# Stopwords used for key-element extraction (narrower than the similarity list)
STOPWORDS = frozenset({
    'a', 'an', 'the', 'and', 'but', 'or', 'for', 'nor', 'on', 'at', 'to', 'by', 'is', 'are', 'was',
    'were', 'be', 'been', 'being', 'in', 'that', 'this', 'it', 'of', 'from', 'with', 'as', 'have',
    'has', 'had', 'not', 'what', 'when', 'where', 'who', 'why', 'how', 'all', 'any', 'both', 'each',
    'few', 'more', 'most', 'other', 'some', 'such', 'than', 'too', 'very', 'can', 'will', 'just',
    'should', 'now', 'into', 'only', 'itself', 'himself', 'herself', 'myself', 'yourself', 'themselves',
    'ourselves', 'its', 'his', 'hers', 'your', 'my', 'their', 'our', 'these', 'those', 'they', 'we',
    'he', 'she', 'you', 'me', 'him', 'her', 'them', 'us', 'there', 'here', 'would', 'could',
    'shall', 'might', 'may', 'must', 'about', 'within', 'without', 'throughout', 'through', 'during',
    'before', 'after', 'above', 'below', 'up', 'down', 'over', 'under',
})

DETERMINERS = frozenset({'the', 'a', 'an', 'this', 'that', 'these', 'those'})

_NOUN_SUFFIX_RE = re.compile(r"(?:tion|ment|ity|ness|ship|dom|ence|ance|ism|ing)$")
_ADJ_SUFFIX_RE = re.compile(r"(?:able|ible|al|ful|ic|ive|less|ous)$")

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
_WORD_RE = re.compile(r"\b[\w'-]+\b")


def sentence_spans(text: str) -> List[str]:
    """Sentences as terminated runs; unterminated trailing text is dropped."""
    return _SENTENCE_RE.findall(text or "")


def _is_capitalized(word: str) -> bool:
    first = word[0]
    return first.upper() == first and first.lower() != first


def tag_word(word: str, index: int, prev_category: Optional[PosTag]) -> PosTag:
    """First matching rule wins.

    `prev_category` is the last ADJ or DET tag seen earlier in the sentence.
    """
    lower = word.lower()
    is_stop = lower in STOPWORDS
    if index > 0 and _is_capitalized(word):
        return PosTag.PROPN
    if _NOUN_SUFFIX_RE.search(lower):
        return PosTag.NOUN
    if prev_category is PosTag.DET and not is_stop:
        return PosTag.NOUN
    if _ADJ_SUFFIX_RE.search(lower):
        return PosTag.ADJ
    if lower in DETERMINERS:
        return PosTag.DET
    if is_stop:
        return PosTag.STOP
    if index > 0:
        return PosTag.NOUN
    return PosTag.OTHER


def tag_sentence(sentence: str) -> TaggedSentence:
    words: List[TaggedWord] = []
    prev_category: Optional[PosTag] = None
    for index, word in enumerate(_WORD_RE.findall(sentence)):
        tag = tag_word(word, index, prev_category)
        lower = word.lower()
        words.append(TaggedWord(
            word=word,
            lower=lower,
            tag=tag,
            is_stopword=lower in STOPWORDS,
            is_capitalized=_is_capitalized(word),
            is_sentence_start=index == 0,
        ))
        if tag in (PosTag.ADJ, PosTag.DET):
            prev_category = tag
    return TaggedSentence(text=sentence, words=words)


def tag_parts_of_speech(text: str) -> List[TaggedSentence]:
    return [tag_sentence(s) for s in sentence_spans(text)]
