from __future__ import annotations
import re
from typing import Iterator, List, Optional
from .config import PreprocessConfig
from .datatypes import Document, Sentence

# sentence end followed by a capital letter, or any newline run
_BOUNDARY_RE = re.compile(r"([.!?])\s+(?=[A-Z])")
_NEWLINES_RE = re.compile(r"\n+")
_PUNCT_RE = re.compile(r"[^\w\s]|_", re.ASCII)

STOPWORDS = frozenset({
    'a', 'about', 'above', 'after', 'again', 'against', 'all', 'am', 'an', 'and',
    'any', 'are', "aren't", 'as', 'at', 'be', 'because', 'been', 'before', 'being',
    'below', 'between', 'both', 'but', 'by', 'can', "can't", 'cannot', 'could', "couldn't",
    'did', "didn't", 'do', 'does', "doesn't", 'doing', "don't", 'down', 'during',
    'each', 'few', 'for', 'from', 'further', 'had', "hadn't", 'has', "hasn't", 'have',
    "haven't", 'having', 'he', "he'd", "he'll", "he's", 'her', 'here', "here's",
    'hers', 'herself', 'him', 'himself', 'his', 'how', "how's", 'i', "i'd", "i'll",
    "i'm", "i've", 'if', 'in', 'into', 'is', "isn't", 'it', "it's", 'its', 'itself',
    "let's", 'me', 'more', 'most', "mustn't", 'my', 'myself', 'no', 'nor', 'not', 'of',
    'off', 'on', 'once', 'only', 'or', 'other', 'ought', 'our', 'ours', 'ourselves', 'out',
    'over', 'own', 'same', "shan't", 'she', "she'd", "she'll", "she's", 'should',
    "shouldn't", 'so', 'some', 'such', 'than', 'that', "that's", 'the', 'their', 'theirs',
    'them', 'themselves', 'then', 'there', "there's", 'these', 'they', "they'd", "they'll",
    "they're", "they've", 'this', 'those', 'through', 'to', 'too', 'under', 'until', 'up',
    'very', 'was', "wasn't", 'we', "we'd", "we'll", "we're", "we've", 'were', "weren't",
    'what', "what's", 'when', "when's", 'where', "where's", 'which', 'while', 'who',
    "who's", 'whom', 'why', "why's", 'with', "won't", 'would', "wouldn't", 'you',
    "you'd", "you'll", "you're", "you've", 'your', 'yours', 'yourself', 'yourselves',
})


def iter_sentences(text: str, cfg: Optional[PreprocessConfig] = None) -> Iterator[str]:
    """Yield trimmed sentences longer than ``cfg.min_sentence_length`` characters.

    Each call starts a fresh pass over ``text``.
    """
    cfg = cfg or PreprocessConfig()
    if not text:
        return
    marked = _BOUNDARY_RE.sub(r"\1|", text)
    marked = _NEWLINES_RE.sub("|", marked)
    for piece in marked.split("|"):
        piece = piece.strip()
        if len(piece) > cfg.min_sentence_length:
            yield piece


def split_sentences(text: str, cfg: Optional[PreprocessConfig] = None) -> List[str]:
    return list(iter_sentences(text, cfg))


def tokenize(sentence: str, cfg: Optional[PreprocessConfig] = None) -> List[str]:
    """Lowercase, strip punctuation and drop short words and stopwords."""
    cfg = cfg or PreprocessConfig()
    cleaned = _PUNCT_RE.sub("", sentence.lower())
    toks = [t for t in cleaned.split() if len(t) >= cfg.min_token_length]
    if cfg.remove_stopwords:
        toks = [t for t in toks if t not in STOPWORDS]
    return toks


def preprocess_text(text: str, cfg: Optional[PreprocessConfig] = None) -> Document:
    cfg = cfg or PreprocessConfig()
    sentences = [
        Sentence(idx=i, text=s, tokens=tokenize(s, cfg))
        for i, s in enumerate(iter_sentences(text, cfg))
    ]
    return Document(raw_text=text, sentences=sentences)
