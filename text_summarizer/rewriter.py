"""Heuristic rewriting that makes extractive summaries read less extractive.

All template choices go through the injected ``random.Random``; seed it to
get repeatable output.
"""

from __future__ import annotations
import random
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .analysis import ContentAnalysis, assess_confidence

REMOVABLE_PHRASES = (
    'it is important to note that', 'it should be noted that', 'it is worth noting that',
    'as a matter of fact', 'as you can see', 'in other words', 'in this case',
)
HIGH_CONFIDENCE_FILLERS = ("in other words",)
FILLER_PHRASES = (
    "it is important to note that", "it should be noted that", "it is worth noting that",
    "in other words", "as you can see", "as a matter of fact", "it can be said that",
    "needless to say", "as mentioned earlier",
)
SENTENCE_STARTERS = (
    "The content highlights how",
    "The document explains that",
    "The analysis shows that",
    "The discussion reveals that",
)
TOPIC_TEMPLATES = (
    "{Topic}{verb}key aspects covered in the content.",
    "The significance of {topic} becomes apparent in this context.",
    "When examining {topic}, several important insights emerge.",
    "{Topic} represents a central consideration in this analysis.",
)
MAIN_VERBS = (
    "discuss", "explore", "analyze", "present", "describe", "explain", "demonstrate", "show",
    "highlight", "emphasize", "suggest", "reveal", "indicate", "provide", "address",
)
PRESENT_TENSE = {
    'discuss': 'discusses', 'show': 'shows', 'reveal': 'reveals', 'present': 'presents',
    'describe': 'describes', 'examine': 'examines', 'provide': 'provides', 'address': 'addresses',
    'highlight': 'highlights', 'demonstrate': 'demonstrates', 'explain': 'explains',
    'explore': 'explores', 'analyze': 'analyzes', 'are': 'is', 'were': 'was', 'have': 'has',
}
HIGH_CONFIDENCE = 0.7
MEDIUM_CONFIDENCE = 0.4
BODY_CONFIDENCE = 0.6
FALLBACK_SENTENCE = "Information is presented with context and detail."

_STARTER_RE = re.compile(r"^(This text|The text)\s+(analyze|analyzes|discuss|discusses|describe|describes)", re.I)
_NOUN_ANALYZE_RE = re.compile(r"\b(text|content|document|analysis)\s+analyze\b", re.I)
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([,.;:])")
_KEY_PHRASE_BAD_START_RE = re.compile(r"^(this|that|these|those|it|there|here|when|while)\s", re.I)
_LONG_WORD_RE = re.compile(r"\b\w{5,}\b")
_SECTION_BREAK_RE = re.compile(r"(therefore|thus|in conclusion|to summarize|consequently|as a result)")
_CONCLUSION_RE = re.compile(r"(?:in conclusion|to summarize|overall|ultimately|therefore|thus)", re.I)
_TRANSITION_START_RE = re.compile(
    r"^(furthermore|moreover|additionally|however|thus|therefore|in addition|consequently)", re.I)
_TRANSITION_STRIP_RE = re.compile(
    r"^(furthermore|moreover|additionally|however|thus|therefore|in addition|consequently)[,]?\s+", re.I)
_TO_IT_RE = re.compile(r"^(This|The)\s+[^.!?]+?\b(is|are|has|have|can|will|may)\b", re.I)
_TO_WE_SEE_RE = re.compile(r"^(This|The)\s+[^.!?]+?\b(analyze|discusses|describes|shows|presents|highlights)\b", re.I)
_STRUCTURE_VERB_RE = re.compile(r"\b(?:is|are|was|discuss|highlight|show|reveal|present|describe|examine)\w*\b")
_STRUCTURE_PREP_RE = re.compile(r"\b(?:in|on|to|for|from|with|by|about|through)\b")
_BASE_VERB_RE = re.compile(r"\b(?:is|are|shows|presents|discusses|describes|reveals|provides|addresses)\b", re.I)
_BIO_RE = re.compile(r"\b(?:born|life|career|work|achievement|position|led|elected|served)\b", re.I)
_IMPACT_RE = re.compile(r"\b(?:impact|influence|contribution|important|significant|legacy)\b", re.I)
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
_TOKEN_PUNCT_RE = re.compile(r"[^\w'-]")


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:] if text else ""


def remove_filler_phrases(text: str, phrases: Sequence[str]) -> str:
    for phrase in phrases:
        text = re.sub(re.escape(phrase), "", text, flags=re.I)
    return text


def clean_text(text: str) -> str:
    """Collapse whitespace, fix spacing before punctuation, capitalise, end with a full stop."""
    if not text:
        return ""
    result = re.sub(r"\s+", " ", text).strip()
    result = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", result)
    if not result:
        return ""
    result = capitalize_first(result)
    if not re.search(r"[.!?]$", result):
        result += "."
    return result


def basic_cleanup(text: str) -> str:
    """Filler removal and spacing fixes without touching sentence endings."""
    if not text:
        return ""
    result = remove_filler_phrases(text, REMOVABLE_PHRASES)
    result = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", result)
    result = re.sub(r"\s{2,}", " ", result).strip()
    return capitalize_first(result)


def conjugate_verb(verb: str) -> str:
    if verb in PRESENT_TENSE:
        return PRESENT_TENSE[verb]
    if verb.endswith(("ed", "ing")):
        base = next((b for b in PRESENT_TENSE if len(b) > 3 and verb.startswith(b[:-1])), None)
        return PRESENT_TENSE[base] if base else verb
    if verb.endswith("s") or " " in verb:
        return verb
    return f"{verb}s"


def protect_entities(text: str, entities: Sequence[str]) -> Tuple[str, Dict[str, str]]:
    """Swap entities for placeholder tokens, longest first."""
    placeholders: Dict[str, str] = {}
    for counter, entity in enumerate(sorted(entities, key=len, reverse=True)):
        placeholder = f"__ENTITY_{counter}__"
        placeholders[placeholder] = entity
        text = re.sub(rf"\b{re.escape(entity)}\b", placeholder, text)
    return text, placeholders


def restore_entities(text: str, placeholders: Dict[str, str]) -> str:
    for placeholder, entity in placeholders.items():
        text = text.replace(placeholder, entity)
    return text


def extract_key_phrases(text: str) -> List[str]:
    """4 to 7 word runs worth quoting: no pronoun start, one long word, mostly long words."""
    words = text.split()
    phrases = []
    for i in range(len(words) - 3):
        for length in range(4, min(7, len(words) - i) + 1):
            chunk = words[i:i + length]
            phrase = " ".join(chunk)
            if _KEY_PHRASE_BAD_START_RE.match(phrase) or not _LONG_WORD_RE.search(phrase):
                continue
            if sum(1 for w in chunk if len(w) < 4) < len(chunk) / 2:
                phrases.append(phrase)
    return phrases


def extract_main_verb(text: str) -> Optional[str]:
    lower = text.lower()
    for verb in MAIN_VERBS:
        for form in (verb, f"{verb}s", f"{verb}ed", f"{verb}ing"):
            if re.search(rf"\b{form}\b", lower):
                return verb
    return None


def contains_any_phrase(text: str, phrases: Sequence[str], threshold: int = 1) -> bool:
    lower = text.lower()
    matches = 0
    for phrase in phrases:
        if phrase and len(phrase) > 3 and phrase.lower() in lower:
            matches += 1
            if matches >= threshold:
                return True
    return False


def sentence_signature(sentence: str) -> str:
    """First five words longer than three letters, alphanumerics only, lowercased."""
    words = re.sub(r"[^a-z0-9]", " ", sentence.lower()).split()
    return " ".join([w for w in words if len(w) > 3][:5])


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_RE.findall(text or "")]


def segment_into_sections(sentences: Sequence[str]) -> List[List[str]]:
    if len(sentences) <= 3:
        return [list(sentences)]
    sections: List[List[str]] = []
    current: List[str] = []
    for sentence in sentences:
        current.append(sentence)
        if sentence.endswith(".") and (_SECTION_BREAK_RE.search(sentence.lower()) or len(current) >= 3):
            sections.append(current)
            current = []
    if current:
        sections.append(current)
    return sections


def improve_text_quality(text: str) -> str:
    """Drop transition-led sentences and near-duplicates.

    A repeated signature on a "This/The" sentence is restructured
    ("The X is ..." -> "It is ...") and kept even when no pattern applies.
    Other repeats are dropped.
    """
    sentences = split_sentences(text)
    if len(sentences) <= 1:
        return text
    filtered = [s for s in sentences if not _TRANSITION_START_RE.match(s)]
    working = filtered or sentences

    unique: List[str] = []
    seen: Set[str] = set()
    for sentence in working:
        processed = _TRANSITION_STRIP_RE.sub("", sentence)
        key = sentence_signature(processed)
        if len(key) > 10 and key in seen:
            if re.match(r"^(This|The)", processed):
                simple = _TO_IT_RE.sub(r"It \2", processed)
                simple = _TO_WE_SEE_RE.sub(r"We see that it \2", simple)
                unique.append(simple)
        elif key:
            seen.add(key)
            unique.append(processed)
    return " ".join(unique)


@dataclass
class SentenceStructure:
    original: str
    first_word: str
    verbs: List[Tuple[str, int]] = field(default_factory=list)
    prepositions: List[Tuple[str, int]] = field(default_factory=list)


def extract_sentence_structures(sentences: Sequence[str]) -> List[SentenceStructure]:
    structures = []
    for sentence in sentences:
        tokens = sentence.split()
        if len(tokens) < 5 or len(tokens) > 15:
            continue
        structure = SentenceStructure(original=sentence, first_word=tokens[0].lower())
        for i, token in enumerate(tokens):
            token = _TOKEN_PUNCT_RE.sub("", token.lower())
            if _STRUCTURE_VERB_RE.search(token):
                structure.verbs.append((token, i))
            if _STRUCTURE_PREP_RE.search(token):
                structure.prepositions.append((token, i))
        if structure.verbs:
            structures.append(structure)
    return structures


class TextRewriter:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def rewrite_adaptively(self, sentence: str, analysis: Optional[ContentAnalysis] = None,
                           topics: Sequence[str] = (), used_phrases: Optional[Set[str]] = None) -> str:
        """Rewrite one sentence, harder the lower its confidence score.

        high    -> strip "in other words" only
        medium  -> strip fillers, vary "This text discusses" style openers
        low     -> replace with a sentence about the first unused topic
        """
        analysis = analysis or ContentAnalysis()
        used_phrases = used_phrases if used_phrases is not None else set()
        confidence = assess_confidence(sentence, analysis)
        result, placeholders = protect_entities(sentence, analysis.main_entities)

        if confidence > HIGH_CONFIDENCE:
            result = remove_filler_phrases(result, HIGH_CONFIDENCE_FILLERS)
        elif confidence > MEDIUM_CONFIDENCE:
            result = remove_filler_phrases(result, FILLER_PHRASES)
            if _STARTER_RE.match(result):
                result = _STARTER_RE.sub(self.rng.choice(SENTENCE_STARTERS), result, count=1)
            result = _NOUN_ANALYZE_RE.sub(r"\1 analyzes", result, count=1)
        else:
            unused = [t for t in topics if t not in used_phrases]
            if unused:
                topic = unused[0]
                verb = extract_main_verb(result)
                verb_phrase = f" {conjugate_verb(verb)} " if verb else " discusses "
                template = self.rng.choice(TOPIC_TEMPLATES)
                result = template.format(Topic=capitalize_first(topic), topic=topic, verb=verb_phrase)
                used_phrases.add(topic)
            result = remove_filler_phrases(result, FILLER_PHRASES)

        result = restore_entities(clean_text(result), placeholders)

        if confidence > MEDIUM_CONFIDENCE and result != sentence:
            result = self._quote_original(sentence, result)
        return clean_text(result)

    def _quote_original(self, original: str, result: str) -> str:
        phrases = extract_key_phrases(original)
        if not phrases or len(result) <= 20:
            return result
        phrase = self.rng.choice(phrases)
        if phrase in result or len(phrase) <= 10:
            return result
        mid = len(result) // 2
        at = result.find(". ", mid)
        if at == -1:
            at = result.find(", ", mid)
        if at == -1:
            return result
        return f'{result[:at + 2]}as the original text states, "{phrase}" {result[at + 2:]}'

    def extract_distinct_insights(self, sections: Sequence[Sequence[str]], topics: Sequence[str],
                                  used_phrases: Set[str]) -> List[str]:
        insights = []
        for section in sections:
            if not section:
                continue
            best, best_topics = section[0], []
            for sentence in section:
                if contains_any_phrase(sentence, list(used_phrases)):
                    continue
                lower = sentence.lower()
                fresh = [t for t in topics if t.lower() in lower and t not in used_phrases]
                if len(fresh) > len(best_topics):
                    best, best_topics = sentence, fresh
            insights.append(best)
            used_phrases.update(best_topics)
        return insights

    def apply_sentence_structure(self, structure: SentenceStructure, topic: str,
                                 analysis: ContentAnalysis) -> str:
        if analysis.action_verbs:
            verb = self.rng.choice(analysis.action_verbs)
        else:
            verb = structure.verbs[0][0] if structure.verbs else "discuss"
        conj = conjugate_verb(verb)
        if conj in ("is", "was", "has"):
            conj = "discusses"
        subject = capitalize_first(topic)
        if structure.first_word in ("this", "the", "these", "those"):
            if structure.verbs and structure.verbs[0][1] < 3:
                sentence = f"{subject} {conj} key information presented."
            else:
                prep = structure.prepositions[0][0] if structure.prepositions else "in"
                sentence = f"{subject} {prep} this context provides important insights."
        elif len(structure.verbs) > 1:
            sentence = f"{subject} {conj} how information can be effectively processed."
        else:
            sentence = f"{subject} {conj} concepts from various perspectives."
        return clean_text(sentence)

    def adapt_sentence(self, analysis: ContentAnalysis) -> str:
        verb = self.rng.choice(analysis.action_verbs) if analysis.action_verbs else "present"
        topic = analysis.key_topics[0] if analysis.key_topics else "information"
        return f"{capitalize_first(topic)} {conjugate_verb(verb)} important concepts in context."

    def extract_key(self, sentences: Sequence[str], position: int) -> str:
        if not sentences:
            return FALLBACK_SENTENCE
        if position < 0:
            idx = max(0, len(sentences) + position)
        else:
            idx = min(position, len(sentences) - 1)
        return self.rewrite_adaptively(sentences[idx], ContentAnalysis(), (), set())

    def generate_dynamic_sentence(self, base: str, topics: Sequence[str], used_phrases: Set[str],
                                  original_sentences: Sequence[str], analysis: ContentAnalysis) -> str:
        unused = [t for t in topics if t not in used_phrases]
        if not unused:
            return self.rewrite_adaptively(base, ContentAnalysis(), topics, used_phrases)

        topic = unused[0]
        used_phrases.add(topic)
        structures = extract_sentence_structures(original_sentences[:5])
        if structures:
            return self.apply_sentence_structure(self.rng.choice(structures), topic, analysis)

        match = _BASE_VERB_RE.search(base)
        if match:
            verb = match.group(0).lower()
        elif analysis.action_verbs:
            verb = conjugate_verb(analysis.action_verbs[0])
        else:
            verb = "relates to"
        return clean_text(f"{capitalize_first(topic)} {verb} key concepts in this content.")

    def generate_adaptive_summary(self, sentences: Sequence[str], analysis: ContentAnalysis,
                                  themes: Sequence[str], sentence_count: int) -> str:
        """Intro from a topic, body from distinct insights, conclusion from the text's own ending."""
        used: Set[str] = set()
        preserved = {e.lower() for e in analysis.main_entities}
        sections = segment_into_sections(sentences)
        topics = list(themes) if themes else list(analysis.key_topics)
        # drop topics that are only fragments of a protected entity
        topics = [t for t in topics
                  if not any(t.lower() in e and e != t.lower() for e in preserved)]

        intro = ""
        if sentences:
            structures = extract_sentence_structures(sentences[:3])
            if topics and structures:
                intro = self.apply_sentence_structure(self.rng.choice(structures), topics[0], analysis)
                used.add(topics[0])
            elif structures:
                intro = self.adapt_sentence(analysis)
            else:
                intro = self.extract_key(sentences, 0)

        insights = self.extract_distinct_insights(sections, topics, used)
        body = []
        for insight in insights[:max(1, sentence_count - 2)]:
            if assess_confidence(insight, analysis) > BODY_CONFIDENCE:
                body.append(self.rewrite_adaptively(insight, analysis, topics, used))
            else:
                body.append(self.generate_dynamic_sentence(insight, topics, used, sentences, analysis))

        conclusion = self._conclusion(sentences, analysis, topics, used)
        raw = " ".join(part for part in [intro, *body, conclusion] if part)
        return improve_text_quality(raw)

    def _conclusion(self, sentences: Sequence[str], analysis: ContentAnalysis,
                    topics: Sequence[str], used: Set[str]) -> str:
        actual = next((s for s in sentences[-2:] if _CONCLUSION_RE.search(s)), None)
        if actual:
            return self.rewrite_adaptively(actual, analysis, topics, used)
        unused = next((t for t in topics if t not in used), "")
        if unused:
            structures = extract_sentence_structures(sentences[-3:])
            if structures:
                return self.apply_sentence_structure(self.rng.choice(structures), unused, analysis)
        return self.extract_key(sentences, -1)

    def generate_adaptive_biography(self, sentences: Sequence[str], analysis: ContentAnalysis) -> str:
        """Summary centred on the most mentioned person."""
        if not analysis.main_entities:
            return self.generate_adaptive_summary(sentences, analysis, [], 3)
        person = analysis.main_entities[0]
        last_name = person.split()[-1]
        used: Set[str] = set()

        if extract_sentence_structures(sentences[:3]):
            verb = analysis.action_verbs[0] if analysis.action_verbs else "present"
            intro = f"{person} {conjugate_verb(verb)} important contributions in this context."
        else:
            about = [s for s in sentences if person in s]
            intro = (self.rewrite_adaptively(about[0], analysis, (), used) if about
                     else f"{person} is examined in this biographical content.")
        used.add(person)

        def mentions(s: str) -> bool:
            return person in s or (len(last_name) > 2 and last_name in s)

        key_bio = [s for s in sentences if (2 if mentions(s) else 0) + (1 if _BIO_RE.search(s) else 0) >= 2]
        body = [self.rewrite_adaptively(s, analysis, (), used) for s in key_bio[:2]]

        relevant = next((s for s in sentences[-2:] if person in s or last_name in s), None)
        if relevant:
            conclusion = self.rewrite_adaptively(relevant, analysis, (), used)
        else:
            impact = [s for s in sentences if _IMPACT_RE.search(s)]
            if impact:
                conclusion = self.rewrite_adaptively(self.rng.choice(impact), analysis, (), used)
                if person not in conclusion:
                    conclusion = f"{person}'s {conclusion[:1].lower()}{conclusion[1:]}"
            else:
                conclusion = self.extract_key(sentences, -1)

        return improve_text_quality(" ".join([intro, *body, conclusion]))
