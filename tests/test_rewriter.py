"""Tests for text cleanup, adaptive rewriting and the rule-based LLM handler."""

import random

from text_summarizer.analysis import ContentAnalysis, analyze_text, assess_confidence, detect_content_type
from text_summarizer.datatypes import KeyElements, ScoredTerm
from text_summarizer.llm_handler import LLMHandler, extract_prompt_text
from text_summarizer.rewriter import (
    REMOVABLE_PHRASES,
    SENTENCE_STARTERS,
    TextRewriter,
    basic_cleanup,
    clean_text,
    conjugate_verb,
    improve_text_quality,
    protect_entities,
    remove_filler_phrases,
    restore_entities,
    sentence_signature,
    split_sentences,
)

BIOGRAPHY = (
    "Marie Curie was born in Warsaw in 1867. "
    "Marie Curie moved to Paris to study physics. "
    "Her career focused on radioactivity research. "
    "Curie won two Nobel prizes during her life. "
    "Marie Curie remains an important figure in science."
)


class TestCleanup:
    """Filler removal and punctuation fixes."""

    def test_removes_filler(self):
        text = remove_filler_phrases("It is important to note that cats purr.", REMOVABLE_PHRASES)
        assert clean_text(text) == "Cats purr."

    def test_basic_cleanup(self):
        assert basic_cleanup("It should be noted that the system works .") == "The system works."

    def test_clean_text_adds_period(self):
        assert clean_text("hello   world") == "Hello world."

    def test_clean_text_empty(self):
        assert clean_text("") == ""

    def test_conjugate_verb(self):
        assert conjugate_verb("discuss") == "discusses"
        assert conjugate_verb("are") == "is"
        assert conjugate_verb("is") == "is"
        assert conjugate_verb("described") == "describes"
        assert conjugate_verb("relates to") == "relates to"


class TestEntityProtection:
    """Entities survive rewriting untouched."""

    def test_longest_entity_first(self):
        text, placeholders = protect_entities("Ada Lovelace met Ada.", ["Ada", "Ada Lovelace"])
        assert text == "__ENTITY_0__ met __ENTITY_1__."
        assert restore_entities(text, placeholders) == "Ada Lovelace met Ada."

    def test_entity_kept_through_rewrite(self, rewriter):
        analysis = ContentAnalysis(main_entities=["Apollo"])
        sentence = "It is important to note that Apollo engineers coordinated complex launch systems"
        result = rewriter.rewrite_adaptively(sentence, analysis, [], set())
        assert result == "Apollo engineers coordinated complex launch systems."
        assert "important to note" not in result.lower()


class TestDeduplication:
    """Near-duplicate sentences share their first five long words."""

    def test_signature(self):
        assert sentence_signature("The quick brown foxes jumped over lazy dogs") == "quick brown foxes jumped over"

    def test_duplicate_without_determiner_dropped(self):
        text = ("Large documents load quickly every single day. "
                "Large documents load quickly every single night. "
                "Cats sleep a lot during the day.")
        assert improve_text_quality(text) == (
            "Large documents load quickly every single day. Cats sleep a lot during the day.")

    def test_determiner_duplicate_kept_when_no_pattern_applies(self):
        text = ("The system handles large documents quickly and well. "
                "The system handles large documents quickly in practice. "
                "Cats sleep a lot during the day.")
        assert improve_text_quality(text) == text

    def test_duplicate_restructured(self):
        text = "The engine is very fast under heavy load. The engine is very fast under heavy stress."
        assert improve_text_quality(text) == (
            "The engine is very fast under heavy load. It is very fast under heavy stress.")

    def test_transition_sentences_dropped(self):
        text = "However, the plan failed badly. The team recovered quickly afterwards."
        assert improve_text_quality(text) == "The team recovered quickly afterwards."


class TestAdaptiveRewrite:
    """Rewrite strength follows sentence confidence."""

    def test_high_confidence_unchanged(self, rewriter):
        analysis = ContentAnalysis(main_entities=["Apollo"], key_positions=[0])
        sentence = "Specifically, the Apollo program demonstrates clearly how engineering teams coordinate."
        assert assess_confidence(sentence, analysis) > 0.7
        assert rewriter.rewrite_adaptively(sentence, analysis, [], set()) == sentence

    def test_medium_confidence_strips_filler(self, rewriter):
        sentence = "It is important to note that the method works on large inputs."
        assert rewriter.rewrite_adaptively(sentence) == "The method works on large inputs."

    def test_medium_confidence_varies_opener(self, rewriter):
        result = rewriter.rewrite_adaptively("This text discusses the economic history of Europe carefully.")
        assert result.startswith(SENTENCE_STARTERS)
        assert "economic history of Europe" in result

    def test_low_confidence_uses_topic(self, rewriter):
        used = set()
        result = rewriter.rewrite_adaptively("maybe stuff happens", ContentAnalysis(), ["renewable energy"], used)
        assert "renewable energy" in result.lower()
        assert used == {"renewable energy"}

    def test_seeded_output_is_repeatable(self, article):
        sentences = split_sentences(article)
        analysis = analyze_text(article, sentences)
        first = TextRewriter(random.Random(3)).generate_adaptive_summary(sentences, analysis, [], 3)
        second = TextRewriter(random.Random(3)).generate_adaptive_summary(sentences, analysis, [], 3)
        assert first == second
        assert first

    def test_biography_mentions_person(self, rewriter):
        sentences = split_sentences(BIOGRAPHY)
        analysis = analyze_text(BIOGRAPHY, sentences)
        assert analysis.main_entities[0] == "Marie Curie"
        assert "Marie Curie" in rewriter.generate_adaptive_biography(sentences, analysis)


class TestContentAnalysis:
    """Content type detection."""

    def test_biographical(self):
        assert detect_content_type(BIOGRAPHY) == "biographical"

    def test_technical(self):
        text = "The system stores data. The algorithm sorts data. Software uses technology well."
        assert detect_content_type(text) == "technical"

    def test_general(self):
        assert detect_content_type("Cats sleep. Dogs play.") == "general"


class TestLLMHandler:
    """Prompt construction and processing."""

    def test_extract_prompt_text(self):
        assert extract_prompt_text("Improve this: a, b.\n\nSummary: Hello there.") == "Hello there."
        assert extract_prompt_text("Summarize:\n\nBody text.") == "Body text."
        assert extract_prompt_text("just text") == "just text"

    def test_processing_delay(self, rewriter, article):
        waits = []
        LLMHandler(rewriter, wait=waits.append).generate_summary(article)
        assert waits == [0.3]

    def test_enhance_uses_themes(self, rewriter):
        summary = ("Solar panels are cheaper than ever before. "
                   "Many homes now use rooftop panels for electricity. "
                   "Governments offer incentives for clean energy adoption.")
        elements = KeyElements(themes=[ScoredTerm("solar power", 5)])
        result = LLMHandler(rewriter).enhance_summary(summary, elements)
        assert "solar power" in result.lower()

    def test_empty_prompt_text(self, rewriter):
        assert LLMHandler(rewriter).transform_summary("") == ""
