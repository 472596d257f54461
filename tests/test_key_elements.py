"""Tests for TF-IDF, n-gram themes, entities, categories and key points."""

import math

from text_summarizer.features import (
    compute_tfidf,
    extract_quality_ngrams,
    filter_meaningful_phrases,
    relevance,
)
from text_summarizer.key_elements import (
    OTHER_CATEGORY,
    categorize,
    count_entities,
    extract_entities,
    extract_key_elements,
    extract_key_points,
)
from text_summarizer.tagging import tag_parts_of_speech

TECH_TEXT = (
    "Today machine learning powers social media feeds. "
    "Engineers tune machine learning models for social media apps. "
    "Critics say social media and machine learning need rules."
)


class TestTfidf:
    """Each sentence is one document; IDF is ln(N / (df + 1))."""

    def test_rare_term(self):
        tagged = tag_parts_of_speech("Machine learning improves. Machine learning needs data. Cooking is fun.")
        tfidf = compute_tfidf(tagged)
        assert tfidf["cooking"] == math.log(3 / 2)
        assert tfidf["machine"] == 0.0

    def test_ubiquitous_term_is_negative(self):
        tagged = tag_parts_of_speech("Data matters a lot. Data drives choices.")
        assert compute_tfidf(tagged)["data"] < 0

    def test_stopwords_and_short_terms_skipped(self):
        tfidf = compute_tfidf(tag_parts_of_speech("It is an ox in the barn."))
        assert "is" not in tfidf
        assert "ox" not in tfidf
        assert "barn" in tfidf


class TestPhrases:
    """Quality filters on n-gram candidates."""

    def test_quality_bigrams(self):
        tagged = tag_parts_of_speech("The quick analysis of data is useful.")
        assert extract_quality_ngrams(tagged, 2) == {"quick analysis": 1}

    def test_bigram_of_suffix_adjectives_after_determiner(self):
        tagged = tag_parts_of_speech("The team found critical essential results.")
        assert "critical essential" in extract_quality_ngrams(tagged, 2)

    def test_filter_meaningful_phrases(self):
        candidates = [("ab", 1), ("of the", 1), ("machine of", 1), ("machine learning", 2)]
        assert filter_meaningful_phrases(candidates, 2) == [("machine learning", 2)]

    def test_relevance_is_clamped(self):
        assert relevance(10, 1, 10) == 5
        assert relevance(0.01, 1, 10) == 1
        assert relevance(-3, 1, 10) == 1
        assert relevance(100, 4, 10) == 5


class TestCategories:
    """First matching category wins."""

    def test_technology_terms(self):
        assert categorize("machine learning") == "technology"
        assert categorize("social media platforms") == "technology"

    def test_communication_terms(self):
        assert categorize("news coverage") == "communication"

    def test_unmatched_is_other(self):
        assert categorize("quantum chromodynamics") == OTHER_CATEGORY

    def test_tech_paragraph_lands_in_technology(self):
        elements = extract_key_elements(TECH_TEXT)
        tech = [item.text.lower() for item in elements.categories["technology"]]
        assert "machine learning" in tech
        assert "social media" in tech


class TestEntities:
    """Capitalised runs plus a gazetteer of technical terms."""

    def test_proper_noun_runs(self):
        tagged = tag_parts_of_speech("Alice Johnson met Bob Smith in Paris. Later Alice Johnson returned home.")
        texts = [e.text for e in extract_entities(tagged)]
        assert "Bob Smith" in texts
        assert "Paris" in texts
        assert "Alice Johnson" in texts

    def test_gazetteer_matches_whole_words(self):
        counts = count_entities(tag_parts_of_speech("She said hello to everyone today."))
        assert "ai" not in counts

    def test_gazetteer_term_counted(self):
        counts = count_entities(tag_parts_of_speech("We study machine learning daily. It works."))
        assert counts["machine learning"] == 1

    def test_relevance_from_count(self):
        tagged = tag_parts_of_speech("We met Paris today. We met Paris again.")
        paris = next(e for e in extract_entities(tagged) if e.text == "Paris")
        assert paris.relevance == 4


class TestKeyPoints:
    """Position, keyword and length scoring; at most five, in source order."""

    def test_animals(self, animals):
        elements = extract_key_elements(animals)
        assert elements.key_points == [
            "Cats are mammals.", "Dogs are mammals.", "Birds can fly.", "Fish live in water.",
        ]

    def test_limit_and_order(self, article):
        points = extract_key_points(article, ["renewable energy", "grid"])
        assert 0 < len(points) <= 5
        positions = [article.index(p) for p in points]
        assert positions == sorted(positions)

    def test_first_sentence_always_scores(self, article):
        points = extract_key_points(article, [])
        assert points[0].startswith("Renewable energy is reshaping")


class TestKeyElements:
    """Themes, terms and categories together."""

    def test_themes_sorted_by_relevance(self, article):
        elements = extract_key_elements(article)
        relevances = [t.relevance for t in elements.themes]
        assert relevances == sorted(relevances, reverse=True)
        assert all(1 <= r <= 5 for r in relevances)

    def test_terms_skip_top_three(self, article):
        elements = extract_key_elements(article)
        assert len(elements.terms) <= 9

    def test_every_item_categorized(self, article):
        elements = extract_key_elements(article)
        categorized = sum(len(items) for items in elements.categories.values())
        assert categorized == len(elements.themes) + len(elements.entities)
