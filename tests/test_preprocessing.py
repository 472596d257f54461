"""Tests for sentence splitting, tokenization and POS tagging."""

from text_summarizer.config import PreprocessConfig
from text_summarizer.datatypes import PosTag
from text_summarizer.preprocessing import iter_sentences, preprocess_text, split_sentences, tokenize
from text_summarizer.tagging import sentence_spans, tag_sentence, tag_word


class TestSentenceSplitting:
    """Split on terminal punctuation before a capital letter, or on newlines."""

    def test_splits_on_period_before_capital(self, animals):
        assert split_sentences(animals) == [
            "Cats are mammals.", "Dogs are mammals.", "Birds can fly.", "Fish live in water.",
        ]

    def test_drops_short_pieces(self):
        assert split_sentences("Hi. This sentence is long enough.") == ["This sentence is long enough."]

    def test_splits_on_newlines(self):
        assert split_sentences("First line here\n\nSecond line here") == ["First line here", "Second line here"]

    def test_no_split_before_lowercase(self):
        text = "It costs 3.5 dollars today. then more text follows"
        assert split_sentences(text) == [text]

    def test_empty_text_yields_nothing(self):
        assert split_sentences("") == []

    def test_iteration_is_restartable(self, animals):
        assert list(iter_sentences(animals)) == list(iter_sentences(animals))

    def test_min_length_is_configurable(self):
        cfg = PreprocessConfig(min_sentence_length=2)
        assert split_sentences("Hi there. Go now.", cfg) == ["Hi there.", "Go now."]


class TestTokenize:
    """Similarity tokens are lowercase, punctuation-free and stopword-free."""

    def test_strips_punctuation_and_stopwords(self):
        assert tokenize("The Cats, are mammals!") == ["cats", "mammals"]

    def test_can_is_a_stopword(self):
        assert tokenize("Birds can fly.") == ["birds", "fly"]

    def test_keeps_stopwords_when_disabled(self):
        cfg = PreprocessConfig(remove_stopwords=False)
        assert tokenize("The cats sleep.", cfg) == ["the", "cats", "sleep"]

    def test_preprocess_numbers_sentences(self, animals):
        doc = preprocess_text(animals)
        assert [s.idx for s in doc.sentences] == [0, 1, 2, 3]
        assert doc.sentences[3].tokens == ["fish", "live", "water"]
        assert doc.raw_text == animals


class TestTagging:
    """Rule order: proper noun, noun suffix, after determiner, adjective suffix, determiner, stopword."""

    def test_capitalized_after_start_is_proper_noun(self):
        assert tag_word("Paris", 2, None) is PosTag.PROPN

    def test_capitalized_at_start_is_not_proper_noun(self):
        assert tag_word("Paris", 0, None) is not PosTag.PROPN

    def test_noun_suffix(self):
        assert tag_word("information", 0, None) is PosTag.NOUN

    def test_word_after_determiner_is_noun(self):
        assert tag_word("quick", 2, PosTag.DET) is PosTag.NOUN

    def test_determiner_carries_through_sentence(self):
        tagged = tag_sentence("The team found critical essential results.")
        assert [w.tag for w in tagged.words] == [PosTag.DET] + [PosTag.NOUN] * 5

    def test_determiner_carries_past_stopword(self):
        tagged = tag_sentence("The careful builder is helpful.")
        assert tagged.words[3].tag is PosTag.STOP
        assert tagged.words[4].tag is PosTag.NOUN

    def test_adjective_suffix(self):
        assert tag_word("beautiful", 2, None) is PosTag.ADJ

    def test_determiner_and_stopword(self):
        assert tag_word("the", 1, None) is PosTag.DET
        assert tag_word("is", 2, None) is PosTag.STOP

    def test_first_plain_word_is_other(self):
        assert tag_word("run", 0, None) is PosTag.OTHER

    def test_tag_sentence_flags(self):
        tagged = tag_sentence("The Model works.")
        assert [w.word for w in tagged.words] == ["The", "Model", "works"]
        assert tagged.words[0].is_sentence_start
        assert tagged.words[1].is_capitalized
        assert tagged.words[0].is_stopword

    def test_sentence_spans_drop_unterminated_tail(self):
        assert sentence_spans("One sentence. A trailing fragment") == ["One sentence."]
