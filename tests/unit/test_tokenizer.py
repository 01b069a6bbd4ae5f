"""
Unit tests for word, letters-only and query tokenizers.
"""

import types

from cardsearch.index.tokenizer import iter_letter_tokens, iter_word_tokens, split_query_terms


class TestWordTokens:
    """Alphanumeric/underscore runs, lowercased"""

    def test_basic_tokenization(self):
        """Test words are lowercased and punctuation dropped"""
        assert list(iter_word_tokens("Travel Rewards, Card!")) == ["travel", "rewards", "card"]

    def test_digits_and_underscore_kept(self):
        """Test digits and underscores stay inside tokens"""
        assert list(iter_word_tokens("3X points no_fee")) == ["3x", "points", "no_fee"]

    def test_decimal_splits(self):
        """Test that a decimal point splits a number"""
        assert list(iter_word_tokens("1.5% cash-back")) == ["1", "5", "cash", "back"]

    def test_empty_input(self):
        """Test empty and None input yield nothing"""
        assert list(iter_word_tokens("")) == []
        assert list(iter_word_tokens(None)) == []
        assert list(iter_word_tokens("  !! ")) == []

    def test_lazy(self):
        """Test tokens are produced lazily"""
        tokens = iter_word_tokens("a b c")
        assert isinstance(tokens, types.GeneratorType)
        assert next(tokens) == "a"


class TestLetterTokens:
    """Whole words of ASCII letters only"""

    def test_words_with_digits_dropped(self):
        """Test letters glued to digits are not tokens"""
        assert list(iter_letter_tokens("Earn 3x points, 10k bonus, no_fee")) == ["earn", "points", "bonus"]

    def test_punctuation_splits(self):
        """Test punctuation separates words"""
        assert list(iter_letter_tokens("3X Points, 1.5% cash-back")) == ["points", "cash", "back"]

    def test_underscore_joins(self):
        """Test an underscore word is not a letters-only token"""
        assert list(iter_letter_tokens("no_fee")) == []

    def test_differs_from_word_tokens(self):
        """Test the two token universes differ on alphanumerics"""
        text = "Earn 3x points"
        assert "3x" in list(iter_word_tokens(text))
        assert "3x" not in list(iter_letter_tokens(text))


class TestQueryTerms:
    """Whitespace split for queries"""

    def test_whitespace_split(self):
        """Test runs of whitespace collapse"""
        assert split_query_terms("  Travel \t Rewards\n") == ["travel", "rewards"]

    def test_punctuation_kept(self):
        """Test punctuation stays attached to the term"""
        assert split_query_terms("cash-back!") == ["cash-back!"]

    def test_blank(self):
        """Test blank query gives no terms"""
        assert split_query_terms("   ") == []
        assert split_query_terms(None) == []
