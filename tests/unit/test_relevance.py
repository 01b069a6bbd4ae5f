"""
Unit tests for the TF-IDF cosine relevance model.
"""

import math

import pytest

from cardsearch.index.relevance import RelevanceModel
from cardsearch.models import Record
from cards import CASH_BACK, PREMIUM_TRAVEL, STUDENT, TRAVEL_REWARDS


@pytest.fixture
def model(sample_records):
    return RelevanceModel.build(sample_records)


class TestBuild:
    """Test IDF table and document vectors"""

    def test_idf_values(self, model):
        """Test idf = ln(N / df)"""
        assert model.document_count == 4
        assert model.idf["travel"] == pytest.approx(math.log(4 / 2))
        assert model.idf["rewards"] == pytest.approx(math.log(4))
        assert model.document_frequency("chase") == 2

    def test_idf_zero_iff_in_every_record(self, model):
        """Test only terms present in all cards get idf 0"""
        for term, value in model.idf.items():
            assert value >= 0
            if value == 0:
                assert model.document_frequency(term) == model.document_count
            else:
                assert model.document_frequency(term) < model.document_count

        assert model.idf["card"] == 0

    def test_document_vector(self, model):
        """Test weights are tf × idf and the norm matches"""
        vector = model.vector_for(TRAVEL_REWARDS)

        assert vector.weights["travel"] == pytest.approx(2 * math.log(2))
        assert vector.weights["3x"] == pytest.approx(math.log(4))
        assert vector.norm == pytest.approx(math.sqrt(sum(w * w for w in vector.weights.values())))

    def test_unknown_record_has_no_vector(self, model):
        """Test records outside the corpus have no vector"""
        assert model.vector_for(Record(title="Unknown")) is None
        assert model.cosine_similarity(Record(title="Unknown"), "travel") is None

    def test_idf_read_only(self, model):
        """Test the IDF table cannot be mutated"""
        with pytest.raises(TypeError):
            model.idf["travel"] = 1.0


class TestRank:
    """Test cosine ranking"""

    def test_two_card_example(self):
        """Test travel query ranks the travel card and drops the cash card"""
        travel = Record(title="Travel Rewards Card", bank_name="Chase")
        cash = Record(title="Cash Back Card", bank_name="Chase")
        model = RelevanceModel.build([travel, cash])

        assert model.cosine_similarity(travel, "travel rewards") > 0
        assert model.cosine_similarity(cash, "travel rewards") == 0
        assert model.rank([travel, cash], "travel rewards") == [travel]
        assert model.rank([cash, travel], "travel rewards") == [travel]

    def test_ranking_order(self, model, sample_records):
        """Test more relevant cards come first"""
        assert model.rank(sample_records, "travel rewards") == [TRAVEL_REWARDS, PREMIUM_TRAVEL]
        assert model.rank(sample_records, "travel") == [PREMIUM_TRAVEL, TRAVEL_REWARDS]

    def test_blank_query_returns_input(self, model, sample_records):
        """Test blank query is a no-op"""
        reversed_records = list(reversed(sample_records))

        assert model.rank(reversed_records, "") == reversed_records
        assert model.rank(reversed_records, "   ") == reversed_records
        assert model.rank(reversed_records, None) == reversed_records

    def test_unknown_terms_score_zero(self, model, sample_records):
        """Test terms absent from the corpus match nothing"""
        assert model.rank(sample_records, "mortgage") == []

    def test_term_in_every_card_scores_zero(self, model, sample_records):
        """Test idf 0 terms give zero query norm"""
        assert model.rank(sample_records, "card") == []

    def test_query_is_whitespace_split(self, model, sample_records):
        """Test punctuation attached to a query term prevents a match"""
        assert model.rank(sample_records, "travel!") == []
        assert model.rank(sample_records, "TRAVEL") == [PREMIUM_TRAVEL, TRAVEL_REWARDS]

    def test_unknown_candidates_skipped(self, model):
        """Test candidates missing from the corpus are not scored"""
        stranger = Record(title="Travel Travel Travel")

        assert model.rank([stranger, TRAVEL_REWARDS], "travel") == [TRAVEL_REWARDS]

    def test_subset_ranking(self, model):
        """Test ranking a filtered subset only returns members of it"""
        # Same matching weights; the shorter student card has the smaller norm
        assert model.rank([CASH_BACK, STUDENT], "annual fee") == [STUDENT, CASH_BACK]
        assert model.rank([CASH_BACK], "travel") == []

    def test_ties_keep_corpus_order(self):
        """Test equal scores fall back to corpus order"""
        first = Record(title="Lounge Card", link="https://example.com/1")
        second = Record(title="Lounge Card", link="https://example.com/2")
        other = Record(title="Gas Card")
        model = RelevanceModel.build([first, second, other])

        assert model.rank([second, other, first], "lounge") == [first, second]

    def test_similarity_bounds(self, model, sample_records):
        """Test cosine similarity stays within [0, 1]"""
        queries = ["travel", "travel rewards", "no annual fee", "chase chase", "lounge access", "x"]
        for record in sample_records:
            for query in queries:
                similarity = model.cosine_similarity(record, query)
                assert 0.0 <= similarity <= 1.0

    def test_self_similarity(self, model):
        """Test a card's own text scores ~1 against itself"""
        similarity = model.cosine_similarity(
            PREMIUM_TRAVEL, "premium travel card luxury travel perks travel credit and lounge access american express"
        )
        assert similarity == pytest.approx(1.0)
