"""
Card search service: attribute filters, relevance ranking, autocomplete,
spelling suggestions and search-history recording over a built SearchIndex.

Stateless apart from the injected SearchHistory; the index is read-only.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from .index import SearchIndex, score_occurrences, split_query_terms
from .models import Record, parse_fee, parse_rate_percent
from .search_history import SearchHistory

logger = logging.getLogger(__name__)


def _in_range(value: float, minimum: Optional[float], maximum: Optional[float]) -> bool:
    if minimum is not None and value < minimum:
        return False
    if maximum is not None and value > maximum:
        return False
    return True


class CardSearchService:
    """Query facade used by the HTTP layer"""

    def __init__(self, index: SearchIndex, history: Optional[SearchHistory] = None):
        self.index = index
        self.history = history if history is not None else SearchHistory()

    # ---- corpus and filters ---------------------------------------------

    def all_cards(self) -> List[Record]:
        return list(self.index.records)

    def filter_by_bank(self, cards: Sequence[Record], bank_name: str) -> List[Record]:
        """Exact bank name match, case-insensitive, surrounding whitespace ignored"""
        wanted = bank_name.strip().lower()
        return [card for card in cards if card.bank_name.strip().lower() == wanted]

    def filter_by_annual_fee(
        self,
        cards: Sequence[Record],
        min_fee: Optional[float],
        max_fee: Optional[float],
    ) -> List[Record]:
        """Keep cards whose annual fee is within [min_fee, max_fee] (None = open bound)"""
        return self._filter_numeric(cards, "annual fee", lambda card: card.annual_fee, parse_fee, min_fee, max_fee)

    def filter_by_purchase_rate(
        self,
        cards: Sequence[Record],
        min_rate: Optional[float],
        max_rate: Optional[float],
    ) -> List[Record]:
        """Keep cards whose purchase rate, in percent, is within [min_rate, max_rate]"""
        return self._filter_numeric(
            cards, "purchase interest rate", lambda card: card.purchase_rate, parse_rate_percent, min_rate, max_rate
        )

    def _filter_numeric(
        self,
        cards: Sequence[Record],
        label: str,
        raw_value: Callable[[Record], str],
        parse: Callable[[str], float],
        minimum: Optional[float],
        maximum: Optional[float],
    ) -> List[Record]:
        if minimum is None and maximum is None:
            return list(cards)

        kept = []
        for card in cards:
            try:
                value = parse(raw_value(card))
            except ValueError:
                logger.warning(f"Invalid {label} format for '{card.title}': {raw_value(card)!r}")
                continue
            if _in_range(value, minimum, maximum):
                kept.append(card)
        return kept

    # ---- ranking --------------------------------------------------------

    def rank(self, cards: Sequence[Record], query: Optional[str] = "") -> List[Record]:
        """Cosine TF-IDF ranking; blank query returns cards unchanged"""
        return self.index.relevance_model.rank(cards, query)

    def search(self, cards: Sequence[Record], term: Optional[str]) -> List[Record]:
        """Record the search term, then rank cards against it"""
        if term is None or not term.strip():
            return list(cards)
        self.history.record_search(term)
        return self.rank(cards, term)

    def find_cards(
        self,
        bank_name: Optional[str] = None,
        min_fee: Optional[float] = None,
        max_fee: Optional[float] = None,
        min_interest: Optional[float] = None,
        max_interest: Optional[float] = None,
        search: Optional[str] = None,
    ) -> List[Record]:
        """
        Listing pipeline: bank → annual fee → purchase rate → text search.
        
        Each filter is applied only when its parameter is given. A non-blank
        search term is recorded in the history and ranks the remaining cards.
        """
        cards = self.all_cards()

        if bank_name is not None:
            cards = self.filter_by_bank(cards, bank_name)
        if min_fee is not None or max_fee is not None:
            cards = self.filter_by_annual_fee(cards, min_fee, max_fee)
        if min_interest is not None or max_interest is not None:
            cards = self.filter_by_purchase_rate(cards, min_interest, max_interest)
        if search is not None and search.strip():
            cards = self.search(cards, search.strip().lower())

        return cards

    def ranked_search_results(self, term: str) -> Dict[str, Any]:
        """
        Page-ranking view: cosine-matched cards re-ordered by substring
        occurrence TF-IDF.
        
        Returns:
            {"searchTerm": term, "results": [{"title", "bank", "url",
            "relevance", "occurrences"}, ...]}
        """
        model = self.index.relevance_model
        candidates = self.search(self.all_cards(), term)
        terms = split_query_terms(term)

        scored = [(card, score_occurrences(card, terms, model)) for card in candidates]
        # Stable sort: equal relevance keeps the cosine order
        scored.sort(key=lambda item: item[1].relevance, reverse=True)

        return {
            "searchTerm": term,
            "results": [
                {
                    "title": card.title,
                    "bank": card.bank_name,
                    "url": card.link,
                    "relevance": score.relevance,
                    "occurrences": score.occurrences,
                }
                for card, score in scored
            ],
        }

    # ---- words ----------------------------------------------------------

    def autocomplete(self, prefix: str) -> List[str]:
        return self.index.prefix_index.search_prefix(prefix.lower())

    def spelling_suggestions(self, word: str, max_distance: int = 2, max_suggestions: int = 3) -> List[str]:
        return self.index.fuzzy_matcher.get_suggestions(word, max_distance, max_suggestions)

    def word_frequency(self, word: str) -> int:
        return self.index.fuzzy_matcher.get_word_frequency(word)
