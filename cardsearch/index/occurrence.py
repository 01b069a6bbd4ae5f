"""
Substring-occurrence scoring behind the ranked search results view.

This is a second, independent TF-IDF flavour kept for compatibility with
the page-ranking endpoint. It differs from RelevanceModel on purpose:
- terms are raw whitespace-split query pieces
- tf = literal substring occurrences / whitespace token count of the card
- scores are summed, not cosine-normalised

IDF reuses the model's cached document frequencies instead of rescanning
every card for every query term.
"""

import math
from dataclasses import dataclass
from typing import List

from ..models import Record
from .relevance import RelevanceModel


@dataclass(frozen=True)
class OccurrenceScore:
    relevance: float
    occurrences: int


def count_occurrences(content: str, term: str) -> int:
    """
    Non-overlapping literal occurrences of term in content.
    
    >>> count_occurrences("travel rewards, travel perks", "travel")
    2
    >>> count_occurrences("aaaa", "aa")
    2
    """
    if not term:
        return 0
    return content.count(term)


def score_occurrences(record: Record, terms: List[str], model: RelevanceModel) -> OccurrenceScore:
    """
    Score one card against raw query terms.
    
    Args:
        record: Card to score
        terms: Lowercase whitespace-split query terms (duplicates count twice)
        model: Built relevance model, source of N and df(term)
    
    Returns:
        OccurrenceScore with summed tf × idf and total substring hits
    """
    content = record.searchable_text().lower()
    token_count = len(content.split()) or 1

    relevance = 0.0
    occurrences = 0
    for term in terms:
        count = count_occurrences(content, term)
        occurrences += count
        if count == 0:
            continue

        # A substring hit with no exact token match has df = 0; it adds
        # nothing rather than an infinite idf
        df = model.document_frequency(term)
        if df == 0:
            continue

        tf = count / token_count
        idf = math.log(model.document_count / df)
        relevance += tf * idf

    return OccurrenceScore(relevance=relevance, occurrences=occurrences)
