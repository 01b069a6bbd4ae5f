"""
In-memory text index for credit card search.

Components:
- tokenizer: word tokens (ranking, autocomplete) and letters-only tokens (spelling)
- trie: PrefixIndex for autocompletion
- spelling: FuzzyMatcher with Levenshtein distance and word frequencies
- relevance: TF-IDF vectors with cosine-similarity ranking
- occurrence: substring-occurrence scoring for ranked search results
- builder: build_index() wiring all of the above from one corpus snapshot

Build once, query many: every structure is immutable after build_index()
returns, so request handlers can share it without locks.
"""

from .tokenizer import iter_word_tokens, iter_letter_tokens, split_query_terms
from .trie import PrefixIndex
from .spelling import FuzzyMatcher, levenshtein_distance
from .relevance import RelevanceModel, DocumentVector
from .occurrence import OccurrenceScore, score_occurrences
from .builder import SearchIndex, IndexBuildError, build_index

__all__ = [
    "iter_word_tokens",
    "iter_letter_tokens",
    "split_query_terms",
    "PrefixIndex",
    "FuzzyMatcher",
    "levenshtein_distance",
    "RelevanceModel",
    "DocumentVector",
    "OccurrenceScore",
    "score_occurrences",
    "SearchIndex",
    "IndexBuildError",
    "build_index",
]
