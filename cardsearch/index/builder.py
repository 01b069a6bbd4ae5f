"""
One-time index construction from the loaded corpus.

Feeds the ordered card list into the prefix index, the spelling
vocabulary and the TF-IDF model. Nothing is mutated afterwards.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..models import Record
from .relevance import RelevanceModel
from .spelling import FuzzyMatcher
from .tokenizer import iter_word_tokens
from .trie import PrefixIndex

logger = logging.getLogger(__name__)


class IndexBuildError(RuntimeError):
    """Corpus could not be indexed; startup must abort"""


@dataclass(frozen=True)
class SearchIndex:
    """Read-only bundle of everything built from the corpus"""
    records: Tuple[Record, ...]
    prefix_index: PrefixIndex
    fuzzy_matcher: FuzzyMatcher
    relevance_model: RelevanceModel


def build_prefix_index(records: Sequence[Record]) -> PrefixIndex:
    """Insert the word tokens of every card's searchable text"""
    prefix_index = PrefixIndex()
    for record in records:
        for token in iter_word_tokens(record.searchable_text()):
            prefix_index.insert(token)
    return prefix_index


def build_index(records: Optional[Sequence[Record]]) -> SearchIndex:
    """
    Build prefix index, spelling vocabulary and relevance model.
    
    Args:
        records: Ordered corpus (must not be empty)
    
    Returns:
        SearchIndex ready for concurrent read-only queries
    
    Raises:
        IndexBuildError: If there are no records to index
    """
    if not records:
        raise IndexBuildError("Cannot build search index: corpus is empty")

    records = tuple(records)

    prefix_index = build_prefix_index(records)
    fuzzy_matcher = FuzzyMatcher.from_records(records)
    relevance_model = RelevanceModel.build(records)

    logger.info(
        f"Search index built: {len(records)} cards, "
        f"{len(prefix_index)} autocomplete words, "
        f"{len(fuzzy_matcher.vocabulary)} vocabulary words, "
        f"{len(relevance_model.idf)} ranking terms"
    )

    return SearchIndex(
        records=records,
        prefix_index=prefix_index,
        fuzzy_matcher=fuzzy_matcher,
        relevance_model=relevance_model,
    )
