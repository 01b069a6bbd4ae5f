"""
Spelling suggestions over the card vocabulary.

Vocabulary and word counts come from the letters-only tokens of each
card's title, value proposition, benefits and bank name.

Suggestion lookup scans the whole vocabulary (O(|V|) distance checks per
call, pruned by length difference). That is fine for a corpus of a few
hundred cards but does not scale to large vocabularies.
"""

import logging
from collections import Counter
from typing import Dict, FrozenSet, Iterable, List

from ..models import Record
from .tokenizer import iter_letter_tokens

logger = logging.getLogger(__name__)


def levenshtein_distance(word1: str, word2: str) -> int:
    """
    Minimum number of single-character inserts, deletes and substitutions
    turning word1 into word2.
    
    Classic dynamic program kept to two rows, O(len1 * len2) time and
    O(min(len1, len2)) space.
    
    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "abc")
        3
    """
    if len(word1) < len(word2):
        word1, word2 = word2, word1

    previous = list(range(len(word2) + 1))
    for i, c1 in enumerate(word1, start=1):
        current = [i]
        for j, c2 in enumerate(word2, start=1):
            if c1 == c2:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current

    return previous[-1]


class FuzzyMatcher:
    """
    Vocabulary plus word frequencies with edit-distance lookup.
    
    Immutable after construction.
    """

    def __init__(self, word_counts: Dict[str, int]):
        self._word_counts: Dict[str, int] = dict(word_counts)
        self._vocabulary: FrozenSet[str] = frozenset(self._word_counts)

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "FuzzyMatcher":
        """Count letters-only tokens across the indexed text fields of every record"""
        counts: Counter = Counter()
        for record in records:
            for field in (record.title, record.value_prop, record.benefits, record.bank_name):
                counts.update(iter_letter_tokens(field))

        logger.debug(f"Built spelling vocabulary: {len(counts)} words, {sum(counts.values())} tokens")
        return cls(counts)

    @property
    def vocabulary(self) -> FrozenSet[str]:
        return self._vocabulary

    def get_suggestions(self, word: str, max_distance: int = 2, max_suggestions: int = 3) -> List[str]:
        """
        Find vocabulary words within max_distance edits of word.
        
        Candidates whose length differs from the word by more than
        max_distance are skipped without computing a distance. Matches are
        ordered by (distance, word) and truncated to max_suggestions, so
        the closest words always come first.
        
        Args:
            word: Possibly misspelled word (case-insensitive)
            max_distance: Largest accepted edit distance
            max_suggestions: Maximum number of words returned
            
        Returns:
            Suggested words, closest first (empty if none qualify)
        """
        if max_distance < 0 or max_suggestions <= 0:
            return []

        target = word.lower()
        matches = []
        for candidate in self._vocabulary:
            if abs(len(candidate) - len(target)) > max_distance:
                continue
            distance = levenshtein_distance(target, candidate)
            if distance <= max_distance:
                matches.append((distance, candidate))

        matches.sort()
        return [candidate for _, candidate in matches[:max_suggestions]]

    def get_word_frequency(self, word: str) -> int:
        """Occurrences of the lowercased word across all indexed fields (0 if unknown)"""
        return self._word_counts.get(word.lower(), 0)
