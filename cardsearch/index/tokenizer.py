"""
Tokenizers for card text indexing.

Two token universes are produced from the same card text:
1. Word tokens: maximal runs of ASCII letters, digits and underscore
   (TF-IDF term extraction, prefix index)
2. Letter tokens: whole words made of ASCII letters only; a letter run
   glued to a digit or underscore ("3x", "no_fee") is not a token
   (spelling vocabulary and word frequencies)

Queries are split on whitespace instead (see split_query_terms), so a
query term like "cash-back" never matches the word tokens "cash" and "back".
"""

import re
from typing import Iterator, List, Optional

WORD_PATTERN = re.compile(r"[a-z0-9_]+")
LETTER_PATTERN = re.compile(r"\b[a-z]+\b")


def iter_word_tokens(text: Optional[str]) -> Iterator[str]:
    """
    Yield lowercase word tokens (letters, digits, underscore).
    
    Args:
        text: Raw text (None is treated as empty)
        
    Yields:
        Lowercase tokens in order of appearance
        
    Examples:
        >>> list(iter_word_tokens("3X Points on Travel!"))
        ['3x', 'points', 'on', 'travel']
        
        >>> list(iter_word_tokens("no_fee/annual"))
        ['no_fee', 'annual']
    """
    if not text:
        return
    for match in WORD_PATTERN.finditer(text.lower()):
        yield match.group()


def iter_letter_tokens(text: Optional[str]) -> Iterator[str]:
    """
    Yield lowercase words made only of letters.
    
    Examples:
        >>> list(iter_letter_tokens("3X Points, 1.5% cash-back, no_fee"))
        ['points', 'cash', 'back']
    """
    if not text:
        return
    for match in LETTER_PATTERN.finditer(text.lower()):
        yield match.group()


def split_query_terms(text: Optional[str]) -> List[str]:
    """Lowercase and split on whitespace, dropping empty pieces."""
    if not text:
        return []
    return text.lower().split()
