"""
Prefix tree used for autocompletion.

Built once from the corpus and only read afterwards, so concurrent
lookups need no locking.
"""

from typing import Dict, List


class TrieNode:
    """Single trie node: children keyed by character plus a word-end marker"""

    __slots__ = ("children", "is_word_end")

    def __init__(self) -> None:
        self.children: Dict[str, "TrieNode"] = {}
        self.is_word_end = False


class PrefixIndex:
    """
    Trie of indexed tokens.
    
    insert() is O(len(word)); search_prefix() is O(len(prefix) + size of
    the matching subtree).
    """

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: str) -> bool:
        node = self._find_node(word)
        return node is not None and node.is_word_end

    def insert(self, word: str) -> None:
        """
        Insert a word character by character.
        
        Inserting the same word again has no effect. Empty strings are ignored.
        """
        if not word:
            return

        node = self._root
        for ch in word:
            child = node.children.get(ch)
            if child is None:
                child = TrieNode()
                node.children[ch] = child
            node = child

        if not node.is_word_end:
            node.is_word_end = True
            self._size += 1

    def search_prefix(self, prefix: str) -> List[str]:
        """
        Return every indexed word starting with prefix.
        
        Children are visited in key order, so the result is sorted.
        Unknown prefixes return an empty list.
        
        Example:
            >>> index = PrefixIndex()
            >>> for w in ("chase", "cheap", "charge", "cash"):
            ...     index.insert(w)
            >>> index.search_prefix("ch")
            ['charge', 'chase', 'cheap']
        """
        node = self._find_node(prefix)
        if node is None:
            return []

        results: List[str] = []
        # Iterative DFS; stack holds (node, word so far) and is pushed in
        # reverse key order so pops come out sorted
        stack = [(node, prefix)]
        while stack:
            current, word = stack.pop()
            if current.is_word_end:
                results.append(word)
            for ch in sorted(current.children, reverse=True):
                stack.append((current.children[ch], word + ch))

        return results

    def _find_node(self, prefix: str):
        node = self._root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node
