"""
TF-IDF vector space model with cosine-similarity ranking.

Build phase (once, over the whole corpus):
    tf(term, card)  = raw count of the word token in the card's searchable text
    df(term)        = number of cards containing the term
    idf(term)       = ln(N / df(term))
    weight(term)    = tf × idf
    norm(card)      = sqrt(Σ weight²)

Query phase:
    Query terms come from a whitespace split (not the word tokenizer), so
    punctuation attached to a query term makes it miss the corpus terms.
    Terms unknown to the corpus get idf = 0.

    cosine(card, query) = Σ w_card(t) × w_query(t) / (norm(card) × norm(query))

Everything is immutable after build(), so concurrent queries need no locks.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..models import Record
from .tokenizer import iter_word_tokens, split_query_terms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentVector:
    """TF-IDF weights of one card plus their Euclidean norm"""
    weights: Mapping[str, float]
    norm: float


class RelevanceModel:
    """
    Cached TF-IDF statistics for a fixed corpus.
    
    Use RelevanceModel.build(records) to construct.
    """

    def __init__(
        self,
        document_count: int,
        document_frequencies: Dict[str, int],
        idf: Dict[str, float],
        vectors: Dict[Record, DocumentVector],
        positions: Dict[Record, int],
    ):
        self._document_count = document_count
        self._document_frequencies = MappingProxyType(dict(document_frequencies))
        self._idf = MappingProxyType(dict(idf))
        self._vectors = MappingProxyType(dict(vectors))
        self._positions = MappingProxyType(dict(positions))

    @classmethod
    def build(cls, records: Sequence[Record]) -> "RelevanceModel":
        """
        Compute term frequencies, IDF table and document vectors.
        
        Args:
            records: Full corpus in its original order
            
        Returns:
            Immutable model
        """
        term_frequencies: List[Tuple[Record, Counter]] = [
            (record, Counter(iter_word_tokens(record.searchable_text())))
            for record in records
        ]

        # Document frequency counts every corpus entry, duplicates included,
        # so df never exceeds N and idf stays >= 0
        document_frequencies: Counter = Counter()
        for _, tf in term_frequencies:
            document_frequencies.update(tf.keys())

        total = len(records)
        idf = {
            term: math.log(total / df)
            for term, df in document_frequencies.items()
        }

        vectors: Dict[Record, DocumentVector] = {}
        positions: Dict[Record, int] = {}
        for position, (record, tf) in enumerate(term_frequencies):
            if record in vectors:
                continue
            weights = {term: count * idf[term] for term, count in tf.items()}
            norm = math.sqrt(sum(w * w for w in weights.values()))
            vectors[record] = DocumentVector(weights=MappingProxyType(weights), norm=norm)
            positions[record] = position

        logger.debug(
            f"Built TF-IDF model: {total} cards, {len(idf)} terms, "
            f"{len(vectors)} distinct document vectors"
        )

        return cls(total, document_frequencies, idf, vectors, positions)

    @property
    def document_count(self) -> int:
        return self._document_count

    @property
    def idf(self) -> Mapping[str, float]:
        return self._idf

    def document_frequency(self, term: str) -> int:
        """Number of corpus cards whose word tokens include term"""
        return self._document_frequencies.get(term, 0)

    def vector_for(self, record: Record) -> Optional[DocumentVector]:
        return self._vectors.get(record)

    def query_vector(self, query: str) -> DocumentVector:
        """Weight whitespace-split query terms by qtf × idf"""
        query_tf = Counter(split_query_terms(query))
        weights = {term: count * self._idf.get(term, 0.0) for term, count in query_tf.items()}
        norm = math.sqrt(sum(w * w for w in weights.values()))
        return DocumentVector(weights=MappingProxyType(weights), norm=norm)

    def cosine_similarity(self, record: Record, query: str) -> Optional[float]:
        """
        Cosine similarity between a card and a query.
        
        Returns None for cards that were not part of the corpus at build
        time, 0.0 when either vector has zero norm.
        """
        document = self.vector_for(record)
        if document is None:
            return None
        return self._cosine(document, self.query_vector(query))

    def rank(self, records: Sequence[Record], query: Optional[str]) -> List[Record]:
        """
        Order candidate cards by cosine similarity to query.
        
        - Blank query: candidates returned unchanged, in their given order
        - Cards unknown to the model are skipped
        - Cards scoring 0 are dropped
        - Ties keep original corpus order
        
        Args:
            records: Candidate cards (usually a filtered subset of the corpus)
            query: Free-text query
            
        Returns:
            Ranked cards, most relevant first
        """
        if query is None or not query.strip():
            return list(records)

        query_vector = self.query_vector(query)

        scored = []
        for record in records:
            document = self.vector_for(record)
            if document is None:
                continue
            similarity = self._cosine(document, query_vector)
            if similarity > 0:
                scored.append((-similarity, self._positions[record], record))

        scored.sort(key=lambda item: (item[0], item[1]))

        logger.debug(f"Ranked {len(scored)}/{len(records)} cards for query '{query}'")
        return [record for _, _, record in scored]

    @staticmethod
    def _cosine(document: DocumentVector, query: DocumentVector) -> float:
        if document.norm <= 0 or query.norm <= 0:
            return 0.0

        dot_product = 0.0
        for term, query_weight in query.weights.items():
            document_weight = document.weights.get(term)
            if document_weight is not None:
                dot_product += document_weight * query_weight

        # Guard against rounding pushing identical vectors past 1.0
        return min(1.0, dot_product / (document.norm * query.norm))
