"""
Document Domain Model

Represents one indexable text unit: its identity, classification label and a
sparse term -> weight profile, plus the operations that work purely on that
profile (feature filtering, pairwise similarity, slda serialization).
"""

from __future__ import annotations

import math
import os
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, Union

from corpuskit.utils.invertible_map import LabelMapping

TermId = Hashable

# A feature is a (term, weight) pair; only the term is used for filtering.
Feature = Tuple[TermId, float]


class Document:
    """
    Document entity holding a sparse term-frequency profile.

    The frequency mapping is empty upon creation and filled through
    increment(). Documents own no external resources and copies are
    independent.
    """

    NO_LABEL = "[NONE]"

    def __init__(self, path: str, doc_id: Hashable, label: str = NO_LABEL):
        self._path = path
        self._id = doc_id
        self._label = label
        self._name = os.path.basename(path)
        self._length: float = 0
        self._frequencies: Dict[TermId, float] = {}
        self._content: Optional[str] = None
        self._contains_content = False

    # identity

    @property
    def id(self) -> Hashable:
        """Caller-assigned document id."""
        return self._id

    @property
    def path(self) -> str:
        """Where this document was sourced from (constructor argument)."""
        return self._path

    @property
    def name(self) -> str:
        """Short name of this document (final path component)."""
        return self._name

    @property
    def label(self) -> str:
        """Classification category this document is in."""
        return self._label

    def set_label(self, label: str):
        """Set the classification category. No validation is performed."""
        self._label = label

    # term profile

    def increment(self, term: TermId, amount: float):
        """
        Add amount to the weight of term and to the document length.

        Args:
            term: Term identifier
            amount: Occurrence count or weight to add; negative values are
                applied as-is

        Raises:
            ValueError: If amount is NaN or infinite
        """
        if not isinstance(amount, int) and not math.isfinite(amount):
            raise ValueError(f"increment amount must be finite, got {amount!r}")
        self._frequencies[term] = self._frequencies.get(term, 0) + amount
        self._length += amount

    @property
    def length(self) -> float:
        """Total of all increments (not the number of distinct terms)."""
        return self._length

    def frequency(self, term: TermId) -> float:
        """Weight recorded for term, 0 if it was never incremented."""
        return self._frequencies.get(term, 0)

    @property
    def frequencies(self) -> Mapping[TermId, float]:
        """Read-only view of the term -> weight mapping."""
        return MappingProxyType(self._frequencies)

    def unique_terms(self) -> int:
        """Number of distinct terms in the profile."""
        return len(self._frequencies)

    # content

    def set_content(self, content: str):
        """
        Store the raw text of this document.

        Only some corpus formats keep content in the object itself, so
        callers should check contains_content before relying on it.
        """
        self._content = content
        self._contains_content = True

    @property
    def content(self) -> Optional[str]:
        """Stored raw text, or None if set_content was never called."""
        return self._content

    @property
    def contains_content(self) -> bool:
        """Whether this document stores its content internally."""
        return self._contains_content

    # slda output

    def get_slda_term_data(self) -> str:
        """
        Term count data in slda format.

        Returns:
            "<n> term:weight term:weight ..." where n is the number of
            distinct terms with nonzero weight
        """
        pairs = [(t, w) for t, w in self._frequencies.items() if w != 0]
        parts = [str(len(pairs))]
        parts.extend(f"{t}:{_format_weight(w)}" for t, w in pairs)
        return " ".join(parts)

    def get_slda_label_data(self, label_mapping: LabelMapping) -> str:
        """
        Class label integer for slda.

        The mapping assigns the next unused integer to labels it has not
        seen yet, so it accumulates a consistent table across documents.
        """
        return str(label_mapping.get_or_assign(self._label))

    # copying

    def copy(self) -> Document:
        """Independent copy of this document."""
        doc = self._clone(self._frequencies)
        doc._length = self._length
        return doc

    def _clone(self, frequencies: Mapping[TermId, float]) -> Document:
        doc = Document(self._path, self._id, self._label)
        doc._frequencies = dict(frequencies)
        doc._length = sum(doc._frequencies.values())
        doc._content = self._content
        doc._contains_content = self._contains_content
        return doc

    # static utilities

    @staticmethod
    def filter_features(docs, features):
        """See corpuskit.core.document.filter_features."""
        return filter_features(docs, features)

    @staticmethod
    def jaccard_similarity(a: Document, b: Document) -> float:
        """See corpuskit.core.document.jaccard_similarity."""
        return jaccard_similarity(a, b)

    @staticmethod
    def cosine_similarity(a: Document, b: Document) -> float:
        """See corpuskit.core.document.cosine_similarity."""
        return cosine_similarity(a, b)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self._id == other._id
            and self._path == other._path
            and self._label == other._label
            and self._length == other._length
            and self._frequencies == other._frequencies
            and self._content == other._content
            and self._contains_content == other._contains_content
        )

    # mutable value type
    __hash__ = None

    def __str__(self) -> str:
        return f"Document(name='{self._name}', id={self._id!r}, label='{self._label}')"

    def __repr__(self) -> str:
        return (f"Document(id={self._id!r}, path='{self._path}', label='{self._label}', "
                f"length={self._length}, unique_terms={len(self._frequencies)})")


def _format_weight(w: float) -> str:
    if isinstance(w, int):
        return str(w)
    # integral floats print without a decimal point: 2.0 -> "2"
    w = float(w)
    if w.is_integer():
        return str(int(w))
    return repr(w)


def _allowed_terms(features: Iterable[Feature]) -> set:
    return {term for term, _ in features}


def filter_features(docs: Union[Document, Iterable[Document]],
                    features: Iterable[Feature]) -> Union[Document, List[Document]]:
    """
    Keep only the listed features in one or many documents.

    Args:
        docs: A Document, or an iterable of Documents
        features: (term, weight) pairs whose terms should remain;
            the weights are ignored

    Returns:
        A new Document when given one, otherwise a list of new Documents in
        input order. Inputs are not modified. Listed terms missing from a
        document are not created, and length is recomputed from the kept
        weights.
    """
    allowed = _allowed_terms(features)
    if isinstance(docs, Document):
        return _filter_one(docs, allowed)
    return [_filter_one(d, allowed) for d in docs]


def _filter_one(doc: Document, allowed: set) -> Document:
    kept = {t: w for t, w in doc.frequencies.items() if t in allowed}
    return doc._clone(kept)


def jaccard_similarity(a: Document, b: Document) -> float:
    """
    Jaccard similarity of the two documents' term sets, ignoring weights.

    Two documents without any terms have similarity 0.
    """
    ka = a.frequencies.keys()
    kb = b.frequencies.keys()
    union = len(ka | kb)
    if union == 0:
        return 0.0
    return len(ka & kb) / union


def cosine_similarity(a: Document, b: Document) -> float:
    """
    Cosine similarity of the two weight vectors; missing terms weigh 0.

    Returns 0 when either document has a zero-norm vector.
    """
    fa = _scaled(a.frequencies)
    fb = _scaled(b.frequencies)
    if fa is None or fb is None:
        return 0.0
    sq_a = sum(w * w for w in fa.values())
    sq_b = sum(w * w for w in fb.values())
    if len(fa) > len(fb):
        fa, fb = fb, fa
    dot = sum(w * fb[t] for t, w in fa.items() if t in fb)
    return max(-1.0, min(1.0, dot / math.sqrt(sq_a * sq_b)))


def _scaled(freqs: Mapping[TermId, float]) -> Optional[Dict[TermId, float]]:
    # divide by the largest magnitude so squares neither overflow nor underflow
    peak = max((abs(w) for w in freqs.values()), default=0)
    if peak == 0:
        return None
    return {t: w / peak for t, w in freqs.items()}
