# corpuskit/metrics/similarity.py
from __future__ import annotations

from enum import Enum
from typing import Dict, Hashable, List, Sequence, Tuple

import numpy as np
from scipy import sparse
from sklearn.metrics.pairwise import cosine_similarity as _sk_cosine

from corpuskit.core.document import Document, cosine_similarity, jaccard_similarity


class SimilarityMetric(Enum):
    """Pairwise document similarity measures."""
    JACCARD = "jaccard"
    COSINE = "cosine"


def pairwise_similarity(a: Document, b: Document, metric: SimilarityMetric = SimilarityMetric.COSINE) -> float:
    """
    Score one pair of documents with the chosen metric.
    """
    metric = SimilarityMetric(metric)
    if metric is SimilarityMetric.JACCARD:
        return jaccard_similarity(a, b)
    return cosine_similarity(a, b)


def term_matrix(docs: Sequence[Document]) -> Tuple[sparse.csr_matrix, List[Hashable]]:
    """
    Stack document profiles into a sparse (n_docs x n_terms) matrix.

    Columns follow first-seen term order across docs. Returns the matrix and
    the term for each column.
    """
    vocab: Dict[Hashable, int] = {}
    rows: List[int] = []
    cols: List[int] = []
    vals: List[float] = []
    for i, d in enumerate(docs):
        for term, w in d.frequencies.items():
            j = vocab.setdefault(term, len(vocab))
            rows.append(i)
            cols.append(j)
            vals.append(float(w))
    mat = sparse.csr_matrix(
        (np.asarray(vals, dtype=np.float64), (rows, cols)),
        shape=(len(docs), len(vocab)),
    )
    return mat, list(vocab)


def similarity_matrix(docs: Sequence[Document], metric: SimilarityMetric = SimilarityMetric.COSINE) -> np.ndarray:
    """
    Dense (n x n) similarity matrix for a batch of documents.

    Entries match pairwise_similarity for the same pair: rows with no terms
    (Jaccard) or zero norm (cosine) score 0 against everything, including
    themselves.
    """
    metric = SimilarityMetric(metric)
    n = len(docs)
    if n == 0:
        return np.zeros((0, 0), dtype=np.float64)
    mat, vocab = term_matrix(docs)
    if not vocab:
        return np.zeros((n, n), dtype=np.float64)

    if metric is SimilarityMetric.COSINE:
        # sklearn leaves zero rows at zero after normalisation
        return np.asarray(_sk_cosine(mat, dense_output=True), dtype=np.float64)

    # Jaccard over key sets: stored entries count even when their weight is 0
    binary = mat.copy()
    binary.data = np.ones_like(binary.data)
    inter = (binary @ binary.T).toarray()
    sizes = np.diff(binary.indptr).astype(np.float64)
    union = sizes[:, None] + sizes[None, :] - inter
    out = np.zeros((n, n), dtype=np.float64)
    np.divide(inter, union, out=out, where=union > 0)
    return out


def most_similar(
    query: Document,
    candidates: Sequence[Document],
    metric: SimilarityMetric = SimilarityMetric.COSINE,
    top_k: int = 10,
) -> List[Tuple[Document, float]]:
    """
    Rank candidates by similarity to query.

    Returns at most top_k (document, score) pairs, best first; equal scores
    keep candidate order.
    """
    if top_k <= 0:
        return []
    scored = [(c, pairwise_similarity(query, c, metric)) for c in candidates]
    scored.sort(key=lambda x: -x[1])
    return scored[:top_k]
