from .similarity import (
    SimilarityMetric,
    pairwise_similarity,
    term_matrix,
    similarity_matrix,
    most_similar,
)

__all__ = [
    "SimilarityMetric",
    "pairwise_similarity",
    "term_matrix",
    "similarity_matrix",
    "most_similar",
]
