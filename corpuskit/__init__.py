"""
corpuskit: sparse term-frequency documents for text classification,
similarity search and supervised topic-model export.
"""

from corpuskit.core import Document, filter_features, jaccard_similarity, cosine_similarity
from corpuskit.utils.invertible_map import InvertibleMap, LabelIndex, LabelMapping

__version__ = "0.1.0"

__all__ = [
    "Document",
    "filter_features",
    "jaccard_similarity",
    "cosine_similarity",
    "InvertibleMap",
    "LabelIndex",
    "LabelMapping",
]
