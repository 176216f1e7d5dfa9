"""
Core Domain Models

This module contains the document entity and the free functions that operate
on its term profile.
"""

from .document import (
    Document,
    filter_features,
    jaccard_similarity,
    cosine_similarity,
)

__all__ = [
    'Document',
    'filter_features',
    'jaccard_similarity',
    'cosine_similarity',
]
