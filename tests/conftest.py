"""
Shared pytest fixtures: small documents with known term profiles.
"""

import pytest

from corpuskit.core.document import Document


def make_doc(path, doc_id, counts, label=Document.NO_LABEL):
    """Build a Document from a {term: amount} dict."""
    doc = Document(path, doc_id, label)
    for term, amount in counts.items():
        doc.increment(term, amount)
    return doc


@pytest.fixture
def doc_a():
    """A = {term1: 2, term2: 1}"""
    return make_doc("corpus/sports/a.txt", 1, {"term1": 2, "term2": 1}, label="sports")


@pytest.fixture
def doc_b():
    """B = {term2: 3, term3: 1}"""
    return make_doc("corpus/politics/b.txt", 2, {"term2": 3, "term3": 1}, label="politics")


@pytest.fixture
def empty_doc():
    return Document("corpus/empty.txt", 99)


@pytest.fixture
def doc_factory():
    """Factory fixture: doc_factory(path, doc_id, {term: amount}, label=...)."""
    return make_doc
