"""Shared test fixtures"""

import pytest
import torch

from glove_embedding.vocabulary import Vocabulary


GLOVE_LINES = [
    "the 0.1 0.2 0.3 0.4",
    "cat 0.5 -0.25 1.0 0.0",
    "dog -1.5 2.0 0.125 3.0",
    "sat 0.0 0.0 1.0 1.0",
]


@pytest.fixture
def glove_lines():
    """A tiny 4-dimensional GloVe file as a list of lines"""
    return list(GLOVE_LINES)


@pytest.fixture
def glove_file(tmp_path, glove_lines):
    """Write the tiny GloVe file to disk and return its path"""
    path = tmp_path / "glove.tiny.4d.txt"
    path.write_text("\n".join(glove_lines) + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def glove_table():
    """Word -> tensor table matching GLOVE_LINES"""
    table = {}
    for line in GLOVE_LINES:
        word, *values = line.split(" ")
        table[word] = torch.tensor([float(v) for v in values])
    return table


@pytest.fixture
def vocabulary():
    """Vocabulary built from a few sentences"""
    texts = [
        "The cat sat on the mat.",
        "The dog sat too.",
        "A zzzrareword appeared!",
    ]
    return Vocabulary.from_texts(texts, max_size=50)
