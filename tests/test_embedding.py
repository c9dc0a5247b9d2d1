"""Tests for the pre-trained embedding layer"""

import pytest
import torch
from glove_embedding.embedding import Embedding
from glove_embedding.embedding_matrix import build_embedding_matrix


@pytest.fixture
def matrix(vocabulary, glove_table):
    """Embedding matrix for the test vocabulary"""
    return build_embedding_matrix(vocabulary.word_to_index, glove_table, 4)


def test_embedding_creation():
    """Test that embedding layer is created with correct dimensions"""
    layer = Embedding(vocab_size=12, d_model=4)
    assert layer.vocab_size == 12
    assert layer.d_model == 4
    assert layer.embedding.weight.shape == (12, 4)


def test_from_pretrained(matrix):
    """Test that the layer holds the matrix and is frozen by default"""
    layer = Embedding.from_pretrained(matrix)

    assert torch.equal(layer.embedding.weight, matrix)
    assert layer.frozen
    assert not any(p.requires_grad for p in layer.parameters())


def test_load_pretrained_trainable(matrix):
    """Test that freeze=False keeps the weights trainable"""
    layer = Embedding(matrix.shape[0], matrix.shape[1])
    layer.load_pretrained(matrix, freeze=False)

    assert torch.equal(layer.embedding.weight, matrix)
    assert not layer.frozen


def test_load_pretrained_shape_mismatch(matrix):
    """Test that the matrix must match the configured shape exactly"""
    layer = Embedding(matrix.shape[0] + 1, matrix.shape[1])
    with pytest.raises(ValueError):
        layer.load_pretrained(matrix)

    layer = Embedding(matrix.shape[0], matrix.shape[1] + 1)
    with pytest.raises(ValueError):
        layer.load_pretrained(matrix)


def test_embedding_lookup(vocabulary, glove_table, matrix):
    """Test that an encoded batch looks up the pre-trained rows"""
    layer = Embedding.from_pretrained(matrix)
    batch = vocabulary.encode_batch(["the cat", "zzzrareword"], max_length=3)

    output = layer(batch)

    assert output.shape == (2, 3, 4)
    assert torch.equal(output[0, 1], glove_table["the"])
    assert torch.equal(output[0, 2], glove_table["cat"])
    # padding and words without a GloVe vector are zero
    assert torch.equal(output[1], torch.zeros(3, 4))


def test_frozen_weights_unchanged_by_step(matrix):
    """Test that an optimizer step leaves frozen weights alone"""
    layer = Embedding.from_pretrained(matrix, freeze=True)
    head = torch.nn.Linear(4, 1)
    optimizer = torch.optim.SGD(list(head.parameters()) + list(layer.parameters()), lr=0.1)

    loss = head(layer(torch.tensor([[2, 3, 4]])).mean(dim=1)).sum()
    loss.backward()
    optimizer.step()

    assert torch.equal(layer.embedding.weight, matrix)
