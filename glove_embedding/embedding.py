"""
Word embedding layer initialized from a pre-trained matrix
"""

import torch
import torch.nn as nn


class Embedding(nn.Module):
    """
    Word embedding layer - converts word ranks to dense vectors

    This is a simple lookup table: embeddings[rank] -> vector of size d_model
    """

    def __init__(self, vocab_size: int, d_model: int) -> None:
        """
        Initialize embedding layer

        Args:
            vocab_size: Number of words in vocabulary
            d_model: Embedding dimension (100 for glove.6B.100d)
        """
        super().__init__()
        self.vocab_size: int = vocab_size
        self.d_model: int = d_model

        self.embedding = nn.Embedding(vocab_size, d_model)

    @classmethod
    def from_pretrained(cls, matrix: torch.Tensor, freeze: bool = True) -> "Embedding":
        """
        Create a layer sized from a (vocab_size, d_model) matrix and load it

        Args:
            matrix: Pre-built embedding matrix
            freeze: If True, the weights are not updated during training
        """
        if matrix.dim() != 2:
            raise ValueError(f"Expected a 2-D matrix, got shape {tuple(matrix.shape)}")
        layer = cls(matrix.shape[0], matrix.shape[1])
        layer.load_pretrained(matrix, freeze=freeze)
        return layer

    def load_pretrained(self, matrix: torch.Tensor, freeze: bool = True) -> None:
        """
        Copy a pre-built matrix into the embedding weights

        Args:
            matrix: Tensor of shape exactly (vocab_size, d_model)
            freeze: If True, the weights are not updated during training
        """
        expected = (self.vocab_size, self.d_model)
        if tuple(matrix.shape) != expected:
            raise ValueError(
                f"Embedding matrix has shape {tuple(matrix.shape)}, expected {expected}"
            )

        with torch.no_grad():
            self.embedding.weight.copy_(matrix)
        self.embedding.weight.requires_grad_(not freeze)

    @property
    def frozen(self) -> bool:
        """Whether the embedding weights are excluded from training"""
        return not self.embedding.weight.requires_grad

    def forward(self, token_ids: torch.Tensor) -> torch.Tensor:
        """
        Convert word ranks to embeddings

        Args:
            token_ids: Tensor of ranks, shape (batch_size, seq_len) or (seq_len,)

        Returns:
            Embeddings tensor of shape (batch_size, seq_len, d_model) or (seq_len, d_model)
        """
        return self.embedding(token_ids)  # (batch, seq, dim)
