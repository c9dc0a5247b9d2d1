"""
Save and load embedding matrices as safetensors
"""

import json
from collections.abc import Mapping

from safetensors import safe_open
from safetensors.torch import save_file
import torch


def save_embedding_matrix(
    matrix: torch.Tensor,
    path: str,
    vocabulary_index: Mapping[str, int] | None = None,
) -> None:
    """
    Write an embedding matrix to a safetensors file

    Args:
        matrix: Tensor of shape (num_rows, embedding_dim)
        path: Output file path
        vocabulary_index: Optional word -> rank mapping stored in the metadata
    """
    if matrix.dim() != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {tuple(matrix.shape)}")

    metadata = {
        "num_rows": str(matrix.shape[0]),
        "embedding_dim": str(matrix.shape[1]),
    }
    if vocabulary_index is not None:
        if len(vocabulary_index) != matrix.shape[0]:
            raise ValueError(
                f"Vocabulary has {len(vocabulary_index)} words but matrix has {matrix.shape[0]} rows"
            )
        metadata["vocabulary"] = json.dumps(dict(vocabulary_index), ensure_ascii=False)

    # safetensors refuses non-contiguous tensors
    save_file({"weight": matrix.contiguous()}, path, metadata=metadata)


def load_embedding_matrix(
    path: str,
    device: str | torch.device = "cpu",
) -> tuple[torch.Tensor, dict[str, int] | None]:
    """
    Read an embedding matrix written by save_embedding_matrix

    Args:
        path: safetensors file path
        device: Device to load the matrix to

    Returns:
        (matrix, vocabulary_index), where vocabulary_index is None if it was not saved
    """
    # Note: safe_open requires device as string, not torch.device object
    with safe_open(path, framework="pt", device=str(device)) as f:
        if "weight" not in f.keys():
            raise ValueError(f"{path} has no 'weight' tensor")
        matrix = f.get_tensor("weight")
        metadata = f.metadata() or {}

    expected = (metadata.get("num_rows"), metadata.get("embedding_dim"))
    if expected != (None, None) and expected != (str(matrix.shape[0]), str(matrix.shape[1])):
        raise ValueError(
            f"{path} metadata says shape {expected}, tensor has {tuple(matrix.shape)}"
        )

    vocabulary_index = None
    if "vocabulary" in metadata:
        vocabulary_index = json.loads(metadata["vocabulary"])

    return matrix, vocabulary_index
