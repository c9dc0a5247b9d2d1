"""
Build an embedding matrix aligned to a vocabulary from pre-trained vectors
"""

from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor

import torch


Vector = Sequence[float] | torch.Tensor


def _index_table(
    embedding_table: Mapping[str, Vector] | Iterable[tuple[str, Vector]],
) -> dict[str, Vector]:
    """
    Turn the embedding table into a dict for O(1) lookups

    A mapping is used as-is. An iterable of (word, vector) pairs is indexed in
    a single pass; if a word appears more than once the first vector is kept.
    """
    if isinstance(embedding_table, Mapping):
        return dict(embedding_table)

    table: dict[str, Vector] = {}
    for word, vector in embedding_table:
        if word not in table:
            table[word] = vector
    return table


def _validate_vocabulary(vocabulary_index: Mapping[str, int]) -> list[str]:
    """
    Check that ranks are ints covering [0, N) exactly once

    Returns:
        Words ordered by rank (words_by_rank[r] is the word with rank r)
    """
    num_words = len(vocabulary_index)
    words_by_rank: list[str | None] = [None] * num_words

    for word, rank in vocabulary_index.items():
        if isinstance(rank, bool) or not isinstance(rank, int):
            raise ValueError(f"Rank for {word!r} must be an int, got {type(rank).__name__}")
        if not 0 <= rank < num_words:
            raise ValueError(
                f"Rank {rank} for {word!r} is outside [0, {num_words}); "
                "ranks must be contiguous from 0"
            )
        if words_by_rank[rank] is not None:
            raise ValueError(
                f"Duplicate rank {rank} for {words_by_rank[rank]!r} and {word!r}"
            )
        words_by_rank[rank] = word

    return words_by_rank


def _to_row(word: str, vector: Vector, embedding_dim: int, dtype: torch.dtype) -> torch.Tensor:
    """Convert one table entry to a detached 1-D tensor, rejecting malformed vectors"""
    if isinstance(vector, Sequence) and any(isinstance(v, bool) for v in vector):
        raise ValueError(f"Vector for {word!r} contains booleans, expected numbers")

    try:
        row = torch.as_tensor(vector)
    except (TypeError, ValueError, RuntimeError) as e:
        raise ValueError(f"Vector for {word!r} is not numeric: {e}") from e

    if row.dtype == torch.bool:
        raise ValueError(f"Vector for {word!r} is a boolean tensor, expected numbers")
    # Parameters taken from another model must not drag their graph along
    row = row.detach().to(dtype)

    if row.dim() != 1 or row.shape[0] != embedding_dim:
        raise ValueError(
            f"Vector for {word!r} has shape {tuple(row.shape)}, "
            f"expected ({embedding_dim},)"
        )
    return row


def build_embedding_matrix(
    vocabulary_index: Mapping[str, int],
    embedding_table: Mapping[str, Vector] | Iterable[tuple[str, Vector]],
    embedding_dim: int,
    workers: int = 1,
    dtype: torch.dtype = torch.float32,
) -> torch.Tensor:
    """
    Build a dense (N, embedding_dim) matrix whose row r is the pre-trained
    vector of the word with rank r

    Words missing from the embedding table get an all-zero row. All inputs are
    validated before the matrix is allocated, so a ValueError means nothing
    was built.

    Args:
        vocabulary_index: word -> rank, ranks contiguous in [0, N)
        embedding_table: word -> vector, or an iterable of (word, vector)
            pairs where the first occurrence of a word wins
        embedding_dim: Length every vector must have
        workers: Number of threads filling disjoint row ranges
        dtype: dtype of the returned matrix

    Returns:
        Tensor of shape (N, embedding_dim)
    """
    if isinstance(embedding_dim, bool) or not isinstance(embedding_dim, int) or embedding_dim <= 0:
        raise ValueError(f"embedding_dim must be a positive int, got {embedding_dim!r}")
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ValueError(f"workers must be an int >= 1, got {workers!r}")
    if not dtype.is_floating_point:
        raise ValueError(f"dtype must be a floating point type, got {dtype}")

    words_by_rank = _validate_vocabulary(vocabulary_index)
    table = _index_table(embedding_table)

    # Validate every entry, not just the ones the vocabulary uses
    rows: dict[str, torch.Tensor] = {
        word: _to_row(word, vector, embedding_dim, dtype) for word, vector in table.items()
    }

    num_words = len(words_by_rank)
    matrix = torch.zeros(num_words, embedding_dim, dtype=dtype)

    def fill(start: int, end: int) -> None:
        for rank in range(start, end):
            row = rows.get(words_by_rank[rank])
            if row is not None:
                matrix[rank] = row

    if workers == 1 or num_words < 2:
        fill(0, num_words)
        return matrix

    # Each worker owns a disjoint slice of rows, so no locking is needed
    chunk = -(-num_words // workers)
    bounds = [(start, min(start + chunk, num_words)) for start in range(0, num_words, chunk)]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for future in [pool.submit(fill, start, end) for start, end in bounds]:
            future.result()

    return matrix


def missing_words(
    vocabulary_index: Mapping[str, int],
    embedding_table: Mapping[str, Vector] | Iterable[tuple[str, Vector]],
) -> list[str]:
    """Vocabulary words without a pre-trained vector, in rank order"""
    table = _index_table(embedding_table)
    return [
        word
        for word, _ in sorted(vocabulary_index.items(), key=lambda item: item[1])
        if word not in table
    ]


def embedding_coverage(
    vocabulary_index: Mapping[str, int],
    embedding_table: Mapping[str, Vector] | Iterable[tuple[str, Vector]],
) -> tuple[int, int]:
    """
    Count how many vocabulary words have a pre-trained vector

    Returns:
        (found, total)
    """
    total = len(vocabulary_index)
    return total - len(missing_words(vocabulary_index, embedding_table)), total
