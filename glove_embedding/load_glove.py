"""
Load pre-trained GloVe word vectors
"""

import io
import os
import zipfile
from collections.abc import Iterable

from huggingface_hub import hf_hub_download
import torch


def download_glove(repo_id: str, filename: str) -> str:
    """
    Download a GloVe file from the HuggingFace Hub

    Args:
        repo_id: HuggingFace repository ID (e.g. "stanfordnlp/glove")
        filename: File inside the repo (e.g. "glove.6B.zip")

    Returns:
        Local path of the cached file
    """
    return hf_hub_download(repo_id, filename)


def read_glove(
    lines: Iterable[str],
    embedding_dim: int | None = None,
    words: Iterable[str] | None = None,
) -> dict[str, torch.Tensor]:
    """
    Parse GloVe text lines of the form "word v1 v2 ... vD"

    Every line is validated even when words restricts what is kept.
    If a word appears more than once, the first vector wins.

    Args:
        lines: Lines of a GloVe text file
        embedding_dim: Expected vector length (None = take it from the first line)
        words: If given, only keep vectors for these words

    Returns:
        Dictionary mapping words to float32 tensors of shape (embedding_dim,)
    """
    if embedding_dim is not None and (
        isinstance(embedding_dim, bool) or not isinstance(embedding_dim, int) or embedding_dim <= 0
    ):
        raise ValueError(f"embedding_dim must be a positive int, got {embedding_dim!r}")

    wanted = set(words) if words is not None else None
    table: dict[str, torch.Tensor] = {}

    for line_no, line in enumerate(lines, 1):
        parts = line.rstrip("\r\n").rstrip(" ").split(" ")
        if parts == [""]:
            continue

        word, values = parts[0], parts[1:]
        if embedding_dim is None:
            embedding_dim = len(values)
            if embedding_dim == 0:
                raise ValueError(f"Line {line_no}: no vector values for {word!r}")

        if len(values) != embedding_dim:
            raise ValueError(
                f"Line {line_no}: {word!r} has {len(values)} values, expected {embedding_dim}"
            )

        try:
            vector = [float(v) for v in values]
        except ValueError as e:
            raise ValueError(f"Line {line_no}: non-numeric value for {word!r}: {e}") from e

        if word in table or (wanted is not None and word not in wanted):
            continue
        table[word] = torch.tensor(vector, dtype=torch.float32)

    return table


def _open_text(path: str, member: str | None) -> tuple[zipfile.ZipFile | None, io.TextIOBase]:
    """Open a GloVe .txt file, or a .txt member of a .zip archive"""
    if not zipfile.is_zipfile(path):
        return None, open(path, "r", encoding="utf-8")

    archive = zipfile.ZipFile(path)
    if member is None:
        candidates = [name for name in archive.namelist() if name.endswith(".txt")]
        if len(candidates) != 1:
            archive.close()
            raise ValueError(
                f"{path} contains {len(candidates)} .txt files; pass member= to pick one: "
                f"{candidates}"
            )
        member = candidates[0]
    elif member not in archive.namelist():
        archive.close()
        raise ValueError(f"{member!r} not found in {path}")

    return archive, io.TextIOWrapper(archive.open(member), encoding="utf-8")


def load_glove(
    path: str,
    embedding_dim: int | None = None,
    words: Iterable[str] | None = None,
    member: str | None = None,
) -> dict[str, torch.Tensor]:
    """
    Load GloVe vectors from a .txt file or a .zip archive

    Args:
        path: Local path to the file
        embedding_dim: Expected vector length (None = infer)
        words: If given, only keep vectors for these words
        member: Name of the .txt file inside a .zip (None = the only one)

    Returns:
        Dictionary mapping words to float32 tensors
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"GloVe file '{path}' not found.")

    print(f"Loading GloVe vectors from {path}" + (f" [{member}]" if member else "") + " ...")
    archive, f = _open_text(path, member)
    try:
        table = read_glove(f, embedding_dim=embedding_dim, words=words)
    finally:
        f.close()
        if archive is not None:
            archive.close()

    print(f"Loaded {len(table)} vectors")
    return table
