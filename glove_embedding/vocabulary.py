"""
Word-level vocabulary built from a corpus, ranked by frequency
"""

from collections import Counter
from collections.abc import Iterable, Mapping

import regex as re
import torch


# Letter runs (optionally with one internal apostrophe, e.g. "don't") or digit runs
TOKEN_PATTERN: re.Pattern = re.compile(r"\p{L}+(?:'\p{L}+)?|\p{N}+")


def tokenize(text: str) -> list[str]:
    """Lowercase text and split it into word tokens"""
    return TOKEN_PATTERN.findall(text.lower())


class Vocabulary:
    """
    Mapping between words and contiguous integer ranks

    Special tokens take the lowest ranks (padding is 0 when present), followed
    by corpus words in descending frequency.
    """

    def __init__(
        self,
        word_to_index: Mapping[str, int],
        pad_token: str | None = "<pad>",
        unk_token: str | None = "<unk>",
    ) -> None:
        """
        Initialize from an existing word -> rank mapping

        Args:
            word_to_index: Ranks must cover [0, len(word_to_index)) exactly once
            pad_token: Token used for padding (None = no padding token)
            unk_token: Token used for unknown words (None = drop unknown words)
        """
        self.word_to_index: dict[str, int] = dict(word_to_index)

        size = len(self.word_to_index)
        if sorted(self.word_to_index.values()) != list(range(size)):
            raise ValueError("Vocabulary ranks must be unique and contiguous from 0")

        for token in (pad_token, unk_token):
            if token is not None and token not in self.word_to_index:
                raise ValueError(f"Special token {token!r} is not in the vocabulary")

        self.pad_token = pad_token
        self.unk_token = unk_token
        self.index_to_word: dict[int, str] = {v: k for k, v in self.word_to_index.items()}

    @classmethod
    def from_texts(
        cls,
        texts: Iterable[str],
        max_size: int,
        pad_token: str | None = "<pad>",
        unk_token: str | None = "<unk>",
    ) -> "Vocabulary":
        """
        Build a vocabulary from the most frequent words in texts

        Args:
            texts: Corpus to count words in
            max_size: Maximum number of entries, special tokens included
            pad_token: Padding token, given rank 0 (None = omit)
            unk_token: Unknown-word token, ranked after padding (None = omit)

        Returns:
            Vocabulary with at most max_size entries
        """
        specials = [token for token in (pad_token, unk_token) if token is not None]
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < len(specials):
            raise ValueError(
                f"max_size must be an int >= {len(specials)} (the number of special tokens), "
                f"got {max_size!r}"
            )

        counts: Counter[str] = Counter()
        for text in texts:
            counts.update(tokenize(text))

        word_to_index: dict[str, int] = {token: i for i, token in enumerate(specials)}

        # most_common keeps first-seen order among equal counts
        for word, _ in counts.most_common():
            if len(word_to_index) >= max_size:
                break
            if word not in word_to_index:
                word_to_index[word] = len(word_to_index)

        return cls(word_to_index, pad_token=pad_token, unk_token=unk_token)

    def __len__(self) -> int:
        return len(self.word_to_index)

    def __contains__(self, word: str) -> bool:
        return word in self.word_to_index

    @property
    def pad_id(self) -> int:
        """Rank of the padding token, or -1 if there is none"""
        if self.pad_token is None:
            return -1
        return self.word_to_index[self.pad_token]

    @property
    def unk_id(self) -> int:
        """Rank of the unknown-word token, or -1 if there is none"""
        if self.unk_token is None:
            return -1
        return self.word_to_index[self.unk_token]

    def encode(self, text: str) -> list[int]:
        """
        Convert text to word ranks

        Args:
            text: Input string

        Returns:
            List of ranks; unknown words map to unk_id, or are dropped when
            there is no unknown-word token
        """
        ids: list[int] = []
        for word in tokenize(text):
            if word in self.word_to_index:
                ids.append(self.word_to_index[word])
            elif self.unk_token is not None:
                ids.append(self.unk_id)
        return ids

    def decode(self, ids: Iterable[int]) -> str:
        """Convert ranks back to space-separated words, skipping padding"""
        words: list[str] = []
        for i in ids:
            if i not in self.index_to_word:
                raise ValueError(f"Rank {i} is outside the vocabulary [0, {len(self)})")
            if self.pad_token is None or i != self.pad_id:
                words.append(self.index_to_word[i])
        return " ".join(words)

    def pad_sequences(
        self,
        sequences: list[list[int]],
        max_length: int,
        padding: str = "pre",
        truncating: str = "pre",
    ) -> torch.Tensor:
        """
        Pad or truncate sequences to a fixed length

        Args:
            sequences: Lists of ranks
            max_length: Output sequence length
            padding: "pre" pads at the start, "post" at the end
            truncating: "pre" drops tokens from the start, "post" from the end

        Returns:
            LongTensor of shape (len(sequences), max_length)
        """
        if self.pad_token is None:
            raise ValueError("Cannot pad sequences without a padding token")
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")
        if padding not in ("pre", "post") or truncating not in ("pre", "post"):
            raise ValueError("padding and truncating must be 'pre' or 'post'")

        out = torch.full((len(sequences), max_length), self.pad_id, dtype=torch.long)
        for i, seq in enumerate(sequences):
            if len(seq) > max_length:
                seq = seq[-max_length:] if truncating == "pre" else seq[:max_length]
            if not seq:
                continue
            row = torch.tensor(seq, dtype=torch.long)
            if padding == "pre":
                out[i, max_length - len(seq):] = row
            else:
                out[i, : len(seq)] = row
        return out

    def encode_batch(self, texts: Iterable[str], max_length: int) -> torch.Tensor:
        """Encode and pad a batch of texts -> (batch, max_length)"""
        return self.pad_sequences([self.encode(text) for text in texts], max_length)
