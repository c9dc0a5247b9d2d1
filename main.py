"""
Build a GloVe-initialized embedding layer for a small sentiment corpus

This script demonstrates the full path from raw text to a frozen embedding layer.
"""

import torch
from glove_embedding.config import load_config
from glove_embedding.embedding import Embedding
from glove_embedding.embedding_matrix import build_embedding_matrix, missing_words
from glove_embedding.load_glove import download_glove, load_glove
from glove_embedding.serialization import save_embedding_matrix
from glove_embedding.vocabulary import Vocabulary


TEXTS = [
    "This movie was wonderful, I loved every minute of it.",
    "An absolute waste of time. The plot made no sense.",
    "Great acting and a beautiful soundtrack.",
    "I fell asleep halfway through; boring and predictable.",
    "One of the best films I have seen this year!",
    "Terrible dialogue, terrible pacing, zzzrareword everywhere.",
]
LABELS = [1, 0, 1, 0, 1, 0]


def main():
    """Main function building and saving the embedding matrix"""
    print("=" * 80)
    print("GloVe Embedding Matrix Demo")
    print("=" * 80)
    print()

    config = load_config("config.json")

    vocab = Vocabulary.from_texts(TEXTS, max_size=config["vocab_size"])
    print(f"Vocabulary size: {len(vocab)}")

    print("Downloading GloVe...")
    glove_path = download_glove(config["glove_repo_id"], config["glove_filename"])
    glove = load_glove(
        glove_path,
        embedding_dim=config["embedding_dim"],
        words=vocab.word_to_index,
        member=config["glove_member"],
    )

    matrix = build_embedding_matrix(
        vocab.word_to_index,
        glove,
        config["embedding_dim"],
        workers=config["workers"],
    )
    missing = missing_words(vocab.word_to_index, glove)
    print(
        f"Embedding matrix: {tuple(matrix.shape)}, "
        f"GloVe hit {len(vocab) - len(missing)}/{len(vocab)} words"
    )
    if missing:
        print(f"Warning: Zero vectors for: {missing}")
    print()

    layer = Embedding.from_pretrained(matrix, freeze=config["freeze"])
    batch = vocab.encode_batch(TEXTS, max_length=config["max_length"])
    with torch.no_grad():
        embedded = layer(batch)
    print(f"Input batch: {tuple(batch.shape)} -> embeddings: {tuple(embedded.shape)}")
    print(f"Labels: {LABELS}")
    print(f"Embedding layer frozen: {layer.frozen}")

    save_embedding_matrix(matrix, "embedding_matrix.safetensors", vocab.word_to_index)
    print("Saved embedding_matrix.safetensors")


if __name__ == "__main__":
    main()
