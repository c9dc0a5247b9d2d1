"""
JSON configuration for building GloVe embedding matrices
"""

import json
import os


DEFAULT_CONFIG: dict = {
    "vocab_size": 10000,
    "embedding_dim": 100,
    "max_length": 100,
    "glove_repo_id": "stanfordnlp/glove",
    "glove_filename": "glove.6B.zip",
    "glove_member": "glove.6B.100d.txt",
    "workers": 1,
    "freeze": True,
}


def _check(config: dict, key: str, kind: type | tuple, minimum: int | None = None) -> None:
    value = config[key]
    if isinstance(value, bool) and kind is not bool:
        raise ValueError(f"Config key '{key}' must be {kind}, got bool")
    if not isinstance(value, kind):
        raise ValueError(f"Config key '{key}' must be {kind}, got {type(value).__name__}")
    if minimum is not None and value < minimum:
        raise ValueError(f"Config key '{key}' must be >= {minimum}, got {value}")


def load_config(path: str | None = None) -> dict:
    """
    Load a JSON config file merged over DEFAULT_CONFIG

    Args:
        path: Path to the JSON file (None = defaults only)

    Returns:
        dict: Configuration with every default key present

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If a value has the wrong type or range.
    """
    config = dict(DEFAULT_CONFIG)

    if path is not None:
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Configuration file '{path}' not found.")
        with open(path, "r", encoding="utf-8") as f:
            overrides = json.load(f)
        if not isinstance(overrides, dict):
            raise ValueError(f"Configuration file '{path}' must contain a JSON object")
        config.update(overrides)

    _check(config, "vocab_size", int, minimum=1)
    _check(config, "embedding_dim", int, minimum=1)
    _check(config, "max_length", int, minimum=1)
    _check(config, "workers", int, minimum=1)
    _check(config, "glove_repo_id", str)
    _check(config, "glove_filename", str)
    _check(config, "glove_member", (str, type(None)))
    _check(config, "freeze", bool)

    return config
