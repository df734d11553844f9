# utilities.py
from __future__ import annotations


def preprocess_message(msg: str) -> str:
    """Drop every whitespace character."""
    return "".join(msg.split())


def group_blocks(text: str, block: int = 5) -> str:
    """Split `text` into `block`-sized groups separated by single spaces."""
    if block < 1:
        raise ValueError(f"Block size must be positive, got {block}")
    return " ".join(text[i : i + block] for i in range(0, len(text), block))
