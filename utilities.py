# utilities.py
from __future__ import annotations

import re

_ws_re = re.compile(r"\s+")


def preprocess_message(msg: str) -> str:
    """Drop every whitespace character; the machine sees a flat symbol run."""
    return _ws_re.sub("", msg)


def group_blocks(msg: str, block: int = 5) -> str:
    """Split *msg* into space-separated groups of *block* symbols."""
    if block < 1:
        raise ValueError(f"block size must be positive, got {block}")
    return " ".join(msg[i : i + block] for i in range(0, len(msg), block))
