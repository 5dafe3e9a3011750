"""Heuristic token estimation.

Skill budgets are measured with a deterministic ~4 characters-per-token
estimate rather than a model tokenizer, so results are reproducible across
models and need no tokenizer download.
"""

from __future__ import annotations

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Return ceil(len(text) / 4)."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


__all__ = ["CHARS_PER_TOKEN", "estimate_tokens"]
