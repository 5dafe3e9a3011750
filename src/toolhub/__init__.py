"""toolhub - capability registry and skill loader for LLM tool calling.

This package catalogs callable tools from pluggable providers, dispatches
single and batched calls against them, and loads token-budgeted skill
documents for injection into model context.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.4.0"
