"""Core shared infrastructure for toolhub.

This package contains foundational utilities:
    - config: Application configuration management
    - console: Rich console output and logging
    - result: Result types and error hierarchy
    - runtime: Explicitly constructed hub context
    - tokens: Heuristic token estimation
"""

from __future__ import annotations

from . import config, console

__all__ = ["config", "console"]
