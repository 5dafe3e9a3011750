"""HTTP bridge exposing the hub over FastAPI."""
