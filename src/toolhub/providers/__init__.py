"""Built-in tool providers. Each module exposes a ``PROVIDER`` with a setup hook."""
