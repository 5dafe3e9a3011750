"""CLI command modules discovered by toolhub.main."""
