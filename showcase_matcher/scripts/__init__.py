"""Command-line entry points (showcase-dedupe, showcase-search)."""
