"""Command-line interface for lebin."""
