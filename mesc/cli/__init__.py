"""Command-line interface for mesc."""
