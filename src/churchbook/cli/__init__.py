"""Command-line interface for churchbook."""
