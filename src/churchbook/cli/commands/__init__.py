"""CLI commands for churchbook."""
