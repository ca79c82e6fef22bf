"""Command-line interface for ax."""
