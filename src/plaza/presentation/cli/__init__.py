"""Command-line interface for Plaza."""
