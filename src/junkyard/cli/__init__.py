"""Command-line interface for junkyard."""
