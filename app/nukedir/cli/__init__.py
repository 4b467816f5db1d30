"""Command-line interface for nukedir."""
