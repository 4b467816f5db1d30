"""Bundled data files for nukedir."""
