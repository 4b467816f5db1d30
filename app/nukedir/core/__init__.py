"""Core deletion pipeline: preconditions, validation, strategy, execution."""
