"""Data models for nukedir.

This module exports the run configuration and target models.
"""

from nukedir.models.config import RunConfig
from nukedir.models.target import DeletionResult, FilesystemStrategy, TargetDirectory

__all__ = [
    "DeletionResult",
    "FilesystemStrategy",
    "RunConfig",
    "TargetDirectory",
]
