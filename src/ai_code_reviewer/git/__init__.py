"""
Git Integration Layer

This module provides staged-file listing, per-file diff retrieval
and commit-message context extraction.
"""

from .commands import GitCommands
from .commit_context import extract_commit_context

__all__ = ['GitCommands', 'extract_commit_context']
