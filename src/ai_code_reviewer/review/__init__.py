"""
Review Orchestration

This module provides language policy loading, file discovery,
per-file review dispatch and the pre-commit gate decision.
"""

from .policy import load_language_policy
from .templates import load_templates
from .discovery import FileDiscovery
from .reviewer import Reviewer, print_review_results
from .gate import is_blocking, GateOutcome

__all__ = [
    'load_language_policy',
    'load_templates',
    'FileDiscovery',
    'Reviewer',
    'print_review_results',
    'is_blocking',
    'GateOutcome',
]
