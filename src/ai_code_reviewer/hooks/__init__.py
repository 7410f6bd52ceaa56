"""
Git Hook Integration

Husky pre-commit hook installation and the pre-commit review gate.
"""

from .husky import HuskyIntegration

__all__ = ['HuskyIntegration']
