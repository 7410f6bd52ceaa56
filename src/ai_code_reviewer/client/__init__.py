"""
Review Service Client

HTTP transport for the remote code analysis endpoint.
"""

from .api_client import ReviewAPIClient

__all__ = ['ReviewAPIClient']
