"""
Exceptions

리뷰 도구 전반에서 사용하는 예외 계층
"""

from typing import Dict, Optional


class ReviewerError(Exception):
    """Base error for the code review tool"""


class PolicyConfigurationError(ReviewerError):
    """Language policy document is missing or malformed"""


class TemplateConfigurationError(ReviewerError):
    """Template collection document is missing or malformed"""


class UnknownTemplateError(ReviewerError):
    """Requested template name is not in the loaded collection"""
    def __init__(self, name: str, available: Optional[list] = None):
        available = sorted(available or [])
        super().__init__(f"Unknown review template: {name} (available: {', '.join(available) or 'none'})")
        self.name = name
        self.available = available


class ReviewAPIError(ReviewerError):
    """Review service related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class GitCommandError(ReviewerError):
    """A git subprocess failed or could not be started"""
    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class HookInstallError(ReviewerError):
    """Pre-commit hook could not be written"""
