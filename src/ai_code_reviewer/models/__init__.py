"""
Data Models

AI 코드 리뷰 도구의 핵심 데이터 모델들
"""

from .review import Severity, ReviewRequest, ReviewResult, ReviewResponse
from .policy import LanguagePolicy, ReviewTemplate, TemplateCollection
from .commit import CommitContext

__all__ = [
    "Severity",
    "ReviewRequest",
    "ReviewResult",
    "ReviewResponse",
    "LanguagePolicy",
    "ReviewTemplate",
    "TemplateCollection",
    "CommitContext",
]
