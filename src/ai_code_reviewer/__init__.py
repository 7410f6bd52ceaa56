"""
AI Code Reviewer

원격 분석 API를 이용한 코드 리뷰 CLI 및 pre-commit 게이트
"""

__version__ = "1.0.0"

from .api import CodeReviewAPI

__all__ = ["CodeReviewAPI", "__version__"]
