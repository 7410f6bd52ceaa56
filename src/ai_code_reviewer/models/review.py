"""
Review Data Models

코드 리뷰 요청/결과 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, field_validator


class Severity(str, Enum):
    """리뷰 심각도 (low < medium < high < critical)"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """정렬용 순위"""
        return _SEVERITY_ORDER.index(self)

    @property
    def is_blocking(self) -> bool:
        """커밋 차단 대상 여부"""
        return self in (Severity.HIGH, Severity.CRITICAL)

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """문자열을 Severity로 변환 (알 수 없는 값은 ValueError)"""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid severity: {value!r}") from None


_SEVERITY_ORDER = [Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL]


@dataclass
class ReviewRequest:
    """리뷰 서비스로 보내는 요청"""
    content: str
    language: str
    file_name: str
    template: str
    prompt: str = ""
    severity_threshold: Severity = Severity.LOW
    ticket_id: Optional[str] = None
    additional_info: Optional[str] = None
    diff: str = ""

    def __post_init__(self):
        """데이터 검증"""
        if not self.language:
            raise ValueError("Language cannot be empty")
        if not self.file_name:
            raise ValueError("File name cannot be empty")
        if self.diff is None:
            self.diff = ""

    def to_payload(self) -> Dict[str, Any]:
        """JSON 요청 본문으로 변환"""
        payload: Dict[str, Any] = {
            'content': self.content,
            'language': self.language,
            'fileName': self.file_name,
            'template': self.template,
            'prompt': self.prompt,
            'severityThreshold': self.severity_threshold.value,
            'diff': self.diff,
        }
        if self.ticket_id:
            payload['ticketId'] = self.ticket_id
        if self.additional_info:
            payload['additionalInfo'] = self.additional_info
        return payload


@dataclass
class ReviewResult:
    """파일 하나에 대한 리뷰 결과"""
    file_name: str
    feedback: str
    severity: Severity
    suggestions: List[str] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증"""
        if not isinstance(self.severity, Severity):
            self.severity = Severity.parse(self.severity)
        if not self.file_name:
            raise ValueError("File name cannot be empty")

    @property
    def is_blocking(self) -> bool:
        """high/critical 결과인지 확인"""
        return self.severity.is_blocking


# Pydantic models for API validation
class ReviewResponse(BaseModel):
    """리뷰 서비스 응답 모델"""
    feedback: str
    suggestions: List[str] = []
    severity: Severity

    @field_validator('suggestions', mode='before')
    @classmethod
    def validate_suggestions(cls, v):
        if v is None:
            return []
        return v

    @field_validator('severity', mode='before')
    @classmethod
    def validate_severity(cls, v):
        if isinstance(v, str):
            return Severity.parse(v.strip().lower())
        return v

    def to_result(self, file_name: str) -> ReviewResult:
        """파일 경로를 붙여 ReviewResult로 변환"""
        return ReviewResult(
            file_name=file_name,
            feedback=self.feedback,
            severity=self.severity,
            suggestions=list(self.suggestions),
        )
