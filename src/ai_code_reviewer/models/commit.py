"""
Commit Data Models

커밋 메시지에서 추출한 컨텍스트 모델
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CommitContext:
    """커밋 메시지에서 추출한 티켓 ID와 부가 정보"""
    ticket_id: Optional[str] = None
    additional_info: Optional[str] = None

    def __post_init__(self):
        """빈 문자열은 None으로 정규화"""
        if self.ticket_id is not None and not self.ticket_id.strip():
            object.__setattr__(self, 'ticket_id', None)
        if self.additional_info is not None and not self.additional_info.strip():
            object.__setattr__(self, 'additional_info', None)

    @property
    def is_empty(self) -> bool:
        """추출된 정보가 없는지 확인"""
        return self.ticket_id is None and self.additional_info is None

    def override(self, ticket_id: Optional[str] = None, additional_info: Optional[str] = None) -> "CommitContext":
        """명시적으로 주어진 값으로 덮어쓴 새 컨텍스트 반환"""
        return CommitContext(
            ticket_id=ticket_id or self.ticket_id,
            additional_info=additional_info or self.additional_info,
        )
