"""
Policy Data Models

언어 정책 및 리뷰 템플릿 데이터 모델들
"""

import os
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Tuple

from ..exceptions import UnknownTemplateError
from .review import Severity


def _glob_to_regex(pattern: str) -> Pattern:
    """Translate a path glob into a compiled regex.

    ``**`` spans zero or more whole path segments; ``*`` and ``?`` never
    cross a ``/``.
    """
    parts = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == '*':
            if pattern.startswith('**', i):
                at_segment_start = i == 0 or pattern[i - 1] == '/'
                if at_segment_start and pattern.startswith('**/', i):
                    parts.append('(?:[^/]*/)*')
                    i += 3
                    continue
                if at_segment_start and i + 2 == n:
                    parts.append('.*')
                    i += 2
                    continue
                parts.append('[^/]*')
                i += 2
                continue
            parts.append('[^/]*')
        elif c == '?':
            parts.append('[^/]')
        elif c == '[':
            end = pattern.find(']', i + 1)
            if end == -1:
                parts.append(re.escape(c))
            else:
                body = pattern[i + 1:end]
                if body.startswith('!'):
                    body = '^' + body[1:]
                parts.append(f'[{body}]')
                i = end
        else:
            parts.append(re.escape(c))
        i += 1
    return re.compile(''.join(parts) + r'\Z')


def normalize_path(path: str) -> str:
    """Forward-slash path with any leading ``./`` removed."""
    normalized = path.replace('\\', '/')
    while normalized.startswith('./'):
        normalized = normalized[2:]
    return normalized


@dataclass(frozen=True)
class LanguagePolicy:
    """확장자 → 언어 매핑과 무시 패턴 (로드 후 불변)"""
    extensions: Mapping[str, str]
    ignore_patterns: Tuple[str, ...] = ()
    source: str = "builtin"
    _compiled: Tuple[Pattern, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        """데이터 검증 및 불변화"""
        for ext, language in self.extensions.items():
            if not ext.startswith('.'):
                raise ValueError(f"Extension must start with '.': {ext}")
            if not language:
                raise ValueError(f"Language name cannot be empty for {ext}")
        object.__setattr__(self, 'extensions', MappingProxyType(dict(self.extensions)))
        object.__setattr__(self, 'ignore_patterns', tuple(self.ignore_patterns))
        object.__setattr__(self, '_compiled', tuple(_glob_to_regex(p) for p in self.ignore_patterns))

    @classmethod
    def from_languages(
        cls,
        languages: Mapping[str, Iterable[str]],
        ignore_patterns: Iterable[str],
        source: str = "builtin",
    ) -> "LanguagePolicy":
        """언어별 확장자 목록에서 정책 생성"""
        extensions: Dict[str, str] = {}
        for language, exts in languages.items():
            for ext in exts:
                extensions[ext] = language
        return cls(extensions=extensions, ignore_patterns=tuple(ignore_patterns), source=source)

    @property
    def supported_extensions(self) -> List[str]:
        """지원 확장자 목록 (정의 순서)"""
        return list(self.extensions.keys())

    def resolve_language(self, extension: str) -> Optional[str]:
        """확장자로 언어 조회 (대소문자 구분)"""
        return self.extensions.get(extension)

    def language_for_path(self, path: str) -> Optional[str]:
        """파일 경로의 확장자로 언어 조회"""
        return self.resolve_language(os.path.splitext(path)[1])

    def is_ignored(self, path: str) -> bool:
        """무시 패턴 중 하나라도 일치하면 True"""
        normalized = normalize_path(path)
        return any(regex.match(normalized) for regex in self._compiled)


@dataclass(frozen=True)
class ReviewTemplate:
    """이름이 붙은 리뷰 프롬프트 설정"""
    name: str
    prompt: str
    severity_threshold: Severity = Severity.LOW

    def __post_init__(self):
        """데이터 검증"""
        if not self.name.strip():
            raise ValueError("Template name cannot be empty")
        if not isinstance(self.severity_threshold, Severity):
            object.__setattr__(self, 'severity_threshold', Severity.parse(self.severity_threshold))


@dataclass(frozen=True)
class TemplateCollection:
    """기본 키를 가진 템플릿 모음"""
    default: str
    templates: Mapping[str, ReviewTemplate]
    source: str = "builtin"

    def __post_init__(self):
        """데이터 검증 및 불변화"""
        if not self.templates:
            raise ValueError("Template collection cannot be empty")
        if self.default not in self.templates:
            raise ValueError(f"Default template not defined: {self.default}")
        object.__setattr__(self, 'templates', MappingProxyType(dict(self.templates)))

    @property
    def names(self) -> List[str]:
        """템플릿 이름 목록"""
        return list(self.templates.keys())

    def get(self, name: Optional[str] = None) -> ReviewTemplate:
        """이름으로 템플릿 조회 (없으면 UnknownTemplateError)"""
        key = name or self.default
        try:
            return self.templates[key]
        except KeyError:
            raise UnknownTemplateError(key, self.names) from None
