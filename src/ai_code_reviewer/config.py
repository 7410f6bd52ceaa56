"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field, fields
from typing import Optional, Dict, Any
from pathlib import Path
import logging


ENV_PREFIX = "CODE_REVIEW_"


@dataclass
class ApiConfig:
    """리뷰 서비스 API 설정"""
    host: str = "http://localhost:8080"
    endpoint: str = "/api/v1/query"
    timeout_seconds: float = 30


@dataclass
class ReviewConfig:
    """리뷰 실행 설정"""
    template: Optional[str] = None  # None이면 템플릿 모음의 default 사용
    file_identity: str = "path"  # 'path' | 'basename'
    languages_path: Optional[str] = None
    templates_path: Optional[str] = None
    max_diff_chars: int = 20000


@dataclass
class HookConfig:
    """pre-commit 훅 설정"""
    hook_dir: str = ".husky"
    hook_name: str = "pre-commit"
    command: str = "ai-code-review"
    commit_message_env: str = "HUSKY_GIT_PARAMS"
    git_timeout_seconds: float = 30


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(levelname)s: %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    api: ApiConfig = field(default_factory=ApiConfig)
    review: ReviewConfig = field(default_factory=ReviewConfig)
    hook: HookConfig = field(default_factory=HookConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        def env(name: str, default: Optional[str] = None) -> Optional[str]:
            return os.getenv(ENV_PREFIX + name, default)

        return cls(
            api=ApiConfig(
                host=env("HOST", "http://localhost:8080"),
                endpoint=env("ENDPOINT", "/api/v1/query"),
                timeout_seconds=float(env("TIMEOUT", "30")),
            ),
            review=ReviewConfig(
                template=env("TEMPLATE"),
                file_identity=env("FILE_IDENTITY", "path"),
                languages_path=env("LANGUAGES_FILE"),
                templates_path=env("TEMPLATES_FILE"),
                max_diff_chars=int(env("MAX_DIFF_CHARS", "20000")),
            ),
            hook=HookConfig(
                hook_dir=env("HOOK_DIR", ".husky"),
                hook_name=env("HOOK_NAME", "pre-commit"),
                command=env("HOOK_COMMAND", "ai-code-review"),
                commit_message_env=env("COMMIT_MESSAGE_ENV", "HUSKY_GIT_PARAMS"),
                git_timeout_seconds=float(env("GIT_TIMEOUT", "30")),
            ),
            logging=LoggingConfig(
                level=env("LOG_LEVEL", "INFO"),
                format=env("LOG_FORMAT", "%(levelname)s: %(message)s"),
                file_path=env("LOG_FILE"),
                max_file_size=int(env("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(env("LOG_BACKUP_COUNT", "5")),
            ),
            debug=env("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")

        # 알 수 없는 키나 매핑이 아닌 섹션은 TypeError
        try:
            return cls(
                api=ApiConfig(**config_data.get('api') or {}),
                review=ReviewConfig(**config_data.get('review') or {}),
                hook=HookConfig(**config_data.get('hook') or {}),
                logging=LoggingConfig(**config_data.get('logging') or {}),
                debug=config_data.get('debug', False),
            )
        except TypeError as e:
            raise ValueError(f"Invalid config section in {config_path}: {e}") from e

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # API 주소 확인
        if not self.api.host.startswith(("http://", "https://")):
            errors.append(f"API host must start with http:// or https://: {self.api.host}")

        if not self.api.endpoint.startswith("/"):
            errors.append(f"API endpoint must start with '/': {self.api.endpoint}")

        # 타임아웃은 반드시 유한한 양수
        if not 0 < self.api.timeout_seconds <= 600:
            errors.append("API timeout must be between 0 and 600 seconds")

        if self.hook.git_timeout_seconds <= 0:
            errors.append("Git timeout must be positive")

        if self.review.file_identity not in ('path', 'basename'):
            errors.append(f"Invalid file identity mode: {self.review.file_identity}")

        if self.review.max_diff_chars <= 0:
            errors.append("max_diff_chars must be positive")

        if not self.hook.hook_dir or not self.hook.hook_name:
            errors.append("Hook directory and name are required")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        def section(obj) -> Dict[str, Any]:
            return {f.name: getattr(obj, f.name) for f in fields(obj)}

        return {
            'api': section(self.api),
            'review': section(self.review),
            'hook': section(self.hook),
            'logging': section(self.logging),
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """설정 업데이트 (None 값은 무시)"""
        config_dict = self._config.to_dict()

        for key, value in kwargs.items():
            if value is None:
                continue
            if '.' in key:
                # 중첩된 설정 (예: 'api.host')
                section, name = key.split('.', 1)
                if section not in config_dict or name not in config_dict[section]:
                    raise KeyError(f"Unknown config key: {key}")
                config_dict[section][name] = value
            else:
                config_dict[key] = value

        self._config = AppConfig(
            api=ApiConfig(**config_dict['api']),
            review=ReviewConfig(**config_dict['review']),
            hook=HookConfig(**config_dict['hook']),
            logging=LoggingConfig(**config_dict['logging']),
            debug=config_dict['debug'],
        )

        self._config.validate()
        self._setup_logging()

    def _setup_logging(self) -> None:
        """로깅 설정"""
        level = logging.DEBUG if self._config.debug else getattr(logging, self._config.logging.level.upper())
        root_logger = logging.getLogger()

        logging.basicConfig(level=level, format=self._config.logging.format)
        root_logger.setLevel(level)

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            already_attached = any(
                isinstance(h, RotatingFileHandler)
                and getattr(h, 'baseFilename', None) == os.path.abspath(self._config.logging.file_path)
                for h in root_logger.handlers
            )
            if not already_attached:
                handler = RotatingFileHandler(
                    self._config.logging.file_path,
                    maxBytes=self._config.logging.max_file_size,
                    backupCount=self._config.logging.backup_count,
                )
                handler.setFormatter(logging.Formatter(self._config.logging.format))
                root_logger.addHandler(handler)


# 전역 설정 관리자 인스턴스 (최초 사용 시 생성)
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """전역 설정 관리자 반환"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def set_config(config: AppConfig) -> ConfigManager:
    """전역 설정 교체"""
    global _config_manager
    _config_manager = ConfigManager(config)
    return _config_manager


def get_config() -> AppConfig:
    """현재 설정 반환"""
    return get_config_manager().config


def update_config(**kwargs) -> None:
    """설정 업데이트"""
    get_config_manager().update_config(**kwargs)
