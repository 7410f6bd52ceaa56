"""
Language Policy Loader

Resolves which file extensions are reviewable and which paths are ignored.
The policy is read from a YAML document shipped with the package and falls
back to a built-in table when the document is missing or malformed.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import PolicyConfigurationError
from ..models.policy import LanguagePolicy


logger = logging.getLogger(__name__)


DEFAULT_LANGUAGES_PATH = Path(__file__).resolve().parent.parent / "data" / "languages.yaml"

FALLBACK_EXTENSIONS: Dict[str, str] = {
    '.js': 'javascript',
    '.ts': 'typescript',
    '.jsx': 'javascript',
    '.tsx': 'typescript',
    '.java': 'java',
    '.groovy': 'groovy',
    '.kt': 'kotlin',
    '.swift': 'swift',
    '.m': 'objective-c',
    '.sh': 'shell',
    '.py': 'python',
}

DEFAULT_IGNORE_PATTERNS: List[str] = [
    '**/node_modules/**',
    '**/.git/**',
    '**/dist/**',
    '**/build/**',
    '**/*.min.js',
    '**/coverage/**',
    '**/.nyc_output/**',
]


class LanguageEntry(BaseModel):
    """One language block of the policy document."""
    extensions: List[str]
    display_name: Optional[str] = Field(default=None, alias='displayName')

    @field_validator('extensions')
    @classmethod
    def validate_extensions(cls, v):
        if not v:
            raise ValueError('At least one extension is required')
        for ext in v:
            if not ext.startswith('.') or len(ext) < 2:
                raise ValueError(f'Invalid extension: {ext!r}')
        return v


class LanguageDocument(BaseModel):
    """Shape of ``languages.yaml``."""
    languages: Dict[str, LanguageEntry]
    ignore_patterns: Optional[List[str]] = Field(default=None, alias='ignorePatterns')

    @field_validator('languages')
    @classmethod
    def validate_languages(cls, v):
        if not v:
            raise ValueError('No languages defined')
        return v


def default_language_policy() -> LanguagePolicy:
    """Built-in policy used when no valid document is available."""
    return LanguagePolicy(
        extensions=dict(FALLBACK_EXTENSIONS),
        ignore_patterns=tuple(DEFAULT_IGNORE_PATTERNS),
        source="builtin",
    )


def parse_language_document(text: str, source: str = "<string>") -> LanguagePolicy:
    """
    Parse and validate a language policy document.

    Args:
        text: YAML document text
        source: Label recorded on the resulting policy

    Returns:
        LanguagePolicy built from the document

    Raises:
        PolicyConfigurationError: If the YAML is invalid or has the wrong shape
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise PolicyConfigurationError(f"Invalid YAML in {source}: {e}") from e

    if not isinstance(data, dict):
        raise PolicyConfigurationError(f"Language policy in {source} must be a mapping")

    try:
        document = LanguageDocument.model_validate(data)
    except ValidationError as e:
        raise PolicyConfigurationError(f"Invalid language policy in {source}: {e}") from e

    ignore_patterns = document.ignore_patterns
    if ignore_patterns is None:
        ignore_patterns = list(DEFAULT_IGNORE_PATTERNS)

    return LanguagePolicy.from_languages(
        {name: entry.extensions for name, entry in document.languages.items()},
        ignore_patterns,
        source=source,
    )


def load_language_policy(path: Optional[Union[str, Path]] = None) -> LanguagePolicy:
    """
    Load the language policy, falling back to the built-in table.

    Never raises for a missing or malformed document.
    """
    config_path = Path(path) if path else DEFAULT_LANGUAGES_PATH

    if not config_path.exists():
        logger.warning(f"Language configuration not found at {config_path}, using built-in defaults")
        return default_language_policy()

    try:
        text = config_path.read_text(encoding='utf-8')
        policy = parse_language_document(text, source=str(config_path))
    except (OSError, PolicyConfigurationError) as e:
        logger.error(f"Failed to load language configuration: {e}")
        return default_language_policy()

    logger.debug(f"Loaded {len(policy.extensions)} extensions from {config_path}")
    return policy
