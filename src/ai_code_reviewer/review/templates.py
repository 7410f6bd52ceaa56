"""
Review Template Loader

Loads the named prompt templates used to focus a review. When the collection
cannot be loaded at all a single built-in ``security`` template is used.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..exceptions import TemplateConfigurationError
from ..models.policy import ReviewTemplate, TemplateCollection
from ..models.review import Severity


logger = logging.getLogger(__name__)


DEFAULT_TEMPLATES_PATH = Path(__file__).resolve().parent.parent / "data" / "templates.yaml"

FALLBACK_TEMPLATE_NAME = "security"

FALLBACK_SECURITY_PROMPT = (
    "Review the code for security vulnerabilities such as injection, "
    "hard-coded secrets, unsafe input handling and authorization gaps. "
    "Report each finding with a concrete suggestion."
)


class TemplateEntry(BaseModel):
    """One template block of the templates document."""
    prompt: str
    severity_threshold: Severity = Field(default=Severity.LOW, alias='severityThreshold')

    @field_validator('prompt')
    @classmethod
    def validate_prompt(cls, v):
        if not v.strip():
            raise ValueError('Prompt cannot be empty')
        return v.strip()


class TemplateDocument(BaseModel):
    """Shape of ``templates.yaml``."""
    default: str
    templates: Dict[str, TemplateEntry]

    @model_validator(mode='after')
    def validate_default(self):
        if not self.templates:
            raise ValueError('No templates defined')
        if self.default not in self.templates:
            raise ValueError(f'Default template {self.default!r} is not defined')
        return self


def default_template_collection() -> TemplateCollection:
    """Collection synthesized when the templates document failed to load."""
    template = ReviewTemplate(
        name=FALLBACK_TEMPLATE_NAME,
        prompt=FALLBACK_SECURITY_PROMPT,
        severity_threshold=Severity.MEDIUM,
    )
    return TemplateCollection(
        default=FALLBACK_TEMPLATE_NAME,
        templates={FALLBACK_TEMPLATE_NAME: template},
        source="builtin",
    )


def parse_template_document(text: str, source: str = "<string>") -> TemplateCollection:
    """
    Parse and validate a templates document.

    Raises:
        TemplateConfigurationError: If the YAML is invalid or has the wrong shape
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TemplateConfigurationError(f"Invalid YAML in {source}: {e}") from e

    if not isinstance(data, dict):
        raise TemplateConfigurationError(f"Template collection in {source} must be a mapping")

    try:
        document = TemplateDocument.model_validate(data)
    except ValidationError as e:
        raise TemplateConfigurationError(f"Invalid template collection in {source}: {e}") from e

    templates = {
        name: ReviewTemplate(name=name, prompt=entry.prompt, severity_threshold=entry.severity_threshold)
        for name, entry in document.templates.items()
    }
    return TemplateCollection(default=document.default, templates=templates, source=source)


def load_templates(path: Optional[Union[str, Path]] = None) -> TemplateCollection:
    """Load the template collection, falling back to the built-in one."""
    config_path = Path(path) if path else DEFAULT_TEMPLATES_PATH

    if not config_path.exists():
        logger.warning(f"Template configuration not found at {config_path}, using built-in security template")
        return default_template_collection()

    try:
        text = config_path.read_text(encoding='utf-8')
        collection = parse_template_document(text, source=str(config_path))
    except (OSError, TemplateConfigurationError) as e:
        logger.error(f"Failed to load review templates: {e}")
        return default_template_collection()

    logger.debug(f"Loaded templates {collection.names} (default: {collection.default})")
    return collection
