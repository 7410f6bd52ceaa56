"""
Prompt Builder

Composes the prompt text sent with each review request from the selected
template and the per-file git context (ticket, commit text, staged diff).
"""

import logging
from typing import Dict, Optional

from ..models.policy import ReviewTemplate


logger = logging.getLogger(__name__)


class PromptBuilder:
    """
    Builds review prompts from a template plus optional git context.

    Sections are emitted in a fixed order; absent context is left out
    rather than rendered empty.
    """

    def __init__(self, max_diff_chars: int = 20000):
        """
        Initialize prompt builder.

        Args:
            max_diff_chars: Diff text beyond this length is truncated
        """
        self.max_diff_chars = max_diff_chars
        self.headers: Dict[str, str] = {
            "file": "## File",
            "ticket": "## Ticket",
            "context": "## Change context",
            "diff": "## Staged diff",
            "output": "## Output format",
        }

    def build_review_prompt(
        self,
        template: ReviewTemplate,
        language: str,
        file_name: str,
        diff: str = "",
        ticket_id: Optional[str] = None,
        additional_info: Optional[str] = None,
    ) -> str:
        """
        Build the complete prompt for one file.

        Args:
            template: Selected review template
            language: Language name resolved from the file extension
            file_name: File identity sent to the service
            diff: Staged diff text ("" for new files)
            ticket_id: Optional ticket identifier from the commit message
            additional_info: Optional commit message text without the ticket id

        Returns:
            Prompt string
        """
        logger.debug(f"Building review prompt for {file_name} with template {template.name}")

        sections = [template.prompt.strip()]

        sections.append(f"\n{self.headers['file']}\n{file_name} ({language})")

        if ticket_id:
            sections.append(f"\n{self.headers['ticket']}\n{ticket_id}")

        if additional_info:
            sections.append(f"\n{self.headers['context']}\n{additional_info}")

        if diff:
            sections.append(f"\n{self.headers['diff']}\n```diff\n{self._truncate_diff(diff)}\n```")

        sections.append(
            f"\n{self.headers['output']}\n"
            f"Only report findings of severity {template.severity_threshold.value} or higher. "
            "Respond with feedback text, a list of suggestions and an overall severity "
            "(low, medium, high or critical)."
        )

        return "\n".join(sections)

    def _truncate_diff(self, diff: str) -> str:
        """Limit diff text to ``max_diff_chars``."""
        diff = diff.rstrip('\n')
        if len(diff) <= self.max_diff_chars:
            return diff
        logger.debug(f"Truncating diff from {len(diff)} to {self.max_diff_chars} characters")
        return diff[:self.max_diff_chars] + "\n... (diff truncated)"
