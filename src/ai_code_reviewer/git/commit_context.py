"""
Commit Context Extractor

Recovers a ticket identifier and the remaining free text from a commit
message so they can be attached to each review request.
"""

import logging
import re
from typing import List, Optional, Pattern

from ..models.commit import CommitContext


logger = logging.getLogger(__name__)


# Evaluated in order; the first pattern with any match supplies the ticket id.
TICKET_PATTERNS: List[Pattern] = [
    re.compile(r'[A-Z]{2,}-?\d{3,}-\d{3,}', re.IGNORECASE),  # PRJ1234-0235, SQ1234-0123
    re.compile(r'[A-Z0-9]+-\d+', re.IGNORECASE),             # PROJ-123, GIA-123
    re.compile(r'#\d+'),                                     # #123
]


def find_ticket_id(message: str, patterns: Optional[List[Pattern]] = None) -> Optional[str]:
    """Return the first match of the highest-priority matching pattern."""
    for pattern in patterns or TICKET_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(0).strip()
    return None


def remove_first(message: str, fragment: str) -> str:
    """Remove the first occurrence of ``fragment`` and collapse the gap."""
    index = message.find(fragment)
    if index == -1:
        return message.strip()
    before = message[:index].rstrip()
    after = message[index + len(fragment):].lstrip()
    return " ".join(part for part in (before, after) if part).strip()


def extract_commit_context(message: Optional[str]) -> CommitContext:
    """
    Extract ticket id and additional info from a raw commit message.

    Args:
        message: Raw commit message (may be empty or None)

    Returns:
        CommitContext with absent fields for anything not found
    """
    if not message or not message.strip():
        return CommitContext()

    ticket_id = find_ticket_id(message)

    if ticket_id:
        additional_info = remove_first(message, ticket_id)
    else:
        additional_info = message.strip()

    context = CommitContext(ticket_id=ticket_id, additional_info=additional_info or None)
    logger.debug(f"Extracted commit context: ticket={context.ticket_id!r}")
    return context
