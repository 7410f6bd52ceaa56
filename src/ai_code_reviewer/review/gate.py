"""
Gate Decision

Reduces a batch of review results to the pass/fail signal used by the
pre-commit hook.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from ..models.review import ReviewResult


def blocking_results(results: Iterable[ReviewResult]) -> List[ReviewResult]:
    """Results with high or critical severity."""
    return [result for result in results if result.is_blocking]


def is_blocking(results: Iterable[ReviewResult]) -> bool:
    """True iff any result has high or critical severity."""
    return any(result.is_blocking for result in results)


@dataclass
class GateOutcome:
    """Outcome of a pre-commit review run."""
    results: List[ReviewResult] = field(default_factory=list)
    files_reviewed: int = 0

    @property
    def blocked(self) -> bool:
        return is_blocking(self.results)

    @property
    def blockers(self) -> List[ReviewResult]:
        return blocking_results(self.results)
