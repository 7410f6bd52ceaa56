"""
Git Command Layer

Thin wrapper around the git CLI for staged-file listing, per-file diffs and
commit messages.
"""

import logging
import subprocess
from typing import List, Optional, Sequence

from ..exceptions import GitCommandError


logger = logging.getLogger(__name__)


MAX_OUTPUT_BYTES = 10 * 1024 * 1024  # 10MB


class GitCommands:
    """
    Runs git subprocesses in a working directory.

    All calls are blocking and bounded by ``timeout_seconds``.
    """

    def __init__(self, cwd: Optional[str] = None, timeout_seconds: float = 30, git_binary: str = "git"):
        """
        Initialize git command runner.

        Args:
            cwd: Working directory for git commands (default: process cwd)
            timeout_seconds: Upper bound for each git invocation
            git_binary: Name or path of the git executable
        """
        self.cwd = cwd
        self.timeout_seconds = timeout_seconds
        self.git_binary = git_binary

    def _run(self, args: Sequence[str]) -> str:
        """
        Run a git command and return its stdout.

        Raises:
            GitCommandError: If git cannot be started, times out or exits non-zero
        """
        cmd = [self.git_binary, *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout_seconds,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise GitCommandError(f"Failed to run {' '.join(cmd)}: {e}") from e

        if result.returncode != 0:
            raise GitCommandError(
                f"{' '.join(cmd)} exited with {result.returncode}: {result.stderr.strip()}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        if len(result.stdout) > MAX_OUTPUT_BYTES:
            logger.warning(f"Output of {' '.join(cmd)} truncated to {MAX_OUTPUT_BYTES} characters")
            return result.stdout[:MAX_OUTPUT_BYTES]
        return result.stdout

    def get_staged_files(self) -> List[str]:
        """Relative paths of added, copied, modified and renamed staged files."""
        output = self._run(['diff', '--cached', '--name-only', '--diff-filter=ACMR'])
        return parse_name_list(output)

    def get_staged_diff(self, file_path: str) -> str:
        """Unified diff of ``file_path`` against the index."""
        return self._run(['diff', '--cached', '--', file_path])

    def get_last_commit_message(self) -> str:
        """Message of the latest commit."""
        return self._run(['log', '-1', '--pretty=%B']).strip()


def parse_name_list(output: str) -> List[str]:
    """Split newline-separated git output into non-empty trimmed paths."""
    return [line.strip() for line in output.splitlines() if line.strip()]
