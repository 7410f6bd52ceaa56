"""
Husky Integration

Installs the review gate into a repository's husky pre-commit hook and runs
the gate over staged files when the hook fires.
"""

import logging
import os
import shlex
from pathlib import Path
from typing import IO, Optional

from ..client.api_client import ReviewAPIClient
from ..exceptions import GitCommandError, HookInstallError
from ..git.commands import GitCommands
from ..git.commit_context import extract_commit_context
from ..models.commit import CommitContext
from ..models.policy import LanguagePolicy, TemplateCollection
from ..review.gate import GateOutcome
from ..review.prompts import PromptBuilder
from ..review.reviewer import Reviewer, print_review_results


logger = logging.getLogger(__name__)


HOOK_HEADER = '#!/usr/bin/env sh\n. "$(dirname "$0")/_/husky.sh"\n\n'
HOOK_MODE = 0o755


class HuskyIntegration:
    """
    Pre-commit hook installation and execution.

    The installer only ever appends its own command line, and only when that
    exact line is not already in the hook file.
    """

    def __init__(
        self,
        api_client: ReviewAPIClient,
        template: str = "security",
        host: str = "http://localhost:8080",
        endpoint: str = "/api/v1/query",
        ticket_id: Optional[str] = None,
        additional_info: Optional[str] = None,
        command: str = "ai-code-review",
        hook_dir: str = ".husky",
        hook_name: str = "pre-commit",
        commit_message_env: str = "HUSKY_GIT_PARAMS",
        git: Optional[GitCommands] = None,
        policy: Optional[LanguagePolicy] = None,
        templates: Optional[TemplateCollection] = None,
        file_identity: str = "path",
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        """
        Initialize husky integration.

        Args:
            api_client: Client for the review service
            template: Template name written into the hook and used for reviews
            host: Service host written into the hook command
            endpoint: Service endpoint written into the hook command
            ticket_id: Ticket id to pin in the hook command / override at run time
            additional_info: Extra context to pin in the hook command / override at run time
            command: Executable invoked by the hook
            hook_dir: Hook directory relative to the repository root
            hook_name: Hook file name
            commit_message_env: Environment variable naming the commit message file
            git: Git command runner
            policy: Language policy for reviews
            templates: Template collection for reviews
            file_identity: "path" or "basename"
            prompt_builder: Prompt builder for review requests
        """
        self.api_client = api_client
        self.template = template
        self.host = host
        self.endpoint = endpoint
        self.ticket_id = ticket_id
        self.additional_info = additional_info
        self.command = command
        self.hook_dir = hook_dir
        self.hook_name = hook_name
        self.commit_message_env = commit_message_env
        self.git = git or GitCommands()
        self.policy = policy
        self.templates = templates
        self.file_identity = file_identity
        self.prompt_builder = prompt_builder

    def build_hook_command(self) -> str:
        """Command line written into the hook file."""
        parts = [
            self.command, "pre-commit",
            "--host", shlex.quote(self.host),
            "--endpoint", shlex.quote(self.endpoint),
            "--template", shlex.quote(self.template),
        ]
        if self.ticket_id:
            parts += ["--ticket-id", shlex.quote(self.ticket_id)]
        if self.additional_info:
            parts += ["--additional-info", shlex.quote(self.additional_info)]
        return " ".join(parts)

    def hook_path(self, repo_path: str) -> Path:
        return Path(repo_path) / self.hook_dir / self.hook_name

    def install_pre_commit_hook(self, repo_path: str) -> bool:
        """
        Add the review command to the repository's pre-commit hook.

        Args:
            repo_path: Repository root

        Returns:
            True if the hook file was written, False if the command was already present

        Raises:
            HookInstallError: If the hook directory or file cannot be written
        """
        hook_file = self.hook_path(repo_path)

        try:
            hook_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise HookInstallError(f"Cannot create hook directory {hook_file.parent}: {e}") from e

        existing = ""
        if hook_file.exists():
            try:
                existing = hook_file.read_text(encoding='utf-8')
            except OSError as e:
                raise HookInstallError(f"Cannot read hook file {hook_file}: {e}") from e

        command = self.build_hook_command().strip()

        if command in existing:
            logger.info("Pre-commit hook already contains code review command.")
            return False

        if existing:
            new_content = existing if existing.endswith('\n') else existing + '\n'
            new_content += command + '\n'
        else:
            new_content = HOOK_HEADER + command + '\n'

        try:
            hook_file.write_text(new_content, encoding='utf-8')
            os.chmod(hook_file, HOOK_MODE)
        except OSError as e:
            raise HookInstallError(f"Cannot write hook file {hook_file}: {e}") from e

        logger.info(f"Pre-commit hook updated with code review command: {hook_file}")
        return True

    def read_commit_message(self) -> Optional[str]:
        """
        Commit message from the hook environment, else the latest commit.

        Returns None when neither source is available.
        """
        message_file = os.environ.get(self.commit_message_env)

        if message_file:
            try:
                return Path(message_file).read_text(encoding='utf-8').strip()
            except OSError as e:
                logger.warning(f"Could not read commit message file {message_file}: {e}")

        try:
            return self.git.get_last_commit_message()
        except GitCommandError as e:
            logger.warning("Could not retrieve commit message, proceeding without context")
            logger.debug(f"Commit message lookup failed: {e}")
            return None

    def extract_commit_context(self) -> CommitContext:
        """Commit context with explicitly configured values taking precedence."""
        context = extract_commit_context(self.read_commit_message())
        return context.override(ticket_id=self.ticket_id, additional_info=self.additional_info)

    def get_staged_files(self):
        """Staged files, or an empty list when git cannot list them."""
        try:
            return self.git.get_staged_files()
        except GitCommandError as e:
            logger.error(f"Error getting staged files: {e}")
            return []

    def run_pre_commit_review(self, stream: Optional[IO] = None) -> GateOutcome:
        """
        Review staged files and decide whether the commit may proceed.

        Args:
            stream: Where to print the review report (default: stdout)

        Returns:
            GateOutcome; ``outcome.blocked`` is True for high/critical findings
        """
        staged_files = self.get_staged_files()

        if not staged_files:
            logger.info("No staged files to review.")
            return GateOutcome()

        logger.info(f"Found {len(staged_files)} staged files to review.")

        reviewer = Reviewer(
            self.api_client,
            template=self.template,
            commit_context=self.extract_commit_context(),
            policy=self.policy,
            templates=self.templates,
            git=self.git,
            file_identity=self.file_identity,
            prompt_builder=self.prompt_builder,
        )
        results = reviewer.review_files(staged_files)
        print_review_results(results, stream)

        outcome = GateOutcome(results=results, files_reviewed=len(staged_files))
        if outcome.blocked:
            logger.error("Critical or high severity issues found. Commit blocked.")
        return outcome
