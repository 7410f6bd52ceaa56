"""
Main Code Review API

Main interface that wires configuration, language policy, templates,
the review service client and git together for the three entry points:
interactive review, hook installation and the pre-commit gate.
"""

import logging
from typing import IO, List, Optional

from .client.api_client import ReviewAPIClient
from .config import AppConfig
from .git.commands import GitCommands
from .hooks.husky import HuskyIntegration
from .models.commit import CommitContext
from .models.review import ReviewResult
from .review.gate import GateOutcome
from .review.policy import load_language_policy
from .review.prompts import PromptBuilder
from .review.reviewer import Reviewer, print_review_results
from .review.templates import load_templates


logger = logging.getLogger(__name__)


class CodeReviewAPI:
    """
    Main code review interface.

    Policy and templates are loaded once per instance and shared read-only
    by every review it runs.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        api_client: Optional[ReviewAPIClient] = None,
        git: Optional[GitCommands] = None,
    ):
        """
        Initialize code review API.

        Args:
            config: Application configuration (default: AppConfig())
            api_client: Optional preconfigured review service client
            git: Optional git command runner
        """
        self.config = config or AppConfig()

        self.api_client = api_client or ReviewAPIClient(
            base_url=self.config.api.host,
            endpoint=self.config.api.endpoint,
            timeout_seconds=self.config.api.timeout_seconds,
        )
        self.git = git or GitCommands(timeout_seconds=self.config.hook.git_timeout_seconds)

        self.policy = load_language_policy(self.config.review.languages_path)
        self.templates = load_templates(self.config.review.templates_path)

        logger.debug(
            f"Code review API ready: {self.api_client.url}, "
            f"{len(self.policy.extensions)} extensions, templates {self.templates.names}"
        )

    @property
    def template(self) -> str:
        """Configured template name, or the collection default."""
        return self.config.review.template or self.templates.default

    def create_reviewer(self, commit_context: Optional[CommitContext] = None) -> Reviewer:
        return Reviewer(
            self.api_client,
            template=self.template,
            commit_context=commit_context,
            policy=self.policy,
            templates=self.templates,
            git=self.git,
            file_identity=self.config.review.file_identity,
            prompt_builder=PromptBuilder(max_diff_chars=self.config.review.max_diff_chars),
        )

    def create_hook_integration(
        self,
        ticket_id: Optional[str] = None,
        additional_info: Optional[str] = None,
    ) -> HuskyIntegration:
        return HuskyIntegration(
            self.api_client,
            template=self.template,
            host=self.config.api.host,
            endpoint=self.config.api.endpoint,
            ticket_id=ticket_id,
            additional_info=additional_info,
            command=self.config.hook.command,
            hook_dir=self.config.hook.hook_dir,
            hook_name=self.config.hook.hook_name,
            commit_message_env=self.config.hook.commit_message_env,
            git=self.git,
            policy=self.policy,
            templates=self.templates,
            file_identity=self.config.review.file_identity,
            prompt_builder=PromptBuilder(max_diff_chars=self.config.review.max_diff_chars),
        )

    def review(
        self,
        path: str = ".",
        files: Optional[List[str]] = None,
        stream: Optional[IO] = None,
    ) -> List[ReviewResult]:
        """
        Interactive review of a directory or an explicit file list.

        Prints the report and returns the results; never gates.
        """
        reviewer = self.create_reviewer()
        if files:
            results = reviewer.review_files(files)
        else:
            results = reviewer.review_directory(path)
        print_review_results(results, stream)
        return results

    def install_hook(
        self,
        repo_path: str,
        ticket_id: Optional[str] = None,
        additional_info: Optional[str] = None,
    ) -> bool:
        """Install the pre-commit hook. Returns True if the hook file changed."""
        integration = self.create_hook_integration(ticket_id, additional_info)
        return integration.install_pre_commit_hook(repo_path)

    def run_pre_commit(
        self,
        ticket_id: Optional[str] = None,
        additional_info: Optional[str] = None,
        stream: Optional[IO] = None,
    ) -> GateOutcome:
        """Run the pre-commit gate over staged files."""
        integration = self.create_hook_integration(ticket_id, additional_info)
        return integration.run_pre_commit_review(stream)

    def close(self) -> None:
        self.api_client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit closing the HTTP session."""
        self.close()
