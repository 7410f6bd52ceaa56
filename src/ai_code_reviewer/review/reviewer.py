"""
Reviewer

Dispatches eligible files to the review service one at a time and collects
the successful results. A failure for one file is logged and skipped; it
never aborts the batch.
"""

import logging
import os
import sys
from typing import IO, Iterable, List, Optional

from ..client.api_client import ReviewAPIClient
from ..exceptions import GitCommandError, ReviewerError
from ..git.commands import GitCommands
from ..models.commit import CommitContext
from ..models.policy import LanguagePolicy, TemplateCollection
from ..models.review import ReviewRequest, ReviewResult
from .discovery import FileDiscovery
from .policy import load_language_policy
from .prompts import PromptBuilder
from .templates import load_templates


logger = logging.getLogger(__name__)


FILE_IDENTITY_MODES = ('path', 'basename')


class Reviewer:
    """
    Orchestrates per-file review requests.

    Steps for each file:
    1. Read content and resolve the language
    2. Fetch the staged diff ("" when unavailable)
    3. Compose the prompt from the selected template and commit context
    4. Send the request and wrap the response in a ReviewResult
    """

    def __init__(
        self,
        api_client: ReviewAPIClient,
        template: Optional[str] = None,
        commit_context: Optional[CommitContext] = None,
        policy: Optional[LanguagePolicy] = None,
        templates: Optional[TemplateCollection] = None,
        git: Optional[GitCommands] = None,
        file_identity: str = 'path',
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        """
        Initialize reviewer.

        Args:
            api_client: Client for the review service
            template: Template name (default: the collection's default)
            commit_context: Ticket id / additional info attached to every request
            policy: Language policy (default: loaded from the packaged document)
            templates: Template collection (default: loaded from the packaged document)
            git: Git command runner used for per-file diffs
            file_identity: Send the file "path" or only its "basename"
            prompt_builder: Prompt composer
        """
        if file_identity not in FILE_IDENTITY_MODES:
            raise ValueError(f"Invalid file_identity: {file_identity}")

        self.api_client = api_client
        self.policy = policy or load_language_policy()
        self.templates = templates or load_templates()
        self.template = template or self.templates.default
        self.commit_context = commit_context or CommitContext()
        self.git = git or GitCommands()
        self.file_identity = file_identity
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.discovery = FileDiscovery(self.policy)

    def review_directory(self, dir_path: str) -> List[ReviewResult]:
        """Review every supported, non-ignored file under a directory."""
        files = self.discovery.discover_directory(dir_path)
        return self._review_all(files)

    def review_files(self, file_paths: Iterable[str]) -> List[ReviewResult]:
        """Review an explicit list of files, skipping those failing policy checks."""
        files = self.discovery.filter_files(file_paths)
        return self._review_all(files)

    def _review_all(self, files: List[str]) -> List[ReviewResult]:
        results: List[ReviewResult] = []
        for file_path in files:
            result = self.review_file(file_path)
            if result:
                results.append(result)
        logger.info(f"Reviewed {len(results)} of {len(files)} files")
        return results

    def review_file(self, file_path: str) -> Optional[ReviewResult]:
        """
        Review a single file.

        Args:
            file_path: Path of the file to review

        Returns:
            ReviewResult, or None if the file could not be reviewed
        """
        language = self.policy.language_for_path(file_path)
        if not language:
            logger.warning(f"Unsupported file extension: {os.path.splitext(file_path)[1]}")
            return None

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading file {file_path}: {e}")
            return None

        diff = self.get_diff(file_path)

        logger.info(f"Reviewing file: {file_path} ({language}) with template: {self.template}")

        try:
            request = self.build_request(file_path, content, language, diff)
            response = self.api_client.send_review_request(request)
        except ReviewerError as e:
            logger.error(f"Error reviewing file {file_path}: {e}")
            return None

        return response.to_result(file_path)

    def get_diff(self, file_path: str) -> str:
        """Staged diff for the file, or "" when git has none to give."""
        try:
            return self.git.get_staged_diff(file_path)
        except GitCommandError as e:
            logger.info(f"No diff found for file: {file_path} (likely a new file)")
            logger.debug(f"Diff retrieval failed: {e}")
            return ""

    def build_request(self, file_path: str, content: str, language: str, diff: str = "") -> ReviewRequest:
        """
        Build the review request for a file.

        Raises:
            UnknownTemplateError: If the configured template is not loaded
        """
        template = self.templates.get(self.template)
        file_name = os.path.basename(file_path) if self.file_identity == 'basename' else file_path

        prompt = self.prompt_builder.build_review_prompt(
            template,
            language=language,
            file_name=file_name,
            diff=diff,
            ticket_id=self.commit_context.ticket_id,
            additional_info=self.commit_context.additional_info,
        )

        return ReviewRequest(
            content=content,
            language=language,
            file_name=file_name,
            template=template.name,
            prompt=prompt,
            severity_threshold=template.severity_threshold,
            ticket_id=self.commit_context.ticket_id,
            additional_info=self.commit_context.additional_info,
            diff=diff or "",
        )


def print_review_results(results: List[ReviewResult], stream: Optional[IO] = None) -> None:
    """Write a human-readable report of the results."""
    out = stream or sys.stdout

    if not results:
        print("No review results to display.", file=out)
        return

    for result in results:
        print(f"\n--- Code Review for: {result.file_name} ---", file=out)
        print(f"Severity: {result.severity.value}", file=out)
        print(f"Feedback:\n{result.feedback}", file=out)

        if result.suggestions:
            print("Suggestions:", file=out)
            for index, suggestion in enumerate(result.suggestions, 1):
                print(f"{index}. {suggestion}", file=out)

        print("--- End of Review ---\n", file=out)
