"""
File Discovery

Expands a directory or an explicit file list into the ordered sequence of
files eligible for review under the active language policy.
"""

import glob
import logging
import os
from typing import Iterable, List

from ..models.policy import LanguagePolicy, normalize_path


logger = logging.getLogger(__name__)


class FileDiscovery:
    """
    Applies a LanguagePolicy to directories and file lists.

    Files failing a policy check are skipped with a warning, never raised.
    """

    def __init__(self, policy: LanguagePolicy):
        self.policy = policy

    def discover_directory(self, dir_path: str) -> List[str]:
        """
        Find all supported, non-ignored files under a directory.

        Extensions are visited in policy order and each glob result is
        sorted, so the output is stable for a fixed file system state.

        Args:
            dir_path: Directory to search recursively

        Returns:
            Deduplicated forward-slash paths
        """
        if not os.path.isdir(dir_path):
            logger.warning(f"Directory does not exist: {dir_path}")
            return []

        seen = set()
        files: List[str] = []
        base = normalize_path(dir_path).rstrip('/') or '.'

        for ext in self.policy.supported_extensions:
            pattern = f"{glob.escape(base)}/**/*{glob.escape(ext)}"
            for match in sorted(glob.glob(pattern, recursive=True)):
                path = normalize_path(match)
                if path in seen or not os.path.isfile(match):
                    continue
                # absolute roots are matched inside the reviewed tree only
                relative = normalize_path(os.path.relpath(match, dir_path))
                if self.policy.is_ignored(relative) or (
                    not os.path.isabs(dir_path) and self.policy.is_ignored(path)
                ):
                    logger.debug(f"Ignoring file due to pattern: {path}")
                    continue
                seen.add(path)
                files.append(path)

        logger.info(f"Discovered {len(files)} reviewable files in {dir_path}")
        return files

    def filter_files(self, file_paths: Iterable[str]) -> List[str]:
        """
        Keep the explicitly listed files that pass every policy check.

        Checks run in order: existence, extension support, ignore patterns.
        Input order is preserved and duplicates are kept.
        """
        eligible: List[str] = []

        for file_path in file_paths:
            if not os.path.exists(file_path):
                logger.warning(f"File does not exist: {file_path}")
                continue

            ext = os.path.splitext(file_path)[1]
            if self.policy.resolve_language(ext) is None:
                logger.warning(f"Unsupported file type: {file_path} ({ext or 'no extension'})")
                continue

            if self.policy.is_ignored(file_path):
                logger.warning(f"Ignoring file due to pattern: {file_path}")
                continue

            eligible.append(file_path)

        return eligible
