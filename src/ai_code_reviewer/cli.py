"""
Command Line Interface

``ai-code-review review | install-hook | pre-commit``
"""

import argparse
import logging
import os
import sys
from enum import IntEnum
from typing import List, Optional

from . import __version__
from .api import CodeReviewAPI
from .config import AppConfig, set_config
from .exceptions import ReviewerError


logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    OK = 0
    ERROR = 1
    BLOCKED = 2


def _add_service_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-H", "--host", help="API host (e.g. http://localhost:8080)")
    parser.add_argument("-e", "--endpoint", help="review API endpoint (e.g. /api/v1/query)")
    parser.add_argument("-t", "--template", help="review template name")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds")


def _add_context_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--ticket-id", help="ticket id attached to every review request")
    parser.add_argument("--additional-info", help="extra context attached to every review request")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-code-review",
        description="Code review using a remote analysis API",
        allow_abbrev=False,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", help="YAML configuration file")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")

    sub = parser.add_subparsers(dest="command", metavar="command")
    sub.required = True

    review = sub.add_parser("review", help="review files or directories")
    _add_service_options(review)
    review.add_argument("-p", "--path", default=".", help="directory to review (default: current directory)")
    review.add_argument("-f", "--files", nargs="+", help="specific files to review")
    review.add_argument("--basename", action="store_true", help="send only file basenames to the service")

    install = sub.add_parser("install-hook", help="install the husky pre-commit hook")
    _add_service_options(install)
    _add_context_options(install)
    install.add_argument("--repo", default=None, help="repository root (default: current directory)")

    pre_commit = sub.add_parser("pre-commit", help="review staged files (run from the pre-commit hook)")
    _add_service_options(pre_commit)
    _add_context_options(pre_commit)

    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    """Configuration from file or environment, with command-line overrides applied."""
    config = AppConfig.from_yaml(args.config) if args.config else AppConfig.from_env()

    manager = set_config(config)
    manager.update_config(**{
        'api.host': args.host,
        'api.endpoint': args.endpoint,
        'api.timeout_seconds': args.timeout,
        'review.template': args.template,
        'review.file_identity': 'basename' if getattr(args, 'basename', False) else None,
        'logging.level': args.log_level,
    })
    return manager.config


def _run(args: argparse.Namespace) -> ExitCode:
    config = load_config(args)

    with CodeReviewAPI(config) as api:
        if args.command == "review":
            api.review(path=args.path, files=args.files)
            print("Code review completed successfully!")
            return ExitCode.OK

        if args.command == "install-hook":
            repo_path = args.repo or os.getcwd()
            api.install_hook(repo_path, ticket_id=args.ticket_id, additional_info=args.additional_info)
            return ExitCode.OK

        outcome = api.run_pre_commit(ticket_id=args.ticket_id, additional_info=args.additional_info)
        if outcome.blocked:
            print("Critical or high severity issues found. Commit blocked.", file=sys.stderr)
            return ExitCode.BLOCKED
        return ExitCode.OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return int(_run(args))
    except (ReviewerError, ValueError, OSError) as e:
        logger.error(f"Error during {args.command}: {e}")
        return int(ExitCode.ERROR)


if __name__ == "__main__":
    raise SystemExit(main())
