"""CLI entrypoint for the Jira issue browser.

Matching issues are written to stdout (or the `out` stream); diagnostics go to logging.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from pydantic import ValidationError

from jira_issue_browser import __version__
from jira_issue_browser.browser.config import BrowserSettings
from jira_issue_browser.browser.display import IssueFilter, render_issues, render_projects
from jira_issue_browser.browser.jira.client import JiraClient, JiraError
from jira_issue_browser.browser.jira.resolver import ById, ByName, ProjectRef
from jira_issue_browser.browser.logging import configure_logging

logger = logging.getLogger(__name__)


def parse_project_arg(value: str) -> ProjectRef:
    """Treat an all-digit ``--project`` value as an id, anything else as a name."""

    value = value.strip()
    if value.isdigit():
        return ById(int(value))
    return ByName(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jira-issues",
        description="Browse Jira issues from the command line",
    )
    parser.add_argument("--version", action="version", version=f"jira-issue-browser {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    issues = subparsers.add_parser("issues", help="Display Jira issues of a project")
    issues.add_argument(
        "--project",
        "-p",
        required=True,
        help=(
            "Project id, or a case-insensitive prefix of the project name. "
            "An all-digit value is always sent as a project id"
        ),
    )
    issues.add_argument("--assignee", default="", help="List issues assigned to a specific person")
    issues.add_argument("--reporter", default="", help="List issues reported by a specific person")
    issues.add_argument("--status", default="", help="List issues that have a specific status")

    subparsers.add_parser("projects", help="List projects visible to the configured user")

    return parser


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out if out is not None else sys.stdout

    try:
        settings = BrowserSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_format)

    if args.command == "issues" and not args.project.strip():
        logger.error("value of --project cannot be empty")
        return 2

    try:
        jira = JiraClient(
            settings.jira_url,
            username=settings.jira_user,
            password=settings.jira_password,
            timeout=settings.request_timeout,
        )
    except JiraError as e:
        logger.error("Could not connect to Jira: %s", e)
        return 1

    with jira:
        if args.command == "projects":
            render_projects(jira.projects, out)
            return 0

        if args.command == "issues":
            ref = parse_project_arg(args.project)
            try:
                issues = jira.issues(ref)
            except JiraError as e:
                logger.error("error: %s", e, extra={"project": args.project})
                return 1

            issue_filter = IssueFilter(
                assignee=args.assignee,
                reporter=args.reporter,
                status=args.status,
            )
            count = render_issues(issues, issue_filter, out)
            logger.debug(
                "Issues rendered",
                extra={"project": args.project, "fetched": len(issues), "matched": count},
            )
            return 0

    logger.error("Unknown command", extra={"command": args.command})
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
