#!/usr/bin/env python3
"""Programmatic issue listing example.

This demonstrates using the browser components directly:

* load settings from the environment or `.env`
* authenticate against Jira and list the visible projects
* fetch the issues of one project, oldest first

The project is passed as an argument (id or name prefix).
"""

from __future__ import annotations

import argparse
from typing import Sequence

import requests

from jira_issue_browser.browser.config import BrowserSettings
from jira_issue_browser.browser.jira.client import JiraClient, JiraError
from jira_issue_browser.browser.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List Jira issues (programmatic example).")
    parser.add_argument("project", help="Project id or case-insensitive name prefix")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = BrowserSettings()
    configure_logging(settings.log_level, settings.log_format)

    project: int | str = int(args.project) if args.project.isdigit() else args.project

    # The caller owns the session, so it can be shared or tuned (proxies, TLS, ...).
    with requests.Session() as session:
        try:
            jira = JiraClient(
                settings.jira_url,
                username=settings.jira_user,
                password=settings.jira_password,
                session=session,
                timeout=settings.request_timeout,
            )
            print("Projects:", ", ".join(p.name for p in jira.projects))
            issues = jira.issues(project)
        except JiraError as exc:
            print(f"error: {exc}")
            return 1

    for issue in issues:
        print(f"{issue.created_at:%Y-%m-%d} [{issue.key}] {issue.summary} -> {issue.issue_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
