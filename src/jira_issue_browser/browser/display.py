"""Client-side issue filtering and plain-text rendering for the CLI."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO

from jira_issue_browser.browser.jira.models import Issue, Project


@dataclass(frozen=True, slots=True)
class IssueFilter:
    """Case-insensitive substring filters; empty values match everything."""

    assignee: str = ""
    reporter: str = ""
    status: str = ""

    def matches(self, issue: Issue) -> bool:
        return (
            _contains(issue.assignee.name, self.assignee)
            and _contains(issue.reporter.name, self.reporter)
            and _contains(issue.status.name, self.status)
        )

    def apply(self, issues: Iterable[Issue]) -> list[Issue]:
        return [issue for issue in issues if self.matches(issue)]


def _contains(value: str, needle: str) -> bool:
    if not needle:
        return True
    return needle.lower() in value.lower()


def format_issue(issue: Issue) -> str:
    lines = [
        f"[{issue.key}] {issue.summary}",
        f"Status: {issue.status.name.upper()}",
        f"Reported by: {issue.reporter}",
    ]
    if issue.assignee.name:
        lines.append(f"Assigned to: {issue.assignee}")
    labels = "', '".join(issue.labels)
    lines.append(f"Labels: ['{labels}']")
    lines.append(f'Permalink: "{issue.issue_url or ""}"')
    return "\n".join(lines) + "\n"


def render_issues(issues: Iterable[Issue], issue_filter: IssueFilter, out: TextIO) -> int:
    """Write every issue accepted by ``issue_filter`` to ``out``.

    Returns:
        The number of issues written.
    """

    count = 0
    for issue in issues:
        if not issue_filter.matches(issue):
            continue
        out.write(format_issue(issue))
        out.write("\n")
        count += 1

    out.write(f"Total matching issues found: {count}\n")
    return count


def render_projects(projects: Iterable[Project], out: TextIO) -> int:
    count = 0
    for project in projects:
        out.write(f"{project.key}\t{project.id}\t{project.name}\n")
        count += 1
    out.write(f"Total projects: {count}\n")
    return count
