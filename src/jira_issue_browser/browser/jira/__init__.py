"""Jira REST access: client, records and project resolution."""

from jira_issue_browser.browser.jira.client import (
    JiraAuthError,
    JiraClient,
    JiraDecodeError,
    JiraError,
    JiraRequestError,
    JiraResponseError,
    JiraURLError,
    ProjectRefError,
)
from jira_issue_browser.browser.jira.models import Issue, Project, Status, User
from jira_issue_browser.browser.jira.resolver import ById, ByName, ProjectRef

__all__ = [
    "ById",
    "ByName",
    "Issue",
    "JiraAuthError",
    "JiraClient",
    "JiraDecodeError",
    "JiraError",
    "JiraRequestError",
    "JiraResponseError",
    "JiraURLError",
    "Project",
    "ProjectRef",
    "ProjectRefError",
    "Status",
    "User",
]
