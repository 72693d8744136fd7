"""Jira issue browser.

A thin client for the Jira REST API plus a small CLI:
- configuration loaded from the environment or `.env`
- project lookup by id or name prefix
- issue listing with assignee/reporter/status filters
"""

__version__ = "0.1.0"

from jira_issue_browser.browser.config import BrowserSettings
from jira_issue_browser.browser.jira.client import JiraClient

__all__ = ["__version__", "BrowserSettings", "JiraClient"]
