"""Console script entrypoint.

The CLI itself is implemented in `jira_issue_browser.browser.main`.
"""

from __future__ import annotations

from jira_issue_browser.browser.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
