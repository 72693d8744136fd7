"""Jira REST client used by the browser.

Wraps a ``requests.Session`` so that HTTP calls stay out of CLI code and tests can
point the client at a stub server.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import SplitResult, unquote, urlsplit, urlunsplit

import requests
from pydantic import TypeAdapter, ValidationError

from jira_issue_browser.browser.jira.models import (
    Issue,
    Project,
    SearchResult,
    sort_issues,
    sort_projects,
)
from jira_issue_browser.browser.jira.resolver import find_project, query_string

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_PROJECT_LIST = TypeAdapter(list[Project])


class JiraError(Exception):
    """Base class for every error raised by :class:`JiraClient`."""


class JiraURLError(JiraError, ValueError):
    """The configured Jira base URL could not be parsed."""


class JiraAuthError(JiraError):
    """The initial project fetch used to check the credentials failed."""


class JiraRequestError(JiraError):
    """The HTTP request itself failed (connection, TLS, unsupported scheme, ...)."""


class JiraResponseError(JiraError):
    """Jira answered with a status other than 200."""

    def __init__(self, status_code: int, reason: str, url: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(f"error response: {status_code} {reason}".rstrip())


class JiraDecodeError(JiraError):
    """The response body was not JSON of the expected shape."""


class ProjectRefError(JiraError, TypeError):
    """The project reference has an unsupported type or matched no project."""

    def __init__(self, ref: object) -> None:
        self.ref = ref
        super().__init__(
            f"project reference has to be a project id (int) or name (str) "
            f"of an accessible project, got {ref!r}"
        )


def _decode(validate: Callable[[Any], _T], raw: Any, *, what: str) -> _T:
    try:
        return validate(raw)
    except ValidationError as e:
        raise JiraDecodeError(f"error parsing {what}: {e}") from e


def _parse_endpoint(jira_url: str) -> tuple[SplitResult, tuple[str, str] | None]:
    """Split ``jira_url`` into a credential-free endpoint and any embedded userinfo."""

    try:
        parts = urlsplit(jira_url.strip())
        hostname = parts.hostname
        parts.port  # raises ValueError for a non-numeric port
    except ValueError as e:
        raise JiraURLError(f"error parsing jira url {jira_url!r}: {e}") from e

    if not parts.scheme or not parts.netloc or not hostname:
        raise JiraURLError(f"error parsing jira url {jira_url!r}: missing scheme or host")

    embedded: tuple[str, str] | None = None
    netloc = parts.netloc
    if "@" in netloc:
        userinfo, netloc = netloc.rsplit("@", 1)
        user, _, password = userinfo.partition(":")
        embedded = (unquote(user), unquote(password))

    endpoint = SplitResult(
        scheme=parts.scheme,
        netloc=netloc,
        path=parts.path.rstrip("/"),
        query="",
        fragment="",
    )
    return endpoint, embedded


class JiraClient:
    """Read-only client for the Jira REST v2 API.

    Construction authenticates by fetching the list of projects visible to the
    user; that list is cached, sorted by name, for the lifetime of the client.
    """

    def __init__(
        self,
        jira_url: str,
        *,
        username: str | None = None,
        password: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._endpoint, embedded = _parse_endpoint(jira_url)

        if username is not None or password is not None:
            self._auth: tuple[str, str] | None = (username or "", password or "")
        else:
            self._auth = embedded

        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

        try:
            raw = self._get_json(self._url("/project"))
            projects = _decode(_PROJECT_LIST.validate_python, raw, what="projects")
        except JiraError as e:
            self.close()
            raise JiraAuthError(f"authentication against jira failed: {e}") from e

        self._projects: tuple[Project, ...] = tuple(sort_projects(projects))
        logger.info(
            "Authenticated with Jira",
            extra={"endpoint": self.endpoint, "project_count": len(self._projects)},
        )

    @property
    def endpoint(self) -> str:
        """Base URL of the REST API, without credentials."""

        return urlunsplit(self._endpoint)

    @property
    def projects(self) -> tuple[Project, ...]:
        """Projects visible to the user, sorted by name."""

        return self._projects

    def find_project(self, name: str) -> Project | None:
        return find_project(self._projects, name)

    def issues(self, project: object) -> list[Issue]:
        """Return all issues of ``project`` ordered by creation time.

        Args:
            project: A project id (``int`` or :class:`ById`) or a case-insensitive
                name prefix (``str`` or :class:`ByName`).

        Raises:
            ProjectRefError: If ``project`` has an unsupported type or no project
                name matches.
            JiraRequestError, JiraResponseError, JiraDecodeError: If the search
                request fails.
        """

        query = query_string(project, self._projects)
        if not query:
            raise ProjectRefError(project)

        # /project exposes no issue listing; JQL search is the only way in.
        raw = self._get_json(f"{self._url('/search')}?{query}")
        result = _decode(SearchResult.model_validate, raw, what="search results")

        issues: list[Issue] = []
        for hit in result.issues:
            issues.append(
                hit.fields.model_copy(
                    update={"key": hit.key, "issue_url": self.browse_url(hit.key)}
                )
            )

        logger.debug(
            "Issues fetched",
            extra={"project": repr(project), "query": query, "issue_count": len(issues)},
        )
        return sort_issues(issues)

    def browse_url(self, key: str) -> str:
        """Web UI permalink for the issue ``key``."""

        return f"{self._endpoint.scheme}://{self._endpoint.netloc}/browse/{key}"

    def _url(self, path: str) -> str:
        return urlunsplit(self._endpoint._replace(path=self._endpoint.path + path))

    def _get_json(self, url: str) -> Any:
        try:
            resp = self._session.get(url, auth=self._auth, timeout=self._timeout)
        except requests.RequestException as e:
            raise JiraRequestError(f"request to jira failed: {e}") from e

        try:
            if resp.status_code != requests.codes.ok:
                raise JiraResponseError(resp.status_code, resp.reason or "", url)
            try:
                return resp.json()
            except ValueError as e:
                raise JiraDecodeError(f"error decoding response from {url}: {e}") from e
        finally:
            resp.close()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> JiraClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
