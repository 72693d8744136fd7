"""Map a user-supplied project reference to a JQL query string.

A project can be referenced either by its numeric id or by (a prefix of) its
name. Name lookups are a loose, case-insensitive prefix match over the
name-sorted project list: the first hit wins, so a short name such as ``Proj``
resolves to whichever project sorts first among ``Proj*``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlencode

from jira_issue_browser.browser.jira.models import Project


@dataclass(frozen=True, slots=True)
class ById:
    """Reference a project by its numeric id."""

    project_id: int


@dataclass(frozen=True, slots=True)
class ByName:
    """Reference a project by a case-insensitive prefix of its name."""

    name: str


ProjectRef = ById | ByName


def as_project_ref(value: object) -> ProjectRef | None:
    """Coerce a plain ``int``/``str`` into a :data:`ProjectRef`.

    Returns ``None`` for any other type. ``bool`` is rejected even though it is an
    ``int`` subclass.
    """

    if isinstance(value, (ById, ByName)):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return ById(value)
    if isinstance(value, str):
        return ByName(value)
    return None


def find_project(projects: Sequence[Project], name: str) -> Project | None:
    """Return the first project whose name starts with ``name`` (ignoring case)."""

    prefix = name.lower()
    for project in projects:
        if project.name.lower().startswith(prefix):
            return project
    return None


def query_string(ref: object, projects: Sequence[Project]) -> str:
    """Build the encoded ``jql=project=<id>`` query string for ``ref``.

    An empty string means the reference could not be used: either its type is
    unsupported or no project name matched.
    """

    resolved = as_project_ref(ref)
    if isinstance(resolved, ById):
        jql = f"project={resolved.project_id}"
    elif isinstance(resolved, ByName):
        project = find_project(projects, resolved.name)
        if project is None:
            return ""
        jql = f"project={project.id}"
    else:
        return ""

    return urlencode({"jql": jql})
