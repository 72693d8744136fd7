"""Jira records decoded from REST v2 responses.

Only the handful of fields the browser renders are modelled; everything else in
the payload is ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Jira returns e.g. "2015-03-05T16:54:07.000+0000".
_JIRA_DATETIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)

EPOCH = datetime.min.replace(tzinfo=UTC)

# A word starts at any letter not preceded by a letter, digit or underscore.
_WORD_START = re.compile(r"(?<![A-Za-z0-9_])[a-z]")


def parse_jira_datetime(value: object) -> datetime:
    """Parse a Jira timestamp into an aware datetime.

    Missing values map to :data:`EPOCH` so that every issue stays orderable.
    Naive timestamps are taken as UTC.
    """

    if value is None or value == "":
        return EPOCH
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = _parse_datetime_string(value.strip())
    else:
        raise ValueError(f"Invalid datetime value: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_datetime_string(value: str) -> datetime:
    for fmt in _JIRA_DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def title_words(value: str) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched."""

    return _WORD_START.sub(lambda m: m.group(0).upper(), value)


class _JiraModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Project(_JiraModel):
    """A project the authenticated user can browse."""

    id: str
    key: str = ""
    name: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # Jira sends ids as strings but some proxies re-encode them as numbers.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class User(_JiraModel):
    name: str = ""
    email: str = Field(default="", alias="emailAddress")
    profile_url: str = Field(default="", alias="self")

    @field_validator("name", "email", "profile_url", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value

    def __str__(self) -> str:
        return f"{title_words(self.name)} ({self.email})".strip(" ")


class Status(_JiraModel):
    name: str = ""
    description: str = ""

    @field_validator("name", "description", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class Issue(_JiraModel):
    """A single issue, built from the ``fields`` object of a search hit.

    ``key`` and ``issue_url`` are not part of ``fields``; the client fills them in
    from the search envelope.
    """

    key: str = ""
    summary: str = ""
    description: str = ""
    labels: list[str] = Field(default_factory=list)
    assignee: User = Field(default_factory=User)
    reporter: User = Field(default_factory=User)
    status: Status = Field(default_factory=Status)
    issue_url: str | None = None
    created_at: datetime = Field(default=EPOCH, alias="created")
    updated_at: datetime = Field(default=EPOCH, alias="updated")

    @field_validator("summary", "description", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("labels", mode="before")
    @classmethod
    def _none_as_no_labels(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("assignee", "reporter", "status", mode="before")
    @classmethod
    def _none_as_blank_record(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: object) -> datetime:
        return parse_jira_datetime(value)


class SearchHit(_JiraModel):
    key: str
    fields: Issue


class SearchResult(_JiraModel):
    """Envelope returned by ``GET /search``."""

    issues: list[SearchHit] = Field(default_factory=list)


def sort_projects(projects: Iterable[Project]) -> list[Project]:
    """Return projects ordered by name (plain string comparison)."""

    return sorted(projects, key=lambda p: p.name)


def sort_issues(issues: Iterable[Issue]) -> list[Issue]:
    """Return issues ordered by creation time, oldest first."""

    return sorted(issues, key=lambda i: i.created_at)
