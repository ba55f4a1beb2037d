"""
Sentry entity models.

These Pydantic models describe the loose shape of Sentry payloads. Every
field is optional and unknown keys are allowed, because tools return
whatever subset of a payload the caller selected.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class SentryModel(BaseModel):
    """Base model that tolerates partial and extended payloads."""

    model_config = ConfigDict(extra="allow")


class SentryOrganizationStatus(SentryModel):
    id: str | None = None
    name: str | None = None


class SentryOrganization(SentryModel):
    """An organization returned by ``/api/0/organizations/``."""

    id: str | None = None
    slug: str | None = None
    name: str | None = None
    dateCreated: str | None = None
    status: SentryOrganizationStatus | None = None


class SentryProjectRef(SentryModel):
    id: str | None = None
    name: str | None = None
    slug: str | None = None


class SentryIssue(SentryModel):
    """An issue (group) of a project."""

    id: str | None = None
    title: str | None = None
    culprit: str | None = None
    level: str | None = None
    status: str | None = None
    firstSeen: str | None = None
    lastSeen: str | None = None
    count: str | None = None
    userCount: int | None = None
    shortId: str | None = None
    project: SentryProjectRef | None = None


class SentryTag(SentryModel):
    key: str | None = None
    value: str | None = None


class SentryEvent(SentryModel):
    """An error event bound to an issue."""

    id: str | None = None
    eventID: str | None = None
    title: str | None = None
    culprit: str | None = None
    platform: str | None = None
    dateCreated: str | None = None
    tags: list[SentryTag] | None = None


class SentryProjectEvent(SentryModel):
    """A single event of a project, with its entries (stacktrace, breadcrumbs...)."""

    eventID: str | None = None
    title: str | None = None
    culprit: str | None = None
    platform: str | None = None
    dateCreated: str | None = None
    tags: list[SentryTag] | None = None
    entries: list[Any] | None = None


class OrganizationsOutput(BaseModel):
    organizations: list[SentryOrganization]


class IssuesOutput(BaseModel):
    issues: list[SentryIssue]


class EventsOutput(BaseModel):
    events: list[SentryEvent]


class ProjectEventOutput(BaseModel):
    event: SentryProjectEvent


def output_schema(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema advertised as a tool's output schema."""
    return model.model_json_schema()
