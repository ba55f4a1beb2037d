"""
Pydantic models for Sentry API responses.
"""

from .sentry import (
    EventsOutput,
    IssuesOutput,
    OrganizationsOutput,
    ProjectEventOutput,
    SentryEvent,
    SentryIssue,
    SentryModel,
    SentryOrganization,
    SentryProjectEvent,
    SentryTag,
    output_schema,
)

__all__ = [
    "EventsOutput",
    "IssuesOutput",
    "OrganizationsOutput",
    "ProjectEventOutput",
    "SentryEvent",
    "SentryIssue",
    "SentryModel",
    "SentryOrganization",
    "SentryProjectEvent",
    "SentryTag",
    "output_schema",
]
