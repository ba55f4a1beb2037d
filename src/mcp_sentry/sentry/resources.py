"""Declarative descriptions of the Sentry resources exposed as tools.

Every tool performs the same procedure: validate the path parameters, build
the resource URL and query string, GET it, and shape the JSON body. Only the
data below differs from one tool to the next.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from string import Formatter
from typing import Any, Literal
from urllib.parse import quote

from .constants import (
    API_PREFIX,
    DEFAULT_ISSUE_EVENT_FIELDS,
    DEFAULT_ISSUE_FIELDS,
    DEFAULT_ORGANIZATION_FIELDS,
    DEFAULT_PROJECT_EVENT_FIELDS,
)

QueryParamKind = Literal["string", "boolean", "list"]


@dataclass(frozen=True)
class QueryParam:
    """How one optional tool argument maps onto the query string.

    Strings are sent when non-empty and lists send one entry per element.
    Booleans are sent as ``true_value`` when true; a false value is only sent
    when ``false_value`` is set.
    """

    name: str
    kind: QueryParamKind = "string"
    true_value: str = "true"
    false_value: str | None = None

    def serialize(self, value: Any) -> list[tuple[str, str]]:
        if value is None:
            return []
        if self.kind == "boolean":
            if value:
                return [(self.name, self.true_value)]
            if self.false_value is not None:
                return [(self.name, self.false_value)]
            return []
        if self.kind == "list":
            if isinstance(value, str):
                value = [value]
            return [(self.name, str(item)) for item in value if item is not None]
        text = str(value)
        return [(self.name, text)] if text else []


@dataclass(frozen=True)
class SentryResource:
    """A read-only Sentry endpoint published as an MCP tool."""

    name: str
    title: str
    description: str
    path_template: str
    output_key: str
    default_fields: str
    query_params: tuple[QueryParam, ...] = ()
    many: bool = True
    path_params: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        names = tuple(
            field_name
            for _, field_name, _, _ in Formatter().parse(self.path_template)
            if field_name
        )
        object.__setattr__(self, "path_params", names)

    def missing_params(self, arguments: Mapping[str, Any]) -> list[str]:
        """Names of required path parameters that are absent or blank."""
        missing = []
        for name in self.path_params:
            value = arguments.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def build_path(self, arguments: Mapping[str, Any]) -> str:
        """Fill the path template, quoting each segment.

        Raises:
            KeyError: If a path parameter is missing from ``arguments``.
        """
        values = {
            name: quote(str(arguments[name]).strip(), safe="")
            for name in self.path_params
        }
        return self.path_template.format(**values)

    def build_query(self, arguments: Mapping[str, Any]) -> list[tuple[str, str]]:
        """Ordered query parameters for the arguments the caller supplied."""
        params: list[tuple[str, str]] = []
        for param in self.query_params:
            params.extend(param.serialize(arguments.get(param.name)))
        return params


LIST_ORGANIZATIONS = SentryResource(
    name="listOrganizations",
    title="List Organizations",
    description=(
        "Return a list of organizations available to the authenticated session."
    ),
    path_template=f"{API_PREFIX}/organizations/",
    output_key="organizations",
    default_fields=DEFAULT_ORGANIZATION_FIELDS,
    query_params=(
        QueryParam("owner", "boolean", true_value="true", false_value="false"),
        QueryParam("cursor"),
        QueryParam("query"),
        QueryParam("sortBy"),
    ),
)

LIST_PROJECT_ISSUES = SentryResource(
    name="listProjectIssues",
    title="List a Project's Issues",
    description="Return a list of issues (groups) bound to a project.",
    path_template=(
        f"{API_PREFIX}/projects/{{organizationIdOrSlug}}/{{projectIdOrSlug}}/issues/"
    ),
    output_key="issues",
    default_fields=DEFAULT_ISSUE_FIELDS,
    query_params=(
        QueryParam("statsPeriod"),
        QueryParam("shortIdLookup", "boolean", true_value="1"),
        QueryParam("query"),
        QueryParam("hashes"),
        QueryParam("cursor"),
    ),
)

LIST_ISSUE_EVENTS = SentryResource(
    name="listIssueEvents",
    title="List an Issue's Events",
    description="Return a list of error events bound to an issue.",
    path_template=(
        f"{API_PREFIX}/organizations/{{organizationIdOrSlug}}/issues/{{issueId}}/events/"
    ),
    output_key="events",
    default_fields=DEFAULT_ISSUE_EVENT_FIELDS,
    query_params=(
        QueryParam("start"),
        QueryParam("end"),
        QueryParam("statsPeriod"),
        QueryParam("full", "boolean"),
        QueryParam("sample", "boolean"),
        QueryParam("query"),
        QueryParam("environment", "list"),
    ),
)

GET_PROJECT_EVENT = SentryResource(
    name="getProjectEvent",
    title="Retrieve an Event for a Project",
    description="Return details on an individual event, including stacktrace.",
    path_template=(
        f"{API_PREFIX}/projects/{{organizationIdOrSlug}}/{{projectIdOrSlug}}"
        "/events/{eventId}/"
    ),
    output_key="event",
    default_fields=DEFAULT_PROJECT_EVENT_FIELDS,
    many=False,
)

RESOURCES: dict[str, SentryResource] = {
    resource.name: resource
    for resource in (
        LIST_ORGANIZATIONS,
        LIST_PROJECT_ISSUES,
        LIST_ISSUE_EVENTS,
        GET_PROJECT_EVENT,
    )
}
