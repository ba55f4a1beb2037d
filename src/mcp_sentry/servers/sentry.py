"""Sentry FastMCP server instance and tool definitions."""

import logging
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from mcp_sentry.models import (
    EventsOutput,
    IssuesOutput,
    OrganizationsOutput,
    ProjectEventOutput,
    output_schema,
)
from mcp_sentry.sentry.resources import (
    GET_PROJECT_EVENT,
    LIST_ISSUE_EVENTS,
    LIST_ORGANIZATIONS,
    LIST_PROJECT_ISSUES,
    SentryResource,
)
from mcp_sentry.servers.dependencies import get_sentry_fetcher

logger = logging.getLogger("mcp-sentry.servers.sentry")

FIELDS_DESCRIPTION = (
    "(Optional) A comma-separated list of top-level fields to return "
    '(e.g., "id,title,culprit"). Omit to get a concise default set; '
    "pass an empty string to return every field."
)
ORGANIZATION_DESCRIPTION = "The ID or slug of the organization."
PROJECT_DESCRIPTION = "The ID or slug of the project."
CURSOR_DESCRIPTION = (
    "A pointer to the last object fetched; used to retrieve the next or "
    "previous results."
)

sentry_mcp = FastMCP(
    name="Sentry MCP Service",
    instructions="Provides read-only tools for the Sentry API.",
)


async def _run_tool(
    ctx: Context, resource: SentryResource, **arguments: Any
) -> ToolResult:
    """Fetch ``resource`` and convert the outcome to an MCP tool result.

    Raises:
        ToolError: If the fetch failed; FastMCP reports it with ``isError``.
    """
    sentry = await get_sentry_fetcher(ctx)
    result = await sentry.fetch(resource, arguments)
    if result.is_error:
        logger.warning(f"{resource.name} failed: {result.error}")
        raise ToolError(result.error)
    return ToolResult(
        content=[TextContent(type="text", text=result.to_text())],
        structured_content=result.to_structured(),
    )


@sentry_mcp.tool(
    name=LIST_ORGANIZATIONS.name,
    description=LIST_ORGANIZATIONS.description,
    tags={"sentry", "read"},
    annotations={"title": LIST_ORGANIZATIONS.title, "readOnlyHint": True},
    output_schema=output_schema(OrganizationsOutput),
)
async def list_organizations(
    ctx: Context,
    owner: Annotated[
        bool | None,
        Field(
            description="Specify true to restrict results to organizations in which you are an owner."
        ),
    ] = None,
    cursor: Annotated[str | None, Field(description=CURSOR_DESCRIPTION)] = None,
    query: Annotated[
        str | None, Field(description="Filters results by using Sentry query syntax.")
    ] = None,
    sortBy: Annotated[
        str | None,
        Field(
            description="The field to sort results by (members, projects, or events)."
        ),
    ] = None,
    fields: Annotated[str | None, Field(description=FIELDS_DESCRIPTION)] = None,
) -> ToolResult:
    return await _run_tool(
        ctx,
        LIST_ORGANIZATIONS,
        owner=owner,
        cursor=cursor,
        query=query,
        sortBy=sortBy,
        fields=fields,
    )


@sentry_mcp.tool(
    name=LIST_PROJECT_ISSUES.name,
    description=LIST_PROJECT_ISSUES.description,
    tags={"sentry", "read"},
    annotations={"title": LIST_PROJECT_ISSUES.title, "readOnlyHint": True},
    output_schema=output_schema(IssuesOutput),
)
async def list_project_issues(
    ctx: Context,
    organizationIdOrSlug: Annotated[str, Field(description=ORGANIZATION_DESCRIPTION)],
    projectIdOrSlug: Annotated[str, Field(description=PROJECT_DESCRIPTION)],
    statsPeriod: Annotated[
        str | None,
        Field(
            description='Optional stat period ("24h", "14d", or ""). Defaults to "24h".'
        ),
    ] = None,
    shortIdLookup: Annotated[
        bool | None,
        Field(description="If true, short IDs are looked up as well."),
    ] = None,
    query: Annotated[
        str | None,
        Field(
            description='Optional Sentry structured search query. Defaults to "is:unresolved".'
        ),
    ] = None,
    hashes: Annotated[
        str | None,
        Field(description="A comma-separated list of group hashes to return."),
    ] = None,
    cursor: Annotated[str | None, Field(description=CURSOR_DESCRIPTION)] = None,
    fields: Annotated[str | None, Field(description=FIELDS_DESCRIPTION)] = None,
) -> ToolResult:
    return await _run_tool(
        ctx,
        LIST_PROJECT_ISSUES,
        organizationIdOrSlug=organizationIdOrSlug,
        projectIdOrSlug=projectIdOrSlug,
        statsPeriod=statsPeriod,
        shortIdLookup=shortIdLookup,
        query=query,
        hashes=hashes,
        cursor=cursor,
        fields=fields,
    )


@sentry_mcp.tool(
    name=LIST_ISSUE_EVENTS.name,
    description=LIST_ISSUE_EVENTS.description,
    tags={"sentry", "read"},
    annotations={"title": LIST_ISSUE_EVENTS.title, "readOnlyHint": True},
    output_schema=output_schema(EventsOutput),
)
async def list_issue_events(
    ctx: Context,
    organizationIdOrSlug: Annotated[str, Field(description=ORGANIZATION_DESCRIPTION)],
    issueId: Annotated[str, Field(description="The ID of the issue to query.")],
    start: Annotated[
        str | None,
        Field(description="Start of the time period in ISO-8601 format."),
    ] = None,
    end: Annotated[
        str | None,
        Field(description="End of the time period in ISO-8601 format."),
    ] = None,
    statsPeriod: Annotated[
        str | None,
        Field(
            description='Time period for the query (e.g., "24h", "14d"). Overrides start/end.'
        ),
    ] = None,
    environment: Annotated[
        list[str] | None,
        Field(description="Name of environments to filter by."),
    ] = None,
    full: Annotated[
        bool | None,
        Field(description="Include the full event body and stacktrace."),
    ] = None,
    sample: Annotated[
        bool | None,
        Field(description="Return events in pseudo-random order."),
    ] = None,
    query: Annotated[
        str | None,
        Field(description="Optional search query for filtering events."),
    ] = None,
    fields: Annotated[str | None, Field(description=FIELDS_DESCRIPTION)] = None,
) -> ToolResult:
    return await _run_tool(
        ctx,
        LIST_ISSUE_EVENTS,
        organizationIdOrSlug=organizationIdOrSlug,
        issueId=issueId,
        start=start,
        end=end,
        statsPeriod=statsPeriod,
        environment=environment,
        full=full,
        sample=sample,
        query=query,
        fields=fields,
    )


@sentry_mcp.tool(
    name=GET_PROJECT_EVENT.name,
    description=GET_PROJECT_EVENT.description,
    tags={"sentry", "read"},
    annotations={"title": GET_PROJECT_EVENT.title, "readOnlyHint": True},
    output_schema=output_schema(ProjectEventOutput),
)
async def get_project_event(
    ctx: Context,
    organizationIdOrSlug: Annotated[str, Field(description=ORGANIZATION_DESCRIPTION)],
    projectIdOrSlug: Annotated[str, Field(description=PROJECT_DESCRIPTION)],
    eventId: Annotated[
        str, Field(description="The hexadecimal ID of the event to retrieve.")
    ],
    fields: Annotated[str | None, Field(description=FIELDS_DESCRIPTION)] = None,
) -> ToolResult:
    return await _run_tool(
        ctx,
        GET_PROJECT_EVENT,
        organizationIdOrSlug=organizationIdOrSlug,
        projectIdOrSlug=projectIdOrSlug,
        eventId=eventId,
        fields=fields,
    )
