"""Unit tests for the Sentry FastMCP server implementation."""

import functools
import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from unittest.mock import patch

import httpx
import pytest
from fastmcp import Client, FastMCP
from fastmcp.client import FastMCPTransport

from mcp_sentry.logging_config import null_logger
from mcp_sentry.sentry import SentryFetcher
from mcp_sentry.servers.context import MainAppContext
from mcp_sentry.servers.sentry import sentry_mcp
from tests.fixtures.sentry_mocks import (
    MOCK_ISSUE_EVENTS,
    MOCK_ORGANIZATIONS,
    MOCK_PROJECT_EVENT,
    MOCK_PROJECT_ISSUES,
)
from tests.utils.sentry_http import RecordingTransport, json_response

EVENT_ID = MOCK_PROJECT_EVENT["eventID"]

ROUTES = {
    "/api/0/organizations/": MOCK_ORGANIZATIONS,
    "/api/0/projects/acme/backend/issues/": MOCK_PROJECT_ISSUES,
    "/api/0/organizations/acme/issues/4503998/events/": MOCK_ISSUE_EVENTS,
    f"/api/0/projects/acme/backend/events/{EVENT_ID}/": MOCK_PROJECT_EVENT,
}


def sentry_routes(request: httpx.Request) -> httpx.Response:
    payload = ROUTES.get(request.url.path)
    if payload is None:
        return json_response(
            {"detail": "The requested resource does not exist"}, status_code=404
        )
    return json_response(payload)


@pytest.fixture
def sentry_transport():
    return RecordingTransport(sentry_routes)


def make_test_mcp(sentry_config) -> FastMCP:
    @asynccontextmanager
    async def test_lifespan(app: FastMCP) -> AsyncGenerator[dict, None]:
        yield {"app_lifespan_context": MainAppContext(sentry_config=sentry_config)}

    test_mcp = FastMCP("TestSentry", lifespan=test_lifespan)
    test_mcp.mount(sentry_mcp)
    return test_mcp


@pytest.fixture
async def sentry_client(sentry_config, sentry_transport):
    """Create a FastMCP client whose Sentry requests hit the mock transport."""
    fetcher_factory = functools.partial(
        SentryFetcher, transport=sentry_transport, logger=null_logger()
    )
    with patch("mcp_sentry.servers.dependencies.SentryFetcher", fetcher_factory):
        async with Client(
            transport=FastMCPTransport(make_test_mcp(sentry_config))
        ) as client_instance:
            yield client_instance


@pytest.fixture
async def unconfigured_client():
    """Create a client whose server has no Sentry configuration."""
    async with Client(transport=FastMCPTransport(make_test_mcp(None))) as client:
        yield client


@pytest.mark.anyio
async def test_list_tools(sentry_client):
    tools = {tool.name: tool for tool in await sentry_client.list_tools()}

    assert set(tools) == {
        "listOrganizations",
        "listProjectIssues",
        "listIssueEvents",
        "getProjectEvent",
    }
    for tool in tools.values():
        assert tool.annotations.readOnlyHint is True
        assert "fields" in tool.inputSchema["properties"]
        assert "fields" not in tool.inputSchema.get("required", [])

    assert tools["listOrganizations"].annotations.title == "List Organizations"
    assert tools["listOrganizations"].inputSchema.get("required", []) == []
    assert set(tools["getProjectEvent"].inputSchema["required"]) == {
        "organizationIdOrSlug",
        "projectIdOrSlug",
        "eventId",
    }
    assert set(tools["listIssueEvents"].inputSchema["required"]) == {
        "organizationIdOrSlug",
        "issueId",
    }
    assert "organizations" in tools["listOrganizations"].outputSchema["properties"]
    assert "event" in tools["getProjectEvent"].outputSchema["properties"]


@pytest.mark.anyio
async def test_list_organizations(sentry_client, sentry_transport):
    response = await sentry_client.call_tool("listOrganizations", {})

    text_content = response.content[0]
    assert text_content.type == "text"
    content = json.loads(text_content.text)
    assert [org["slug"] for org in content] == ["acme", "globex"]
    assert set(content[0]) == {"id", "name", "status", "slug"}
    assert response.structured_content == {"organizations": content}

    request = sentry_transport.requests[0]
    assert request.headers["Authorization"] == "Bearer sntrys_test_token"


@pytest.mark.anyio
async def test_list_organizations_with_owner_and_fields(sentry_client, sentry_transport):
    response = await sentry_client.call_tool(
        "listOrganizations", {"owner": True, "sortBy": "members", "fields": "slug"}
    )

    assert json.loads(response.content[0].text) == [
        {"slug": "acme"},
        {"slug": "globex"},
    ]
    params = sentry_transport.requests[0].url.params
    assert params["owner"] == "true"
    assert params["sortBy"] == "members"


@pytest.mark.anyio
async def test_list_project_issues(sentry_client, sentry_transport):
    response = await sentry_client.call_tool(
        "listProjectIssues",
        {
            "organizationIdOrSlug": "acme",
            "projectIdOrSlug": "backend",
            "shortIdLookup": True,
            "fields": "shortId,title",
        },
    )

    assert response.structured_content == {
        "issues": [
            {"shortId": "BACKEND-1A", "title": "ZeroDivisionError: division by zero"},
            {"shortId": "BACKEND-1B", "title": "KeyError: 'customer_id'"},
        ]
    }
    assert sentry_transport.requests[0].url.params["shortIdLookup"] == "1"


@pytest.mark.anyio
async def test_list_issue_events(sentry_client, sentry_transport):
    response = await sentry_client.call_tool(
        "listIssueEvents",
        {
            "organizationIdOrSlug": "acme",
            "issueId": "4503998",
            "environment": ["production", "staging"],
            "full": True,
        },
    )

    events = response.structured_content["events"]
    assert len(events) == 2
    assert set(events[0]) == {
        "id",
        "eventID",
        "title",
        "culprit",
        "platform",
        "dateCreated",
        "tags",
    }
    params = sentry_transport.requests[0].url.params
    assert params.get_list("environment") == ["production", "staging"]
    assert params["full"] == "true"


@pytest.mark.anyio
async def test_get_project_event(sentry_client):
    response = await sentry_client.call_tool(
        "getProjectEvent",
        {
            "organizationIdOrSlug": "acme",
            "projectIdOrSlug": "backend",
            "eventId": EVENT_ID,
        },
    )

    event = response.structured_content["event"]
    assert event["eventID"] == EVENT_ID
    assert event["entries"][0]["type"] == "exception"
    assert "sdk" not in event
    assert json.loads(response.content[0].text) == event


@pytest.mark.anyio
async def test_not_found_is_error_result(sentry_client):
    result = await sentry_client.call_tool_mcp(
        "listProjectIssues",
        {"organizationIdOrSlug": "acme", "projectIdOrSlug": "missing"},
    )

    assert result.isError is True
    assert "API Error: 404 Not Found" in result.content[0].text
    assert "The requested resource does not exist" in result.content[0].text


@pytest.mark.anyio
async def test_missing_required_argument_is_rejected(sentry_client, sentry_transport):
    result = await sentry_client.call_tool_mcp(
        "getProjectEvent",
        {"organizationIdOrSlug": "acme", "projectIdOrSlug": "backend"},
    )

    assert result.isError is True
    assert sentry_transport.requests == []


@pytest.mark.anyio
async def test_blank_required_argument_is_rejected(sentry_client, sentry_transport):
    result = await sentry_client.call_tool_mcp(
        "listIssueEvents", {"organizationIdOrSlug": "acme", "issueId": "  "}
    )

    assert result.isError is True
    assert "Missing required parameter(s): issueId" in result.content[0].text
    assert sentry_transport.requests == []


@pytest.mark.anyio
async def test_error_does_not_affect_next_call(sentry_client):
    failed = await sentry_client.call_tool_mcp(
        "listProjectIssues",
        {"organizationIdOrSlug": "acme", "projectIdOrSlug": "missing"},
    )
    succeeded = await sentry_client.call_tool("listOrganizations", {})

    assert failed.isError is True
    assert len(succeeded.structured_content["organizations"]) == 2


@pytest.mark.anyio
async def test_unconfigured_server_reports_error(unconfigured_client):
    result = await unconfigured_client.call_tool_mcp("listOrganizations", {})

    assert result.isError is True
