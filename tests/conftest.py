"""Shared pytest fixtures and helpers for the agent tests."""

import asyncio
import json

import httpx
import pytest

from app.agent.tool_registry import ToolContext, build_tool_registry


class FakeProvider:
    """Stands in for OpenAIProvider; replays canned texts in order."""

    def __init__(self, responses=None, error=None, fail_on_call=None):
        self.responses = list(responses or [])
        self.error = error
        self.fail_on_call = fail_on_call
        self.calls = []

    async def generate(self, system, user, json_schema=None):
        self.calls.append({"system": system, "user": user, "json_schema": json_schema})
        if self.error is not None and (self.fail_on_call is None or self.fail_on_call == len(self.calls)):
            raise self.error
        return {"text": self.responses.pop(0), "model": "fake", "latency_ms": 1, "tokens_used": 0}


def run(coro):
    return asyncio.run(coro)


def plan_json(*tools, reasoning="Use the tools in order."):
    return json.dumps({
        "reasoning": reasoning,
        "plan": [
            {"id": f"s{i}", "title": f"Step {i}", "description": description, "tool": tool}
            for i, (tool, description) in enumerate(tools, 1)
        ],
    })


@pytest.fixture
def search_requests():
    return []


@pytest.fixture
def search_transport(search_requests):
    """Offline search backend answering with an empty result set."""

    def handler(request: httpx.Request) -> httpx.Response:
        search_requests.append(request)
        return httpx.Response(200, json={"AbstractText": "", "RelatedTopics": []})

    return httpx.MockTransport(handler)


@pytest.fixture
def registry(search_transport):
    return build_tool_registry(transport=search_transport)


@pytest.fixture
def context():
    return ToolContext(task="Plan a product launch")
