"""
Shared fixtures for integra tests.

Downstream services are replaced by ``FakeDownstream``, an
``httpx.MockTransport`` handler that answers like the collaborator
services, counts calls per path, and can be told to fail, stall or return
errors for a given path.
"""

import asyncio
import json
from typing import Any

import httpx
import pytest

from integra.core.hooks import HookRegistry
from integra.core.pipeline import IntegrationPipeline
from integra.integrations import AuthAdapter, DataAccessPolicy, DataAdapter, NotifyAdapter

DOWNSTREAM_URL = "http://downstream.test"

AUTH_PATH = "/auth/validate"
FETCH_PATH = "/database/fetch"
NOTIFY_PATH = "/notification/send"


class FakeDownstream:
    """Deterministic stand-in for the auth, database and notification services."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.auth_valid: bool | None = None  # None = apply the valid_ prefix rule
        self.data: dict[str, Any] = {"records": 42, "permissions": ["read", "write"]}
        self.notify_sent = True
        self.fail: set[str] = set()
        self.status: dict[str, int] = {}
        self.delay: dict[str, float] = {}
        self.user_delay: dict[str, float] = {}
        self.raw_body: dict[str, bytes] = {}

    def calls_to(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path == path)

    def last_request(self, path: str) -> httpx.Request:
        return [request for request in self.requests if request.url.path == path][-1]

    @staticmethod
    def _user_id(request: httpx.Request) -> str:
        if request.method == "GET":
            return request.url.params.get("user_id", "")
        return json.loads(request.content).get("user_id", "")

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.delay:
            await asyncio.sleep(self.delay[path])
        user_id = self._user_id(request)
        if user_id in self.user_delay:
            await asyncio.sleep(self.user_delay[user_id])
        if path in self.fail:
            raise httpx.ConnectError("connection refused", request=request)
        if path in self.status:
            return httpx.Response(self.status[path], json={"error": "boom"})
        if path in self.raw_body:
            return httpx.Response(200, content=self.raw_body[path])

        if path == AUTH_PATH:
            body = json.loads(request.content)
            token = body.get("token", "")
            valid = self.auth_valid
            if valid is None:
                valid = len(token) > 6 and token.startswith("valid_")
            return httpx.Response(
                200,
                json={
                    "valid": valid,
                    "user_id": body.get("user_id", ""),
                    "message": "Token validated" if valid else "Invalid token",
                },
            )
        if path == FETCH_PATH:
            return httpx.Response(200, json={"success": True, "data": self.data})
        if path == NOTIFY_PATH:
            body = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "sent": self.notify_sent,
                    "message": f"Notification sent to user {body.get('user_id')}",
                },
            )
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture(autouse=True)
def _no_delete_flag(monkeypatch: pytest.MonkeyPatch):
    """Keep a DELETE_ENABLED from the real environment out of tests."""
    monkeypatch.delenv("DELETE_ENABLED", raising=False)


@pytest.fixture
def downstream() -> FakeDownstream:
    return FakeDownstream()


@pytest.fixture
async def http_client(downstream: FakeDownstream):
    """Async client whose transport is the fake downstream."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(downstream)) as client:
        yield client


@pytest.fixture
def hooks() -> HookRegistry:
    return HookRegistry()


def make_pipeline(
    client: httpx.AsyncClient,
    *,
    timeout: float = 5.0,
    destructive_actions_enabled: bool = False,
    hooks: HookRegistry | None = None,
) -> IntegrationPipeline:
    policy = DataAccessPolicy(destructive_actions_enabled=destructive_actions_enabled)
    return IntegrationPipeline(
        auth=AuthAdapter(client, DOWNSTREAM_URL, timeout),
        data=DataAdapter(client, DOWNSTREAM_URL, timeout, policy=policy),
        notify=NotifyAdapter(client, DOWNSTREAM_URL, timeout),
        hooks=hooks,
    )


@pytest.fixture
def pipeline(http_client: httpx.AsyncClient, hooks: HookRegistry) -> IntegrationPipeline:
    return make_pipeline(http_client, hooks=hooks)


@pytest.fixture
def pipeline_factory(http_client: httpx.AsyncClient, hooks: HookRegistry):
    """Build pipelines over the fake downstream with custom timeout or policy."""

    def _factory(**kwargs: Any) -> IntegrationPipeline:
        kwargs.setdefault("hooks", hooks)
        return make_pipeline(http_client, **kwargs)

    return _factory
