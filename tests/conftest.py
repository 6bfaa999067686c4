import httpx
import pytest

from asana_mcp.config import AsanaConfig

LIST_PATH = "/api/1.0/users/me/user_task_list"


@pytest.fixture
def config():
    return AsanaConfig(access_token="tok-123", workspace_gid="W1")


class FakeAsana:
    """Routes requests to canned responses and records what was called.

    A response slot may hold an exception instance, which is raised instead.
    """

    def __init__(self):
        self.list_response = httpx.Response(200, json={"data": {"gid": "L1"}})
        self.tasks_response = httpx.Response(200, json={"data": []})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == LIST_PATH:
            reply = self.list_response
        elif request.url.path.endswith("/tasks"):
            reply = self.tasks_response
        else:
            reply = httpx.Response(404, json={"errors": [{"message": "unknown path"}]})
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def fake_asana():
    return FakeAsana()
