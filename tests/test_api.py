"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from conftest import (
    FakeModelClient,
    call,
    complete,
    step,
    tool_calls,
)
from praxis.api.app import (
    app,
    get_model_client,
)

WORKFLOW = {"description": "Greet the user", "output": "A greeting"}


@pytest.fixture
def client_with():
    """Return a TestClient whose model client replays *responses*."""

    def _make(*responses):
        fake = FakeModelClient(list(responses))
        app.dependency_overrides[get_model_client] = lambda: fake
        return TestClient(app), fake

    yield _make
    app.dependency_overrides.clear()


def test_health(client_with) -> None:
    http, _ = client_with()

    assert http.get("/health").json() == {"status": "ok"}


def test_list_tools(client_with) -> None:
    http, _ = client_with()

    names = {tool["name"] for tool in http.get("/tools").json()}

    assert {"echo", "current_time"} <= names


def test_run_task(client_with) -> None:
    http, fake = client_with(
        tool_calls(call("c1", "echo", text="hello")),
        step("greet", "said hello"),
        complete("Hello!"),
    )

    resp = http.post(
        "/tasks",
        json={"role": "a greeter", "tools": ["echo"], "model": "m-1", "workflow": WORKFLOW},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["result"] == "Hello!"
    assert body["turns"] == 3
    assert [m["role"] for m in body["messages"]] == ["assistant", "assistant", "tool", "assistant"]
    assert "<workflow>Greet the user</workflow>" in body["messages"][0]["content"]
    assert fake.calls[0]["model"] == "m-1"


def test_unknown_tool_name_is_bad_request(client_with) -> None:
    http, fake = client_with()

    resp = http.post("/tasks", json={"role": "r", "tools": ["nope"], "workflow": WORKFLOW})

    assert resp.status_code == 400
    assert "nope" in resp.json()["detail"]
    assert fake.calls == []


def test_orphaned_history_is_bad_request(client_with) -> None:
    http, _ = client_with(complete("unused"))

    resp = http.post(
        "/tasks",
        json={
            "role": "r",
            "workflow": WORKFLOW,
            "messages": [{"role": "tool", "tool_call_id": "x", "content": "1"}],
        },
    )

    assert resp.status_code == 400


def test_task_failure_is_bad_gateway(client_with) -> None:
    http, _ = client_with(tool_calls(call("c1", "echo", text="hi")))

    # The agent was not given the echo tool
    resp = http.post("/tasks", json={"role": "r", "workflow": WORKFLOW})

    assert resp.status_code == 502
    assert "echo" in resp.json()["detail"]


def test_turn_limit(client_with) -> None:
    http, fake = client_with(step("a", "1"), step("b", "2"))

    resp = http.post("/tasks", json={"role": "r", "workflow": WORKFLOW, "max_turns": 1})

    assert resp.status_code == 502
    assert len(fake.calls) == 1
