import json

import httpx
from typer.testing import CliRunner

from asana_mcp import cli
from asana_mcp.client import AsanaClient
from asana_mcp.models import TasksDueToday

runner = CliRunner()


def _env(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda *a, **k: False)
    monkeypatch.setenv("ASANA_PERSONAL_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("ASANA_WORKSPACE_GID", "W1")


def _stub_fetch(monkeypatch, result):
    async def fake_fetch(config):
        return result
    monkeypatch.setattr(cli, "fetch_tasks_due_today", fake_fetch)


def test_today_lists_tasks(monkeypatch):
    _env(monkeypatch)
    _stub_fetch(monkeypatch, TasksDueToday(
        tasksFound=2,
        summary="Today's Asana Tasks:\n1. Write report (Link: https://x/1)\n2. Review PR (Link: https://x/2)",
    ))

    result = runner.invoke(cli.app, ["today"])

    assert result.exit_code == 0, result.stdout
    assert "Today's Asana Tasks:" in result.stdout
    assert "1. Write report (Link: https://x/1)" in result.stdout
    assert "2. Review PR (Link: https://x/2)" in result.stdout


def test_today_nothing_due(monkeypatch):
    _env(monkeypatch)
    _stub_fetch(monkeypatch, TasksDueToday(tasksFound=0, summary="No Asana tasks are due today."))

    result = runner.invoke(cli.app, ["today"])

    assert result.exit_code == 0
    assert "No Asana tasks are due today." in result.stdout


def test_today_json(monkeypatch):
    _env(monkeypatch)
    _stub_fetch(monkeypatch, TasksDueToday(tasksFound=0, summary="No User Task List GID found."))

    result = runner.invoke(cli.app, ["today", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"tasksFound": 0, "summary": "No User Task List GID found."}


def test_today_requires_config(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda *a, **k: False)
    monkeypatch.delenv("ASANA_PERSONAL_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("ASANA_WORKSPACE_GID", raising=False)

    result = runner.invoke(cli.app, ["today"])

    assert result.exit_code == 1
    assert "ASANA_PERSONAL_ACCESS_TOKEN" in result.stdout


def _patch_client(monkeypatch, handler):
    original_init = AsanaClient.__init__

    def init(self, config, transport=None):
        original_init(self, config, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(AsanaClient, "__init__", init)


def test_check_prints_task_list_gid(monkeypatch):
    _env(monkeypatch)
    _patch_client(monkeypatch, lambda request: httpx.Response(200, json={"data": {"gid": "L1"}}))

    result = runner.invoke(cli.app, ["check"])

    assert result.exit_code == 0
    assert "L1" in result.stdout


def test_check_fails_when_unresolved(monkeypatch):
    _env(monkeypatch)
    _patch_client(monkeypatch, lambda request: httpx.Response(401, json={"errors": []}))

    result = runner.invoke(cli.app, ["check"])

    assert result.exit_code == 1
    assert "Could not resolve" in result.stdout
