"""Fetch today's Asana tasks and summarise them as text."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from asana_mcp.client import AsanaClient, response_detail
from asana_mcp.config import AsanaConfig
from asana_mcp.dates import today_string
from asana_mcp.models import AsanaTask, TasksDueToday, parse_tasks

logger = logging.getLogger(__name__)

NO_TASK_LIST = "No User Task List GID found."
NO_TASKS = "No Asana tasks are due today."
BAD_FORMAT = "Error: Received unexpected task data format from Asana."
GENERIC_ERROR = "An unexpected error occurred while fetching tasks from Asana."


def render_summary(tasks: list[AsanaTask]) -> str:
    lines = [f"{i}. {t.name} (Link: {t.permalink_url})" for i, t in enumerate(tasks, start=1)]
    return "Today's Asana Tasks:\n" + "\n".join(lines)


def describe_error(e: Exception) -> str:
    """Turn a failed tasks query into the text shown to the caller."""
    if isinstance(e, httpx.HTTPStatusError):
        detail = response_detail(e.response) or str(e)
        return f"Asana API Error: {e.response.status_code} - {detail}"
    if isinstance(e, httpx.RequestError):
        return f"Asana API Error: N/A - {e}"
    return str(e) or GENERIC_ERROR


async def fetch_tasks_due_today(
    config: AsanaConfig,
    *,
    today: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TasksDueToday:
    """Look up the caller's incomplete tasks due today.

    Never raises: lookup failures, HTTP errors and malformed payloads all come
    back as a zero-count result whose summary explains what went wrong.
    """
    today = today or today_string()

    async with AsanaClient(config, transport=transport) as client:
        list_gid = await client.get_user_task_list_gid(config.workspace_gid)
        if not list_gid:
            return TasksDueToday(tasksFound=0, summary=NO_TASK_LIST)

        try:
            data = await client.get_tasks_due_on(list_gid, today)
        except Exception as e:
            logger.error("Failed to fetch tasks for list %s: %s", list_gid, e)
            return TasksDueToday(tasksFound=0, summary=f"Error: {describe_error(e)}")

    try:
        tasks = parse_tasks(data)
    except ValidationError as e:
        logger.error("Failed to parse Asana tasks against schema: %s", e)
        return TasksDueToday(tasksFound=0, summary=BAD_FORMAT)

    if not tasks:
        return TasksDueToday(tasksFound=0, summary=NO_TASKS)

    logger.info("Found %d task(s) due %s", len(tasks), today)
    return TasksDueToday(tasksFound=len(tasks), summary=render_summary(tasks))
