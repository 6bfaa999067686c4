"""Thin async wrapper around the two Asana REST endpoints we use."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from asana_mcp.config import AsanaConfig

logger = logging.getLogger(__name__)

TASK_OPT_FIELDS = (
    "name,due_on,permalink_url,assignee.name,assignee.gid,projects.name,projects.gid"
)


def decode_body(response: httpx.Response) -> Any:
    """Parsed JSON body, or the raw text when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


def response_detail(response: httpx.Response) -> str:
    """Body of a response serialised as compact JSON; empty string for an empty body."""
    if not response.content:
        return ""
    return json.dumps(decode_body(response), separators=(",", ":"), ensure_ascii=False)


class AsanaClient:
    """Issues bearer-authenticated GETs against the Asana API.

    Use as an async context manager; one underlying httpx client is opened
    per ``async with`` block.
    """

    def __init__(self, config: AsanaConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> AsanaClient:
        self._http = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=self.config.headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        if self._http is None:
            raise RuntimeError("AsanaClient used outside 'async with'")
        response = await self._http.get(path, params=params)
        response.raise_for_status()
        return decode_body(response)

    async def get_user_task_list_gid(self, workspace_gid: str) -> str | None:
        """Return the gid of the current user's task list in a workspace, or None.

        Every failure (transport, HTTP status, unexpected body) is logged and
        reported as None.
        """
        if not workspace_gid:
            logger.error("Cannot fetch User Task List GID: workspace GID is empty.")
            return None

        logger.info("Attempting to fetch User Task List GID for workspace: %s", workspace_gid)
        try:
            body = await self._get("/users/me/user_task_list", {"workspace": workspace_gid})
        except httpx.HTTPStatusError as e:
            logger.error(
                "Failed to fetch User Task List GID for workspace %s: status %s, data: %s",
                workspace_gid,
                e.response.status_code,
                response_detail(e.response),
            )
            return None
        except httpx.RequestError as e:
            logger.error(
                "Failed to fetch User Task List GID for workspace %s: %s", workspace_gid, e
            )
            return None

        data = body.get("data") if isinstance(body, dict) else None
        gid = data.get("gid") if isinstance(data, dict) else None
        if isinstance(gid, str) and gid:
            logger.info("User Task List GID successfully fetched: %s", gid)
            return gid

        logger.warning("API response for User Task List GID was missing 'data.gid'. Response: %s", body)
        return None

    async def get_tasks_due_on(self, task_list_gid: str, due_on: str) -> Any:
        """Return the raw ``data`` array of incomplete tasks due on a date.

        A body that is not a JSON object (including one that is not JSON at
        all) yields None. Raises httpx errors for the caller to handle.
        """
        body = await self._get(
            f"/user_task_lists/{task_list_gid}/tasks",
            {
                "due_on": due_on,
                "completed": "false",
                "opt_fields": TASK_OPT_FIELDS,
            },
        )
        return body.get("data") if isinstance(body, dict) else None
