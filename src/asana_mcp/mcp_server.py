"""MCP server exposing today's Asana tasks to AI assistants."""

from __future__ import annotations

import logging
import os
import signal
import sys

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from asana_mcp.config import AsanaConfig, ConfigError, configure_logging
from asana_mcp.models import TasksDueToday
from asana_mcp.tasks import fetch_tasks_due_today

logger = logging.getLogger(__name__)

SERVER_NAME = "asana-mcp-server"
TOOL_NAME = "get_my_tasks_due_today"
TOOL_DESCRIPTION = "Retrieves your Asana tasks that are due today from the configured workspace."

INSTRUCTIONS = """\
MCP Server to interact with the Asana API, providing tools to fetch tasks.

The server is bound to one Asana user (via a personal access token) and one \
workspace. Use get_my_tasks_due_today when the user asks what is due today in \
Asana. It takes no arguments and returns the number of incomplete tasks due \
today plus a numbered summary with a link to each task. A count of zero may \
mean there is nothing due or that Asana could not be reached; the summary \
says which.\
"""


def create_server(config: AsanaConfig) -> FastMCP:
    """Build the FastMCP server with its single tool bound to ``config``."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)
    # FastMCP has no version argument; the low-level server reports this in initialize
    mcp._mcp_server.version = config.version

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def get_my_tasks_due_today() -> TasksDueToday:
        return await fetch_tasks_due_today(config)

    logger.info("McpServer instance created: %s v%s", SERVER_NAME, config.version)
    return mcp


def _handle_signal(signum, frame) -> None:
    # no logging here: a handler lock may be held by the interrupted frame
    sys.stderr.write(f"[ASANA MCP SERVER] Received {signal.Signals(signum).name}. Shutting down...\n")
    sys.stderr.flush()
    # the stdio reader thread would block a normal interpreter exit
    os._exit(0)


def install_signal_handlers() -> None:
    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _handle_signal)


def load_config() -> AsanaConfig:
    """Read config from the environment (and .env), exiting with status 1 if incomplete."""
    load_dotenv()
    try:
        return AsanaConfig.from_env()
    except ConfigError as e:
        logger.critical("%s Exiting.", e)
        sys.exit(1)


def main():
    """Entry point for the MCP server."""
    configure_logging()
    logger.info("Starting MCP server process...")
    config = load_config()
    install_signal_handlers()

    try:
        mcp = create_server(config)
        logger.info("Connecting McpServer to stdio transport...")
        mcp.run(transport="stdio")
    except Exception:
        logger.critical("Uncaught error during server execution", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
