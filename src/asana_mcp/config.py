"""Process configuration read once from the environment."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field

__version__ = "0.1.0"

ASANA_API_BASE_URL = "https://app.asana.com/api/1.0"

TOKEN_ENV = "ASANA_PERSONAL_ACCESS_TOKEN"
WORKSPACE_ENV = "ASANA_WORKSPACE_GID"
VERSION_ENV = "VERSION"

LOG_FORMAT = "%(asctime)s [ASANA MCP SERVER] %(levelname)s %(message)s"


class ConfigError(ValueError):
    """A required setting is missing."""


@dataclass(frozen=True)
class AsanaConfig:
    """Credentials and workspace for the Asana API."""

    access_token: str = field(repr=False)
    workspace_gid: str
    version: str = __version__
    base_url: str = ASANA_API_BASE_URL

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AsanaConfig:
        """Build the config from environment variables.

        Raises ConfigError naming the first missing variable. Empty values
        count as missing.
        """
        env = os.environ if environ is None else environ
        token = env.get(TOKEN_ENV, "").strip()
        if not token:
            raise ConfigError(f"{TOKEN_ENV} environment variable is not set.")
        workspace = env.get(WORKSPACE_ENV, "").strip()
        if not workspace:
            raise ConfigError(f"{WORKSPACE_ENV} environment variable is not set.")
        return cls(
            access_token=token,
            workspace_gid=workspace,
            version=env.get(VERSION_ENV) or __version__,
        )


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to stderr; stdout carries the MCP stream."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
