"""Plex server connection configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from PlexSearch.config.common import expect_number, expect_str, get_optional_value, get_section


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Store validated Plex server connection settings.

    The token itself is never read from YAML, only from the environment
    variable named by ``token_env``.
    """

    url: str
    token_env: str
    token: str
    timeout: float


def load_server(raw: Mapping[str, Any]) -> ServerConfig:
    """Load the ``server`` section.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed server configuration with the token resolved from the environment.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "server", required=False)
    token_env = expect_str(get_optional_value(section, "token_env", "PLEX_TOKEN"), "server.token_env")
    return ServerConfig(
        url=expect_str(get_optional_value(section, "url", "http://localhost:32400"), "server.url"),
        token_env=token_env,
        token=os.getenv(token_env, "").strip(),
        timeout=float(expect_number(get_optional_value(section, "timeout", 30), "server.timeout")),
    )


def check_server(config: ServerConfig, *, require_token: bool = True) -> None:
    """Validate server domain constraints.

    Args:
        config: Parsed server configuration.
        require_token: Whether a missing token is an error.

    Raises:
        ValueError: If values violate server constraints.
    """
    if not config.url.strip():
        raise ValueError("server.url must not be empty")
    if not config.url.startswith(("http://", "https://")):
        raise ValueError("server.url must start with http:// or https://")
    if not config.token_env.strip():
        raise ValueError("server.token_env must not be empty")
    if config.timeout <= 0:
        raise ValueError("server.timeout must be positive")
    if require_token and not config.token:
        raise ValueError(
            f"{config.token_env} environment variable not set. "
            "Set it in your .env file or shell environment."
        )
