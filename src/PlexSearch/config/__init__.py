from __future__ import annotations

"""Public configuration API for PlexSearch."""

from PlexSearch.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from PlexSearch.config.output import OutputConfig
from PlexSearch.config.runtime import RuntimeConfig
from PlexSearch.config.search import SearchConfig
from PlexSearch.config.server import ServerConfig, check_server

__all__ = [
    "RuntimeConfig",
    "ServerConfig",
    "SearchConfig",
    "OutputConfig",
    "AppConfig",
    "check_server",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
