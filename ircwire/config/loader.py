"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..logs.logger import logger
from .model import ClientConfig

CONF_FILE_ENV = "IRCWIRE_CONF_FILE"
DEFAULT_CONF_FILE = "ircwire.conf"

# Environment variable -> config field
ENV_OVERRIDES = {
    "IRC_SERVER": "server",
    "IRC_NICK": "nickname",
    "IRC_USERNAME": "username",
    "IRC_PASSWORD": "password",
    "IRC_REALNAME": "realname",
    "IRC_CHANNELS": "channels",
}


class ConfigLoader:
    """Loads a ``ClientConfig`` from a JSON file plus environment overrides."""

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def resolve_path(self, config_file: str | None = None) -> Path:
        return Path(
            config_file or self.environ.get(CONF_FILE_ENV, DEFAULT_CONF_FILE)
        )

    def load_raw(self, path: Path) -> dict[str, Any]:
        """Read the JSON object stored at ``path``.

        A missing file yields an empty mapping so environment variables
        alone can configure the client.

        Raises:
            ValueError: when the file is not a JSON object.
        """
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.log_event(
                "config", "file_missing", level=logging.DEBUG, path=str(path)
            )
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object")
        return data

    def apply_env(self, raw: dict[str, Any]) -> dict[str, Any]:
        merged = dict(raw)
        for env_name, field in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value is not None and value.strip():
                merged[field] = value.strip()
        return merged

    def load(self, config_file: str | None = None) -> ClientConfig:
        """Build the effective configuration.

        Raises:
            ValueError: on unreadable JSON or a configuration that fails
                validation (pydantic's ``ValidationError`` is a ``ValueError``).
        """
        path = self.resolve_path(config_file)
        raw = self.apply_env(self.load_raw(path))
        try:
            config = ClientConfig.from_dict(raw)
        except ValidationError as e:
            logger.log_event(
                "config",
                "invalid",
                level=logging.ERROR,
                path=str(path),
                errors=e.error_count(),
            )
            raise
        logger.log_event(
            "config",
            "loaded",
            path=str(path),
            server=config.server,
            nick=config.nickname,
            channels=len(config.channels),
        )
        return config


def load_configuration(config_file: str | None = None) -> ClientConfig:
    return ConfigLoader().load(config_file)
