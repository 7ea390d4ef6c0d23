# file: teluri/config.py
"""
Configuration loader.

Precedence (highest to lowest):
1. OS environment variables
2. `.env` values
3. YAML config file values
4. Code defaults

Settings are turned into an immutable `ParseOptions` object that callers pass
to each parse, so changing configuration never affects a parse in flight.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel
from pydantic import ConfigDict as PydanticConfigDict

from teluri.core.parser import ParseOptions


class TeluriSettings(BaseModel):
    model_config = PydanticConfigDict(extra="ignore")

    # Parsing
    strict: bool = True

    # Logging
    log_level: str = "INFO"
    json_logging: bool = False

    def parse_options(self) -> ParseOptions:
        return ParseOptions(strict=self.strict)


_ENV_MAP: dict[str, str] = {
    "TELURI_STRICT": "strict",
    "TELURI_LOG_LEVEL": "log_level",
    "TELURI_JSON_LOGGING": "json_logging",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return raw if isinstance(raw, dict) else {}


def _read_dotenv(path: Path) -> dict[str, str]:
    values = dotenv_values(path)
    out: dict[str, str] = {}
    for k, v in values.items():
        if isinstance(k, str) and isinstance(v, str):
            out[k] = v
    return out


def _overlay_env(target: dict[str, Any], env: dict[str, str]) -> None:
    for env_key, field_name in _ENV_MAP.items():
        if env_key in env:
            target[field_name] = env[env_key]


def load_settings(
    *, yaml_path: Path | None = None, env_path: Path | None = None
) -> TeluriSettings:
    """
    Load settings from YAML and .env, with OS env overrides.

    Args:
        yaml_path: Optional YAML config path (falls back to `TELURI_CONFIG`).
        env_path: Optional .env path (default: `.env` if present).
    """

    data: dict[str, Any] = {}

    if env_path is None:
        maybe = Path(".env")
        env_path = maybe if maybe.exists() else None

    dotenv = _read_dotenv(env_path) if env_path is not None and env_path.exists() else {}

    if yaml_path is None:
        cfg = os.environ.get("TELURI_CONFIG") or dotenv.get("TELURI_CONFIG")
        if cfg:
            yaml_path = Path(cfg)

    if yaml_path is not None and yaml_path.exists():
        data.update(_read_yaml(yaml_path))

    if dotenv:
        _overlay_env(data, dotenv)

    os_env: dict[str, str] = {k: v for k, v in os.environ.items() if k in _ENV_MAP}
    _overlay_env(data, os_env)

    return TeluriSettings.model_validate(data)
