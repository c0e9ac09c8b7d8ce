"""Configuration loader for the squirrel cache."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml
from jsonschema import Draft7Validator

from .errors import ConfigurationError

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["cache_dir"],
    "properties": {
        "cache_dir": {"type": "string", "minLength": 1},
        "ttl_sec": {"type": "integer", "minimum": -1},
        "codec": {"type": "string", "enum": ["pickle", "json"]},
    },
    "additionalProperties": False,
}

_validator = Draft7Validator(CONFIG_SCHEMA)


def validate_config(data: Dict[str, Any]) -> None:
    errors = sorted(_validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise ConfigurationError(f"squirrel config validation failed: {messages}")


@dataclass(frozen=True)
class SquirrelConfig:
    cache_dir: Path
    ttl_sec: int = 0
    codec: str = "pickle"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SquirrelConfig":
        validate_config(data)
        return cls(
            cache_dir=Path(os.path.expanduser(data["cache_dir"])),
            ttl_sec=int(data.get("ttl_sec", 0)),
            codec=data.get("codec", "pickle"),
        )


ENV_MAP = {
    "cache_dir": "SQUIRREL_CACHE_DIR",
    "ttl_sec": "SQUIRREL_TTL_SEC",
    "codec": "SQUIRREL_CODEC",
}


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = json.loads(json.dumps(config_data))  # deep copy via json

    for key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        value: Any = os.environ[env_name]
        if key == "ttl_sec":
            try:
                value = int(value)
            except ValueError as e:
                raise ConfigurationError(f"{env_name} must be an integer, got `{value}`") from e
        merged[key] = value

    return merged


def load_config(config_path: str | Path = "config/squirrel.yml") -> SquirrelConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = load_yaml(path)
    data = merge_env_overrides(data)
    return SquirrelConfig.from_dict(data)
