"""
Serialization helpers for command streams, responses and configuration.

Command records are plain dicts already; this module only writes and
reads them as JSON/YAML. Configuration goes through an explicit dict
representation so the YAML layout stays stable.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from dtpcmd.config import QueueConfig


def commands_to_json(commands: List[Dict[str, Any]]) -> str:
    return json.dumps(commands)


def commands_from_json(s: str) -> List[Dict[str, Any]]:
    return json.loads(s)


def commands_to_yaml(commands: List[Dict[str, Any]]) -> str:
    return yaml.safe_dump(commands, sort_keys=False)


def commands_from_yaml(s: str) -> List[Dict[str, Any]]:
    return yaml.safe_load(s) or []


def response_to_json(response: Dict[str, Any]) -> str:
    return json.dumps(response, sort_keys=True)


def config_to_dict(c: QueueConfig) -> Dict[str, Any]:
    return {
        "y_position_variable": c.y_position_variable,
        "queue_ident_prefix": c.queue_ident_prefix,
        "content_ident_prefix": c.content_ident_prefix,
        "asset_download_enabled": c.asset_download_enabled,
        "debug": c.debug,
    }


def config_from_dict(d: Dict[str, Any] | None) -> QueueConfig:
    if not d:
        return QueueConfig()
    unknown = set(d) - set(config_to_dict(QueueConfig()))
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    return QueueConfig(**d)


def config_to_yaml(c: QueueConfig) -> str:
    return yaml.safe_dump(config_to_dict(c))


def config_from_yaml(s: str) -> QueueConfig:
    return config_from_dict(yaml.safe_load(s))


def load_config(path: Union[str, Path]) -> QueueConfig:
    """Read a QueueConfig from a YAML file."""
    return config_from_yaml(Path(path).read_text(encoding="utf-8"))
