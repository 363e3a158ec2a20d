"""Shared JSON settings storage."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rental_marketplace.logging_config import get_logger


def load_config_data(config_path: Path) -> dict[str, Any]:
    """Load settings from disk; a missing or unreadable file yields ``{}``."""
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        get_logger(__name__).warning("Ignoring unreadable settings file %s", config_path)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def save_config_data(config_path: Path, data: dict[str, Any]) -> None:
    """Write settings atomically via a sibling temporary file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = config_path.with_suffix(config_path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    tmp_path.replace(config_path)


def update_config_data(config_path: Path, **values: Any) -> dict[str, Any]:
    """Merge ``values`` into the stored settings and return the result."""
    payload = load_config_data(config_path)
    payload.update(values)
    save_config_data(config_path, payload)
    return payload
