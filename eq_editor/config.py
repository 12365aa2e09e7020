from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .filters import FilterSet, parse_filter_id

DEFAULT_CONFIG_NAME = "filters.json"

_DEFAULT_TEMPLATE = {
    "name": "Default EQ",
    "selected": 2,
    "filters": [
        {"type": "lowshelf", "id": 1, "hz": 100.0, "db": 3.0, "q": 0.707},
        {"type": "peaking", "id": 2, "hz": 1000.0, "db": -4.0, "q": 1.0},
        {"type": "highshelf", "id": 3, "hz": 8000.0, "db": 2.0, "q": 0.707},
    ],
}


def default_config_payload(name: str | None = None) -> dict[str, Any]:
    payload = json.loads(json.dumps(_DEFAULT_TEMPLATE))
    payload["name"] = (name or _DEFAULT_TEMPLATE["name"]).strip() or _DEFAULT_TEMPLATE["name"]
    return payload


def determine_config_path(user_path: Path | None) -> Path | None:
    if user_path is not None:
        if not user_path.exists():
            raise FileNotFoundError(f"Config file '{user_path}' does not exist")
        return user_path

    auto_path = Path(DEFAULT_CONFIG_NAME)
    if auto_path.exists():
        return auto_path
    return None


def parse_filter_config(data: Any, fallback_name: str = "EQ") -> tuple[FilterSet, dict[str, Any]]:
    if isinstance(data, list):
        data = {"filters": data}
    if not isinstance(data, dict):
        raise ValueError("Config must be a JSON object with a 'filters' array or a bare array of filters")

    entries = data.get("filters")
    if entries is None:
        raise ValueError("Config must define a 'filters' array")
    if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
        raise ValueError("'filters' must be an array of filter objects")

    selected = data.get("selected")
    filter_set = FilterSet.from_dicts(entries)
    if selected is not None:
        selected_id = parse_filter_id(selected)
        if selected_id not in filter_set:
            raise ValueError(f"Selected filter '{selected}' is not defined in 'filters'")
        filter_set.select(selected_id)

    metadata = {"name": data.get("name") or fallback_name}
    return filter_set, metadata


def load_filter_config(config_path: Path | None) -> tuple[FilterSet, dict[str, Any]]:
    """Load a filter set from ``config_path``, or the built-in three-band default."""
    if config_path is None:
        return parse_filter_config(default_config_payload())
    data = json.loads(config_path.read_text(encoding="utf-8"))
    return parse_filter_config(data, fallback_name=config_path.stem)


def dump_filter_config(filter_set: FilterSet, name: str) -> dict[str, Any]:
    payload: dict[str, Any] = {"name": name, "filters": filter_set.to_dicts()}
    if filter_set.selected_id is not None:
        payload["selected"] = filter_set.selected_id
    return payload


def save_filter_config(filter_set: FilterSet, name: str, destination: Path) -> Path:
    destination = destination.expanduser().resolve()
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(dump_filter_config(filter_set, name), indent=2), encoding="utf-8")
    return destination
