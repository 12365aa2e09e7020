import json

import pytest

from eq_editor.config import (
    default_config_payload,
    determine_config_path,
    dump_filter_config,
    load_filter_config,
    save_filter_config,
)
from eq_editor.filters import CustomFilter, LowShelfFilter, PeakingFilter


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_default_set_when_no_config():
    filters, metadata = load_filter_config(None)
    assert metadata["name"] == "Default EQ"
    assert [f.kind for f in filters] == ["lowshelf", "peaking", "highshelf"]
    assert filters.selected_id == 2


def test_default_payload_is_a_fresh_copy():
    payload = default_config_payload("  ")
    payload["filters"].clear()
    assert payload["name"] == "Default EQ"
    assert len(default_config_payload()["filters"]) == 3


def test_loads_object_config(tmp_path):
    path = _write(
        tmp_path / "vocal.json",
        {
            "name": "Vocal",
            "selected": 7,
            "filters": [
                {"type": "peaking", "id": 7, "hz": 3000.0, "db": 2.0, "q": 1.4},
                {"type": "custom", "id": 8, "b0": 0.5},
            ],
        },
    )
    filters, metadata = load_filter_config(path)
    assert metadata == {"name": "Vocal"}
    assert filters.selected == PeakingFilter(id=7, hz=3000.0, db=2.0, q=1.4)
    assert filters.get(8) == CustomFilter(id=8, b0=0.5)


def test_bare_list_config_uses_file_stem(tmp_path):
    path = _write(tmp_path / "bass.json", [{"type": "lowshelf", "id": 1, "hz": 90.0, "db": 4.0, "q": 0.707}])
    filters, metadata = load_filter_config(path)
    assert metadata["name"] == "bass"
    assert filters.selected_id is None
    assert list(filters) == [LowShelfFilter(id=1, hz=90.0, db=4.0, q=0.707)]


@pytest.mark.parametrize(
    "payload, message",
    [
        ("just text", "JSON object"),
        ({"name": "x"}, "'filters'"),
        ({"filters": [1, 2]}, "filter objects"),
        ({"filters": [{"type": "peaking", "id": 1}], "selected": 3}, "Selected filter"),
        ({"filters": [{"type": "peaking", "id": 1}, {"type": "lowshelf", "id": 1}]}, "Duplicate"),
        ({"filters": [{"type": "peaking", "id": None}]}, "whole number"),
        ({"filters": [{"type": "peaking", "id": 1.7}]}, "whole number"),
        ({"filters": [{"type": "peaking", "id": 1}], "selected": [1]}, "whole number"),
        ({"filters": [{"type": "peaking", "id": 1}], "selected": 1.5}, "whole number"),
        ({"filters": [{"type": "peaking", "id": 1, "db": float("nan")}]}, "non-numeric"),
    ],
)
def test_malformed_configs_raise_value_error(tmp_path, payload, message):
    path = _write(tmp_path / "broken.json", payload)
    with pytest.raises(ValueError, match=message):
        load_filter_config(path)


def test_invalid_json_raises_value_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_filter_config(path)


def test_config_path_resolution(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert determine_config_path(None) is None
    with pytest.raises(FileNotFoundError):
        determine_config_path(tmp_path / "missing.json")

    auto = _write(tmp_path / "filters.json", [])
    assert determine_config_path(None).resolve() == auto.resolve()


def test_saved_config_loads_back(tmp_path):
    filters, _ = load_filter_config(None)
    destination = save_filter_config(filters, "Round", tmp_path / "out" / "round.json")
    reloaded, metadata = load_filter_config(destination)
    assert metadata["name"] == "Round"
    assert reloaded.to_dicts() == filters.to_dicts()
    assert reloaded.selected_id == filters.selected_id
    assert dump_filter_config(reloaded, "Round")["selected"] == 2
