"""Tests for resource configuration loading and sample seeding."""

import json

import pytest

from resources import DEFAULT_RESOURCES, load_resources, seed_resource_files


def test_defaults_resolve_against_data_dir(tmp_path):
    resources = load_resources(None, tmp_path)
    by_name = {r["name"]: r for r in resources}
    assert len(resources) == len(DEFAULT_RESOURCES)
    assert by_name["documents"]["path"] == tmp_path / "DocumentTracker.csv"
    assert by_name["savings"]["read_path"] == "/api/chart/data"
    assert by_name["costs"]["save_path"] == "/api/bar/save"
    assert by_name["timestamps"]["mode"] == "append"


def test_missing_config_file_uses_defaults(tmp_path):
    assert len(load_resources(tmp_path / "nope.json", tmp_path)) == len(DEFAULT_RESOURCES)


def _write_config(tmp_path, entries):
    path = tmp_path / "resources.json"
    path.write_text(json.dumps({"resources": entries}), encoding="utf-8")
    return path


def test_absolute_file_path_kept(tmp_path):
    target = tmp_path / "elsewhere" / "docs.csv"
    cfg = _write_config(tmp_path, [{"name": "documents", "file": str(target)}])
    by_name = {r["name"]: r for r in load_resources(cfg, tmp_path / "data")}
    assert by_name["documents"]["path"] == target


def test_invalid_mode_rejected(tmp_path):
    cfg = _write_config(tmp_path, [{"name": "costs", "mode": "merge"}])
    with pytest.raises(ValueError):
        load_resources(cfg, tmp_path)


def test_incomplete_new_resource_rejected(tmp_path):
    cfg = _write_config(tmp_path, [{"name": "notes", "file": "notes.csv"}])
    with pytest.raises(ValueError, match="read_path"):
        load_resources(cfg, tmp_path)


def test_duplicate_route_rejected(tmp_path):
    cfg = _write_config(tmp_path, [
        {"name": "notes", "file": "notes.csv", "read_path": "/api/data", "save_path": "/api/notes/save"},
    ])
    with pytest.raises(ValueError, match="/api/data"):
        load_resources(cfg, tmp_path)


def test_same_path_for_get_and_post_allowed(tmp_path):
    cfg = _write_config(tmp_path, [
        {"name": "timings", "file": "t.csv", "read_path": "/timestamps", "save_path": "/timestamps"},
    ])
    names = [r["name"] for r in load_resources(cfg, tmp_path)]
    assert "timings" in names


def test_seed_only_missing_files(tmp_path):
    resources = load_resources(None, tmp_path)
    (tmp_path / "cost_data.csv").write_text("Description,Cost\nMine,1", encoding="utf-8")
    seeded = seed_resource_files(resources)
    assert seeded == ["documents", "savings"]
    assert (tmp_path / "cost_data.csv").read_text(encoding="utf-8") == "Description,Cost\nMine,1"
    assert (tmp_path / "savings_data.csv").read_text(encoding="utf-8").startswith("Month,Year,Reason,Value")
    assert seed_resource_files(resources) == []


@pytest.mark.parametrize("path", ["/api/chart/summary", "/api/resources"])
def test_router_owned_paths_cannot_be_bound(tmp_path, path):
    cfg = _write_config(tmp_path, [
        {"name": "notes", "file": "notes.csv", "read_path": path, "save_path": "/api/notes/save"},
    ])
    with pytest.raises(ValueError, match="reserved"):
        load_resources(cfg, tmp_path)
