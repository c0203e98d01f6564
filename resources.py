"""
Resource bindings: each named resource maps to one CSV file and a GET/POST path pair.
Defaults cover the dashboard pages; resources.json can override or add entries:

  {"resources": [{"name": "costs", "file": "budget/costs.csv",
                  "read_path": "/api/bar/data", "save_path": "/api/bar/save"}]}
"""

import json
from pathlib import Path
from typing import Optional

from csv_store import read_records

WRITE_MODES = ("replace", "append")

# Sample content written on first start when seeding is enabled
SAMPLE_DOCUMENTS = "Name,Age,City\nJohn Doe,30,New York\nJane Smith,25,London"
SAMPLE_SAVINGS = "Month,Year,Reason,Value\nJan,2024,Salary,1000\nFeb,2024,Salary,1200"
SAMPLE_COSTS = "Description,Cost\nRent,800\nFood,300\nTransport,150"

DEFAULT_RESOURCES = [
    {"name": "documents", "file": "DocumentTracker.csv",
     "read_path": "/api/data", "save_path": "/api/save",
     "mode": "replace", "sample": SAMPLE_DOCUMENTS},
    {"name": "savings", "file": "savings_data.csv",
     "read_path": "/api/chart/data", "save_path": "/api/chart/save",
     "mode": "replace", "sample": SAMPLE_SAVINGS},
    {"name": "costs", "file": "cost_data.csv",
     "read_path": "/api/bar/data", "save_path": "/api/bar/save",
     "mode": "replace", "sample": SAMPLE_COSTS},
    {"name": "tasks", "file": "task_data.csv",
     "read_path": "/api/task/data", "save_path": "/api/task/save",
     "mode": "replace"},
    # Timing log: each POST adds rows instead of replacing the file
    {"name": "timestamps", "file": "timestamps.csv",
     "read_path": "/api/timestamps/data", "save_path": "/api/timestamps/save",
     "mode": "append"},
]

_REQUIRED_KEYS = ("name", "file", "read_path", "save_path")

# Served by the router itself, never by a resource
RESERVED_ROUTES = {("GET", "/api/resources"), ("GET", "/api/chart/summary")}


def _normalize(entry: dict, data_dir: Path) -> dict:
    missing = [k for k in _REQUIRED_KEYS if not entry.get(k)]
    if missing:
        raise ValueError(f"Resource {entry.get('name', '?')!r} is missing {', '.join(missing)}")
    mode = entry.get("mode") or "replace"
    if mode not in WRITE_MODES:
        raise ValueError(f"Resource {entry['name']!r}: mode must be one of {WRITE_MODES}, got {mode!r}")
    path = Path(entry["file"])
    if not path.is_absolute():
        path = data_dir / path
    res = dict(entry)
    res["mode"] = mode
    res["path"] = path
    return res


def load_resources(config_path: Optional[Path], data_dir: Path) -> list[dict]:
    """Return the resource table: defaults, overridden by name from config_path if it exists."""
    data_dir = Path(data_dir)
    entries = {r["name"]: dict(r) for r in DEFAULT_RESOURCES}
    if config_path and Path(config_path).exists():
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
        for override in cfg.get("resources", []):
            name = override.get("name")
            if not name:
                raise ValueError("Resource entry without a name in " + str(config_path))
            merged = entries.get(name, {})
            merged.update(override)
            entries[name] = merged

    resources = [_normalize(e, data_dir) for e in entries.values()]

    seen = set()
    for r in resources:
        for key in (("GET", r["read_path"]), ("POST", r["save_path"])):
            if key in RESERVED_ROUTES:
                raise ValueError(f"{key[0]} {key[1]} is reserved and cannot be bound to {r['name']!r}")
            if key in seen:
                raise ValueError(f"{key[0]} {key[1]} is bound to more than one resource")
            seen.add(key)
    return resources


def seed_resource_files(resources: list[dict]) -> list[str]:
    """Write sample content for resources whose file is absent. Returns names seeded."""
    seeded = []
    for r in resources:
        sample = r.get("sample")
        if not sample or r["path"].exists():
            continue
        r["path"].parent.mkdir(parents=True, exist_ok=True)
        with open(r["path"], "w", encoding="utf-8", newline="") as f:
            f.write(sample)
        print(f"[Seed] Created {r['name']} CSV with sample data: {r['path']}")
        seeded.append(r["name"])
    return seeded


def describe_resources(resources: list[dict]) -> list[dict]:
    """JSON-safe view of the bindings, including whether each file exists and its row count."""
    out = []
    for r in resources:
        exists = r["path"].exists()
        out.append({
            "name": r["name"],
            "file": r["path"].name,
            "read_path": r["read_path"],
            "save_path": r["save_path"],
            "mode": r["mode"],
            "exists": exists,
            "rows": len(read_records(r["path"])) if exists else 0,
        })
    return out
