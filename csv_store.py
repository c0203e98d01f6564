"""
CSV storage for the dashboard resources.
Reads a flat comma-separated file into a list of records (dicts keyed by the
header row) and writes a list of records back out. No quoting is supported:
field values must not contain commas or newlines.
"""

from pathlib import Path


def _split_header(line: str) -> list[str]:
    return [h.strip() for h in line.split(",")]


def records_from_csv(text: str) -> list[dict]:
    """Parse CSV text into records. First non-empty line is the header."""
    headers = None
    records = []
    # Trailing newlines end the file; blank lines inside the body are empty records
    for raw in text.rstrip("\r\n").split("\n"):
        line = raw.rstrip("\r")
        if headers is None:
            if not line.strip():
                continue
            headers = _split_header(line)
            continue
        values = line.split(",")
        # Short rows pad with "", extra fields are dropped
        records.append({
            h: (values[i] if i < len(values) else "")
            for i, h in enumerate(headers)
        })
    return records


def _cell(value) -> str:
    if value is None:
        return ""
    return str(value)


def records_to_csv(records: list[dict]) -> str:
    """Serialize records to CSV text. Columns come from the first record's keys."""
    if not records:
        return ""
    headers = list(records[0].keys())
    lines = [",".join(headers)]
    for row in records:
        lines.append(",".join(_cell(row.get(h)) for h in headers))
    return "\n".join(lines)


def read_records(path: Path) -> list[dict]:
    """Read a CSV file into records. A missing file is an empty resource, not an error."""
    path = Path(path)
    if not path.exists():
        print(f"[CSV] Not found, returning no rows: {path}")
        return []
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    records = records_from_csv(text)
    print(f"[CSV] Read {len(records)} rows from {path.name}")
    return records


def write_records(path: Path, records: list[dict]) -> None:
    """Overwrite a CSV file with records. An empty list truncates the file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = records_to_csv(records)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    print(f"[CSV] Wrote {len(records)} rows ({len(content)} chars) to {path.name}")


def append_records(path: Path, records: list[dict]) -> list[dict]:
    """Append records to the existing file content and rewrite it. Returns the merged list."""
    merged = read_records(path) + list(records)
    write_records(path, merged)
    return merged
