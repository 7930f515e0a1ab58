from __future__ import annotations
from typing import Any, Dict, List
import csv
import io
import json


class ExternalDataError(ValueError):
    """External data file does not have the expected shape."""


def read_csv_roster(text: str) -> List[Dict[str, Any]]:
    """Read a roster CSV into node records, one per row.
    Column headers become attribute labels; empty cells are dropped. Cell
    values stay strings.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    if not reader.fieldnames:
        raise ExternalDataError("CSV has no header row")
    out: List[Dict[str, Any]] = []
    for row in reader:
        attrs = {k.strip(): v for k, v in row.items() if k and v not in (None, "")}
        if not attrs:
            continue
        out.append({"attributes": attrs})
    return out


def read_json_network(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExternalDataError(f"Invalid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise ExternalDataError("Network must be a JSON object")
    nodes = data.get("nodes", [])
    if not isinstance(nodes, list):
        raise ExternalDataError("'nodes' must be a list")
    edges = data.get("edges", [])
    if not isinstance(edges, list):
        raise ExternalDataError("'edges' must be a list")
    ego = data.get("ego") if isinstance(data.get("ego"), dict) else {}
    return {
        "nodes": [n for n in nodes if isinstance(n, dict)],
        "edges": [e for e in edges if isinstance(e, dict)],
        "ego": ego,
    }
