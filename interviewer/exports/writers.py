from __future__ import annotations
from typing import List, Dict, Any, Iterable
import csv
import io

from interviewer.participants.schema import Participant

SCHEMAS = {
    "participants": ["identifier", "label"],
}


def write_csv(rows: Iterable[Dict[str, Any]], columns: List[str]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore")
    w.writeheader()
    for r in rows:
        w.writerow({k: r.get(k) for k in columns})
    return buf.getvalue()


def write_participants(participants: Iterable[Participant]) -> str:
    return write_csv(
        ({"identifier": p.identifier, "label": p.label} for p in participants),
        SCHEMAS["participants"],
    )


ENTITY_TYPE_COLUMN = "type"


def _attribute_column(key: Any) -> str:
    # an attribute literally named "type" must not clobber the entity type
    col = str(key)
    return f"attribute:{col}" if col == ENTITY_TYPE_COLUMN else col


def attribute_columns(entities: Iterable[Dict[str, Any]]) -> List[str]:
    """``type`` followed by attribute keys in order of first appearance."""
    cols: List[str] = [ENTITY_TYPE_COLUMN]
    for e in entities:
        for k in (e.get("attributes") or {}):
            col = _attribute_column(k)
            if col not in cols:
                cols.append(col)
    return cols


def write_attribute_list(entities: List[Dict[str, Any]]) -> str:
    rows = [
        {
            **{_attribute_column(k): v for k, v in (e.get("attributes") or {}).items()},
            ENTITY_TYPE_COLUMN: e.get("type"),
        }
        for e in entities
    ]
    return write_csv(rows, attribute_columns(entities))
