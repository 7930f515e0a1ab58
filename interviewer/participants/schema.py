from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote
import csv
import io
import logging
import uuid

logger = logging.getLogger(__name__)

MAX_IDENTIFIER_LENGTH = 255


class ParticipantValidationError(ValueError):
    pass


@dataclass(frozen=True)
class Participant:
    identifier: str
    label: Optional[str] = None


def validate_identifier(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ParticipantValidationError("Identifier cannot be empty")
    if len(value) > MAX_IDENTIFIER_LENGTH:
        raise ParticipantValidationError(
            f"Identifier too long. Maximum of {MAX_IDENTIFIER_LENGTH} characters."
        )
    return value


def _clean(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def parse_participant_rows(rows: Iterable[Dict[str, Any]]) -> List[Participant]:
    """Validate import rows. Each row needs an identifier, a label, or both.
    Label-only rows get a generated identifier. Duplicate identifiers fail the
    whole import.
    """
    out: List[Participant] = []
    seen: set[str] = set()
    for i, row in enumerate(rows, start=1):
        identifier = _clean(row.get("identifier"))
        label = _clean(row.get("label"))
        if identifier is None and label is None:
            raise ParticipantValidationError(f"Row {i}: identifier or label is required")
        if identifier is None:
            identifier = f"p_{uuid.uuid4().hex}"
        validate_identifier(identifier)
        if identifier in seen:
            raise ParticipantValidationError(f"Row {i}: duplicate identifier {identifier!r}")
        seen.add(identifier)
        out.append(Participant(identifier=identifier, label=label))
    logger.info("parsed %d participants", len(out))
    return out


def read_participants_csv(text: str) -> List[Participant]:
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    headers = {h.strip().lower() for h in (reader.fieldnames or []) if h}
    if not headers & {"identifier", "label"}:
        raise ParticipantValidationError("Invalid CSV")
    rows = [
        {(k or "").strip().lower(): v for k, v in r.items()}
        for r in reader
    ]
    # skip fully blank lines
    rows = [r for r in rows if _clean(r.get("identifier")) or _clean(r.get("label"))]
    return parse_participant_rows(rows)


def participation_url(base_url: str, protocol_id: str, participant_id: str) -> str:
    return f"{base_url.rstrip('/')}/onboard/{quote(str(protocol_id), safe='')}/?participantId={quote(str(participant_id), safe='')}"
