from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import json
from pathlib import Path

from interviewer.keys.core import Entry, Key, build_codebook

SUBJECTS = ("node", "edge", "ego")


def _check_subject(subject: str) -> None:
    if subject not in SUBJECTS:
        raise ValueError(f"Unknown codebook subject: {subject!r}")


@dataclass(frozen=True)
class EntityType:
    key: Key
    name: Optional[str]
    variables: Dict[Key, Entry] = field(default_factory=dict)


@dataclass
class ProtocolCodebook:
    """Codebook section of a protocol: node and edge types plus ego variables."""

    node: Dict[Key, EntityType]
    edge: Dict[Key, EntityType]
    ego: Dict[Key, Entry]

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ProtocolCodebook":
        def types(section: Any) -> Dict[Key, EntityType]:
            out: Dict[Key, EntityType] = {}
            if not isinstance(section, dict):
                return out
            for key, raw in section.items():
                raw = raw if isinstance(raw, dict) else {}
                name = raw.get("name")
                out[key] = EntityType(
                    key=key,
                    name=name if isinstance(name, str) else None,
                    variables=build_codebook(raw.get("variables") or {}),
                )
            return out

        data = data or {}
        ego = data.get("ego") if isinstance(data.get("ego"), dict) else {}
        return ProtocolCodebook(
            node=types(data.get("node")),
            edge=types(data.get("edge")),
            ego=build_codebook(ego.get("variables") or {}),
        )

    @staticmethod
    def from_json_path(path: str | Path) -> "ProtocolCodebook":
        data = json.loads(Path(path).read_text())
        # accept a whole protocol file as well as a bare codebook
        if "codebook" in data and isinstance(data["codebook"], dict):
            data = data["codebook"]
        return ProtocolCodebook.from_dict(data)

    def entity_types(self, subject: str) -> Dict[Key, Dict[str, Any]]:
        """Types for ``node``/``edge`` as a resolver mapping (key -> {name})."""
        _check_subject(subject)
        if subject == "ego":
            return {}
        section = self.node if subject == "node" else self.edge
        return {k: {"name": t.name} for k, t in section.items()}

    def variables(self, subject: str, type_key: Optional[Key] = None) -> Dict[Key, Entry]:
        _check_subject(subject)
        if subject == "ego":
            return self.ego
        section = self.node if subject == "node" else self.edge
        entity = section.get(type_key) if type_key is not None else None
        return entity.variables if entity else {}
