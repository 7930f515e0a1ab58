from __future__ import annotations
from collections import Counter
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging
from pathlib import Path

from interviewer.codebook.model import ProtocolCodebook
from interviewer.keys.core import Key, resolve

logger = logging.getLogger(__name__)


@dataclass
class TranslationReport:
    resolved: Counter = field(default_factory=Counter)  # (subject, label) -> hits
    unresolved: Counter = field(default_factory=Counter)

    @property
    def coverage(self) -> float:
        total = sum(self.resolved.values()) + sum(self.unresolved.values())
        return sum(self.resolved.values()) / total if total else 1.0


@dataclass
class Translator:
    codebook: ProtocolCodebook
    default_type: Optional[Key] = None
    _report: TranslationReport = field(default_factory=TranslationReport)

    @staticmethod
    def from_json_path(path: str | Path, default_type: Optional[Key] = None) -> "Translator":
        return Translator(codebook=ProtocolCodebook.from_json_path(path), default_type=default_type)

    def _track(self, subject: str, label: Any, key: Any, mapping: Dict[Key, Any], prefix: str = "") -> None:
        # a label that is already a canonical key counts as resolved
        hit = key != label or (isinstance(label, Hashable) and label in mapping)
        bucket = self._report.resolved if hit else self._report.unresolved
        bucket[(subject, f"{prefix}{label}")] += 1

    def resolve_type(self, subject: str, label: Any) -> Any:
        return resolve(self.codebook.entity_types(subject), label)

    def translate_attributes(
        self, subject: str, type_key: Optional[Key], attributes: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Re-key one entity's attributes onto codebook variable keys.
        - Labels are resolved against the variables of ``type_key`` (ego ignores it)
        - Unmatched labels are kept as-is and counted as unresolved
        - Two labels resolving to the same key: the later one wins
        """
        variables = self.codebook.variables(subject, type_key)
        out: Dict[str, Any] = {}
        for label, value in (attributes or {}).items():
            key = resolve(variables, label)
            self._track(subject, label, key, variables)
            out[key] = value
        return out

    def translate_entity(self, subject: str, entity: Dict[str, Any]) -> Dict[str, Any]:
        raw_type = entity.get("type") if entity.get("type") is not None else self.default_type
        type_key = None
        if raw_type is not None:
            type_key = self.resolve_type(subject, raw_type)
            self._track(subject, raw_type, type_key, self.codebook.entity_types(subject), prefix="type:")
        out = {k: v for k, v in entity.items()}
        if type_key is not None:
            out["type"] = type_key
        out["attributes"] = self.translate_attributes(subject, type_key, entity.get("attributes") or {})
        return out

    def translate_network(self, network: Dict[str, Any]) -> Dict[str, Any]:
        """Translate ``{nodes, edges, ego}`` external data onto codebook keys."""
        nodes = [self.translate_entity("node", n) for n in network.get("nodes") or []]
        edges = [self.translate_entity("edge", e) for e in network.get("edges") or []]
        ego_in = network.get("ego") or {}
        ego = {k: v for k, v in ego_in.items()}
        ego["attributes"] = self.translate_attributes("ego", None, ego_in.get("attributes") or {})
        logger.info(
            "translated %d nodes, %d edges (coverage %.0f%%)",
            len(nodes), len(edges), 100 * self._report.coverage,
        )
        return {"nodes": nodes, "edges": edges, "ego": ego}

    def report(self) -> TranslationReport:
        return self._report

    def unresolved_labels(self) -> List[Tuple[str, str]]:
        return sorted(self._report.unresolved)
