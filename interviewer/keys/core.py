from __future__ import annotations
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)

Key = Union[str, int]
Scalar = Union[str, int, float]

LOCATION_SUFFIXES = ("_x", "_y")


@dataclass(frozen=True)
class Option:
    value: Scalar
    label: Optional[str] = None


@dataclass(frozen=True)
class PlainEntry:
    kind: ClassVar[str] = "plain"
    name: Optional[Scalar] = None


@dataclass(frozen=True)
class CategoricalEntry:
    kind: ClassVar[str] = "categorical"
    name: Optional[Scalar] = None
    options: Tuple[Option, ...] = ()


Entry = Union[PlainEntry, CategoricalEntry]
Codebook = Mapping[Key, Entry]


def _option_from_raw(raw: Any) -> Optional[Option]:
    if isinstance(raw, Option):
        return raw
    if not isinstance(raw, Mapping) or raw.get("value") is None:
        return None
    label = raw.get("label")
    return Option(value=raw["value"], label=label if isinstance(label, str) else None)


def entry_from_raw(raw: Any) -> Entry:
    """Convert a JSON-shaped codebook record into an Entry.

    Anything that is not a mapping becomes a nameless PlainEntry, which can
    never match by name. A list-valued ``options`` makes the entry categorical;
    options without a ``value`` are dropped.
    """
    if isinstance(raw, (PlainEntry, CategoricalEntry)):
        return raw
    if not isinstance(raw, Mapping):
        return PlainEntry()
    name = raw.get("name")
    if not isinstance(name, (str, int, float)) or isinstance(name, bool):
        name = None
    options = raw.get("options")
    if isinstance(options, (list, tuple)):
        parsed = tuple(o for o in (_option_from_raw(r) for r in options) if o is not None)
        return CategoricalEntry(name=name, options=parsed)
    return PlainEntry(name=name)


def build_codebook(raw: Optional[Mapping[Key, Any]]) -> Dict[Key, Entry]:
    """Build an ordered codebook mapping from raw records, keeping key order."""
    if not raw:
        return {}
    return {k: entry_from_raw(v) for k, v in raw.items()}


def _find_key_by_name(codebook: Codebook, name: Any) -> Optional[Key]:
    # Strict equality: numeric name 5 is not the label "5"
    for key, entry in codebook.items():
        if entry.name is not None and entry.name == name:
            return key
    return None


def _as_text(value: Any) -> str:
    # integral floats print without ".0", booleans lowercase
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _find_key_by_name_str(codebook: Codebook, name: str) -> Optional[Key]:
    for key, entry in codebook.items():
        if entry.name is not None and _as_text(entry.name) == name:
            return key
    return None


def _categorical_candidates(label: str) -> List[Tuple[str, str]]:
    """Split ``label`` at each underscore, leftmost first.

    ``"a_b_c"`` yields ``[("a", "b_c"), ("a_b", "c")]``. Splits with an empty
    name or option part are skipped.
    """
    out: List[Tuple[str, str]] = []
    idx = label.find("_")
    while idx != -1:
        name, option = label[:idx], label[idx + 1:]
        if name and option:
            out.append((name, option))
        idx = label.find("_", idx + 1)
    return out


def _find_categorical_key(codebook: Codebook, label: str) -> Optional[str]:
    for name, option in _categorical_candidates(label):
        key = _find_key_by_name_str(codebook, name)
        if key is None:
            continue
        entry = codebook[key]
        if not isinstance(entry, CategoricalEntry):
            continue
        for opt in entry.options:
            text = _as_text(opt.value)
            if text == option:
                return f"{key}_{text}"
    return None


def resolve(codebook: Optional[Mapping[Key, Any]], label: Any) -> Any:
    """Translate an external variable label into a codebook key, if possible.

    Rules, first match wins:
    1) Empty codebook or ``label`` already a key => ``label``
    2) Exact ``name`` match => that entry's key
    3) ``<name>_x`` / ``<name>_y`` => entry key with the suffix re-appended
    4) ``<name>_<option>`` on a categorical entry => ``<key>_<option value>``
    5) Otherwise ``label`` unchanged
    Entries are scanned in mapping order, so duplicate names resolve to the
    first entry. Never raises.
    """
    if not codebook or _has_key(codebook, label):
        return label
    if not isinstance(label, str):
        return label

    cb: Codebook = {k: entry_from_raw(v) for k, v in codebook.items()}

    key = _find_key_by_name(cb, label)
    if key is not None:
        logger.debug("resolved %r by name -> %r", label, key)
        return key

    if label.endswith(LOCATION_SUFFIXES):
        suffix = label[-2:]
        key = _find_key_by_name(cb, label[:-2])
        if key is not None:
            logger.debug("resolved %r as location -> %r%s", label, key, suffix)
            return f"{key}{suffix}"

    if "_" in label:
        compound = _find_categorical_key(cb, label)
        if compound is not None:
            logger.debug("resolved %r as categorical -> %r", label, compound)
            return compound

    logger.debug("no codebook match for %r", label)
    return label


def _has_key(codebook: Mapping[Key, Any], label: Any) -> bool:
    try:
        return label in codebook
    except TypeError:  # unhashable label
        return False
