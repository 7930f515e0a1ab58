import argparse
import json
import logging
import sys
from pathlib import Path

from interviewer.codebook.model import SUBJECTS, ProtocolCodebook
from interviewer.config.env import get_logging_config
from .core import resolve


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m interviewer.keys.cli",
        description="Resolve external variable labels to codebook keys",
    )
    parser.add_argument("codebook", help="JSON file: a flat {key: entry} mapping or a protocol codebook")
    parser.add_argument("labels", nargs="+", help="labels to resolve")
    parser.add_argument("--subject", choices=SUBJECTS, help="protocol codebook section to resolve against")
    parser.add_argument("--type", dest="type_key", help="node/edge type key; omit to resolve type names")
    return parser


def _load_mapping(path: str, subject, type_key):
    data = json.loads(Path(path).read_text())
    if subject is None or not isinstance(data, dict):
        return data
    cb = ProtocolCodebook.from_dict(data.get("codebook", data))
    if subject != "ego" and type_key is None:
        return cb.entity_types(subject)
    return cb.variables(subject, type_key)


def main(argv=None):
    logging.basicConfig(level=get_logging_config().level)
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.type_key is not None and args.subject not in ("node", "edge"):
        parser.error("--type requires --subject node or edge")
    try:
        mapping = _load_mapping(args.codebook, args.subject, args.type_key)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Could not read codebook: {e}", file=sys.stderr)
        sys.exit(2)
    if not isinstance(mapping, dict):
        print("Codebook must be a JSON object", file=sys.stderr)
        sys.exit(2)
    out = []
    for label in args.labels:
        key = resolve(mapping, label)
        out.append({
            "label": label,
            "key": key,
            "resolved": key != label or label in mapping,
        })
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    main()
