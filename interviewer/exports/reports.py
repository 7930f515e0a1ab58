from __future__ import annotations
from typing import List

from interviewer.translation.engine import TranslationReport


def translation_report_md(report: TranslationReport, warnings: List[str] | None = None) -> str:
    lines = ["# Translation Report", "", f"- coverage: {report.coverage:.0%}", ""]
    lines.append("## Resolved")
    for (subject, label), n in sorted(report.resolved.items()):
        lines.append(f"- {subject}: {label} ({n})")
    lines.append("\n## Unresolved")
    for (subject, label), n in sorted(report.unresolved.items()):
        lines.append(f"- {subject}: {label} ({n})")
    if warnings:
        lines.append("\n## Warnings")
        for w in warnings:
            lines.append(f"- {w}")
    return "\n".join(lines) + "\n"
