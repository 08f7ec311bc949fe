"""
Explanation formatter: findings → reason strings → presentation bullets.

Assessors record what they evaluated as structured Finding facts; this module
owns the textual rendering so the reason narrative and the bullet list shown
to the user never drift apart.

  - render_reason(framework, findings, summary)  : "<Framework> assessment: ..." narrative
  - explain(result)                              : list[Bullet] for a single verdict
  - exemption_label() / reporting_type_label()   : display names for codes
"""

from __future__ import annotations

from typing import Iterable, Optional

from schemas import AssessmentResult, Bullet, Finding
from tools.labels import EXEMPTION_LABELS, REPORTING_TYPE_LABELS

REASON_PREFIXES: dict[str, str] = {
    "ungps": "UN Guiding Principles",
    "oecd": "OECD Guidelines",
    "csrd": "CSRD",
    "taxonomy": "EU Taxonomy",
    "csddd": "CSDDD",
}

CLAUSE_SEPARATOR = "; "


def _status_suffix(satisfied: Optional[bool]) -> str:
    if satisfied is None:
        return ""
    return " - met" if satisfied else " - not met"


def render_finding(finding: Finding) -> str:
    text = f"{finding.criterion}: {finding.value}"
    if finding.requirement_note:
        text += f" ({finding.requirement_note})"
    return text + _status_suffix(finding.satisfied)


def render_reason(framework: str, findings: Iterable[Finding], summary: Optional[str] = None) -> str:
    """
    Build the semi-structured reason narrative for a not-in-scope verdict.

    Clauses are "<criterion>: <value> (<requirement note>) - met|not met",
    joined with "; ". An optional summary is appended as the final clause.
    """
    clauses = [render_finding(f) for f in findings]
    if summary:
        clauses.append(summary)
    prefix = REASON_PREFIXES.get(framework, framework)
    return f"{prefix} assessment: " + CLAUSE_SEPARATOR.join(clauses)


def _bullet_status(satisfied: Optional[bool]) -> str:
    if satisfied is None:
        return "info"
    return "met" if satisfied else "not_met"


def _bullets_from_reason(reason: str) -> list[Bullet]:
    # Free-text reasons: drop the "<X> assessment:" prefix, one bullet per clause.
    _, sep, rest = reason.partition(" assessment: ")
    body = rest if sep else reason
    bullets: list[Bullet] = []
    for clause in body.split(";"):
        clause = clause.strip().rstrip(".")
        if not clause:
            continue
        label, sep, value = clause.partition(": ")
        if sep:
            bullets.append(Bullet(label=label.strip(), value=value.strip()))
        else:
            bullets.append(Bullet(label="Assessment", value=clause))
    return bullets


def explain(result: AssessmentResult) -> list[Bullet]:
    """Presentation bullets for one framework verdict."""
    if not result.findings:
        return _bullets_from_reason(result.reason)
    bullets = []
    for finding in result.findings:
        value = finding.value
        if finding.requirement_note:
            value += f" ({finding.requirement_note})"
        bullets.append(Bullet(label=finding.criterion, value=value, status=_bullet_status(finding.satisfied)))
    return bullets


def exemption_label(code: str) -> str:
    return EXEMPTION_LABELS.get(code, code)


def reporting_type_label(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None
    return REPORTING_TYPE_LABELS.get(code, code)
