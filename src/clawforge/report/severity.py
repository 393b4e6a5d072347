"""Severity scoring — penalty table, score, counts and ordering."""

from __future__ import annotations

from collections.abc import Iterable

from clawforge.analyzers.models import Finding, Severity

MAX_SCORE = 100

# Applied equally to static and AI findings.
SEVERITY_PENALTIES: dict[Severity, int] = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 15,
    Severity.MEDIUM: 8,
    Severity.LOW: 3,
    Severity.INFO: 1,
}


def calculate_score(findings: Iterable[Finding]) -> int:
    score = MAX_SCORE - sum(SEVERITY_PENALTIES[f.severity] for f in findings)
    return max(0, min(MAX_SCORE, score))


def count_by_severity(findings: Iterable[Finding]) -> dict[Severity, int]:
    counts = {s: 0 for s in Severity}
    for f in findings:
        counts[f.severity] += 1
    return counts


def sort_by_severity(findings: Iterable[Finding]) -> list[Finding]:
    """Most severe first; input order kept within a severity."""
    return sorted(findings, key=lambda f: f.severity.rank, reverse=True)
