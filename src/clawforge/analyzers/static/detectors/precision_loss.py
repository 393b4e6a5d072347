"""CF-010: division before multiplication and unscaled financial division."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import (
    SAFE_MATH_CALL,
    is_comment,
    split_lines,
    static_finding,
    window,
)

_DIV_BEFORE_MUL = re.compile(r"(\w+)\s*/\s*(\w+)\s*\*\s*(\w+)")
_FINANCIAL_DIVISION = re.compile(
    r"\b(fee|reward|share|rate|ratio|price|amount)\w*\s*=(?!=)\s*[^;]*/"
)
_LINE_SCALED = re.compile(r"\*\s*1e\d+|\*\s*10\s*\*\*")
_CONTEXT_SCALED = re.compile(
    r"\*\s*1e\d+|\*\s*10\s*\*\*|\*\s*PRECISION|\*\s*WAD|\*\s*RAY"
)


def detect_precision_loss(source: str, file_name: str) -> list[Finding]:
    findings: list[Finding] = []
    lines = split_lines(source)
    seen: set[int] = set()

    for i, line in enumerate(lines):
        if is_comment(line):
            continue

        match = _DIV_BEFORE_MUL.search(line)
        if match and not SAFE_MATH_CALL.search(line):
            seen.add(i)
            expr = match.group(0)
            findings.append(
                static_finding(
                    rule_id="CF-010",
                    title="Precision Loss: Division Before Multiplication",
                    severity=Severity.MEDIUM,
                    description=(
                        f"On line {i + 1}, division is performed before multiplication "
                        f"('{expr}'). Integer division truncates, so this causes "
                        "permanent precision loss."
                    ),
                    line_index=i,
                    line=line,
                    column=match.start(),
                    length=len(expr),
                    recommendation=(
                        "Reorder to multiply before dividing: (a * c) / b. Use higher "
                        "precision intermediates (multiply by 1e18 first)."
                    ),
                    confidence=Confidence.HIGH,
                )
            )

        if i in seen:
            continue
        if not _FINANCIAL_DIVISION.search(line) or _LINE_SCALED.search(line):
            continue
        context = window(lines, i - 1, i + 1)
        if _CONTEXT_SCALED.search(context) or SAFE_MATH_CALL.search(context):
            continue

        seen.add(i)
        findings.append(
            static_finding(
                rule_id="CF-010b",
                title="Potential Precision Loss in Financial Calculation",
                severity=Severity.LOW,
                description=(
                    f"Line {i + 1} computes a financial value (fee/reward/share) using "
                    "division without scaling. Small amounts may round to zero."
                ),
                line_index=i,
                line=line,
                recommendation=(
                    "Scale up by a precision factor (e.g., 1e18) before dividing to "
                    "preserve precision for small values."
                ),
                confidence=Confidence.MEDIUM,
            )
        )

    return findings


PRECISION_LOSS = Detector(
    id="CF-010",
    name="Precision Loss",
    description="Division before multiplication and unscaled financial calculations",
    detect=detect_precision_loss,
)
