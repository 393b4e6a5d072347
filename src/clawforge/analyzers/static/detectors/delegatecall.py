"""CF-004: delegatecall, graded by whether the target is a variable."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import (
    DELEGATECALL,
    HEX_ADDRESS,
    split_lines,
    static_finding,
    window,
)

_VARIABLE_TARGET = re.compile(r"\w+\s*\)?\s*\.delegatecall")


def detect_delegatecall(source: str, file_name: str) -> list[Finding]:
    findings: list[Finding] = []
    lines = split_lines(source)

    for i, line in enumerate(lines):
        match = DELEGATECALL.search(line)
        if not match:
            continue

        # The 4-line window ending at the call must not pin a literal address.
        preceding = window(lines, i - 3, i + 1, sep="\n")
        uses_variable = bool(_VARIABLE_TARGET.search(line)) and not HEX_ADDRESS.search(
            preceding
        )

        if uses_variable:
            title = "Delegatecall to Variable Address"
            detail = (
                "targets a variable address. An attacker may control the target "
                "and execute arbitrary code in this contract's context"
            )
        else:
            title = "Delegatecall Usage"
            detail = "detected. Ensure the target address is trusted"

        findings.append(
            static_finding(
                rule_id="CF-004",
                title=title,
                severity=Severity.HIGH if uses_variable else Severity.MEDIUM,
                description=f"delegatecall on line {i + 1} {detail}.",
                line_index=i,
                line=line,
                column=match.start(),
                length=13,
                recommendation=(
                    "Avoid delegatecall to user-supplied addresses. If delegation is "
                    "required, use a whitelist of trusted implementation contracts."
                ),
                confidence=Confidence.HIGH if uses_variable else Confidence.LOW,
            )
        )

    return findings


DELEGATECALL_USAGE = Detector(
    id="CF-004",
    name="Dangerous Delegatecall",
    description="delegatecall to user-controlled or variable addresses",
    detect=detect_delegatecall,
)
