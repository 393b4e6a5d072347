"""CF-008: storage pointers declared without an initializer."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import split_lines, static_finding

_UNINITIALIZED_POINTER = re.compile(r"^\s*([\w.]+(?:\[\])?)\s+storage\s+(\w+)\s*;")


def detect_uninitialized_storage(source: str, file_name: str) -> list[Finding]:
    # Mostly a pre-0.5.0 problem, still flagged on newer pragmas.
    findings: list[Finding] = []
    for i, line in enumerate(split_lines(source)):
        match = _UNINITIALIZED_POINTER.search(line)
        if not match:
            continue
        name = match.group(2)
        findings.append(
            static_finding(
                rule_id="CF-008",
                title="Uninitialized Storage Pointer",
                severity=Severity.MEDIUM,
                description=(
                    f"Storage pointer '{name}' on line {i + 1} is declared without "
                    "initialization. It may point to storage slot 0 and overwrite "
                    "critical state variables."
                ),
                line_index=i,
                line=line,
                recommendation=(
                    "Always initialize storage pointers from an existing state "
                    "variable, or use memory."
                ),
                confidence=Confidence.MEDIUM,
            )
        )
    return findings


UNINITIALIZED_STORAGE = Detector(
    id="CF-008",
    name="Uninitialized Storage Pointer",
    description="Local storage variables that may point to unexpected storage slots",
    detect=detect_uninitialized_storage,
)
