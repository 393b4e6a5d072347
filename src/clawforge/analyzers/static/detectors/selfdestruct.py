"""CF-005: any selfdestruct."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import split_lines, static_finding

_SELFDESTRUCT = re.compile(r"selfdestruct\s*\(|SELFDESTRUCT")


def detect_selfdestruct(source: str, file_name: str) -> list[Finding]:
    findings: list[Finding] = []
    for i, line in enumerate(split_lines(source)):
        match = _SELFDESTRUCT.search(line)
        if not match:
            continue
        findings.append(
            static_finding(
                rule_id="CF-005",
                title="Selfdestruct Can Destroy Contract",
                severity=Severity.HIGH,
                description=(
                    f"selfdestruct on line {i + 1} can permanently destroy the contract "
                    "and send remaining Ether to a specified address. This is "
                    "irreversible and deprecated since EIP-6049."
                ),
                line_index=i,
                line=line,
                column=match.start(),
                length=12,
                recommendation=(
                    "Avoid selfdestruct. Use withdrawal patterns or pausable contracts "
                    "instead. Its behavior changed with EIP-6780 (Dencun)."
                ),
                confidence=Confidence.HIGH,
            )
        )
    return findings


SELFDESTRUCT = Detector(
    id="CF-005",
    name="Selfdestruct Usage",
    description="selfdestruct, which can permanently destroy the contract",
    detect=detect_selfdestruct,
)
