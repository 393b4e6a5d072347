"""CF-003: tx.origin usage, graded by whether it guards authentication."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import split_lines, static_finding, window

_TX_ORIGIN = re.compile(r"tx\.origin")
_AUTH_USE = re.compile(
    r"require\s*\(.*tx\.origin|if\s*\(.*tx\.origin|[=!]=\s*tx\.origin|tx\.origin\s*[=!]="
)


def detect_tx_origin(source: str, file_name: str) -> list[Finding]:
    findings: list[Finding] = []
    lines = split_lines(source)

    for i, line in enumerate(lines):
        match = _TX_ORIGIN.search(line)
        if not match:
            continue

        is_auth = bool(_AUTH_USE.search(window(lines, i - 2, i + 3)))
        if is_auth:
            title = "tx.origin Used for Authentication"
            detail = (
                "is used for authentication, making this contract vulnerable to "
                "phishing attacks via intermediate contracts"
            )
        else:
            title = "tx.origin Usage Detected"
            detail = "detected; ensure it is not used for authorization"

        findings.append(
            static_finding(
                rule_id="CF-003",
                title=title,
                severity=Severity.HIGH if is_auth else Severity.MEDIUM,
                description=f"tx.origin on line {i + 1} {detail}.",
                line_index=i,
                line=line,
                column=match.start(),
                length=9,
                recommendation=(
                    "Replace tx.origin with msg.sender for authentication. tx.origin "
                    "returns the original external account, not the immediate caller."
                ),
                confidence=Confidence.HIGH if is_auth else Confidence.MEDIUM,
            )
        )

    return findings


TX_ORIGIN = Detector(
    id="CF-003",
    name="tx.origin Authentication",
    description="Use of tx.origin, which is vulnerable to phishing when used for auth",
    detect=detect_tx_origin,
)
