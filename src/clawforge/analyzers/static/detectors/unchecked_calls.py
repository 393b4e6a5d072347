"""CF-002: low-level calls whose boolean result is never checked."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import LOW_LEVEL_CALL, split_lines, static_finding, window

_CAPTURED_RESULT = re.compile(r"\(\s*bool\s+\w+|bool\s+\w+.*=.*\.call")
_REQUIRE = re.compile(r"\brequire\s*\(")


def detect_unchecked_calls(source: str, file_name: str) -> list[Finding]:
    findings: list[Finding] = []
    lines = split_lines(source)

    for i, line in enumerate(lines):
        match = LOW_LEVEL_CALL.search(line)
        if not match:
            continue

        context = window(lines, i - 1, i + 2)
        next_line = lines[i + 1] if i + 1 < len(lines) else ""
        checked = bool(
            _CAPTURED_RESULT.search(context)
            or _REQUIRE.search(next_line)
            or _REQUIRE.search(line[: match.start()])
        )
        if checked:
            continue

        findings.append(
            static_finding(
                rule_id="CF-002",
                title="Unchecked Low-Level Call",
                severity=Severity.HIGH,
                description=(
                    f"Low-level call on line {i + 1} does not check the return "
                    "value. Failed calls will silently continue execution."
                ),
                line_index=i,
                line=line,
                column=match.start(),
                length=5,
                recommendation=(
                    'Capture and check the return value: (bool success, ) = addr.call{...}(""); '
                    'require(success, "Call failed");'
                ),
                confidence=Confidence.MEDIUM,
            )
        )

    return findings


UNCHECKED_CALLS = Detector(
    id="CF-002",
    name="Unchecked External Calls",
    description="Low-level calls whose return values are not checked",
    detect=detect_unchecked_calls,
)
