"""CF-001: external call followed by a balance write in the same function."""

from __future__ import annotations

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import (
    BALANCE_WRITE,
    EXTERNAL_CALL,
    FUNCTION_DECL,
    TRAILING_SEMICOLON,
    brace_delta,
    split_lines,
    static_finding,
)


def detect_reentrancy(source: str, file_name: str) -> list[Finding]:
    """Flag external calls that precede a balance/deposit mapping write.

    Function scope is tracked by brace depth from the declaration line. Each
    external call is reported at most once, at the call's own line.
    """
    findings: list[Finding] = []
    lines = split_lines(source)

    in_function = False
    depth = 0
    function_start = -1
    call_line = -1

    for i, line in enumerate(lines):
        if FUNCTION_DECL.search(line) and not TRAILING_SEMICOLON.search(line):
            in_function = True
            function_start = i
            call_line = -1
            depth = 0

        if not in_function:
            continue

        depth += brace_delta(line)

        if EXTERNAL_CALL.search(line):
            call_line = i

        if call_line >= 0 and i > call_line and BALANCE_WRITE.search(line):
            findings.append(
                static_finding(
                    rule_id="CF-001",
                    title="Potential Reentrancy Vulnerability",
                    severity=Severity.CRITICAL,
                    description=(
                        f"External call on line {call_line + 1} precedes state "
                        f"change on line {i + 1}. An attacker can re-enter the "
                        "function before state is updated."
                    ),
                    line_index=call_line,
                    line=lines[call_line],
                    recommendation=(
                        "Apply checks-effects-interactions: update state before "
                        "making external calls. Consider OpenZeppelin's ReentrancyGuard."
                    ),
                    confidence=Confidence.HIGH,
                )
            )
            call_line = -1

        if depth <= 0 and i > function_start:
            in_function = False
            call_line = -1

    return findings


REENTRANCY = Detector(
    id="CF-001",
    name="Reentrancy",
    description="External calls that precede state changes",
    detect=detect_reentrancy,
)
