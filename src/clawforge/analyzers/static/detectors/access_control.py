"""CF-007: sensitive admin functions exposed without an access guard."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import (
    INTERFACE_DECL,
    brace_delta,
    split_lines,
    static_finding,
    window,
)

# mint/burn/withdraw are left out: they are routinely public in tokens and DEXes.
_SENSITIVE_FUNCTION = re.compile(
    r"function\s+(pause|unpause|set\w+|update\w+|destroy|kill|upgrade)\s*\("
)
_VISIBILITY = re.compile(r"\b(public|external)\b")
_GUARD = re.compile(
    r"onlyOwner|onlyRole|onlyAdmin|nonReentrant|require\s*\(\s*msg\.sender\s*==|"
    r"_checkRole|_checkOwner|hasRole"
)
_SENDER_CHECK = re.compile(r"require\s*\([^)]*msg\.sender|if\s*\(\s*msg\.sender")

_MAX_SIGNATURE_LINES = 12
_GUARD_LOOKAHEAD = 4
_BODY_LOOKAHEAD = 8


def interface_ranges(lines: list[str]) -> list[tuple[int, int]]:
    """Inclusive (start, end) line index ranges of `interface` blocks."""
    ranges: list[tuple[int, int]] = []
    start = -1
    depth = 0
    opened = False

    for i, line in enumerate(lines):
        if start < 0 and INTERFACE_DECL.search(line):
            start = i
            depth = 0
            opened = False
        if start < 0:
            continue
        depth += brace_delta(line)
        opened = opened or "{" in line
        if opened and depth <= 0:
            ranges.append((start, i))
            start = -1

    if start >= 0:
        # Unterminated interface runs to end of file.
        ranges.append((start, len(lines) - 1))
    return ranges


def signature_end(lines: list[str], index: int) -> int:
    """Index of the line where the declaration at *index* opens its body or ends."""
    limit = min(len(lines), index + _MAX_SIGNATURE_LINES)
    end = index
    while end < limit - 1 and "{" not in lines[end] and ";" not in lines[end]:
        end += 1
    return end


def is_signature_only(lines: list[str], index: int) -> bool:
    """True when the declaration reaches `;` before any body `{`."""
    text = window(lines, index, signature_end(lines, index) + 1)
    semi = text.find(";")
    brace = text.find("{")
    return semi >= 0 and (brace < 0 or semi < brace)


def detect_access_control(source: str, file_name: str) -> list[Finding]:
    findings: list[Finding] = []
    lines = split_lines(source)
    ranges = interface_ranges(lines)

    def in_interface(index: int) -> bool:
        return any(start <= index <= end for start, end in ranges)

    for i, line in enumerate(lines):
        match = _SENSITIVE_FUNCTION.search(line)
        if not match:
            continue
        if in_interface(i) or is_signature_only(lines, i):
            continue

        # The header covers the whole signature, modifiers included.
        end = signature_end(lines, i)
        header = window(lines, i, max(i + _GUARD_LOOKAHEAD, end + 1))
        if not _VISIBILITY.search(header):
            continue
        if _GUARD.search(header):
            continue
        if _SENDER_CHECK.search(window(lines, i, end + _BODY_LOOKAHEAD)):
            continue

        name = match.group(1)
        findings.append(
            static_finding(
                rule_id="CF-007",
                title=f"Missing Access Control on {name}()",
                severity=Severity.MEDIUM,
                description=(
                    f"Sensitive function '{name}' on line {i + 1} is public/external "
                    "without access control. Anyone can call this function."
                ),
                line_index=i,
                line=line,
                recommendation=(
                    "Add access control: use OpenZeppelin's Ownable (onlyOwner) or "
                    f"AccessControl (role-based) modifier on '{name}'."
                ),
                confidence=Confidence.MEDIUM,
            )
        )

    return findings


ACCESS_CONTROL = Detector(
    id="CF-007",
    name="Missing Access Control",
    description="Public/external state-changing admin functions without access control",
    detect=detect_access_control,
)
