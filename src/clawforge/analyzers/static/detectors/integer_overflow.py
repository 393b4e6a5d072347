"""CF-006: unchecked arithmetic in pre-0.8 contracts without SafeMath."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import (
    PRAGMA_VERSION,
    is_comment,
    split_lines,
    static_finding,
)

_USES_SAFE_MATH = re.compile(r"using\s+SafeMath\s+for")
_SKIP_LINE = re.compile(r"^\s*(import|pragma)\b|^\s*$|^\s*(event|error|struct|enum)\b")
_COMPOUND_ASSIGN = re.compile(r"\+\s*=|-\s*=|\*\s*=")
_BINARY_OP = re.compile(r"[^=!<>]\s*[+\-*]\s*[^=]")


def pragma_version(lines: list[str]) -> str:
    """Return the first declared `0.x.y` compiler version, or ''."""
    for line in lines:
        match = PRAGMA_VERSION.search(line)
        if match:
            return match.group(1)
    return ""


def detect_integer_overflow(source: str, file_name: str) -> list[Finding]:
    """Report the first arithmetic line of a pre-0.8 file, once per file."""
    lines = split_lines(source)

    version = pragma_version(lines)
    if not version:
        return []
    if int(version.split(".")[1]) >= 8:
        return []
    if _USES_SAFE_MATH.search(source):
        return []

    for i, line in enumerate(lines):
        if is_comment(line) or _SKIP_LINE.search(line):
            continue
        if not (_COMPOUND_ASSIGN.search(line) or _BINARY_OP.search(line)):
            continue
        return [
            static_finding(
                rule_id="CF-006",
                title="Potential Integer Overflow/Underflow",
                severity=Severity.MEDIUM,
                description=(
                    f"Arithmetic operation on line {i + 1} in Solidity {version} "
                    "without SafeMath. Pre-0.8.0 contracts do not have built-in "
                    "overflow protection."
                ),
                line_index=i,
                line=line,
                recommendation=(
                    "Upgrade to Solidity ^0.8.0 for built-in overflow checks, or use "
                    "OpenZeppelin SafeMath for older versions."
                ),
                confidence=Confidence.MEDIUM,
            )
        ]

    return []


INTEGER_OVERFLOW = Detector(
    id="CF-006",
    name="Integer Overflow/Underflow",
    description="Arithmetic in pre-0.8.0 contracts without SafeMath",
    detect=detect_integer_overflow,
)
