"""CF-009: upgradeable/proxy contracts without a reserved storage gap."""

from __future__ import annotations

import re

from clawforge.analyzers.models import Confidence, Detector, Finding, Severity
from clawforge.analyzers.static.patterns import DELEGATECALL, split_lines, static_finding

_PROXY_SYMBOL = re.compile(
    r"\b(delegatecall|\w*Proxy|ERC1967\w*|\w*Upgradeable|Initializable)\b"
)
_STATE_VARIABLE = re.compile(r"^\s*(u?int\d*|bool|address|bytes\d*|string|mapping|struct)\b")
_NOT_STATE = re.compile(r"\b(function|event|error|modifier)\b")
_STORAGE_GAP = re.compile(r"uint256\[\d+\]\s+(?:private\s+)?__gap\b|__storage_gap")
_INHERITANCE = re.compile(r"contract\s+\w+\s+is\s+([^{]+)")


def detect_storage_collision(source: str, file_name: str) -> list[Finding]:
    findings: list[Finding] = []
    lines = split_lines(source)

    has_proxy = False
    has_delegatecall = False
    state_lines: list[int] = []

    for i, line in enumerate(lines):
        if _PROXY_SYMBOL.search(line):
            has_proxy = True
        if DELEGATECALL.search(line):
            has_delegatecall = True
        if _STATE_VARIABLE.search(line) and not _NOT_STATE.search(line):
            state_lines.append(i)

    if not (has_proxy or has_delegatecall) or not state_lines:
        return findings

    first = state_lines[0]
    if not _STORAGE_GAP.search(source):
        findings.append(
            static_finding(
                rule_id="CF-009",
                title="Upgradeable Contract Without Storage Gap",
                severity=Severity.HIGH,
                description=(
                    "This contract uses proxy/upgradeable patterns but lacks a __gap "
                    "storage variable. Adding state variables in an upgrade will "
                    "corrupt the storage layout of derived contracts."
                ),
                line_index=first,
                line=lines[first],
                recommendation=(
                    "Add 'uint256[50] private __gap;' at the end of the contract to "
                    "reserve storage slots for future upgrades."
                ),
                confidence=Confidence.HIGH,
            )
        )

    if has_delegatecall:
        match = _INHERITANCE.search(source)
        if match:
            parents = [p.strip() for p in match.group(1).split(",") if p.strip()]
            if len(parents) > 2:
                line_index = source.count("\n", 0, match.start())
                findings.append(
                    static_finding(
                        rule_id="CF-009b",
                        title="Complex Inheritance with Delegatecall",
                        severity=Severity.MEDIUM,
                        description=(
                            f"Contract inherits from {len(parents)} parents and uses "
                            "delegatecall. Complex inheritance chains increase storage "
                            "collision risk during upgrades."
                        ),
                        line_index=line_index,
                        line=lines[line_index],
                        snippet="is " + ", ".join(" ".join(p.split()) for p in parents),
                        recommendation=(
                            "Use a flat inheritance hierarchy for proxy implementations. "
                            "Consider ERC-7201 namespaced storage."
                        ),
                        confidence=Confidence.MEDIUM,
                    )
                )

    return findings


STORAGE_COLLISION = Detector(
    id="CF-009",
    name="Storage Collision",
    description="Upgradeable/proxy contracts missing storage gaps",
    detect=detect_storage_collision,
)
