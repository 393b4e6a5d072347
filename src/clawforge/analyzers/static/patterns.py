"""Shared regexes and line helpers used by the Solidity detectors."""

from __future__ import annotations

import re

from clawforge.analyzers.models import (
    Confidence,
    DetectorKind,
    Finding,
    Location,
    Severity,
)

# Declarations
FUNCTION_DECL = re.compile(r"function\s+\w+")
TRAILING_SEMICOLON = re.compile(r";\s*$")
INTERFACE_DECL = re.compile(r"^\s*interface\s+")
PRAGMA_VERSION = re.compile(r"pragma\s+solidity\s+[\^~>=]*\s*(0\.\d+\.\d+)")

# External interaction
LOW_LEVEL_CALL = re.compile(r"\.call\s*[{(]")
EXTERNAL_CALL = re.compile(r"\.call\s*\{\s*value\s*:|\.call\s*\(|\.transfer\s*\(|\.send\s*\(")
DELEGATECALL = re.compile(r"\.delegatecall\s*\(")
HEX_ADDRESS = re.compile(r"0x[0-9a-fA-F]{40}")

# State
BALANCE_WRITE = re.compile(
    r"\b(balances|balance|_balances|amounts|deposits)\[.*\]\s*[-+]?=(?!=)"
)

# Non-code lines
LINE_COMMENT = re.compile(r"^\s*//")
BLOCK_COMMENT = re.compile(r"^\s*(/\*|\*)")
SAFE_MATH_CALL = re.compile(r"\.(mul|div)\s*\(|\bmulDiv\s*\(")


def split_lines(source: str) -> list[str]:
    """Split source on newlines, tolerating CRLF, without dropping blank lines."""
    return [line.rstrip("\r") for line in source.split("\n")]


def brace_delta(line: str) -> int:
    return line.count("{") - line.count("}")


def window(lines: list[str], start: int, end: int, sep: str = " ") -> str:
    """Join lines[start:end] with bounds clamped to the file."""
    return sep.join(lines[max(0, start) : min(len(lines), end)])


def is_comment(line: str) -> bool:
    return bool(LINE_COMMENT.match(line) or BLOCK_COMMENT.match(line))


def static_finding(
    *,
    rule_id: str,
    title: str,
    severity: Severity,
    description: str,
    line_index: int,
    line: str,
    recommendation: str,
    confidence: Confidence,
    column: int = 0,
    length: int | None = None,
    snippet: str | None = None,
) -> Finding:
    """Build a static finding anchored at a 0-based line index."""
    return Finding(
        id=rule_id,
        title=title,
        severity=severity,
        description=description,
        location=Location(
            line=line_index + 1,
            column=max(column, 0),
            length=len(line) if length is None else length,
        ),
        snippet=line.strip() if snippet is None else snippet,
        recommendation=recommendation,
        detector=DetectorKind.STATIC,
        confidence=confidence,
    )
