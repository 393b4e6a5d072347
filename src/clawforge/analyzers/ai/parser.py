"""Lenient parsing of the reviewer's reply into findings.

The model is asked for a bare JSON object but routinely wraps it in a code
fence or surrounds it with prose. ``parse_ai_response`` never raises: every
failure becomes a ``ParsedAIResponse`` with a non-OK ``status`` and whatever
summary/score could be salvaged.
"""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass, field
from typing import Any

from clawforge.analyzers.models import (
    Confidence,
    DetectorKind,
    Finding,
    Location,
    Severity,
)

_CODE_FENCE = re.compile(r"\A\s*```(?:json)?\s*(.*?)\s*```\s*\Z", re.DOTALL)
_decoder = json.JSONDecoder()


class ParseStatus(enum.Enum):
    OK = "ok"
    NO_JSON = "no_json"
    MALFORMED = "malformed"
    WRONG_SHAPE = "wrong_shape"


@dataclass(frozen=True)
class ParsedAIResponse:
    status: ParseStatus
    findings: list[Finding] = field(default_factory=list)
    summary: str = ""
    score: int = 0

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK


def _strip_fence(text: str) -> str:
    match = _CODE_FENCE.match(text)
    return match.group(1) if match else text


def _first_object(text: str) -> tuple[ParseStatus, dict[str, Any] | None]:
    """Decode the first `{` that starts a complete JSON object."""
    start = text.find("{")
    if start < 0:
        return ParseStatus.NO_JSON, None
    while start >= 0:
        try:
            obj, _ = _decoder.raw_decode(text, start)
        except ValueError:
            obj = None
        if isinstance(obj, dict):
            return ParseStatus.OK, obj
        start = text.find("{", start + 1)
    return ParseStatus.MALFORMED, None


def _as_int(value: Any, low: int, high: int | None = None) -> int:
    if isinstance(value, bool):
        return low
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return low
    number = max(low, number)
    return min(high, number) if high is not None else number


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _to_finding(index: int, raw: dict[str, Any]) -> Finding:
    return Finding(
        id=f"AI-{index:03d}",
        title=_as_str(raw.get("title")) or "Unnamed Finding",
        severity=Severity.parse(raw.get("severity")),
        description=_as_str(raw.get("description")),
        location=Location(line=_as_int(raw.get("line"), 0)),
        snippet=_as_str(raw.get("snippet")),
        recommendation=_as_str(raw.get("recommendation")),
        detector=DetectorKind.AI,
        confidence=Confidence.parse(raw.get("confidence")),
    )


def parse_ai_response(text: str) -> ParsedAIResponse:
    status, obj = _first_object(_strip_fence(text or ""))
    if obj is None:
        return ParsedAIResponse(status=status)

    summary = _as_str(obj.get("summary"))
    score = _as_int(obj.get("score"), 0, 100)

    raw_findings = obj.get("findings")
    if not isinstance(raw_findings, list):
        return ParsedAIResponse(
            status=ParseStatus.WRONG_SHAPE, summary=summary, score=score
        )

    entries = [f for f in raw_findings if isinstance(f, dict)]
    findings = [_to_finding(i, raw) for i, raw in enumerate(entries, start=1)]
    return ParsedAIResponse(
        status=ParseStatus.OK, findings=findings, summary=summary, score=score
    )
