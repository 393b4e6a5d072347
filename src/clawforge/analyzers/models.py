"""Finding data models — the shared shape of every detector's output."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class Severity(enum.Enum):
    """Finding severity, critical highest."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]

    @classmethod
    def parse(cls, value: object) -> Severity:
        """Map a free-form severity string onto the vocabulary, defaulting to INFO."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.INFO


SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
    Severity.INFO: 0,
}


class Confidence(enum.Enum):
    """Heuristic certainty of a finding. Informational only."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: object) -> Confidence:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


class DetectorKind(enum.Enum):
    """Where a finding came from."""

    STATIC = "static"
    AI = "ai"


@dataclass(frozen=True)
class Location:
    """Position of a finding. line=0 means the location is unknown."""

    line: int = 0
    column: int = 0
    length: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column, "length": self.length}


@dataclass(frozen=True)
class Finding:
    """A single reported issue."""

    id: str
    title: str
    severity: Severity
    description: str
    location: Location = field(default_factory=Location)
    snippet: str = ""
    recommendation: str = ""
    detector: DetectorKind = DetectorKind.STATIC
    confidence: Confidence = Confidence.MEDIUM

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "severity": self.severity.value,
            "description": self.description,
            "location": self.location.to_dict(),
            "snippet": self.snippet,
            "recommendation": self.recommendation,
            "detector": self.detector.value,
            "confidence": self.confidence.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Finding:
        loc = data.get("location") or {}
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            severity=Severity.parse(data.get("severity")),
            description=str(data.get("description", "")),
            location=Location(
                line=int(loc.get("line", 0) or 0),
                column=int(loc.get("column", 0) or 0),
                length=int(loc.get("length", 0) or 0),
            ),
            snippet=str(data.get("snippet", "")),
            recommendation=str(data.get("recommendation", "")),
            detector=DetectorKind(data.get("detector", "static")),
            confidence=Confidence.parse(data.get("confidence")),
        )


@dataclass(frozen=True)
class Detector:
    """A named, stateless rule and the pure function that applies it."""

    id: str
    name: str
    description: str
    detect: Callable[[str, str], list[Finding]]
