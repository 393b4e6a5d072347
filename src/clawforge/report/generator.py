"""Report assembly — dedup, summary, report hash and the JSON artifact."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from clawforge.analyzers.models import Finding, Severity
from clawforge.hashing import canonical_json, compute_hash
from clawforge.report.severity import calculate_score, count_by_severity

logger = logging.getLogger(__name__)

REPORT_VERSION = "1.0.0"
TOOL_NAME = "ClawForge"


class ReportError(ValueError):
    """A report file or report-derived value is malformed."""


def deduplicate_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Keep the first finding for each (title, line); later duplicates are dropped.

    Static findings are passed in before AI ones, so on a collision the
    static finding is the one that survives.
    """
    seen: set[tuple[str, int]] = set()
    unique: list[Finding] = []
    for f in findings:
        key = (f.title, f.location.line)
        if key in seen:
            continue
        seen.add(key)
        unique.append(f)
    return unique


@dataclass(frozen=True)
class ReportSummary:
    contract_name: str
    contract_hash: str
    total_findings: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    info: int = 0
    overall_score: int = 100
    report_hash: str = ""

    @classmethod
    def from_findings(
        cls, contract_name: str, contract_hash: str, findings: list[Finding]
    ) -> ReportSummary:
        counts = count_by_severity(findings)
        return cls(
            contract_name=contract_name,
            contract_hash=contract_hash,
            total_findings=len(findings),
            critical=counts[Severity.CRITICAL],
            high=counts[Severity.HIGH],
            medium=counts[Severity.MEDIUM],
            low=counts[Severity.LOW],
            info=counts[Severity.INFO],
            overall_score=calculate_score(findings),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "contractName": self.contract_name,
            "contractHash": self.contract_hash,
            "totalFindings": self.total_findings,
            "critical": self.critical,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "info": self.info,
            "overallScore": self.overall_score,
            "reportHash": self.report_hash,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReportSummary:
        return cls(
            contract_name=str(data["contractName"]),
            contract_hash=str(data["contractHash"]),
            total_findings=int(data.get("totalFindings", 0)),
            critical=int(data.get("critical", 0)),
            high=int(data.get("high", 0)),
            medium=int(data.get("medium", 0)),
            low=int(data.get("low", 0)),
            info=int(data.get("info", 0)),
            overall_score=int(data.get("overallScore", 0)),
            report_hash=str(data.get("reportHash", "")),
        )


@dataclass(frozen=True)
class AuditReport:
    summary: ReportSummary
    findings: list[Finding] = field(default_factory=list)
    ai_summary: str = ""
    timestamp: str = ""
    version: str = REPORT_VERSION
    tool: str = TOOL_NAME

    @property
    def contract_name(self) -> str:
        return self.summary.contract_name

    @property
    def report_hash(self) -> str:
        return self.summary.report_hash

    @property
    def overall_score(self) -> int:
        return self.summary.overall_score

    @property
    def has_critical(self) -> bool:
        return self.summary.critical > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "tool": self.tool,
            "timestamp": self.timestamp,
            "summary": self.summary.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
            "aiSummary": self.ai_summary,
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def computed_hash(self) -> str:
        """Hash of this report's body with ``reportHash`` blanked."""
        body = self.to_dict()
        body["summary"]["reportHash"] = ""
        return compute_hash(canonical_json(body))

    def verify_hash(self) -> bool:
        return self.report_hash == self.computed_hash()

    @classmethod
    def from_dict(cls, data: Any) -> AuditReport:
        if not isinstance(data, dict):
            raise ReportError("Report must be a JSON object")
        summary = data.get("summary")
        findings = data.get("findings")
        if not isinstance(summary, dict):
            raise ReportError("Report is missing its 'summary' object")
        if not isinstance(findings, list):
            raise ReportError("Report is missing its 'findings' list")
        try:
            return cls(
                summary=ReportSummary.from_dict(summary),
                findings=[Finding.from_dict(f) for f in findings],
                ai_summary=str(data.get("aiSummary", "")),
                timestamp=str(data.get("timestamp", "")),
                version=str(data.get("version", REPORT_VERSION)),
                tool=str(data.get("tool", TOOL_NAME)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ReportError(f"Malformed report: {e}") from e


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_report(
    contract_name: str,
    contract_hash: str,
    findings: list[Finding],
    ai_summary: str = "",
    timestamp: str | None = None,
) -> AuditReport:
    """Assemble a report from already-deduplicated findings and stamp its hash."""
    report = AuditReport(
        summary=ReportSummary.from_findings(contract_name, contract_hash, findings),
        findings=list(findings),
        ai_summary=ai_summary,
        timestamp=timestamp or _utc_timestamp(),
    )
    summary = dataclasses.replace(report.summary, report_hash=report.computed_hash())
    return dataclasses.replace(report, summary=summary)


def write_report(report: AuditReport, output_dir: str | Path) -> Path:
    """Write ``<contractName>-audit.json`` into *output_dir*, creating it."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{report.contract_name}-audit.json"
    path.write_text(report.to_json(indent=2), encoding="utf-8")
    logger.debug("Wrote report %s", path)
    return path


def load_report(path: str | Path) -> AuditReport:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ReportError(f"Cannot read report {path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ReportError(f"Invalid JSON in {path}: {e}") from e
    return AuditReport.from_dict(data)
