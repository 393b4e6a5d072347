"""Ledger data models — what gets published about an audit and what comes back."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from clawforge.report.generator import AuditReport, ReportError

ZERO_ADDRESS = "0x" + "0" * 40

_BYTES32 = re.compile(r"^0x[0-9a-fA-F]{64}$")
_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")

# Registry stores counts and score as uint8.
_UINT8_MAX = 255


@dataclass(frozen=True)
class PublishParams:
    contract_hash: str
    audited_contract: str
    critical_count: int
    high_count: int
    medium_count: int
    low_count: int
    info_count: int
    overall_score: int
    report_hash: str
    report_uri: str
    chain_id: int

    @classmethod
    def from_report(
        cls,
        report: AuditReport,
        report_uri: str = "",
        chain_id: int = 97,
        audited_contract: str | None = None,
    ) -> PublishParams:
        """Extract publishable values from *report*, raising ReportError if invalid."""
        s = report.summary
        if not _BYTES32.match(s.contract_hash):
            raise ReportError(f"contractHash is not a 32-byte hex value: {s.contract_hash!r}")
        if not _BYTES32.match(s.report_hash):
            raise ReportError(f"reportHash is not a 32-byte hex value: {s.report_hash!r}")

        address = audited_contract or ZERO_ADDRESS
        if not _ADDRESS.match(address):
            raise ReportError(f"Invalid contract address: {address!r}")

        counts = {
            "critical": s.critical,
            "high": s.high,
            "medium": s.medium,
            "low": s.low,
            "info": s.info,
        }
        for name, value in counts.items():
            if not 0 <= value <= _UINT8_MAX:
                raise ReportError(f"{name} count {value} does not fit in uint8")
        if not 0 <= s.overall_score <= 100:
            raise ReportError(f"overallScore {s.overall_score} is outside 0-100")
        if chain_id <= 0:
            raise ReportError(f"Invalid chain id: {chain_id}")

        return cls(
            contract_hash=s.contract_hash,
            audited_contract=address,
            critical_count=s.critical,
            high_count=s.high,
            medium_count=s.medium,
            low_count=s.low,
            info_count=s.info,
            overall_score=s.overall_score,
            report_hash=s.report_hash,
            report_uri=report_uri,
            chain_id=chain_id,
        )


@dataclass(frozen=True)
class SubmitResult:
    transaction_id: str
    record_id: int


@dataclass(frozen=True)
class AuditRecord:
    record_id: int
    transaction_id: str
    contract_hash: str
    audited_contract: str
    critical_count: int
    high_count: int
    medium_count: int
    low_count: int
    info_count: int
    overall_score: int
    report_hash: str
    report_uri: str
    chain_id: int
    auditor: str
    timestamp: float

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> AuditRecord:
        return cls(**{k: row[k] for k in cls.__dataclass_fields__})

    def to_dict(self) -> dict[str, Any]:
        return {
            "recordId": self.record_id,
            "transactionId": self.transaction_id,
            "contractHash": self.contract_hash,
            "auditedContract": self.audited_contract,
            "criticalCount": self.critical_count,
            "highCount": self.high_count,
            "mediumCount": self.medium_count,
            "lowCount": self.low_count,
            "infoCount": self.info_count,
            "overallScore": self.overall_score,
            "reportHash": self.report_hash,
            "reportURI": self.report_uri,
            "chainId": self.chain_id,
            "auditor": self.auditor,
            "timestamp": self.timestamp,
        }
