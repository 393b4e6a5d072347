"""Audit pipeline — static phase, AI phase, dedup and report assembly."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from clawforge.analyzers.ai.client import AIAnalysisResult, AIAnalyzer
from clawforge.analyzers.models import Detector, Finding
from clawforge.analyzers.static.engine import StaticAnalyzer
from clawforge.hashing import compute_hash
from clawforge.report.generator import AuditReport, build_report, deduplicate_findings

logger = logging.getLogger(__name__)


def contract_name_for(file_name: str) -> str:
    """``contracts/Vault.sol`` -> ``Vault``."""
    return Path(file_name).stem or "Contract"


def run_audit(
    source: str,
    file_name: str,
    *,
    contract_name: str | None = None,
    analyzer: AIAnalyzer | None = None,
    static: bool = True,
    ai: bool = True,
    detectors: Iterable[Detector] | None = None,
    disabled: Iterable[str] | None = None,
) -> AuditReport:
    """Audit one Solidity source and return the assembled report.

    With ``ai=True`` and no *analyzer*, an ``AIAnalyzer`` with no API key is
    used, which skips the remote call and records why in ``aiSummary``.
    """
    contract_name = contract_name or contract_name_for(file_name)
    contract_hash = compute_hash(source)

    static_findings: list[Finding] = []
    if static:
        engine = StaticAnalyzer(detectors=detectors, disabled=disabled)
        static_findings = engine.analyze(source, file_name)
        logger.info("Static analysis of %s: %d finding(s)", file_name, len(static_findings))

    ai_result = AIAnalysisResult()
    if ai:
        ai_result = (analyzer or AIAnalyzer(None)).analyze(source, file_name)

    findings = deduplicate_findings([*static_findings, *ai_result.findings])
    return build_report(
        contract_name=contract_name,
        contract_hash=contract_hash,
        findings=findings,
        ai_summary=ai_result.summary,
    )
