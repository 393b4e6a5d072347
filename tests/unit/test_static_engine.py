"""Tests for the static analysis coordinator."""

from __future__ import annotations

import logging

from clawforge.analyzers.models import Detector, Finding, Location, Severity
from clawforge.analyzers.static.engine import (
    DETECTORS,
    StaticAnalyzer,
    list_detectors,
    run_static_analysis,
)


def _finding(rule_id: str, severity: Severity, line: int = 1) -> Finding:
    return Finding(
        id=rule_id,
        title=rule_id,
        severity=severity,
        description="",
        location=Location(line=line),
    )


def _fixed(rule_id: str, *findings: Finding) -> Detector:
    return Detector(
        id=rule_id,
        name=rule_id,
        description="",
        detect=lambda source, file_name: list(findings),
    )


def _broken(source: str, file_name: str) -> list[Finding]:
    raise RuntimeError("boom")


class TestRegistry:
    def test_catalog_order(self):
        assert [d.id for d in list_detectors()] == [
            "CF-001",
            "CF-002",
            "CF-003",
            "CF-004",
            "CF-005",
            "CF-006",
            "CF-007",
            "CF-008",
            "CF-009",
            "CF-010",
        ]

    def test_list_is_a_copy(self):
        listed = list_detectors()
        listed.clear()
        assert len(DETECTORS) == 10


class TestStaticAnalyzer:
    def test_legacy_fixture(self, legacy_source):
        findings = run_static_analysis(legacy_source, "LegacyToken.sol")
        assert [(f.id, f.location.line) for f in findings] == [
            ("CF-002", 30),
            ("CF-003", 19),
            ("CF-005", 40),
            ("CF-006", 20),
            ("CF-007", 24),
            ("CF-007", 39),
            ("CF-008", 35),
            ("CF-010", 29),
        ]

    def test_safe_fixture(self, safe_source):
        assert run_static_analysis(safe_source, "SafeContract.sol") == []

    def test_sorted_by_severity_and_stable(self):
        analyzer = StaticAnalyzer(
            detectors=[
                _fixed("A", _finding("A1", Severity.LOW), _finding("A2", Severity.HIGH)),
                _fixed("B", _finding("B1", Severity.CRITICAL), _finding("B2", Severity.LOW)),
                _fixed("C", _finding("C1", Severity.HIGH), _finding("C2", Severity.INFO)),
            ]
        )
        findings = analyzer.analyze("", "X.sol")
        assert [f.id for f in findings] == ["B1", "A2", "C1", "A1", "B2", "C2"]
        ranks = [f.severity.rank for f in findings]
        assert ranks == sorted(ranks, reverse=True)

    def test_faulty_detector_is_isolated(self, caplog):
        analyzer = StaticAnalyzer(
            detectors=[
                _fixed("A", _finding("A1", Severity.MEDIUM)),
                Detector(id="BAD", name="bad", description="", detect=_broken),
                _fixed("C", _finding("C1", Severity.HIGH)),
            ]
        )
        with caplog.at_level(logging.ERROR):
            findings = analyzer.analyze("", "X.sol")
        assert [f.id for f in findings] == ["C1", "A1"]
        assert "BAD" in caplog.text

    def test_disabled_detectors(self, legacy_source):
        analyzer = StaticAnalyzer(disabled=["cf-007", "CF-010"])
        assert "CF-007" not in [d.id for d in analyzer.detectors]
        ids = {f.id for f in analyzer.analyze(legacy_source, "LegacyToken.sol")}
        assert ids == {"CF-002", "CF-003", "CF-005", "CF-006", "CF-008"}

    def test_empty_source(self):
        assert run_static_analysis("", "Empty.sol") == []
