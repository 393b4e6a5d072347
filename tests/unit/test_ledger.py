"""Tests for publish parameter validation."""

from __future__ import annotations

import dataclasses

import pytest

from clawforge.hashing import compute_hash
from clawforge.ledger.models import ZERO_ADDRESS, PublishParams
from clawforge.report.generator import ReportError, build_report


@pytest.fixture
def report():
    return build_report("Vault", compute_hash("contract Vault {}"), [])


def _with_summary(report, **changes):
    return dataclasses.replace(report, summary=dataclasses.replace(report.summary, **changes))


class TestPublishParams:
    def test_from_report(self, report):
        params = PublishParams.from_report(report, report_uri="https://x/r.json", chain_id=56)
        assert params.contract_hash == report.summary.contract_hash
        assert params.report_hash == report.report_hash
        assert params.audited_contract == ZERO_ADDRESS
        assert params.overall_score == 100
        assert params.critical_count == 0
        assert params.chain_id == 56
        assert params.report_uri == "https://x/r.json"

    def test_audited_contract(self, report):
        address = "0x" + "ab" * 20
        params = PublishParams.from_report(report, audited_contract=address)
        assert params.audited_contract == address

    def test_bad_address(self, report):
        with pytest.raises(ReportError, match="address"):
            PublishParams.from_report(report, audited_contract="0x1234")

    def test_bad_contract_hash(self, report):
        with pytest.raises(ReportError, match="contractHash"):
            PublishParams.from_report(_with_summary(report, contract_hash="abc"))

    def test_missing_report_hash(self, report):
        with pytest.raises(ReportError, match="reportHash"):
            PublishParams.from_report(_with_summary(report, report_hash=""))

    def test_count_overflow(self, report):
        with pytest.raises(ReportError, match="uint8"):
            PublishParams.from_report(_with_summary(report, info=256))

    def test_score_out_of_range(self, report):
        with pytest.raises(ReportError, match="overallScore"):
            PublishParams.from_report(_with_summary(report, overall_score=101))

    def test_bad_chain_id(self, report):
        with pytest.raises(ReportError, match="chain"):
            PublishParams.from_report(report, chain_id=0)
