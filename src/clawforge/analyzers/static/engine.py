"""Static engine — runs the Solidity detector catalog over one source file."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from clawforge.analyzers.models import Detector, Finding
from clawforge.analyzers.static.detectors.access_control import ACCESS_CONTROL
from clawforge.analyzers.static.detectors.delegatecall import DELEGATECALL_USAGE
from clawforge.analyzers.static.detectors.integer_overflow import INTEGER_OVERFLOW
from clawforge.analyzers.static.detectors.precision_loss import PRECISION_LOSS
from clawforge.analyzers.static.detectors.reentrancy import REENTRANCY
from clawforge.analyzers.static.detectors.selfdestruct import SELFDESTRUCT
from clawforge.analyzers.static.detectors.storage_collision import STORAGE_COLLISION
from clawforge.analyzers.static.detectors.tx_origin import TX_ORIGIN
from clawforge.analyzers.static.detectors.unchecked_calls import UNCHECKED_CALLS
from clawforge.analyzers.static.detectors.uninitialized_storage import (
    UNINITIALIZED_STORAGE,
)

logger = logging.getLogger(__name__)

# Registration order is the tie-break order for equal severities.
DETECTORS: tuple[Detector, ...] = (
    REENTRANCY,
    UNCHECKED_CALLS,
    TX_ORIGIN,
    DELEGATECALL_USAGE,
    SELFDESTRUCT,
    INTEGER_OVERFLOW,
    ACCESS_CONTROL,
    UNINITIALIZED_STORAGE,
    STORAGE_COLLISION,
    PRECISION_LOSS,
)


def list_detectors() -> list[Detector]:
    return list(DETECTORS)


class StaticAnalyzer:
    """Runs every enabled detector and merges the results, most severe first."""

    def __init__(
        self,
        detectors: Iterable[Detector] | None = None,
        disabled: Iterable[str] | None = None,
    ) -> None:
        skip = {d.upper() for d in (disabled or [])}
        self._detectors = [
            d for d in (detectors if detectors is not None else DETECTORS)
            if d.id.upper() not in skip
        ]

    @property
    def detectors(self) -> list[Detector]:
        return list(self._detectors)

    def analyze(self, source: str, file_name: str) -> list[Finding]:
        findings: list[Finding] = []
        for detector in self._detectors:
            try:
                found = detector.detect(source, file_name)
            except Exception:
                # A broken detector must not take the rest of the catalog down.
                logger.exception("Detector %s failed on %s", detector.id, file_name)
                continue
            logger.debug("%s: %d finding(s) in %s", detector.id, len(found), file_name)
            findings.extend(found)

        # sorted() is stable, so registration order survives within a severity.
        return sorted(findings, key=lambda f: f.severity.rank, reverse=True)


def run_static_analysis(source: str, file_name: str) -> list[Finding]:
    """Run the full detector catalog."""
    return StaticAnalyzer().analyze(source, file_name)
