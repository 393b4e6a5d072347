"""ClawForge: heuristic smart-contract security auditor."""

__version__ = "0.1.0"
