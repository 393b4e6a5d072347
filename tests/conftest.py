"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from clawforge.config import ClawForgeConfig

_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "CLAWFORGE_CONFIG",
    "CLAWFORGE_AI_MODEL",
    "CLAWFORGE_AI_TIMEOUT",
    "CLAWFORGE_WEB_PORT",
    "CLAWFORGE_CHAIN_ID",
    "CLAWFORGE_REPORT_DIR",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests off the real home directory, API key and database."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def safe_source(fixtures_dir: Path) -> str:
    return (fixtures_dir / "safe" / "SafeContract.sol").read_text(encoding="utf-8")


@pytest.fixture
def reentrancy_source(fixtures_dir: Path) -> str:
    return (fixtures_dir / "vulnerable" / "ReentrancyVuln.sol").read_text(
        encoding="utf-8"
    )


@pytest.fixture
def legacy_source(fixtures_dir: Path) -> str:
    return (fixtures_dir / "vulnerable" / "LegacyToken.sol").read_text(encoding="utf-8")


@pytest.fixture
def config(tmp_path: Path) -> ClawForgeConfig:
    return ClawForgeConfig(
        data_dir=tmp_path / "data",
        config_dir=tmp_path / "config",
        report_dir=tmp_path / "reports",
    )
