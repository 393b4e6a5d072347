"""Global configuration — XDG paths, optional YAML file, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from clawforge.analyzers.ai.client import DEFAULT_API_URL, DEFAULT_MODEL


def _default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "clawforge"
    return Path.home() / ".local" / "share" / "clawforge"


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "clawforge"
    return Path.home() / ".config" / "clawforge"


def _section(data: dict, name: str) -> dict:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return value


@dataclass
class ClawForgeConfig:
    """Application-wide configuration."""

    data_dir: Path = field(default_factory=_default_data_dir)
    config_dir: Path = field(default_factory=_default_config_dir)
    anthropic_api_key: str = ""
    ai_model: str = DEFAULT_MODEL
    ai_api_url: str = DEFAULT_API_URL
    ai_max_tokens: int = 4096
    ai_timeout: float = 60.0
    ai_max_retries: int = 1
    disabled_detectors: list[str] = field(default_factory=list)
    report_dir: Path = field(default_factory=lambda: Path("clawforge-reports"))
    chain_id: int = 97  # BSC testnet
    web_host: str = "127.0.0.1"  # Hardcoded, never 0.0.0.0
    web_port: int = 8471
    verbose: bool = False

    @property
    def db_path(self) -> Path:
        return self.data_dir / "clawforge.db"

    @classmethod
    def load(cls, path: str | Path | None = None) -> ClawForgeConfig:
        """Load config: defaults, then the YAML file if present, then env vars."""
        config = cls()

        if path is None:
            env_path = os.environ.get("CLAWFORGE_CONFIG")
            path = Path(env_path) if env_path else config.config_dir / "config.yaml"
        path = Path(path)
        if path.is_file():
            config._apply_file(path)

        config._apply_env()
        return config

    def _apply_file(self, path: Path) -> None:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError("Config YAML must be a mapping")

        ai = _section(data, "ai")
        if "model" in ai:
            self.ai_model = str(ai["model"])
        if "api_url" in ai:
            self.ai_api_url = str(ai["api_url"])
        if "max_tokens" in ai:
            self.ai_max_tokens = int(ai["max_tokens"])
        if "timeout" in ai:
            self.ai_timeout = float(ai["timeout"])
        if "max_retries" in ai:
            self.ai_max_retries = int(ai["max_retries"])

        detectors = _section(data, "detectors")
        disabled = detectors.get("disabled") or []
        if isinstance(disabled, str):
            disabled = [disabled]
        if not isinstance(disabled, list):
            raise ValueError("Config 'detectors.disabled' must be a list of detector ids")
        self.disabled_detectors = [str(d) for d in disabled]

        if "report_dir" in data:
            self.report_dir = Path(data["report_dir"])
        if "chain_id" in data:
            self.chain_id = int(data["chain_id"])

        web = _section(data, "web")
        if "port" in web:
            self.web_port = int(web["port"])

    def _apply_env(self) -> None:
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if api_key:
            self.anthropic_api_key = api_key

        env_model = os.environ.get("CLAWFORGE_AI_MODEL")
        if env_model:
            self.ai_model = env_model

        env_timeout = os.environ.get("CLAWFORGE_AI_TIMEOUT")
        if env_timeout:
            self.ai_timeout = float(env_timeout)

        env_port = os.environ.get("CLAWFORGE_WEB_PORT")
        if env_port:
            self.web_port = int(env_port)

        env_chain = os.environ.get("CLAWFORGE_CHAIN_ID")
        if env_chain:
            self.chain_id = int(env_chain)

        env_reports = os.environ.get("CLAWFORGE_REPORT_DIR")
        if env_reports:
            self.report_dir = Path(env_reports)
