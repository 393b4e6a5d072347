"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from clawforge.config import ClawForgeConfig


class TestClawForgeConfig:
    def test_defaults(self, tmp_path: Path):
        config = ClawForgeConfig.load()
        assert config.anthropic_api_key == ""
        assert config.ai_model == "claude-sonnet-4-5-20250929"
        assert config.ai_timeout == 60.0
        assert config.ai_max_retries == 1
        assert config.chain_id == 97
        assert config.web_host == "127.0.0.1"
        assert config.web_port == 8471
        assert config.report_dir == Path("clawforge-reports")
        assert config.data_dir == tmp_path / "xdg-data" / "clawforge"
        assert config.db_path == tmp_path / "xdg-data" / "clawforge" / "clawforge.db"

    def test_yaml_file(self, tmp_path: Path):
        path = tmp_path / "clawforge.yaml"
        path.write_text(
            "ai:\n"
            "  model: test-model\n"
            "  timeout: 5\n"
            "  max_retries: 0\n"
            "detectors:\n"
            "  disabled: [CF-010, CF-006]\n"
            "report_dir: out\n"
            "chain_id: 56\n"
            "web:\n"
            "  port: 9000\n"
        )
        config = ClawForgeConfig.load(path)
        assert config.ai_model == "test-model"
        assert config.ai_timeout == 5.0
        assert config.ai_max_retries == 0
        assert config.disabled_detectors == ["CF-010", "CF-006"]
        assert config.report_dir == Path("out")
        assert config.chain_id == 56
        assert config.web_port == 9000

    def test_default_file_location(self, tmp_path: Path):
        config_dir = tmp_path / "xdg-config" / "clawforge"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("chain_id: 56\n")
        assert ClawForgeConfig.load().chain_id == 56

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / "clawforge.yaml"
        path.write_text("web:\n  port: 9000\n")
        monkeypatch.setenv("CLAWFORGE_CONFIG", str(path))
        monkeypatch.setenv("CLAWFORGE_WEB_PORT", "9100")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        monkeypatch.setenv("CLAWFORGE_REPORT_DIR", str(tmp_path / "reports"))
        config = ClawForgeConfig.load()
        assert config.web_port == 9100
        assert config.anthropic_api_key == "sk-env"
        assert config.report_dir == tmp_path / "reports"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ClawForgeConfig.load(path).chain_id == 97

    def test_non_mapping_file(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            ClawForgeConfig.load(path)

    @pytest.mark.parametrize(
        "text",
        ["ai: foo\n", "detectors:\n  - CF-001\n", "web: 8080\n"],
    )
    def test_non_mapping_section(self, tmp_path: Path, text: str):
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(ValueError, match="must be a mapping"):
            ClawForgeConfig.load(path)

    def test_disabled_not_a_list(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("detectors:\n  disabled: 5\n")
        with pytest.raises(ValueError, match="list of detector ids"):
            ClawForgeConfig.load(path)
