"""Tests for the reviewer HTTP adapter."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from clawforge.analyzers.ai.client import (
    FAILED_SUMMARY,
    SKIPPED_SUMMARY,
    UNPARSABLE_SUMMARY,
    AIAnalyzer,
)
from clawforge.analyzers.models import DetectorKind, Severity
from clawforge.config import ClawForgeConfig


def _response(status: int = 200, text: str = "", body=None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status}")
    else:
        resp.raise_for_status.return_value = None
    resp.json.return_value = (
        body if body is not None else {"content": [{"type": "text", "text": text}]}
    )
    return resp


REPLY = json.dumps(
    {
        "findings": [{"title": "Oracle manipulation", "severity": "high", "line": 7}],
        "summary": "One issue",
        "score": 70,
    }
)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("clawforge.analyzers.ai.client.time.sleep") as sleep:
        yield sleep


class TestAIAnalyzer:
    def test_no_api_key_skips_without_io(self):
        session = MagicMock()
        result = AIAnalyzer(None, session=session).analyze("contract A {}", "A.sol")
        assert result.findings == []
        assert result.score == 0
        assert result.summary == SKIPPED_SUMMARY
        session.post.assert_not_called()

    def test_success(self):
        session = MagicMock()
        session.post.return_value = _response(text=REPLY)
        analyzer = AIAnalyzer("sk-test", model="test-model", timeout=5.0, session=session)
        result = analyzer.analyze("contract A {}", "A.sol")

        assert result.summary == "One issue"
        assert result.score == 70
        assert len(result.findings) == 1
        assert result.findings[0].detector == DetectorKind.AI
        assert result.findings[0].severity == Severity.HIGH

        args, kwargs = session.post.call_args
        assert args[0] == "https://api.anthropic.com/v1/messages"
        assert kwargs["timeout"] == 5.0
        assert kwargs["headers"]["x-api-key"] == "sk-test"
        assert kwargs["headers"]["anthropic-version"] == "2023-06-01"
        payload = kwargs["json"]
        assert payload["model"] == "test-model"
        assert payload["max_tokens"] == 4096
        assert "ClawForge" in payload["system"]
        assert "A.sol" in payload["messages"][0]["content"]
        assert "contract A {}" in payload["messages"][0]["content"]

    def test_joins_text_blocks(self):
        body = {
            "content": [
                {"type": "text", "text": REPLY[:20]},
                {"type": "tool_use", "id": "x"},
                {"type": "text", "text": REPLY[20:]},
            ]
        }
        session = MagicMock()
        session.post.return_value = _response(body=body)
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.score == 70

    def test_non_string_text_block_is_skipped(self):
        body = {
            "content": [
                {"type": "text", "text": None},
                {"type": "text", "text": REPLY},
            ]
        }
        session = MagicMock()
        session.post.return_value = _response(body=body)
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.score == 70

    def test_only_null_text_is_unparsable(self):
        session = MagicMock()
        session.post.return_value = _response(body={"content": [{"type": "text", "text": None}]})
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.summary == UNPARSABLE_SUMMARY
        assert result.findings == []

    def test_content_not_a_list_fails_cleanly(self):
        session = MagicMock()
        session.post.return_value = _response(body={"content": 5})
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.summary == FAILED_SUMMARY
        assert result.findings == []
        assert session.post.call_count == 1

    def test_retries_transient_error_once(self, no_sleep):
        session = MagicMock()
        session.post.side_effect = [
            requests.ConnectionError("reset"),
            _response(text=REPLY),
        ]
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.score == 70
        assert session.post.call_count == 2
        no_sleep.assert_called_once()

    def test_retry_exhausted(self):
        session = MagicMock()
        session.post.side_effect = requests.Timeout("slow")
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.summary == FAILED_SUMMARY
        assert result.findings == []
        assert result.score == 0
        assert session.post.call_count == 2

    def test_server_error_is_retried(self):
        session = MagicMock()
        session.post.side_effect = [_response(status=503), _response(text=REPLY)]
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.score == 70
        assert session.post.call_count == 2

    def test_client_error_is_not_retried(self):
        session = MagicMock()
        session.post.return_value = _response(status=401)
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.summary == FAILED_SUMMARY
        assert session.post.call_count == 1

    def test_unparsable_reply_is_not_retried(self):
        session = MagicMock()
        session.post.return_value = _response(text="I cannot help with that.")
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.summary == UNPARSABLE_SUMMARY
        assert result.findings == []
        assert session.post.call_count == 1

    def test_wrong_shape_keeps_summary(self):
        session = MagicMock()
        session.post.return_value = _response(text='{"summary": "ok", "score": 90}')
        result = AIAnalyzer("sk-test", session=session).analyze("", "A.sol")
        assert result.findings == []
        assert result.summary == "ok"
        assert result.score == 90

    def test_from_config(self):
        config = ClawForgeConfig(anthropic_api_key="sk-cfg", ai_model="m", ai_timeout=3.0)
        analyzer = AIAnalyzer.from_config(config)
        assert analyzer.enabled
        assert analyzer.model == "m"
        assert analyzer.timeout == 3.0
