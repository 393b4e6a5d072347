"""LLM reviewer adapter — posts the contract to the Messages API and parses the reply.

``AIAnalyzer.analyze`` never raises for I/O or parse problems. A missing API
key, a failed request or an unreadable reply all degrade to an empty result
with an explanatory summary so the static findings still make a report.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests

from clawforge.analyzers.ai.parser import ParseStatus, parse_ai_response
from clawforge.analyzers.ai.prompts import SYSTEM_PROMPT, build_user_prompt
from clawforge.analyzers.models import Finding

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"

SKIPPED_SUMMARY = "AI analysis skipped (no API key)"
FAILED_SUMMARY = "AI analysis failed"
UNPARSABLE_SUMMARY = "AI response could not be parsed"

_RETRY_STATUS = {429, 500, 502, 503, 504, 529}


@dataclass(frozen=True)
class AIAnalysisResult:
    findings: list[Finding] = field(default_factory=list)
    summary: str = ""
    score: int = 0


class _TransientError(Exception):
    """A failure worth one more attempt."""


class AIAnalyzer:
    """Stateless client for the external reviewer.

    ``session`` is any object with a requests-compatible ``post``; tests pass a
    mock, production uses the ``requests`` module itself.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_MODEL,
        api_url: str = DEFAULT_API_URL,
        max_tokens: int = 4096,
        timeout: float = 60.0,
        max_retries: int = 1,
        backoff: float = 2.0,
        session: Any = None,
    ) -> None:
        self.api_key = api_key or ""
        self.model = model
        self.api_url = api_url
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.backoff = backoff
        self._session = session if session is not None else requests

    @classmethod
    def from_config(cls, config, session: Any = None) -> AIAnalyzer:
        return cls(
            config.anthropic_api_key,
            model=config.ai_model,
            api_url=config.ai_api_url,
            max_tokens=config.ai_max_tokens,
            timeout=config.ai_timeout,
            max_retries=config.ai_max_retries,
            session=session,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def analyze(self, source: str, file_name: str) -> AIAnalysisResult:
        if not self.enabled:
            logger.info("No ANTHROPIC_API_KEY set, skipping AI analysis of %s", file_name)
            return AIAnalysisResult(summary=SKIPPED_SUMMARY)

        try:
            text = self._request(source, file_name)
        except requests.RequestException as e:
            logger.warning("AI analysis of %s failed: %s", file_name, e)
            return AIAnalysisResult(summary=FAILED_SUMMARY)

        parsed = parse_ai_response(text)
        if parsed.status in (ParseStatus.NO_JSON, ParseStatus.MALFORMED):
            logger.warning("AI reply for %s unusable (%s)", file_name, parsed.status.value)
            return AIAnalysisResult(summary=UNPARSABLE_SUMMARY)
        if parsed.status is ParseStatus.WRONG_SHAPE:
            logger.warning("AI reply for %s has no findings list", file_name)

        logger.debug("AI analysis of %s: %d finding(s)", file_name, len(parsed.findings))
        return AIAnalysisResult(
            findings=parsed.findings, summary=parsed.summary, score=parsed.score
        )

    def _request(self, source: str, file_name: str) -> str:
        """POST once, retrying transient failures up to ``max_retries`` times."""
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": SYSTEM_PROMPT,
            "messages": [
                {"role": "user", "content": build_user_prompt(source, file_name)}
            ],
        }
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

        attempt = 0
        while True:
            try:
                return self._post(payload, headers)
            except _TransientError as e:
                cause = e.__cause__ or e
                if attempt >= self.max_retries:
                    if isinstance(cause, requests.RequestException):
                        raise cause from None
                    raise requests.RequestException(str(cause)) from None
                attempt += 1
                delay = self.backoff * attempt
                logger.info("Transient AI error (%s), retrying in %.1fs", cause, delay)
                time.sleep(delay)

    def _post(self, payload: dict[str, Any], headers: dict[str, str]) -> str:
        try:
            resp = self._session.post(
                self.api_url, headers=headers, json=payload, timeout=self.timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise _TransientError(str(e)) from e

        if resp.status_code in _RETRY_STATUS:
            try:
                resp.raise_for_status()
            except requests.HTTPError as e:
                raise _TransientError(str(e)) from e
            raise _TransientError(f"HTTP {resp.status_code}")
        resp.raise_for_status()

        try:
            body = resp.json()
        except ValueError as e:
            raise requests.RequestException(f"Invalid JSON body: {e}") from e
        return _response_text(body)


def _response_text(body: Any) -> str:
    """Concatenate the text blocks of a Messages API response."""
    if not isinstance(body, dict):
        return ""
    blocks = body.get("content") or []
    if not isinstance(blocks, list):
        raise requests.RequestException(
            f"Unexpected content in response: {type(blocks).__name__}"
        )
    return "".join(
        b["text"]
        for b in blocks
        if isinstance(b, dict)
        and b.get("type") == "text"
        and isinstance(b.get("text"), str)
    )
