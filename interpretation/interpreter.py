"""
Interpretation - Chat Completion Interpreter.

============================================================
PURPOSE
============================================================
Optional narrative layer on top of a finished scan.

- interpret(): analyst-style reading of a ScanResult
- analyze_financials(): commentary on located filings

============================================================
DESIGN PRINCIPLES
============================================================
- Best effort: a missing API key, HTTP failure or malformed
  response yields None, never an exception
- The scan result is never modified here
- Mistral serves an OpenAI-compatible API, so calls go
  through AsyncOpenAI with base_url pointed at it
- One short-lived client per call, no SDK retries

============================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from openai import APIError, APIStatusError, AsyncOpenAI

from data_ingestion.types import FinancialData
from interpretation.prompts import (
    FINANCIAL_SYSTEM_PROMPT,
    SCAN_SYSTEM_PROMPT,
    format_financial_data_for_ai,
    format_scan_result_for_ai,
)


logger = logging.getLogger(__name__)


# =============================================================
# CONFIGURATION
# =============================================================


@dataclass
class InterpreterConfig:
    """Chat-completion endpoint settings."""
    api_key: Optional[str] = None
    model: str = "mistral-small-latest"
    base_url: str = "https://api.mistral.ai/v1"
    timeout_seconds: float = 30.0
    max_retries: int = 0

    # Scan interpretation
    scan_temperature: float = 0.4
    scan_max_tokens: int = 1500

    # Financial analysis
    financial_temperature: float = 0.3
    financial_max_tokens: int = 1200

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "InterpreterConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - MISTRAL_API_KEY
        - MISTRAL_MODEL
        - MISTRAL_BASE_URL
        - AI_REQUEST_TIMEOUT_SECONDS
        - AI_MAX_RETRIES
        """
        return cls(
            api_key=os.getenv("MISTRAL_API_KEY") or None,
            model=os.getenv("MISTRAL_MODEL", "mistral-small-latest"),
            base_url=os.getenv("MISTRAL_BASE_URL", "https://api.mistral.ai/v1"),
            timeout_seconds=float(os.getenv("AI_REQUEST_TIMEOUT_SECONDS", "30")),
            max_retries=int(os.getenv("AI_MAX_RETRIES", "0")),
        )


# =============================================================
# INTERPRETER
# =============================================================


class Interpreter:
    """
    Generates narrative analysis through a chat-completion API.

    Usage:
        interpreter = Interpreter(InterpreterConfig.from_env())
        text = await interpreter.interpret(scan_result)
    """

    def __init__(
        self,
        config: Optional[InterpreterConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config or InterpreterConfig.from_env()
        self._transport = transport

    @property
    def is_enabled(self) -> bool:
        return self._config.is_configured

    async def interpret(self, result: Any) -> Optional[str]:
        """
        Interpret a completed scan.

        Args:
            result: ScanResult

        Returns:
            Markdown text, or None when unavailable
        """
        if not self.is_enabled:
            logger.warning("Interpretation skipped: MISTRAL_API_KEY not configured")
            return None

        return await self._complete(
            system_prompt=SCAN_SYSTEM_PROMPT,
            user_prompt=format_scan_result_for_ai(result),
            temperature=self._config.scan_temperature,
            max_tokens=self._config.scan_max_tokens,
        )

    async def analyze_financials(
        self,
        financial_data: Optional[FinancialData],
        company_name: str,
    ) -> Optional[str]:
        """
        Comment on located financial filings.

        Returns None when no filings were located.
        """
        if not self.is_enabled:
            logger.warning("Financial analysis skipped: MISTRAL_API_KEY not configured")
            return None

        if financial_data is None or not financial_data.available or not financial_data.records:
            return None

        return await self._complete(
            system_prompt=FINANCIAL_SYSTEM_PROMPT,
            user_prompt=format_financial_data_for_ai(financial_data, company_name),
            temperature=self._config.financial_temperature,
            max_tokens=self._config.financial_max_tokens,
        )

    def _create_client(self) -> AsyncOpenAI:
        http_client = None
        if self._transport is not None:
            http_client = httpx.AsyncClient(
                transport=self._transport,
                timeout=self._config.timeout_seconds,
            )

        return AsyncOpenAI(
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            max_retries=self._config.max_retries,
            http_client=http_client,
        )

    async def _complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> Optional[str]:
        try:
            async with self._create_client() as client:
                completion = await client.chat.completions.create(
                    model=self._config.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    temperature=temperature,
                    max_tokens=max_tokens,
                )

        except APIStatusError as e:
            logger.warning(f"Chat completion failed: HTTP {e.status_code}")
            return None
        except APIError as e:
            logger.warning(f"Chat completion request error: {e}")
            return None

        content = extract_message_content(completion)
        if content is None:
            logger.warning("Chat completion returned no message content")
        return content


def extract_message_content(completion: Any) -> Optional[str]:
    """
    Return choices[0].message.content if it is a string.

    The SDK does not validate response bodies, so a non-JSON
    body arrives as plain text and an empty choices list as-is.
    """
    choices = getattr(completion, "choices", None)
    if not isinstance(choices, list) or not choices:
        return None

    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else None
