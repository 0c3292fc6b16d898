"""
Advice Slip API client.

One GET per call, no retries. The response looks like
``{"slip": {"advice": "..."}}`` and either level may be missing or null.
Results come back tagged so the caller can tell "no advice" apart from
"the request failed".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
from loguru import logger

ADVICE_BASE_URL = "https://api.adviceslip.com/"
NO_ADVICE_TEXT = "No advice found. Try again."
ADVICE_ERROR_TEXT = "Could not load advice. Try again."


class AdviceStatus(str, Enum):
    """Outcome of an advice fetch."""

    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


@dataclass(frozen=True)
class AdviceResult:
    status: AdviceStatus
    text: str

    @property
    def ok(self) -> bool:
        return self.status is not AdviceStatus.FAILURE


def extract_advice(payload: Any) -> str | None:
    """Pull slip.advice out of a decoded payload, tolerating missing levels."""
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected advice payload: {type(payload).__name__}")
    slip = payload.get("slip")
    if not isinstance(slip, dict):
        return None
    advice = slip.get("advice")
    if not isinstance(advice, str) or not advice.strip():
        return None
    return advice.strip()


class AdviceClient:
    """Async client for the advice slip endpoint."""

    def __init__(
        self,
        base_url: str = ADVICE_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def get_advice(self) -> AdviceResult:
        """
        Fetch one piece of advice.

        Returns:
            AdviceResult tagged SUCCESS, EMPTY (fallback text) or FAILURE
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get("advice")
                response.raise_for_status()
                advice = extract_advice(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Advice request failed: {e}")
            return AdviceResult(AdviceStatus.FAILURE, ADVICE_ERROR_TEXT)

        if advice is None:
            logger.info("Advice response had no text")
            return AdviceResult(AdviceStatus.EMPTY, NO_ADVICE_TEXT)

        logger.info("Advice fetched")
        return AdviceResult(AdviceStatus.SUCCESS, advice)
