"""Rugcheck.xyz API client — free contract security analysis for Solana tokens."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from config.settings import settings
from src.parsers.rate_limiter import RateLimiter

MAX_RETRIES = 2
RETRY_DELAYS = [2.0, 5.0]


class RugcheckClient:
    """Async HTTP client for Rugcheck.xyz (free, no API key)."""

    def __init__(
        self,
        max_rps: float = settings.rugcheck_max_rps,
        base_url: str = settings.rugcheck_base_url,
        timeout: float = settings.rugcheck_timeout_sec,
    ) -> None:
        self._rate_limiter = RateLimiter(max_rps)
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def get_full_report(self, mint: str) -> dict[str, Any] | None:
        """Fetch the full token report (score, risks, holders, markets).

        Returns the decoded JSON untouched, or None if the token is unknown,
        the API errors, or retries are exhausted.
        """
        url = f"{self._base_url}/tokens/{mint}/report"

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.get(url)

                if resp.status_code == 404:
                    logger.info(f"[RUGCHECK] No report for {mint}")
                    return None
                if resp.status_code == 429:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[RUGCHECK] Rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue
                if resp.status_code != 200:
                    logger.warning(f"[RUGCHECK] HTTP {resp.status_code} for {mint}")
                    return None

                try:
                    data = resp.json()
                except ValueError:
                    # Cloudflare challenge pages come back as 200 HTML
                    logger.warning(f"[RUGCHECK] Non-JSON response for {mint}")
                    return None
                if not isinstance(data, dict):
                    logger.warning(f"[RUGCHECK] Unexpected payload type {type(data).__name__}")
                    return None
                return data

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[RUGCHECK] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                else:
                    logger.warning(f"[RUGCHECK] Failed after {MAX_RETRIES + 1} attempts: {e}")
                    return None

        logger.warning(f"[RUGCHECK] Still rate limited after {MAX_RETRIES + 1} attempts")
        return None
