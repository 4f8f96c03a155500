import asyncio
import random
from typing import Any

import tls_client
from fake_useragent import UserAgent
from loguru import logger

from config.settings import settings
from src.parsers.gmgn import endpoints
from src.parsers.gmgn.exceptions import (
    CloudflareBlockedError,
    GmgnApiError,
    GmgnRateLimitError,
)
from src.parsers.rate_limiter import RateLimiter

TLS_IDENTIFIERS = [
    "chrome_120",
    "chrome_119",
    "safari_ios_17_0",
    "firefox_120",
]

MAX_RETRIES = 3
RETRY_DELAYS = [2.0, 4.0, 8.0]
REQUEST_TIMEOUT = 30.0
CIRCUIT_BREAKER_THRESHOLD = 5
CIRCUIT_BREAKER_BASE_COOLDOWN = 60.0  # seconds
CIRCUIT_BREAKER_MAX_COOLDOWN = 600.0
SESSION_ROTATE_INTERVAL = 50


class GmgnClient:
    """Async wrapper over a TLS-fingerprinted session for gmgn.ai holder data.

    tls_client is blocking, so each request runs in a worker thread.
    Responses are returned as the full JSON envelope; whether the envelope
    signals success is for the caller to decide.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter | None = None,
        max_rps: float = settings.gmgn_max_rps,
        proxy_url: str = settings.gmgn_proxy_url,
    ) -> None:
        self._rate_limiter = rate_limiter or RateLimiter(max_rps)
        self._ua = UserAgent()
        self._proxy_url = proxy_url
        self._session = self._create_session()
        self._request_count = 0
        self._consecutive_403s = 0
        self._circuit_open_until = 0.0
        self._circuit_trip_count = 0

    def _create_session(self) -> tls_client.Session:
        session = tls_client.Session(
            client_identifier=random.choice(TLS_IDENTIFIERS),
            random_tls_extension_order=True,
        )
        session.headers.update(
            {
                "Accept": "application/json, text/plain, */*",
                "Accept-Language": "en-US,en;q=0.9",
                "Referer": "https://gmgn.ai/?chain=sol",
                "Origin": "https://gmgn.ai",
                "User-Agent": self._ua.random,
            }
        )
        if self._proxy_url:
            session.proxies = {
                "http": self._proxy_url,
                "https": self._proxy_url,
            }
        return session

    async def _request(self, url: str, **kwargs: Any) -> dict[str, Any]:
        """GET with rate limiting, retries and a Cloudflare circuit breaker."""
        now = asyncio.get_running_loop().time()
        if now < self._circuit_open_until:
            remaining = self._circuit_open_until - now
            raise CloudflareBlockedError(
                f"Circuit breaker open ({remaining:.0f}s remaining), skipping GMGN"
            )

        for attempt in range(MAX_RETRIES):
            await self._rate_limiter.acquire()

            self._request_count += 1
            if self._request_count % SESSION_ROTATE_INTERVAL == 0:
                self._session = self._create_session()
                logger.debug("[GMGN] Rotated TLS session")

            try:
                response = await asyncio.wait_for(
                    asyncio.to_thread(self._session.get, url, **kwargs),
                    timeout=REQUEST_TIMEOUT,
                )
            except asyncio.TimeoutError:
                logger.warning(f"[GMGN] Request timed out (attempt {attempt + 1}): {url}")
                if attempt < MAX_RETRIES - 1:
                    await asyncio.sleep(RETRY_DELAYS[attempt])
                    continue
                raise GmgnApiError(f"Request timed out after {MAX_RETRIES} attempts: {url}")
            except Exception as e:
                # tls_client surfaces transport failures as bare Exception
                logger.warning(f"[GMGN] Request failed (attempt {attempt + 1}): {e}")
                if attempt < MAX_RETRIES - 1:
                    await asyncio.sleep(RETRY_DELAYS[attempt])
                    continue
                raise GmgnApiError(f"All retries exhausted for {url}") from e

            if response.status_code == 403:
                self._consecutive_403s += 1
                logger.warning(f"[GMGN] Cloudflare 403 (#{self._consecutive_403s}) for {url}")
                if self._consecutive_403s >= CIRCUIT_BREAKER_THRESHOLD:
                    # 60s, 120s, 240s, ... up to CIRCUIT_BREAKER_MAX_COOLDOWN
                    self._circuit_trip_count += 1
                    cooldown = min(
                        CIRCUIT_BREAKER_BASE_COOLDOWN * (2 ** (self._circuit_trip_count - 1)),
                        CIRCUIT_BREAKER_MAX_COOLDOWN,
                    )
                    self._circuit_open_until = asyncio.get_running_loop().time() + cooldown
                    logger.error(
                        f"[GMGN] Circuit breaker OPEN for {cooldown:.0f}s "
                        f"(trip #{self._circuit_trip_count})"
                    )
                    self._consecutive_403s = 0
                    raise CloudflareBlockedError(f"Circuit breaker triggered for {url}")
                self._session = self._create_session()
                if attempt < MAX_RETRIES - 1:
                    await asyncio.sleep(RETRY_DELAYS[attempt])
                    continue
                raise CloudflareBlockedError(f"403 after {MAX_RETRIES} retries: {url}")

            if response.status_code == 429:
                raise GmgnRateLimitError(f"Rate limited: {url}")

            if response.status_code != 200:
                raise GmgnApiError(f"HTTP {response.status_code}: {url}", response.status_code)

            self._consecutive_403s = 0
            # Step down one trip per success so a flapping endpoint keeps a longer cooldown
            if self._circuit_trip_count > 0:
                self._circuit_trip_count -= 1

            try:
                payload = response.json()
            except ValueError as e:
                raise GmgnApiError(f"Invalid JSON from {url}", response.status_code) from e
            if not isinstance(payload, dict):
                raise GmgnApiError(f"Unexpected payload type {type(payload).__name__}: {url}")
            return payload

        raise GmgnApiError(f"Exhausted retries for {url}")

    async def get_holder_stat(self, address: str, chain: str = "sol") -> dict[str, Any]:
        """Holder category counts: fresh, insider, bluechip, bundler, bot, sniper, dev."""
        url = endpoints.BASE_URL + endpoints.TOKEN_HOLDER_STAT.format(
            chain=chain, address=address
        )
        return await self._request(url)

    async def get_token_holders(
        self,
        address: str,
        chain: str = "sol",
        limit: int = settings.gmgn_holders_limit,
    ) -> dict[str, Any]:
        """Top holders ranked by share of supply, with wallet tags."""
        url = endpoints.BASE_URL + endpoints.TOKEN_HOLDERS.format(chain=chain, address=address)
        params = {"limit": limit, "orderby": "amount_percentage", "direction": "desc"}
        return await self._request(url, params=params)

    async def close(self) -> None:
        """Clean up TLS session."""
        try:
            self._session.close()
        except Exception as e:
            logger.debug(f"[GMGN] Session close failed: {e}")
