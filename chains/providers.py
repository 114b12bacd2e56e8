"""
chains/providers.py - Bank balance providers over the Cosmos REST (LCD) API.

Provides balance snapshots with:
- Multiple endpoint failover per chain
- Request timeout handling
- Connection pooling
- Pagination exhausted until next_key is empty
- Latency tracking
"""

import os
import time
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from dotenv import load_dotenv

from chains.registry import ChainRegistry
from core.constants import (
    BANK_BALANCES_PATH,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_BALANCE_PAGES,
    REST_ENV_PREFIX,
    ErrorCode,
)
from core.exceptions import ConfigurationError, NetworkError
from core.logging import get_logger
from core.models import Coin

logger = get_logger(__name__)

# Load environment variables
load_dotenv()


class BalanceSource(Protocol):
    """Anything that can list every coin an address holds on a chain."""

    async def get_all_balances(self, chain_name: str, address: str) -> list[Coin]:
        ...


@dataclass
class EndpointStats:
    """Statistics for a REST endpoint."""
    url: str
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_latency_ms: int = 0
    last_error: str | None = None
    last_success_ts: int | None = None

    @property
    def avg_latency_ms(self) -> int:
        if self.successful_requests == 0:
            return 0
        return self.total_latency_ms // self.successful_requests

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.successful_requests / self.total_requests


@dataclass
class LCDResponse:
    """Response from a REST call."""
    result: dict[str, Any]
    latency_ms: int
    endpoint_used: str


class LCDProvider:
    """
    REST provider with failover support.

    Tries endpoints in order until one succeeds.
    Tracks statistics per endpoint for monitoring.
    """

    def __init__(
        self,
        chain_name: str,
        rest_urls: list[str],
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        page_limit: int = DEFAULT_PAGE_LIMIT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.chain_name = chain_name
        self.timeout_seconds = timeout_seconds
        self.page_limit = page_limit
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        self.rest_urls = self._resolve_urls(rest_urls)

        self.stats: dict[str, EndpointStats] = {
            url: EndpointStats(url=url) for url in self.rest_urls
        }

    def _resolve_urls(self, urls: list[str]) -> list[str]:
        """Apply TRACKER_REST_<CHAIN> override, strip trailing slashes."""
        override = os.getenv(f"{REST_ENV_PREFIX}{self.chain_name.upper()}", "")
        if override:
            urls = [u.strip() for u in override.split(",") if u.strip()]
        return [url.rstrip("/") for url in urls]

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                limits=httpx.Limits(max_connections=DEFAULT_MAX_CONNECTIONS),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, path: str, params: dict | None = None) -> LCDResponse:
        """
        Make a GET request with failover.

        Args:
            path: REST path (e.g. /cosmos/bank/v1beta1/balances/...)
            params: Query parameters

        Returns:
            LCDResponse with decoded JSON body and metadata

        Raises:
            NetworkError: If all endpoints fail
        """
        if not self.rest_urls:
            raise NetworkError(
                f"No REST endpoints configured for {self.chain_name}",
                details={"chain": self.chain_name},
            )

        client = await self._get_client()
        last_error: Exception | None = None
        last_code = ErrorCode.INFRA_RPC_ERROR

        for url in self.rest_urls:
            stats = self.stats[url]
            stats.total_requests += 1
            start_ms = int(time.time() * 1000)

            try:
                resp = await client.get(f"{url}{path}", params=params)
                latency_ms = int(time.time() * 1000) - start_ms
                resp.raise_for_status()
                result = resp.json()

                if not isinstance(result, dict):
                    raise ValueError(f"expected JSON object, got {type(result).__name__}")

                stats.successful_requests += 1
                stats.total_latency_ms += latency_ms
                stats.last_success_ts = int(time.time() * 1000)

                return LCDResponse(
                    result=result,
                    latency_ms=latency_ms,
                    endpoint_used=url,
                )

            except httpx.TimeoutException as e:
                latency_ms = int(time.time() * 1000) - start_ms
                stats.failed_requests += 1
                stats.last_error = f"Timeout after {latency_ms}ms"
                last_error = e
                last_code = ErrorCode.INFRA_TIMEOUT
                logger.debug(f"REST timeout for {url}: {latency_ms}ms")
                continue

            except (httpx.HTTPError, ValueError) as e:
                stats.failed_requests += 1
                stats.last_error = str(e)
                last_error = e
                last_code = (
                    ErrorCode.INFRA_BAD_RESPONSE
                    if isinstance(e, ValueError)
                    else ErrorCode.INFRA_RPC_ERROR
                )
                logger.debug(f"REST failed for {url}: {e}")
                continue

        # All endpoints failed
        raise NetworkError(
            f"All REST endpoints failed for chain {self.chain_name}",
            code=last_code,
            details={
                "chain": self.chain_name,
                "path": path,
                "endpoints_tried": len(self.rest_urls),
                "last_error": str(last_error),
            },
        )

    async def get_all_balances(self, address: str) -> list[Coin]:
        """
        Get every coin held by address, following pagination to the end.

        Raises:
            NetworkError: On request failure or malformed payload
        """
        path = BANK_BALANCES_PATH.format(address=address)
        coins: list[Coin] = []
        next_key: str | None = None

        for page in range(MAX_BALANCE_PAGES):
            params: dict[str, Any] = {"pagination.limit": self.page_limit}
            if next_key:
                params["pagination.key"] = next_key

            response = await self.get(path, params)
            body = response.result

            try:
                coins.extend(Coin.from_dict(item) for item in body.get("balances") or [])
            except (KeyError, TypeError) as e:
                raise NetworkError(
                    f"Malformed balances payload from {response.endpoint_used}",
                    code=ErrorCode.INFRA_BAD_RESPONSE,
                    details={"chain": self.chain_name, "address": address, "error": str(e)},
                ) from e

            next_key = (body.get("pagination") or {}).get("next_key")
            if not next_key:
                logger.debug(
                    f"Fetched {len(coins)} balances on {self.chain_name}",
                    extra={"context": {
                        "chain": self.chain_name,
                        "address": address,
                        "pages": page + 1,
                        "latency_ms": response.latency_ms,
                    }},
                )
                return coins

        raise NetworkError(
            f"Balance pagination did not terminate after {MAX_BALANCE_PAGES} pages",
            code=ErrorCode.INFRA_BAD_RESPONSE,
            details={"chain": self.chain_name, "address": address},
        )

    def get_stats_summary(self) -> dict:
        """Get statistics summary for all endpoints."""
        return {
            url: {
                "total_requests": s.total_requests,
                "success_rate": round(s.success_rate, 3),
                "avg_latency_ms": s.avg_latency_ms,
                "last_error": s.last_error,
            }
            for url, s in self.stats.items()
        }


class ProviderRegistry:
    """
    Registry of REST providers by chain name.

    Implements BalanceSource. Use as an async context manager so every
    HTTP client is closed when the run ends.
    """

    def __init__(self):
        self._providers: dict[str, LCDProvider] = {}

    @classmethod
    def from_chains(
        cls,
        chain_registry: ChainRegistry,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ProviderRegistry":
        """Register one provider per chain of a ChainRegistry."""
        registry = cls()
        for chain in chain_registry:
            registry.register(
                chain.name,
                list(chain.rest_endpoints),
                timeout_seconds=timeout_seconds,
                transport=transport,
            )
        return registry

    def register(
        self,
        chain_name: str,
        rest_urls: list[str],
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> LCDProvider:
        """Register a provider for a chain."""
        provider = LCDProvider(chain_name, rest_urls, timeout_seconds, transport=transport)
        self._providers[chain_name] = provider
        return provider

    def get(self, chain_name: str) -> LCDProvider | None:
        """Get provider for a chain."""
        return self._providers.get(chain_name)

    async def get_all_balances(self, chain_name: str, address: str) -> list[Coin]:
        provider = self.get(chain_name)
        if provider is None:
            raise ConfigurationError(
                f"No balance provider registered for {chain_name}",
                code=ErrorCode.CONFIG_UNKNOWN_CHAIN,
                details={"chain": chain_name},
            )
        return await provider.get_all_balances(address)

    async def close_all(self) -> None:
        """Close all providers."""
        for provider in self._providers.values():
            await provider.close()
        self._providers.clear()

    async def __aenter__(self) -> "ProviderRegistry":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close_all()

    @property
    def chain_names(self) -> list[str]:
        """List of registered chain names."""
        return list(self._providers.keys())
