import asyncio
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from tx_atlas.core import settings
from tx_atlas.domain.chains import ChainSpec
from tx_atlas.errors import (
    InternalError,
    InvalidAddressError,
    InvalidKeyError,
    NotFoundError,
    SourceUnavailableError,
    UpstreamError,
)
from tx_atlas.logger import get_logger
from tx_atlas.models import TransactionRecord
from tx_atlas.platform.base import AccountTxAPI, Platform, TokenTxAPI, TxAPI, XpubTxAPI
from tx_atlas.platform.registry import ChainRegistry

logger = get_logger(__name__)


class UpstreamClient:
    """Shared HTTP client for the indexer that backs every remote platform."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.UPSTREAM_URL or "").rstrip("/") or None
        self.token = token or settings.UPSTREAM_TOKEN
        self.timeout = settings.UPSTREAM_TIMEOUT if timeout is None else timeout
        self.headers = {"Accept": "application/json"}
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"
        self._client = client
        self._client_lock = asyncio.Lock()

    async def aclose(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _get_client(self) -> httpx.AsyncClient:
        client = self._client
        if client is not None and not client.is_closed:
            return client

        async with self._client_lock:
            client = self._client
            if client is None or client.is_closed:
                client = httpx.AsyncClient()
                self._client = client
            return client

    async def fetch_docs(
        self,
        segments: tuple[str, ...],
        params: dict[str, Any] | None = None,
        *,
        invalid_error: type[UpstreamError] = InvalidAddressError,
    ) -> list[dict[str, Any]]:
        if not self.base_url:
            raise InternalError("upstream URL is not configured")

        path = build_path(segments, invalid_error)
        url = f"{self.base_url}/{path}"
        client = await self._get_client()
        try:
            response = await client.get(url, headers=self.headers, params=params, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise _classify_status(exc.response.status_code, invalid_error) from exc
        except httpx.TransportError as exc:
            logger.warning("[UPSTREAM] Request to %s failed: %s", url, exc)
            raise SourceUnavailableError() from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise InternalError(f"upstream returned invalid JSON for {path}") from exc

        docs = payload.get("docs") if isinstance(payload, dict) else payload
        if not isinstance(docs, list):
            raise InternalError(f"upstream returned unexpected payload for {path}")
        return docs


def build_path(segments: tuple[str, ...], invalid_error: type[UpstreamError]) -> str:
    """Percent-encode each segment so identifiers cannot alter the upstream route."""
    for segment in segments:
        if segment in {".", ".."}:
            raise invalid_error()
    return "/".join(quote(segment, safe="") for segment in segments)


def _classify_status(status_code: int, invalid_error: type[UpstreamError]) -> UpstreamError:
    if status_code in {400, 422}:
        return invalid_error()
    if status_code == 404:
        return NotFoundError()
    if status_code >= 500 or status_code == 429:
        return SourceUnavailableError()
    return InternalError(f"upstream returned HTTP {status_code}")


class RemotePlatform(Platform, TxAPI, TokenTxAPI, AccountTxAPI, XpubTxAPI):
    """
    Chain integration served by the indexer over HTTP.

    Implements every capability interface; which ones are exposed is decided
    by the capability list it is registered with.
    """

    def __init__(self, coin: str, coin_id: int, client: UpstreamClient) -> None:
        self._coin = coin
        self._coin_id = coin_id
        self.client = client

    @property
    def coin(self) -> str:
        return self._coin

    @property
    def coin_id(self) -> int:
        return self._coin_id

    def _to_records(self, docs: list[dict[str, Any]]) -> list[TransactionRecord]:
        try:
            return [
                TransactionRecord.model_validate({"coin": self._coin_id, **doc})
                for doc in docs
            ]
        except (ValidationError, TypeError) as exc:
            raise InternalError(f"malformed transaction from upstream for {self._coin}: {exc}") from exc

    async def get_txs_by_address(self, address: str) -> list[TransactionRecord]:
        docs = await self.client.fetch_docs((self._coin, "transactions", address))
        return self._to_records(docs)

    async def get_token_txs_by_address(self, address: str, token: str) -> list[TransactionRecord]:
        docs = await self.client.fetch_docs(
            (self._coin, "transactions", address),
            params={"token": token},
        )
        return self._to_records(docs)

    async def get_txs_by_account(
        self, account: str, token: str | None, max_results: int
    ) -> list[TransactionRecord]:
        params: dict[str, Any] = {"limit": max_results}
        if token:
            params["token"] = token
        docs = await self.client.fetch_docs(
            (self._coin, "transactions", "account", account),
            params=params,
        )
        return self._to_records(docs)

    async def get_txs_by_xpub(self, xpub: str) -> list[TransactionRecord]:
        docs = await self.client.fetch_docs(
            (self._coin, "transactions", "xpub", xpub),
            invalid_error=InvalidKeyError,
        )
        return self._to_records(docs)


def build_registry(chains: list[ChainSpec], client: UpstreamClient) -> ChainRegistry:
    registry = ChainRegistry()
    for chain in chains:
        registry.register(RemotePlatform(chain.coin, chain.coin_id, client), chain.capabilities)
    return registry
