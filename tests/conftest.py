from collections.abc import Callable

import pytest

from tx_atlas.models import TransactionRecord
from tx_atlas.platform.base import AccountTxAPI, Platform, TokenTxAPI, TxAPI, XpubTxAPI
from tx_atlas.platform.registry import ChainRegistry


def make_record(
    tx_id: str,
    timestamp: int,
    *,
    senders: list[str] | None = None,
    receivers: list[str] | None = None,
    memo: str | None = None,
    token_id: str | None = None,
) -> TransactionRecord:
    return TransactionRecord(
        id=tx_id,
        coin=1729,
        timestamp=timestamp,
        senders=senders or [],
        receivers=receivers or [],
        memo=memo,
        token_id=token_id,
    )


class StubPlatform(Platform, TxAPI, TokenTxAPI, AccountTxAPI, XpubTxAPI):
    """Serves canned records (or raises a canned error) and records every call."""

    def __init__(
        self,
        coin: str = "tezos",
        coin_id: int = 1729,
        records: list[TransactionRecord] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._coin = coin
        self._coin_id = coin_id
        self.records = records or []
        self.error = error
        self.calls: list[tuple] = []

    @property
    def coin(self) -> str:
        return self._coin

    @property
    def coin_id(self) -> int:
        return self._coin_id

    def _answer(self, *call: object) -> list[TransactionRecord]:
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        return list(self.records)

    async def get_txs_by_address(self, address: str) -> list[TransactionRecord]:
        return self._answer("tx", address)

    async def get_token_txs_by_address(self, address: str, token: str) -> list[TransactionRecord]:
        return self._answer("token", address, token)

    async def get_txs_by_account(
        self, account: str, token: str | None, max_results: int
    ) -> list[TransactionRecord]:
        return self._answer("account", account, token, max_results)

    async def get_txs_by_xpub(self, xpub: str) -> list[TransactionRecord]:
        return self._answer("xpub", xpub)


class TxOnlyPlatform(Platform, TxAPI):
    def __init__(self, records: list[TransactionRecord] | None = None) -> None:
        self.records = records or []
        self.calls: list[str] = []

    @property
    def coin(self) -> str:
        return "ripple"

    @property
    def coin_id(self) -> int:
        return 144

    async def get_txs_by_address(self, address: str) -> list[TransactionRecord]:
        self.calls.append(address)
        return list(self.records)


@pytest.fixture
def record() -> Callable[..., TransactionRecord]:
    return make_record


@pytest.fixture
def stub_platform() -> StubPlatform:
    return StubPlatform()


@pytest.fixture
def tx_only_platform() -> TxOnlyPlatform:
    return TxOnlyPlatform()


@pytest.fixture
def registry(stub_platform: StubPlatform, tx_only_platform: TxOnlyPlatform) -> ChainRegistry:
    registry = ChainRegistry()
    registry.register(stub_platform)
    registry.register(tx_only_platform)
    return registry
