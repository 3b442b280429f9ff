from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from tx_atlas.models import TransactionRecord


class Capability(str, Enum):
    TX = "tx"
    TOKEN = "token"
    ACCOUNT = "account"
    XPUB = "xpub"


class Platform(ABC):
    """A single chain integration."""

    @property
    @abstractmethod
    def coin(self) -> str:
        """Handle used in request paths, e.g. ``bitcoin``."""

    @property
    @abstractmethod
    def coin_id(self) -> int:
        """Numeric chain identifier carried on every record."""

    def capabilities(self, enabled: frozenset[Capability] | None = None) -> "CapabilitySet":
        return CapabilitySet.from_platform(self, enabled)


class TxAPI(ABC):
    @abstractmethod
    async def get_txs_by_address(self, address: str) -> list[TransactionRecord]:
        pass


class TokenTxAPI(ABC):
    @abstractmethod
    async def get_token_txs_by_address(self, address: str, token: str) -> list[TransactionRecord]:
        pass


class AccountTxAPI(ABC):
    @abstractmethod
    async def get_txs_by_account(
        self, account: str, token: str | None, max_results: int
    ) -> list[TransactionRecord]:
        """Results must already be ordered, deduplicated and limited to max_results."""
        pass


class XpubTxAPI(ABC):
    @abstractmethod
    async def get_txs_by_xpub(self, xpub: str) -> list[TransactionRecord]:
        pass


@dataclass(frozen=True)
class CapabilitySet:
    """What a platform can serve. An unsupported capability is None."""

    coin: str
    tx: TxAPI | None = None
    token: TokenTxAPI | None = None
    account: AccountTxAPI | None = None
    xpub: XpubTxAPI | None = None

    @classmethod
    def from_platform(
        cls,
        platform: Platform,
        enabled: frozenset[Capability] | None = None,
    ) -> "CapabilitySet":
        def pick(api_type: type, capability: Capability):
            if not isinstance(platform, api_type):
                return None
            if enabled is not None and capability not in enabled:
                return None
            return platform

        return cls(
            coin=platform.coin,
            tx=pick(TxAPI, Capability.TX),
            token=pick(TokenTxAPI, Capability.TOKEN),
            account=pick(AccountTxAPI, Capability.ACCOUNT),
            xpub=pick(XpubTxAPI, Capability.XPUB),
        )

    def supported(self) -> list[Capability]:
        present = {
            Capability.TX: self.tx,
            Capability.TOKEN: self.token,
            Capability.ACCOUNT: self.account,
            Capability.XPUB: self.xpub,
        }
        return [capability for capability, api in present.items() if api is not None]
