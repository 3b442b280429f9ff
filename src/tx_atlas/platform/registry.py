from tx_atlas.errors import UnknownCoinError
from tx_atlas.logger import get_logger
from tx_atlas.platform.base import Capability, CapabilitySet, Platform

logger = get_logger(__name__)


class ChainRegistry:
    def __init__(self) -> None:
        self._platforms: dict[str, Platform] = {}
        self._capabilities: dict[str, CapabilitySet] = {}

    def register(self, platform: Platform, enabled: frozenset[Capability] | None = None) -> None:
        coin = platform.coin.lower()
        if coin in self._platforms:
            raise ValueError(f"Chain '{coin}' is already registered")
        capabilities = platform.capabilities(enabled)
        self._platforms[coin] = platform
        self._capabilities[coin] = capabilities
        logger.info(
            "[REGISTRY] Registered %s (id=%s) with capabilities: %s",
            coin,
            platform.coin_id,
            ", ".join(c.value for c in capabilities.supported()) or "(none)",
        )

    def get(self, coin: str) -> Platform:
        platform = self._platforms.get(coin.lower())
        if platform is None:
            raise UnknownCoinError(coin)
        return platform

    def capabilities(self, coin: str) -> CapabilitySet:
        capabilities = self._capabilities.get(coin.lower())
        if capabilities is None:
            raise UnknownCoinError(coin)
        return capabilities

    def coins(self) -> list[str]:
        return sorted(self._platforms)

    def __contains__(self, coin: str) -> bool:
        return coin.lower() in self._platforms

    def __len__(self) -> int:
        return len(self._platforms)
