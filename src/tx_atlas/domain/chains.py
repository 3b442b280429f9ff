from dataclasses import dataclass

from tx_atlas.logger import get_logger
from tx_atlas.platform.base import Capability

logger = get_logger(__name__)

# SLIP-0044 coin types
COIN_IDS: dict[str, int] = {
    "bitcoin": 0,
    "litecoin": 2,
    "dogecoin": 3,
    "ethereum": 60,
    "zcash": 133,
    "cosmos": 118,
    "ripple": 144,
    "stellar": 148,
    "tron": 195,
    "near": 397,
    "solana": 501,
    "binance": 714,
    "tezos": 1729,
}


@dataclass(frozen=True)
class ChainSpec:
    coin: str
    coin_id: int
    capabilities: frozenset[Capability]


def _parse_capabilities(raw: str) -> frozenset[Capability]:
    capabilities = set()
    for part in raw.split("+"):
        name = part.strip().lower()
        if not name:
            continue
        capabilities.add(Capability(name))
    return frozenset(capabilities)


def parse_chain_entry(entry: str) -> ChainSpec:
    """
    Parse ``coin[=id]:cap+cap``, e.g. ``bitcoin:tx+xpub`` or ``mychain=9000:tx``.
    Raises ValueError on malformed entries.
    """
    head, sep, caps = entry.partition(":")
    if not sep:
        raise ValueError(f"missing capability list in '{entry}'")

    coin, _, raw_id = head.partition("=")
    coin = coin.strip().lower()
    if not coin:
        raise ValueError(f"missing coin name in '{entry}'")

    if raw_id.strip():
        coin_id = int(raw_id)
    elif coin in COIN_IDS:
        coin_id = COIN_IDS[coin]
    else:
        raise ValueError(f"unknown coin '{coin}' needs an explicit id")

    capabilities = _parse_capabilities(caps)
    if not capabilities:
        raise ValueError(f"empty capability list in '{entry}'")
    return ChainSpec(coin=coin, coin_id=coin_id, capabilities=capabilities)


def parse_chains(raw: str | None) -> list[ChainSpec]:
    if not raw:
        return []

    chains: list[ChainSpec] = []
    seen: set[str] = set()
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        try:
            chain = parse_chain_entry(entry)
        except ValueError as exc:
            logger.warning("[REGISTRY] Skipping chain entry '%s': %s", entry, exc)
            continue
        if chain.coin in seen:
            logger.warning("[REGISTRY] Duplicate chain '%s', keeping the first entry.", chain.coin)
            continue
        seen.add(chain.coin)
        chains.append(chain)
    return chains
