from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from tx_atlas.domain.queries import AccountQuery, AddressQuery, QueryIdentifier, XpubQuery
from tx_atlas.errors import NoCapabilityError
from tx_atlas.models import TransactionRecord
from tx_atlas.platform.base import Capability, CapabilitySet

UpstreamCall = Callable[[], Awaitable[list[TransactionRecord]]]


@dataclass(frozen=True)
class ResolvedCall:
    capability: Capability
    call: UpstreamCall


def _active_token(token: str | None) -> str | None:
    if token is None:
        return None
    return token.strip() or None


def resolve(query: QueryIdentifier, capabilities: CapabilitySet, *, max_results: int) -> ResolvedCall:
    """
    Pick the upstream capability that serves ``query``.

    Only the capability set is consulted, never the chain itself. Raises
    NoCapabilityError when the required capability is absent.
    """
    if isinstance(query, AddressQuery):
        token = _active_token(query.token)
        if token:
            if capabilities.token is None:
                raise NoCapabilityError(capabilities.coin, Capability.TOKEN.value)
            return ResolvedCall(
                Capability.TOKEN,
                partial(capabilities.token.get_token_txs_by_address, query.address, token),
            )
        if capabilities.tx is None:
            raise NoCapabilityError(capabilities.coin, Capability.TX.value)
        return ResolvedCall(Capability.TX, partial(capabilities.tx.get_txs_by_address, query.address))

    if isinstance(query, AccountQuery):
        if capabilities.account is None:
            raise NoCapabilityError(capabilities.coin, Capability.ACCOUNT.value)
        return ResolvedCall(
            Capability.ACCOUNT,
            partial(
                capabilities.account.get_txs_by_account,
                query.account,
                _active_token(query.token),
                max_results,
            ),
        )

    if isinstance(query, XpubQuery):
        if capabilities.xpub is None:
            raise NoCapabilityError(capabilities.coin, Capability.XPUB.value)
        return ResolvedCall(Capability.XPUB, partial(capabilities.xpub.get_txs_by_xpub, query.xpub))

    raise TypeError(f"Unsupported query type: {type(query).__name__}")
