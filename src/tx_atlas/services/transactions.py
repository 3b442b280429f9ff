from time import perf_counter

from tx_atlas.core import settings
from tx_atlas.domain.pipeline import normalize_account_txs, normalize_address_txs, normalize_xpub_txs
from tx_atlas.domain.queries import AccountQuery, AddressQuery, QueryIdentifier, XpubQuery
from tx_atlas.errors import InvalidAddressError, InvalidKeyError
from tx_atlas.logger import get_logger
from tx_atlas.models import TransactionPage, TransactionRecord
from tx_atlas.platform.registry import ChainRegistry
from tx_atlas.platform.resolver import resolve

logger = get_logger(__name__)


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def _clean_token(token: str | None) -> str | None:
    if token is None:
        return None
    return token.strip() or None


class TransactionQueryService:
    def __init__(self, registry: ChainRegistry, max_page_size: int | None = None) -> None:
        self.registry = registry
        self.max_page_size = settings.MAX_PAGE_SIZE if max_page_size is None else max_page_size

    async def _fetch(self, coin: str, query: QueryIdentifier) -> list[TransactionRecord]:
        capabilities = self.registry.capabilities(coin)
        resolved = resolve(query, capabilities, max_results=self.max_page_size)

        started = perf_counter()
        records = await resolved.call()
        logger.debug(
            "[QUERY] %s %s capability returned %d records in %.1f ms",
            coin,
            resolved.capability.value,
            len(records),
            (perf_counter() - started) * 1000,
        )
        return records

    async def get_transactions_by_address(
        self, coin: str, address: str, token: str | None = None
    ) -> TransactionPage:
        if _is_blank(address):
            raise InvalidAddressError()
        token = _clean_token(token)

        records = await self._fetch(coin, AddressQuery(address=address, token=token))
        result = normalize_address_txs(
            records,
            address,
            token=token,
            max_page_size=self.max_page_size,
        )
        return TransactionPage.from_records(result)

    async def get_transactions_by_account(
        self, coin: str, account: str, token: str | None = None
    ) -> TransactionPage:
        if _is_blank(account):
            raise InvalidAddressError()

        records = await self._fetch(coin, AccountQuery(account=account, token=_clean_token(token)))
        return TransactionPage.from_records(normalize_account_txs(records, account))

    async def get_transactions_by_xpub(self, coin: str, xpub: str) -> TransactionPage:
        if _is_blank(xpub):
            raise InvalidKeyError()

        records = await self._fetch(coin, XpubQuery(xpub=xpub))
        return TransactionPage.from_records(
            normalize_xpub_txs(records, max_page_size=self.max_page_size)
        )
