"""
Normalization of upstream transaction sequences.

Stages run in a fixed order; reordering them changes the result:

1. drop duplicate ids (first occurrence wins)
2. stable sort by timestamp, newest first
3. drop records whose memo is not valid
4. keep only records of the requested token, when one is given
5. truncate to the page size
6. annotate direction relative to the queried address

Each query kind has its own named variant below. The account variant runs
only stages 3 and 6 because the account capability already returns ordered,
deduplicated and limited results.
"""
from collections.abc import Callable, Iterable

from tx_atlas.core import settings
from tx_atlas.models import TransactionRecord

MemoPredicate = Callable[[TransactionRecord], bool]


def default_memo_predicate(record: TransactionRecord) -> bool:
    return record.is_memo_valid(settings.MEMO_MAX_LENGTH)


def filter_unique_id(records: Iterable[TransactionRecord]) -> list[TransactionRecord]:
    seen: set[str] = set()
    unique: list[TransactionRecord] = []
    for record in records:
        if record.id in seen:
            continue
        seen.add(record.id)
        unique.append(record)
    return unique


def sort_by_date(records: list[TransactionRecord]) -> list[TransactionRecord]:
    # sorted() is stable, so equal timestamps keep their input order
    return sorted(records, key=lambda record: record.timestamp, reverse=True)


def filter_by_memo(
    records: list[TransactionRecord],
    is_valid: MemoPredicate = default_memo_predicate,
) -> list[TransactionRecord]:
    return [record for record in records if is_valid(record)]


def filter_by_token(records: list[TransactionRecord], token: str) -> list[TransactionRecord]:
    return [record for record in records if record.token_id == token]


def truncate(records: list[TransactionRecord], max_size: int) -> list[TransactionRecord]:
    if len(records) > max_size:
        return records[:max_size]
    return records


def annotate_direction(records: list[TransactionRecord], address: str) -> list[TransactionRecord]:
    return [
        record.model_copy(update={"direction": record.direction_for(address)})
        for record in records
    ]


def normalize_address_txs(
    records: Iterable[TransactionRecord],
    address: str,
    *,
    token: str | None = None,
    max_page_size: int | None = None,
    is_memo_valid: MemoPredicate = default_memo_predicate,
) -> list[TransactionRecord]:
    limit = settings.MAX_PAGE_SIZE if max_page_size is None else max_page_size

    result = sort_by_date(filter_unique_id(records))
    result = filter_by_memo(result, is_memo_valid)
    if token:
        result = filter_by_token(result, token)
    result = truncate(result, limit)
    return annotate_direction(result, address)


def normalize_account_txs(
    records: Iterable[TransactionRecord],
    account: str,
    *,
    is_memo_valid: MemoPredicate = default_memo_predicate,
) -> list[TransactionRecord]:
    result = filter_by_memo(list(records), is_memo_valid)
    return annotate_direction(result, account)


def normalize_xpub_txs(
    records: Iterable[TransactionRecord],
    *,
    max_page_size: int | None = None,
    is_memo_valid: MemoPredicate = default_memo_predicate,
) -> list[TransactionRecord]:
    limit = settings.MAX_PAGE_SIZE if max_page_size is None else max_page_size

    result = sort_by_date(filter_unique_id(records))
    result = filter_by_memo(result, is_memo_valid)
    return truncate(result, limit)
