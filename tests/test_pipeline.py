from tx_atlas.domain.pipeline import (
    annotate_direction,
    filter_by_memo,
    filter_by_token,
    filter_unique_id,
    normalize_account_txs,
    normalize_address_txs,
    normalize_xpub_txs,
    sort_by_date,
    truncate,
)
from tx_atlas.models import Direction

ADDRESS = "tz1WCd2jm4uSt4vntk4vSuUWoZQGhLcDuR9q"


def test_filter_unique_id_keeps_first_occurrence(record):
    first = record("a", 5)
    later = record("a", 7, memo="later")
    result = filter_unique_id([first, record("b", 3), later])

    assert [r.id for r in result] == ["a", "b"]
    assert result[0].timestamp == 5
    assert result[0].memo is None


def test_sort_by_date_is_descending_and_stable(record):
    records = [record("x", 1), record("y", 4), record("z", 4), record("w", 9)]
    result = sort_by_date(records)

    assert [r.id for r in result] == ["w", "y", "z", "x"]


def test_filter_by_memo_uses_predicate(record):
    records = [record("a", 1, memo="keep"), record("b", 2, memo="drop")]
    result = filter_by_memo(records, lambda r: r.memo != "drop")

    assert [r.id for r in result] == ["a"]


def test_default_memo_predicate_drops_control_characters(record):
    records = [record("a", 2, memo="12345"), record("b", 1, memo="bad\x00memo"), record("c", 0)]
    result = filter_by_memo(records)

    assert [r.id for r in result] == ["a", "c"]


def test_filter_by_token_matches_exactly(record):
    records = [record("a", 3, token_id="USDT"), record("b", 2, token_id="usdt"), record("c", 1)]

    assert [r.id for r in filter_by_token(records, "USDT")] == ["a"]


def test_truncate_keeps_head(record):
    records = [record(str(i), 10 - i) for i in range(5)]

    assert [r.id for r in truncate(records, 2)] == ["0", "1"]
    assert truncate(records, 10) == records


def test_direction_rules(record):
    records = [
        record("out", 4, senders=[ADDRESS], receivers=["other"]),
        record("in", 3, senders=["other"], receivers=[ADDRESS]),
        record("self", 2, senders=[ADDRESS], receivers=[ADDRESS]),
        record("none", 1, senders=["a"], receivers=["b"]),
    ]
    result = annotate_direction(records, ADDRESS)

    assert [r.direction for r in result] == [
        Direction.OUTGOING,
        Direction.INCOMING,
        Direction.YOURSELF,
        Direction.UNKNOWN,
    ]
    # inputs are not mutated
    assert all(r.direction is None for r in records)


def test_address_pipeline_dedups_overlapping_pages(record):
    records = [record("a", 5), record("b", 3), record("a", 5, memo="dup")]
    result = normalize_address_txs(records, ADDRESS, max_page_size=10)

    assert [(r.id, r.timestamp) for r in result] == [("a", 5), ("b", 3)]
    assert result[0].memo is None


def test_address_pipeline_page_size_one_keeps_newest(record):
    records = [record("old", 1), record("new", 2)]
    result = normalize_address_txs(records, ADDRESS, max_page_size=1)

    assert [r.id for r in result] == ["new"]


def test_address_pipeline_filters_token_before_truncating(record):
    records = [
        record("a", 9, token_id="other"),
        record("b", 8, token_id="other"),
        record("c", 7, token_id="TKN"),
        record("d", 6, token_id="TKN"),
    ]
    result = normalize_address_txs(records, ADDRESS, token="TKN", max_page_size=2)

    assert [r.id for r in result] == ["c", "d"]
    assert all(r.token_id == "TKN" for r in result)


def test_address_pipeline_without_token_ignores_token_id(record):
    records = [record("a", 2, token_id="X"), record("b", 1)]
    result = normalize_address_txs(records, ADDRESS, max_page_size=10)

    assert [r.id for r in result] == ["a", "b"]


def test_address_pipeline_sets_direction(record):
    result = normalize_address_txs([record("a", 1, senders=[ADDRESS])], ADDRESS, max_page_size=10)

    assert result[0].direction == Direction.OUTGOING


def test_account_pipeline_trusts_upstream_order(record):
    records = [record("a", 1), record("b", 9), record("a", 1), record("c", 5, memo="x\ny")]
    result = normalize_account_txs(records, "alice")

    # no dedup, no sort; memo filter still applies
    assert [r.id for r in result] == ["a", "b", "a"]
    assert all(r.direction == Direction.UNKNOWN for r in result)


def test_xpub_pipeline_never_sets_direction(record):
    records = [record("a", 1, senders=["addr"]), record("b", 3), record("a", 2)]
    result = normalize_xpub_txs(records, max_page_size=10)

    assert [r.id for r in result] == ["b", "a"]
    assert all(r.direction is None for r in result)
