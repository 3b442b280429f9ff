from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from tx_atlas.app import app
from tx_atlas.errors import NotFoundError, SourceUnavailableError
from tx_atlas.platform.registry import ChainRegistry
from tx_atlas.services.transactions import TransactionQueryService

client = TestClient(app)

ADDRESS = "tz1WCd2jm4uSt4vntk4vSuUWoZQGhLcDuR9q"


@pytest.fixture(autouse=True)
def app_state(registry: ChainRegistry) -> Generator[None, None, None]:
    original = {name: getattr(app.state, name, None) for name in ("registry", "query_service")}
    app.state.registry = registry
    app.state.query_service = TransactionQueryService(registry, max_page_size=2)
    yield
    for name, value in original.items():
        if value is None:
            delattr(app.state, name)
        else:
            setattr(app.state, name, value)


@pytest.mark.parametrize("path", [f"/v1/tezos/{ADDRESS}", f"/v2/tezos/transactions/{ADDRESS}"])
def test_address_routes_return_page(path, stub_platform, record):
    stub_platform.records = [
        record("a", 1),
        record("b", 3, senders=[ADDRESS]),
        record("c", 2, receivers=[ADDRESS]),
        record("b", 3),
    ]

    response = client.get(path)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["status"] is True
    assert [tx["id"] for tx in data["docs"]] == ["b", "c"]
    assert [tx["direction"] for tx in data["docs"]] == ["outgoing", "incoming"]


def test_token_query_param(stub_platform, record):
    stub_platform.records = [record("a", 1, token_id="USDT"), record("b", 2, token_id="BNB")]

    response = client.get(f"/v2/tezos/transactions/{ADDRESS}", params={"token": "USDT"})

    assert response.status_code == 200
    assert [tx["id"] for tx in response.json()["docs"]] == ["a"]
    assert stub_platform.calls == [("token", ADDRESS, "USDT")]


def test_account_route(stub_platform, record):
    stub_platform.records = [record("a", 1), record("b", 2)]

    response = client.get("/v2/tezos/transactions/account/alice", params={"token": "EOS"})

    assert response.status_code == 200
    assert [tx["id"] for tx in response.json()["docs"]] == ["a", "b"]
    assert stub_platform.calls == [("account", "alice", "EOS", 2)]


def test_xpub_route_has_no_direction(stub_platform, record):
    stub_platform.records = [record("a", 1, senders=["x"])]

    response = client.get("/v2/tezos/transactions/xpub/zpub6ruK9k")

    assert response.status_code == 200
    assert response.json()["docs"][0]["direction"] is None


@pytest.mark.parametrize(
    "error,status",
    [
        (NotFoundError(), 404),
        (SourceUnavailableError(), 503),
        (RuntimeError("indexer exploded"), 500),
    ],
)
def test_upstream_failures_are_mapped(stub_platform, error, status):
    stub_platform.error = error

    response = client.get(f"/v2/tezos/transactions/{ADDRESS}")

    assert response.status_code == status
    assert response.json() == {"error": str(error)}


def test_missing_token_capability_is_internal_error():
    response = client.get("/v2/ripple/transactions/rAddr", params={"token": "USD"})

    assert response.status_code == 500
    assert "no capability for this coin" in response.json()["error"]


def test_unknown_coin_is_not_found():
    response = client.get(f"/v2/dogecash/transactions/{ADDRESS}")

    assert response.status_code == 404
    assert response.json() == {"error": "unknown coin: dogecash"}


def test_capabilities_route():
    response = client.get("/v2/ripple/capabilities")

    assert response.status_code == 200
    assert response.json() == {"coin": "ripple", "coin_id": 144, "capabilities": ["tx"]}


def test_health_and_chains():
    assert client.get("/health").json() == {"status": "ok", "chains": 2}
    assert client.get("/v2/chains").json() == ["ripple", "tezos"]
