from typing import Annotated

from fastapi import APIRouter, Depends

from tx_atlas.api.dependencies import get_query_service
from tx_atlas.api.errors import failure_to_http
from tx_atlas.api.schemas import ErrorResponse
from tx_atlas.models import TransactionPage
from tx_atlas.services.transactions import TransactionQueryService

router = APIRouter(tags=["Transactions"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.get("/v1/{coin}/{address}", response_model=TransactionPage, responses=_ERROR_RESPONSES)
@router.get(
    "/v2/{coin}/transactions/{address}",
    response_model=TransactionPage,
    responses=_ERROR_RESPONSES,
)
async def get_transactions_by_address(
    coin: str,
    address: str,
    service: Annotated[TransactionQueryService, Depends(get_query_service)],
    token: str | None = None,
) -> TransactionPage:
    try:
        return await service.get_transactions_by_address(coin, address, token)
    except Exception as exc:
        raise failure_to_http(exc, f"{coin} address query") from exc


@router.get(
    "/v2/{coin}/transactions/account/{account}",
    response_model=TransactionPage,
    responses=_ERROR_RESPONSES,
)
async def get_transactions_by_account(
    coin: str,
    account: str,
    service: Annotated[TransactionQueryService, Depends(get_query_service)],
    token: str | None = None,
) -> TransactionPage:
    try:
        return await service.get_transactions_by_account(coin, account, token)
    except Exception as exc:
        raise failure_to_http(exc, f"{coin} account query") from exc


@router.get(
    "/v2/{coin}/transactions/xpub/{xpub}",
    response_model=TransactionPage,
    responses=_ERROR_RESPONSES,
)
async def get_transactions_by_xpub(
    coin: str,
    xpub: str,
    service: Annotated[TransactionQueryService, Depends(get_query_service)],
) -> TransactionPage:
    try:
        return await service.get_transactions_by_xpub(coin, xpub)
    except Exception as exc:
        raise failure_to_http(exc, f"{coin} xpub query") from exc
