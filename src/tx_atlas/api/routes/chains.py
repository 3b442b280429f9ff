from typing import Annotated

from fastapi import APIRouter, Depends

from tx_atlas.api.dependencies import get_registry
from tx_atlas.api.errors import failure_to_http
from tx_atlas.api.schemas import CapabilitiesResponse, ErrorResponse
from tx_atlas.errors import UnknownCoinError
from tx_atlas.platform.registry import ChainRegistry

router = APIRouter()


@router.get("/health")
async def health(registry: Annotated[ChainRegistry, Depends(get_registry)]) -> dict[str, object]:
    return {"status": "ok", "chains": len(registry)}


@router.get("/v2/chains")
async def list_chains(registry: Annotated[ChainRegistry, Depends(get_registry)]) -> list[str]:
    return registry.coins()


@router.get(
    "/v2/{coin}/capabilities",
    response_model=CapabilitiesResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_capabilities(
    coin: str,
    registry: Annotated[ChainRegistry, Depends(get_registry)],
) -> CapabilitiesResponse:
    try:
        platform = registry.get(coin)
        capabilities = registry.capabilities(coin)
    except UnknownCoinError as exc:
        raise failure_to_http(exc, f"{coin} capabilities") from exc

    return CapabilitiesResponse(
        coin=platform.coin,
        coin_id=platform.coin_id,
        capabilities=[capability.value for capability in capabilities.supported()],
    )
