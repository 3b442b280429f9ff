from fastapi import HTTPException, Request

from tx_atlas.platform.registry import ChainRegistry
from tx_atlas.services.transactions import TransactionQueryService


def get_registry(request: Request) -> ChainRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return registry


def get_query_service(request: Request) -> TransactionQueryService:
    service = getattr(request.app.state, "query_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return service
