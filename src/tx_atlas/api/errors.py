from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tx_atlas.logger import get_logger
from tx_atlas.services.error_mapping import ResponseClass, map_failure

logger = get_logger(__name__)


def failure_to_http(exc: Exception, context: str) -> HTTPException:
    """Map a failed query to an HTTPException and log it once."""
    mapped = map_failure(exc)
    if mapped.classification is ResponseClass.INTERNAL_ERROR:
        logger.exception("[QUERY] %s failed: %s", context, mapped.message)
    elif mapped.classification is ResponseClass.SERVICE_UNAVAILABLE:
        logger.error("[QUERY] %s failed, upstream unavailable: %s", context, mapped.message)
    else:
        logger.warning("[QUERY] %s rejected (%s): %s", context, mapped.classification.value, mapped.message)
    return HTTPException(status_code=mapped.status_code, detail=mapped.message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def install_error_handlers(app: FastAPI) -> None:
    # Render every HTTP error as {"error": message}
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
