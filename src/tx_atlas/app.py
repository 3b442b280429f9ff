from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tx_atlas.api.errors import install_error_handlers
from tx_atlas.api.routes import chains, transactions
from tx_atlas.core import settings
from tx_atlas.domain.chains import parse_chains
from tx_atlas.integration.upstream import UpstreamClient, build_registry
from tx_atlas.logger import get_logger, setup_logging
from tx_atlas.services.transactions import TransactionQueryService

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        if not settings.UPSTREAM_URL:
            logger.warning("UPSTREAM_URL not set. Every transaction query will fail as internal error.")

        chain_specs = parse_chains(settings.CHAINS)
        if not chain_specs:
            logger.warning("CHAINS not set or empty. No chain integrations registered.")

        upstream = UpstreamClient()
        registry = build_registry(chain_specs, upstream)

        app.state.upstream = upstream
        app.state.registry = registry
        app.state.query_service = TransactionQueryService(registry)

        logger.info("Services initialized: %d chain(s), page size %d.", len(registry), settings.MAX_PAGE_SIZE)
        yield
        await upstream.aclose()
        logger.info("Service shutting down.")

    app = FastAPI(title="tx-atlas", lifespan=lifespan)
    install_error_handlers(app)

    app.include_router(chains.router)
    app.include_router(transactions.router)

    return app


app = create_app()
