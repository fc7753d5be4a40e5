"""
Main FastAPI application for the txledger API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..ledger import LedgerDriver, create_ledger_driver
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting txledger API...", environment=settings.environment)
    ledger: LedgerDriver = app.state.ledger

    # Fail fast: a missing ledger name aborts startup
    ledger.config.validate()

    ok, error = await ledger.ping()
    if ok:
        logger.info("Ledger reachable", ledger=ledger.config.ledger_name)
    else:
        logger.error(
            "Ledger connection check failed",
            ledger=ledger.config.ledger_name,
            error=error,
            note="Application will continue; requests touching the ledger will fail",
        )

    yield

    logger.info("Shutting down txledger API...")
    await ledger.dispose()


def create_app(ledger: LedgerDriver | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        ledger: Ledger driver used by the resolvers. Built from settings if omitted.
    """
    if ledger is None:
        ledger = create_ledger_driver()

    app = FastAPI(
        title="txledger API",
        description="Record and query account transactions on an append-only ledger",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.ledger = ledger

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        app.include_router(create_graphql_router(ledger), prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        # Server should not start with a broken schema
        raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "txledger.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
