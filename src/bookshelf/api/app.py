"""
Main FastAPI application for the Bookshelf GraphQL API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Settings, settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..services.library import LibraryService
from ..store import BackingStore, create_store

# Configure logging before creating logger
configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)


def get_library(request: Request) -> LibraryService:
    """Return the library service bound to the running application."""
    return request.app.state.library


def create_app(
    app_settings: Settings | None = None, store: BackingStore | None = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; read fresh from the environment when omitted
        store: Backing store to use instead of building one from settings
    """
    config = app_settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Bookshelf API...")
        backing_store = store or create_store(config)
        app.state.library = LibraryService.for_store(
            backing_store, strict_delete=config.strict_delete
        )
        logger.info(
            "Backing store ready",
            backend=backing_store.backend,
            strict_delete=app.state.library.strict_delete,
        )

        yield

        logger.info("Shutting down Bookshelf API...")
        await backing_store.close()

    app = FastAPI(
        title="Bookshelf API",
        description="GraphQL API over books and authors",
        version=__version__,
        lifespan=lifespan,
        debug=config.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check(request: Request):  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        library = getattr(request.app.state, "library", None)
        return {
            "status": "healthy",
            "version": __version__,
            "store_backend": library.store.backend if library else None,
        }

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        graphql_router = create_graphql_router(get_library, graphiql=config.debug)
        app.include_router(graphql_router, prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookshelf.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
