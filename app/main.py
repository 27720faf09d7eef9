from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from app.routers import jobs, decks
from app.services.job_manager import build_stores
from config.config_loader import load_store_config
from core.logging_manager import setup_loggers
from .graphql import graphql_app

success_logger, fail_logger = setup_loggers(logger_name="app_main")


# Load persisted jobs/decks once at startup; every request shares this handle
@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "stores", None) is None:
        app.state.stores = build_stores(load_store_config())
    success_logger.info("Deck job store API started")
    yield


def create_app(stores=None) -> FastAPI:
    app = FastAPI(title="Deck Generation Job Store", lifespan=lifespan)
    app.state.stores = stores

    # REST routers
    app.include_router(jobs.router)
    app.include_router(decks.router)

    # GraphQL endpoint (read-only)
    app.include_router(graphql_app, prefix="/graphql")

    @app.get("/health")
    def health():
        return {"ok": True}

    # Define root router
    @app.get("/")
    def root():
        return RedirectResponse(url="/docs")

    return app


app = create_app()
