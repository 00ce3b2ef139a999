"""
Stockroom - Warehouse Stock Ledger
FastAPI Application Entry Point
"""
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from contextlib import asynccontextmanager
from typing import Optional
import logging

from stockroom.core import Settings, get_settings, make_engine, make_session_factory, StockroomError
from stockroom.core.logging import configure_logging
from stockroom.api.router import api_router
from stockroom.services.seed_service import init_database

logger = logging.getLogger("stockroom")

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    engine = make_engine(settings)
    session_factory = make_session_factory(engine)

    # Lifespan for startup/shutdown
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: Create tables and seed an empty store
        if settings.SEED_ON_STARTUP:
            init_database(engine, session_factory)
        logger.info(f"{settings.APP_NAME} starting on port {settings.APP_PORT}")

        yield

        engine.dispose()
        logger.info(f"{settings.APP_NAME} shutting down")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Warehouse stock ledger: products, racks, containers and stock movements",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    @app.exception_handler(StockroomError)
    async def stockroom_error_handler(request: Request, exc: StockroomError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    # Include routers
    app.include_router(api_router, prefix="/api")

    # Root redirect to API docs
    @app.get("/")
    async def root():
        return RedirectResponse(url="/docs")

    # Health check
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "app": settings.APP_NAME}

    return app

app = create_app()

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG
    )
