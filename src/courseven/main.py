"""FastAPI application entrypoint for Courseven."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1.router import api_router
from .core.config import Settings, get_settings
from .core.exceptions import MissingAccessToken, TableGatewayError
from .core.gateway import TableGateway
from .wiring import build_gateway

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(MissingAccessToken)
    async def _missing_token(request: Request, exc: MissingAccessToken) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(TableGatewayError)
    async def _table_store_error(request: Request, exc: TableGatewayError) -> JSONResponse:
        logger.warning("table store failure on %s %s: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app(settings: Optional[Settings] = None, gateway: Optional[TableGateway] = None) -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Courseven API", version="0.1.0")
    app.state.settings = settings
    app.state.gateway = gateway or build_gateway(settings)
    app.include_router(api_router, prefix="/api/v1")
    register_exception_handlers(app)
    return app


app = create_app()
