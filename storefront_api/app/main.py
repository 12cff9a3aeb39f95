"""
Main entrypoint for the Storefront API.

``create_app`` assembles the FastAPI application from an explicit
``Settings`` object: it sets up logging, builds one record store and
service per resource, installs middleware and mounts the routers at
the application root.  There is no module level app instance; run it
with uvicorn's factory mode, e.g.::

    uvicorn --factory storefront_api.app.main:create_app

or through ``run.py``, which also takes care of the port.
"""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router
from .core.config import Settings
from .core.errors import ResourceError
from .core.logging_config import setup_logging
from .core.middleware import install_middleware
from .core.store import RecordStore
from .schemas.product import Product
from .schemas.user import User
from .services.product_service import ProductService
from .services.user_service import UserService


def _store_path(settings: Settings, name: str) -> Optional[Path]:
    if not settings.data_dir:
        return None
    return Path(settings.data_dir) / f"{name}.json"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Startup configuration.  When omitted it is read from the
        environment with ``Settings.from_env``.

    Returns
    -------
    FastAPI
        A configured application.  Its services are reachable as
        ``app.state.user_service`` and ``app.state.product_service``.
    """
    if settings is None:
        settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.user_service = UserService(RecordStore(User, _store_path(settings, "users")))
    app.state.product_service = ProductService(RecordStore(Product, _store_path(settings, "products")))

    @app.exception_handler(ResourceError)
    async def resource_error_handler(request: Request, exc: ResourceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": jsonable_encoder(exc.errors())})

    install_middleware(app, settings.middleware)
    app.include_router(router)

    return app
