"""FastAPI app initialization, exception handling"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tagchip.config import Config, get_config
from tagchip.errors.base import ApplicationError
from tagchip.errors.identifier import IdentifierExhausted
from tagchip.routes.asset import asset_router
from tagchip.routes.claim import claim_router
from tagchip.routes.events import events_router
from tagchip.routes.profile import profile_router
from tagchip.routes.project import project_router
from tagchip.routes.redirect import redirect_router
from tagchip.routes.resource import resource_router
from tagchip.routes.tag import tag_router

logger = logging.getLogger(__name__)


def application_exception_handler(request: Request, exc: ApplicationError):
    c = {
        "error_code": exc.error_code,
        "error": exc.error,
        "where": exc.where,
    }
    if isinstance(exc, IdentifierExhausted):
        logger.error("%s %s: %s", request.method, request.url.path, c)
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, c)
    # Only print full traceback when in debug logging
    if logger.isEnabledFor(logging.DEBUG):
        traceback.print_exception(exc)
    return JSONResponse(status_code=exc.http_code or 418, content=c)


def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(exc)
    if logger.isEnabledFor(logging.DEBUG):
        traceback.print_exception(exc)
    return JSONResponse(
        status_code=418,
        content={"error_code": 1500, "error": exc._message()},
    )


def app_factory() -> FastAPI:
    config: Config = get_config()
    app = FastAPI(title=config.app_name, version=config.app_version)
    app.add_exception_handler(ApplicationError, application_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)

    app.include_router(project_router)
    app.include_router(asset_router)
    app.include_router(resource_router)
    app.include_router(profile_router)
    app.include_router(tag_router)
    app.include_router(claim_router)
    app.include_router(redirect_router)
    app.include_router(events_router)
    return app


app = app_factory()
