"""FastAPI entrypoint wiring the catalog routers for every API version."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from movies.core.config import get_settings
from movies.core.errors import register_error_handlers
from movies.db import init_models
from movies.routers import movie, token

logger = logging.getLogger(__name__)

# version -> deprecated
API_VERSIONS = {"v1": True, "v2": False}
SUPPORTED_VERSIONS = ", ".join(v.lstrip("v") + ".0" for v in API_VERSIONS)
DEPRECATED_VERSIONS = ", ".join(v.lstrip("v") + ".0" for v, old in API_VERSIONS.items() if old)

DESCRIPTION = (
    "Movies management API.\n\n"
    "1. `GET /api/v2/Token` to obtain a JWT.\n"
    "2. Send it as `Authorization: Bearer <token>` on the Movie endpoints."
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Ensure database tables exist before serving."""

    init_models()
    logger.info("Movies API ready (environment=%s)", get_settings().environment)
    yield


def report_api_versions(response: Response) -> None:
    response.headers["api-supported-versions"] = SUPPORTED_VERSIONS
    if DEPRECATED_VERSIONS:
        response.headers["api-deprecated-versions"] = DEPRECATED_VERSIONS


def _configure_cors(app: FastAPI) -> None:
    settings = get_settings()
    if settings.is_development:
        origins = ["*"]
    else:
        origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    app = FastAPI(title="Movies API", description=DESCRIPTION, lifespan=lifespan)
    register_error_handlers(app)
    _configure_cors(app)

    for version, deprecated in API_VERSIONS.items():
        dependencies = [Depends(report_api_versions)]
        app.include_router(
            movie.router,
            prefix=f"/api/{version}/Movie",
            tags=[f"Movie {version}"],
            deprecated=deprecated or None,
            dependencies=dependencies,
        )
        app.include_router(
            token.router,
            prefix=f"/api/{version}/Token",
            tags=[f"Token {version}"],
            deprecated=deprecated or None,
            dependencies=dependencies,
        )
    return app


app = create_app()
