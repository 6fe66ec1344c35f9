import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(
        f"Client error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} ({exc.base_error.message})"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(
        f"Server error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} ({exc.base_error.message})"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.AUTO_CREATE_TABLES:
            from src.depends import init_db

            await init_db()
        yield

    app = FastAPI(title="Sock API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import groups, health_check, invitations, statuses, users

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(users.router, tags=["Users"])
    app.include_router(groups.router, tags=["Groups"])
    app.include_router(invitations.router, tags=["Invitations"])
    app.include_router(statuses.router, tags=["Statuses"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
