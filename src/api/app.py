from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


def error_envelope(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "code": code, "message": message},
    )


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(
        f"Client error on {request.url.path}: {exc.base_error.code} {exc.base_error.message}"
    )
    return error_envelope(exc.status_code, exc.base_error.code, exc.base_error.message)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error on {request.url.path}: {exc.base_error.code}")
    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, exc.base_error.code, exc.base_error.message
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    message = "; ".join(messages) or "Invalid request"
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return error_envelope(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", message)


async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.url.path}")
    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "UPSTREAM_FAILURE", "Server error"
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "SERVER_ERROR", "Server error"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    from src import depends

    await depends.init_db()
    logger.info("Database schema ready")
    yield
    await depends.engine.dispose()


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Auth API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, health_check

    app.include_router(health_check.router, prefix=ApplicationConfig.API_PREFIX, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
