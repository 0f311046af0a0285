"""
Main FastAPI application entry point.
Configures the application, middleware, error handling and routes.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from blogapi.api.routes import admin, auth, comments, health, posts, users
from blogapi.core.config import settings
from blogapi.core.exceptions import AppError, ServerError, ValidationError
from blogapi.core.logging import get_logger, setup_logging
from blogapi.db.session import engine
from blogapi.models.user import UserRole
from blogapi.schemas.user import UserCreate
from blogapi.services.user_service import UserService

# Setup logging
setup_logging()
logger = get_logger(__name__)


def bootstrap_admin() -> None:
    """Create (or promote) the first admin from settings when no admin exists."""
    if not settings.FIRST_ADMIN_EMAIL or not settings.FIRST_ADMIN_PASSWORD:
        logger.info("No FIRST_ADMIN_EMAIL/FIRST_ADMIN_PASSWORD configured, skipping admin bootstrap")
        return

    with Session(engine) as session:
        if UserService.get_admin(session) is not None:
            return
        try:
            existing = UserService.get_by_email(session, settings.FIRST_ADMIN_EMAIL)
            if existing is not None:
                UserService.set_role(session, existing.id, UserRole.ADMIN)
            else:
                admin_in = UserCreate(
                    name=settings.FIRST_ADMIN_NAME,
                    email=settings.FIRST_ADMIN_EMAIL,
                    password=settings.FIRST_ADMIN_PASSWORD,
                )
                UserService.create(session, admin_in, role=UserRole.ADMIN)
            logger.info(f"Admin user ready: {settings.FIRST_ADMIN_EMAIL}")
        except (AppError, PydanticValidationError) as e:
            logger.error(f"Failed to create admin user: {e}")
            logger.warning("Continuing without an admin. Admin endpoints will be unusable.")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Runs startup and shutdown logic.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)

    if not settings.DISABLE_BOOTSTRAP_USERS:
        bootstrap_admin()
    else:
        logger.info("User bootstrapping disabled (DISABLE_BOOTSTRAP_USERS=true)")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

cors_origins = [str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins or ["*"],
    allow_credentials=bool(cors_origins),
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "content-type", "accept"],
)


# Error responses are always {"error": message}


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = None
    return await app_error_handler(request, ValidationError(message))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return await app_error_handler(request, ServerError())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return await app_error_handler(request, ServerError())


app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(users.router, prefix=settings.API_PREFIX)
app.include_router(posts.router, prefix=settings.API_PREFIX)
app.include_router(comments.router, prefix=settings.API_PREFIX)
app.include_router(admin.router, prefix=settings.API_PREFIX)
