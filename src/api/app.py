import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.audit_recorder import SqlAlchemyAuditRecorder
from src.adapter.services.email_sender import SmtpEmailSender
from src.api.utils.cookies import SessionCookieManager
from src.api.utils.jwt import TokenService
from src.api.utils.limiter import build_limiter
from src.app.services.password_hasher import PasswordHasher

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_integrity_error(request: Request, exc: IntegrityError):
    error_dict = {"code": "CONFLICT", "message": "Resource already exists"}
    logger.warning(f"Integrity error: {exc.orig}")
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": error_dict})


async def handle_store_unavailable(request: Request, exc: Exception):
    error_dict = {
        "code": "SERVICE_UNAVAILABLE",
        "message": "Service temporarily unavailable",
    }
    logger.error(f"Store unavailable: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": error_dict}
    )


def create_engine(config) -> AsyncEngine:
    if config.DB_URI.startswith("sqlite"):
        # aiosqlite busy timeout
        return create_async_engine(
            config.DB_URI,
            echo=False,
            future=True,
            connect_args={"timeout": config.DB_TIMEOUT_SECONDS},
        )
    return create_async_engine(
        config.DB_URI, echo=False, future=True, pool_timeout=config.DB_TIMEOUT_SECONDS
    )


def create_app(config) -> FastAPI:
    engine = create_engine(config)
    session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info(f"API started ({config.ENVIRONMENT})")
        yield
        await engine.dispose()

    app = FastAPI(title="Tenant Access API", version="0.1.0", lifespan=lifespan)

    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.token_service = TokenService(
        config.JWT_SECRET, ttl=timedelta(days=config.SESSION_TTL_DAYS)
    )
    app.state.cookie_manager = SessionCookieManager(
        production=config.is_production, max_age=timedelta(days=config.SESSION_TTL_DAYS)
    )
    app.state.password_hasher = PasswordHasher(rounds=config.BCRYPT_ROUNDS)
    app.state.email_sender = SmtpEmailSender(
        host=config.SMTP_HOST,
        port=config.SMTP_PORT,
        username=config.SMTP_USER,
        password=config.SMTP_PASSWORD,
        from_email=config.SMTP_FROM,
    )
    app.state.audit_recorder = SqlAlchemyAuditRecorder(session_factory)

    app.state.limiter = build_limiter(config.RATE_LIMIT_ENABLED)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, audit, auth, health_check, invitation, organization

    app.include_router(health_check.router, prefix=config.API_PREFIX, tags=["Health"])
    app.include_router(auth.router, prefix=config.API_PREFIX, tags=["Authentication"])
    app.include_router(invitation.router, prefix=config.API_PREFIX, tags=["Invitations"])
    app.include_router(organization.router, prefix=config.API_PREFIX, tags=["Organization"])
    app.include_router(audit.router, prefix=config.API_PREFIX, tags=["Audit"])
    app.include_router(admin.router, prefix=config.API_PREFIX, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(OperationalError, handle_store_unavailable)
    app.add_exception_handler(InterfaceError, handle_store_unavailable)
    app.add_exception_handler(PoolTimeoutError, handle_store_unavailable)
    app.add_exception_handler(TimeoutError, handle_store_unavailable)

    return app
