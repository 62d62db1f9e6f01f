from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.smtp_mailer import SmtpMailer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_session_token
from src.app.services.mailer import Mailer
from src.app.use_cases.auth import AuthenticateSessionUseCase, UserProfile

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def init_db() -> None:
    """Create missing tables for every registered entity"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_mailer() -> Mailer:
    return SmtpMailer.from_config(ApplicationConfig)


def extract_session_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """Session cookie first, then `Authorization: Bearer <token>`"""
    cookie_token = request.cookies.get(ApplicationConfig.COOKIE_NAME)
    if cookie_token:
        return cookie_token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow=Depends(get_unit_of_work),
) -> UserProfile:
    """
    Session middleware for protected routes.

    Resolves the session token to its user and attaches it to
    ``request.state.user``.

    Raises:
        ClientError: 401 if the token is missing, invalid, expired, revoked,
            or its user no longer exists
    """
    token = extract_session_token(request, credentials)
    result = await AuthenticateSessionUseCase(uow).execute(token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    request.state.user = result.value.user
    return result.value.user


async def get_session_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """Claims of the presented session token, or None if absent or invalid"""
    token = extract_session_token(request, credentials)
    if not token:
        return None
    return verify_session_token(token)
