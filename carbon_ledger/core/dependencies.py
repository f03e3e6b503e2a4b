"""
FastAPI dependencies shared by the routers.
"""
import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.config import Config
from carbon_ledger.core.security import InvalidTokenError, decode_access_token
from carbon_ledger.database.repositories import UserRepository
from carbon_ledger.database.schemas import UserDBModel
from carbon_ledger.database.session_manager.db_session import Database
from carbon_ledger.services.extraction import DocumentExtractor
from carbon_ledger.services.storage import DocumentStorage

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_config_from_app(request: Request) -> Config:
    return request.app.state.config


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, committed on success and rolled back on error."""
    async with Database() as session:
        yield session


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    config: Config = Depends(get_config_from_app),
    session: AsyncSession = Depends(get_db_session),
) -> UserDBModel:
    """
    Resolve the bearer token to an active user.

    Raises:
        HTTPException: 401 for a missing or invalid token, or an unknown or
            inactive user
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    try:
        user_id = decode_access_token(config, credentials.credentials)
    except InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise unauthorized

    user = await UserRepository(session).get_by_id(user_id)
    if user is None or not user.is_active:
        raise unauthorized
    return user


def get_storage(request: Request) -> DocumentStorage:
    return request.app.state.storage


def get_extractor(request: Request) -> DocumentExtractor:
    return request.app.state.extractor
