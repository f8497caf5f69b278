from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.policy import Caller, Operation, authorize, resolve_caller
from core.tokens import TokenService
from db.database import get_async_session
from db.users import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


async def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_async_session),
) -> Caller:
    token = credentials.credentials if credentials else None
    return await resolve_caller(token, db, tokens)


def require(operation: Operation):
    """Dependency factory: resolves the caller and enforces the gate for `operation`."""

    async def dependency(caller: Caller = Depends(get_caller)) -> Caller:
        return authorize(caller, operation)

    return dependency


async def current_active_user(caller: Caller = Depends(require(Operation.VIEW_SWEETS))) -> User:
    return caller.user
