from typing import Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import current_active_user, get_token_service
from core.tokens import TokenService
from db.database import get_async_session
from db.users import User
from schemas.users import Credentials, PasswordChange
from services.accounts import AccountService

router = APIRouter()


def get_account_service(
    db: AsyncSession = Depends(get_async_session),
    tokens: TokenService = Depends(get_token_service),
) -> AccountService:
    return AccountService(db, tokens)


@router.post("/register", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def register(payload: Credentials, accounts: AccountService = Depends(get_account_service)):
    """Create an account. The first account ever registered is the administrator."""
    user, token = await accounts.register(payload.email, payload.password)
    return {"message": "User registered successfully", "token": token, "user": user.to_schema}


@router.post("/login", response_model=Dict)
async def login(payload: Credentials, accounts: AccountService = Depends(get_account_service)):
    user, token = await accounts.login(payload.email, payload.password)
    return {"message": "Login successful", "token": token, "user": user.to_schema}


@router.get("/me", response_model=Dict)
async def me(user: User = Depends(current_active_user)):
    return {"user": user.to_schema}


@router.put("/password", response_model=Dict)
async def change_password(
    payload: PasswordChange,
    user: User = Depends(current_active_user),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.change_password(user, payload.current_password, payload.new_password)
    return {"message": "Password updated successfully"}
