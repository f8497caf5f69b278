"""
Access policy.

A caller is classified once per request as ANONYMOUS, AUTHENTICATED or
ADMINISTRATOR, then checked against the minimum role each operation needs:

    operation        anonymous   authenticated   administrator
    view_sweets      401         allow           allow
    purchase         401         allow           allow
    manage_sweets    401         403             allow
    restock          401         403             allow
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import AuthenticationError, AuthorizationError
from core.tokens import Claim, TokenService
from db.users import User


class CallerRole(IntEnum):
    ANONYMOUS = 0
    AUTHENTICATED = 1
    ADMINISTRATOR = 2


class Operation(str, Enum):
    VIEW_SWEETS = "view_sweets"
    PURCHASE = "purchase"
    MANAGE_SWEETS = "manage_sweets"
    RESTOCK = "restock"


REQUIRED_ROLE = {
    Operation.VIEW_SWEETS: CallerRole.AUTHENTICATED,
    Operation.PURCHASE: CallerRole.AUTHENTICATED,
    Operation.MANAGE_SWEETS: CallerRole.ADMINISTRATOR,
    Operation.RESTOCK: CallerRole.ADMINISTRATOR,
}


@dataclass(frozen=True)
class Caller:
    role: CallerRole
    user: Optional[User] = None
    claim: Optional[Claim] = None


ANONYMOUS = Caller(role=CallerRole.ANONYMOUS)


async def resolve_caller(token: Optional[str], session: AsyncSession, tokens: TokenService) -> Caller:
    """Turn a raw bearer token (or None) into a Caller."""
    if not token:
        return ANONYMOUS

    claim = tokens.verify(token)
    user = await session.get(User, claim.user_id)
    if user is None:
        raise AuthenticationError("User not found")

    role = CallerRole.ADMINISTRATOR if claim.is_admin else CallerRole.AUTHENTICATED
    return Caller(role=role, user=user, claim=claim)


def authorize(caller: Caller, operation: Operation) -> Caller:
    required = REQUIRED_ROLE[operation]
    if caller.role >= required:
        return caller
    if caller.role == CallerRole.ANONYMOUS:
        raise AuthenticationError("Authentication required")
    raise AuthorizationError("Admin access required")
