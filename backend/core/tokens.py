from dataclasses import dataclass

import jwt
from fastapi_users.jwt import decode_jwt, generate_jwt

from core.errors import AuthenticationError

TOKEN_AUDIENCE = ["sweetshop:auth"]


@dataclass(frozen=True)
class Claim:
    user_id: int
    email: str
    is_admin: bool


class TokenService:
    """Issues and verifies the signed session claim (a JWT with a fixed lifetime)."""

    def __init__(self, secret: str, lifetime_seconds: int):
        self.secret = secret
        self.lifetime_seconds = lifetime_seconds

    def issue(self, user_id: int, email: str, is_admin: bool) -> str:
        data = {
            "sub": str(user_id),
            "email": email,
            "isAdmin": bool(is_admin),
            "aud": TOKEN_AUDIENCE,
        }
        return generate_jwt(data, self.secret, self.lifetime_seconds)

    def verify(self, token: str) -> Claim:
        try:
            payload = decode_jwt(token, self.secret, TOKEN_AUDIENCE)
            return Claim(
                user_id=int(payload["sub"]),
                email=payload["email"],
                is_admin=bool(payload["isAdmin"]),
            )
        except (jwt.PyJWTError, KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")
