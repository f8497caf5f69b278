from fastapi_users.db import SQLAlchemyBaseUserTable
from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .database import Base


class User(SQLAlchemyBaseUserTable[int], Base):
    """Account. `is_superuser` is the administrator flag; `hashed_password` never leaves the store."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    @property
    def is_admin(self) -> bool:
        return bool(self.is_superuser)

    @property
    def to_schema(self):
        """Convert User model to schema dictionary format"""
        return {
            "id": self.id,
            "email": self.email,
            "isAdmin": self.is_admin,
        }
