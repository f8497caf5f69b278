from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PasswordChange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: Optional[str] = Field(default=None, alias="currentPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")
