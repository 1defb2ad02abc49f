from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SignupIn(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    # Holds either an email address or a phone number.
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=128)


class SignupOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: UUID = Field(alias="userId")


class VerifyCodeIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    code: Union[str, int]
