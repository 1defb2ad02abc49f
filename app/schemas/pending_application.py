from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PendingApplicationIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    student_name: Optional[str] = Field(default=None, alias="studentName", max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    course: Optional[str] = Field(default=None, max_length=100)
    data: Optional[Dict[str, Any]] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    image_id: Optional[str] = Field(default=None, alias="imageId")


class PendingApplicationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    student_name: str = Field(alias="studentName")
    course: str
    image_id: Optional[str] = Field(default=None, alias="imageId")
    created_at: datetime = Field(alias="createdAt")
