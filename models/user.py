from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from models.profile import UserProfile


class UserInDB(BaseModel):
    """Represents the user document as stored in Firestore."""

    uid: str
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")
    profile: Optional[UserProfile] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
