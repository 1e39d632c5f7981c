from pydantic import BaseModel, Field, EmailStr
from typing import Optional
from datetime import datetime
from bson import ObjectId

from models.enums import RoleKind
from utils.time import get_current_utc_time
from db.mongodb import PyObjectId

class UserInDB(BaseModel):
    """Database representation of a user account"""
    id: PyObjectId = Field(default_factory=lambda: str(ObjectId()), alias="_id")
    email: EmailStr
    password_hash: str
    role_kind: RoleKind

    # Metadata
    last_login: Optional[datetime] = None
    created_at: datetime = Field(default_factory=get_current_utc_time)
    is_active: bool = True

    model_config = {
        "arbitrary_types_allowed": True,
        "populate_by_name": True,
    }
