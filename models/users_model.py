from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime

from models.enums import RoleKind

class UserBase(BaseModel):
    """Base user fields shared across different user models"""
    email: EmailStr
    role_kind: RoleKind

class UserCreate(UserBase):
    """Model for registering a new account"""
    password: str

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long")
        return v

class UserResponse(UserBase):
    """Model for returning account information to clients"""
    id: str
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: datetime

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "507f1f77bcf86cd799439011",
                    "email": "ada@example.com",
                    "role_kind": "applicant",
                    "is_active": True,
                    "last_login": "2024-01-02T12:30:45",
                    "created_at": "2024-01-01T00:00:00",
                }
            ]
        }
    }
