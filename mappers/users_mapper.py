from typing import Any, Dict

from db.schemas.users_schema import UserInDB
from models.users_model import UserCreate, UserResponse
from utils.time import get_current_utc_time

def user_db_to_response(user_db: UserInDB) -> UserResponse:
    """Public view of an account; the password hash never leaves the service"""
    return UserResponse(**user_db.model_dump(include=set(UserResponse.model_fields)))

def create_user_dict(user_create: UserCreate, password_hash: str) -> Dict[str, Any]:
    """`users` document for a new, active account"""
    return {
        "email": user_create.email.lower(),
        "password_hash": password_hash,
        "role_kind": user_create.role_kind.value,
        "is_active": True,
        "created_at": get_current_utc_time(),
    }
