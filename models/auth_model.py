from typing import Optional
from pydantic import BaseModel

from models.enums import RoleKind

class Token(BaseModel):
    access_token: str
    token_type: str
    user_id: str
    role_kind: RoleKind

class TokenData(BaseModel):
    email: Optional[str] = None
    user_id: Optional[str] = None
    role_kind: Optional[RoleKind] = None
