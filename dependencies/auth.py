# dependencies/auth.py
from fastapi import Depends, HTTPException, status
import jwt
from typing import Annotated

from services.auth_service import AuthService
from dependencies.user import UserRepositoryDep
from db.schemas.users_schema import UserInDB
from models.enums import RoleKind
from config import (
    oauth2_scheme,
    JWT_SECRET_KEY,
    JWT_ALGORITHM
)

async def get_current_user(
    user_repo: UserRepositoryDep,
    token: str = Depends(oauth2_scheme)
) -> UserInDB:
    """Get the current authenticated user from the JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
        user_id: str = payload.get("id")
        if user_id is None:
            raise credentials_exception
    except jwt.PyJWTError:
        raise credentials_exception

    user = await user_repo.find_by_id(user_id)
    if user is None:
        raise credentials_exception

    return user

async def get_current_active_user(current_user = Depends(get_current_user)) -> UserInDB:
    """Get the current authenticated user and verify they are active."""
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user

async def get_company_user(current_user = Depends(get_current_active_user)) -> UserInDB:
    """Current user, who must be a company account."""
    if current_user.role_kind != RoleKind.ORGANIZATION:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only companies can do this"
        )
    return current_user

async def get_applicant_user(current_user = Depends(get_current_active_user)) -> UserInDB:
    """Current user, who must be an applicant account."""
    if current_user.role_kind != RoleKind.APPLICANT:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only applicants can do this"
        )
    return current_user

def get_auth_service(user_repo: UserRepositoryDep):
    """
    Dependency to get an auth service instance.
    """
    return AuthService(user_repo)

# Create annotated types for cleaner dependency injection
CurrentActiveUser = Annotated[UserInDB, Depends(get_current_active_user)]
CompanyUser = Annotated[UserInDB, Depends(get_company_user)]
ApplicantUser = Annotated[UserInDB, Depends(get_applicant_user)]

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
