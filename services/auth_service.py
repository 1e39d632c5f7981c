from fastapi import HTTPException, status
from typing import Optional
from datetime import datetime, timezone, timedelta
import jwt
from pymongo.errors import DuplicateKeyError

from logger.logger import logger
from utils.security import get_password_hash, verify_password
from repos.user_repo import UserRepository
from mappers.users_mapper import create_user_dict, user_db_to_response
from models.auth_model import Token, TokenData
from models.users_model import UserCreate, UserResponse
from config import (
    JWT_SECRET_KEY,
    JWT_ALGORITHM,
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES
)

class AuthService:
    """
    Service layer for authentication-related operations
    Handles registration, login and token creation
    """

    def __init__(self, user_repository: UserRepository):
        self.user_repo = user_repository

    async def register_user(self, user: UserCreate) -> UserResponse:
        """Create an account; emails are unique"""
        if await self.user_repo.find_by_email(user.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

        try:
            user_db = await self.user_repo.create_user(create_user_dict(user, get_password_hash(user.password)))
        except DuplicateKeyError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

        logger.info(f"Registered {user_db.role_kind.value} account {user_db.id}")
        return user_db_to_response(user_db)

    async def generate_user_token(self, email: str, password: str) -> Token:
        """
        Authenticate a user with email and password
        Returns a bearer token if authentication succeeds
        """
        user_db = await self.user_repo.find_by_email(email)

        # Same answer for unknown email and wrong password
        if not user_db or not verify_password(password, user_db.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if not user_db.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")

        access_token = self.create_access_token(
            TokenData(
                email=user_db.email,
                user_id=user_db.id,
                role_kind=user_db.role_kind
            ),
            expires_delta=timedelta(minutes=JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
        )

        await self.update_last_login(user_db.id)

        return Token(
            access_token=access_token,
            token_type="bearer",
            user_id=user_db.id,
            role_kind=user_db.role_kind,
        )

    def create_access_token(self, data: TokenData, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token."""
        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(minutes=15)

        token_data = {
            "sub": data.email,
            "id": data.user_id,
            "role": data.role_kind.value if data.role_kind else None,
            "exp": expire
        }
        return jwt.encode(token_data, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)

    async def update_last_login(self, user_id: str) -> None:
        """Update the last login timestamp for a user"""
        await self.user_repo.update_user(user_id, {"last_login": datetime.now(timezone.utc)})
