from fastapi import Depends
from typing import Annotated

from repos.user_repo import UserRepository
from .db import DB

def get_user_repository(db: DB) -> UserRepository:
    """Accounts repository bound to the request's database handle"""
    return UserRepository(db)

UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
