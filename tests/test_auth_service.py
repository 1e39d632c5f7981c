from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi import HTTPException

from config import JWT_ALGORITHM, JWT_SECRET_KEY
from conftest import make_user
from db.schemas.users_schema import UserInDB
from models.enums import RoleKind
from models.users_model import UserCreate
from services.auth_service import AuthService
from utils.security import get_password_hash


@pytest.fixture
def user_repo():
    return AsyncMock()


@pytest.fixture
def service(user_repo):
    return AuthService(user_repo)


@pytest.mark.asyncio
async def test_register_duplicate_email(service, user_repo):
    user_repo.find_by_email.return_value = make_user("alice")

    with pytest.raises(HTTPException) as exc_info:
        await service.register_user(UserCreate(email="alice@example.com", password="longenough", role_kind=RoleKind.APPLICANT))

    assert exc_info.value.status_code == 409
    user_repo.create_user.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_stores_password_hash(service, user_repo):
    user_repo.find_by_email.return_value = None
    user_repo.create_user.side_effect = lambda data: UserInDB(_id="carol", **data)

    user = await service.register_user(
        UserCreate(email="carol@example.com", password="longenough", role_kind=RoleKind.ORGANIZATION)
    )

    stored = user_repo.create_user.await_args.args[0]
    assert "password" not in stored
    assert stored["password_hash"] != "longenough"
    assert user.role_kind == RoleKind.ORGANIZATION


@pytest.mark.asyncio
async def test_wrong_password_is_unauthorized(service, user_repo):
    user = make_user("alice")
    user.password_hash = get_password_hash("right-password")
    user_repo.find_by_email.return_value = user

    with pytest.raises(HTTPException) as exc_info:
        await service.generate_user_token("alice@example.com", "wrong-password")

    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_token_carries_user_id_and_role(service, user_repo):
    user = make_user("alice")
    user.password_hash = get_password_hash("right-password")
    user_repo.find_by_email.return_value = user

    token = await service.generate_user_token("alice@example.com", "right-password")

    payload = jwt.decode(token.access_token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    assert payload["id"] == "alice"
    assert payload["role"] == "applicant"
    assert token.role_kind == RoleKind.APPLICANT
    user_repo.update_user.assert_awaited_once()
