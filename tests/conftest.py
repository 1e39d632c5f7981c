import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# config.py exits when required settings are missing
os.environ.setdefault("DATABASE_URL", "mongodb://localhost:27017")
os.environ.setdefault("DATABASE_NAME", "marketplace_test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("MINIO_USERNAME", "minio")
os.environ.setdefault("MINIO_PASSWORD", "minio-password")
os.environ.setdefault("MINIO_SERVER", "localhost:9000")
os.environ.setdefault("MINIO_BUCKET", "marketplace-test")

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from db.schemas.users_schema import UserInDB
from models.enums import RoleKind
from models.profiles_model import ProfileSummary

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def make_message(message_id, sender_id, receiver_id, minutes, conversation_id=None, is_read=False, **extra):
    """A raw message record as the repository returns it"""
    record = {
        "id": message_id,
        "sender_id": sender_id,
        "receiver_id": receiver_id,
        "conversation_id": conversation_id or ":".join(sorted([sender_id, receiver_id])),
        "content": f"message {message_id}",
        "created_at": at(minutes),
        "is_read": is_read,
    }
    record.update(extra)
    return record


def make_user(user_id: str, role_kind: RoleKind = RoleKind.APPLICANT) -> UserInDB:
    return UserInDB(
        _id=user_id,
        email=f"{user_id}@example.com",
        password_hash="hashed",
        role_kind=role_kind,
        created_at=BASE_TIME,
    )


@pytest.fixture
def profiles():
    return {
        "bob": ProfileSummary(id="bob", display_name="Bob Builder", role_kind=RoleKind.APPLICANT),
        "carol": ProfileSummary(id="carol", display_name="Carol Inc", organization_name="Carol Inc",
                                role_kind=RoleKind.ORGANIZATION),
        "dave": ProfileSummary(id="dave", display_name="Dave", role_kind=RoleKind.APPLICANT),
    }
