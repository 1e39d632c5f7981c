import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from PIL import Image

from config import MINIO_BUCKET
from conftest import BASE_TIME, make_user
from models.enums import RoleKind
from services.portfolio_service import PortfolioService


def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (32, 32), (0, 128, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


def upload(data: bytes, filename: str, content_type: str):
    file = AsyncMock()
    file.read.return_value = data
    file.filename = filename
    file.content_type = content_type
    return file


def stored_file(file_id: str, owner_id: str = "alice", kind: str = "avatar"):
    return {
        "file_id": file_id,
        "owner_id": owner_id,
        "kind": kind,
        "filename": f"{file_id}.webp",
        "file_type": "image/webp",
        "file_extension": "webp",
        "size": 10,
        "object_name": f"{kind}/{owner_id}/{file_id}.webp",
    }


@pytest.fixture
def portfolio_repo():
    repo = AsyncMock()
    repo.save_file.side_effect = lambda data: data
    return repo


@pytest.fixture
def profile_service():
    service = AsyncMock()
    service.profile_repo = AsyncMock()
    return service


@pytest.fixture
def minio_client():
    return MagicMock()


@pytest.fixture
def service(portfolio_repo, profile_service, minio_client):
    return PortfolioService(portfolio_repo, profile_service, minio_client)


@pytest.mark.asyncio
async def test_cannot_delete_someone_elses_item(service, portfolio_repo, minio_client):
    portfolio_repo.get_item.return_value = None

    with pytest.raises(HTTPException) as exc_info:
        await service.delete_portfolio_item(make_user("mallory"), "item-1")

    assert exc_info.value.status_code == 404
    portfolio_repo.get_item.assert_awaited_once_with("item-1", "mallory")
    portfolio_repo.delete_item.assert_not_awaited()
    minio_client.remove_object.assert_not_called()


@pytest.mark.asyncio
async def test_delete_item_removes_stored_file(service, portfolio_repo, minio_client):
    portfolio_repo.get_item.return_value = {"id": "item-1", "student_id": "alice", "file_id": "f-1"}
    portfolio_repo.get_file.return_value = stored_file("f-1", kind="portfolio")

    await service.delete_portfolio_item(make_user("alice"), "item-1")

    portfolio_repo.delete_item.assert_awaited_once_with("item-1", "alice")
    minio_client.remove_object.assert_called_once_with(MINIO_BUCKET, "portfolio/alice/f-1.webp")
    portfolio_repo.delete_file.assert_awaited_once_with("f-1")


@pytest.mark.asyncio
async def test_new_avatar_replaces_the_previous_one(service, portfolio_repo, profile_service, minio_client):
    profile_service.profile_repo.get_profile.return_value = {"id": "alice", "avatar_file_id": "old-avatar"}
    portfolio_repo.get_file.return_value = stored_file("old-avatar")

    await service.upload_avatar(make_user("alice"), upload(png_bytes(), "me.png", "image/png"))

    put_kwargs = minio_client.put_object.call_args.kwargs
    assert put_kwargs["content_type"] == "image/webp"
    assert put_kwargs["object_name"].startswith("avatar/alice/")

    fields = profile_service.set_file_fields.await_args.args[1]
    assert fields["avatar_file_id"] != "old-avatar"
    assert fields["avatar_url"] == f"/storage/files/{fields['avatar_file_id']}"

    minio_client.remove_object.assert_called_once_with(MINIO_BUCKET, "avatar/alice/old-avatar.webp")
    portfolio_repo.delete_file.assert_awaited_once_with("old-avatar")


@pytest.mark.asyncio
async def test_first_avatar_has_nothing_to_clean_up(service, portfolio_repo, profile_service, minio_client):
    profile_service.profile_repo.get_profile.return_value = None

    await service.upload_avatar(make_user("alice"), upload(png_bytes(), "me.png", "image/png"))

    minio_client.remove_object.assert_not_called()
    portfolio_repo.delete_file.assert_not_awaited()


@pytest.mark.asyncio
async def test_companies_cannot_upload_a_cv(service, minio_client):
    with pytest.raises(HTTPException) as exc_info:
        await service.upload_cv(make_user("carol", RoleKind.ORGANIZATION), upload(b"%PDF", "cv.pdf", "application/pdf"))

    assert exc_info.value.status_code == 403
    minio_client.put_object.assert_not_called()


@pytest.mark.asyncio
async def test_rejected_upload_is_not_stored(service, portfolio_repo, minio_client):
    with pytest.raises(HTTPException) as exc_info:
        await service.add_portfolio_item(make_user("alice"), upload(b"MZ", "tool.exe", "application/x-msdownload"))

    assert exc_info.value.status_code == 415
    minio_client.put_object.assert_not_called()
    portfolio_repo.create_item.assert_not_awaited()


@pytest.mark.asyncio
async def test_portfolio_item_keeps_original_name(service, portfolio_repo):
    portfolio_repo.create_item.side_effect = lambda data: {**data, "id": "item-1", "created_at": BASE_TIME}

    item = await service.add_portfolio_item(
        make_user("alice"), upload(b"%PDF-1.4", "Thesis.pdf", "application/pdf"), description="  Final thesis "
    )

    assert item.file_name == "Thesis.pdf"
    assert item.description == "Final thesis"
    assert item.file_type == "application/pdf"
