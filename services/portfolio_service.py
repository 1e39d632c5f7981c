from typing import List, Optional, Tuple

from fastapi import HTTPException, UploadFile, status
from minio import Minio

from db.schemas.files_schema import FileInDB
from db.schemas.users_schema import UserInDB
from logger.logger import logger
from models.enums import RoleKind, UploadKind
from models.portfolio_model import PortfolioItemResponse
from repos.portfolio_repo import PortfolioRepository
from services.profile_service import ProfileResponse, ProfileService
from services.storage_service import (
    read_from_minio,
    remove_from_minio,
    upload_to_minio,
    validate_upload,
)

class PortfolioService:
    """
    Uploads of avatars, CVs and portfolio files
    Files go to object storage, their metadata to the `files` collection, and
    the resulting URL to the owning profile or portfolio item.
    """

    def __init__(self, portfolio_repo: PortfolioRepository, profile_service: ProfileService, minio_client: Minio):
        self.portfolio_repo = portfolio_repo
        self.profile_service = profile_service
        self.minio_client = minio_client

    async def _store(self, owner: UserInDB, kind: UploadKind, upload: UploadFile) -> FileInDB:
        try:
            data = await upload.read()
        finally:
            await upload.close()

        content_type = upload.content_type or ""
        validate_upload(kind, content_type, len(data))

        file_data = upload_to_minio(
            data=data,
            filename=upload.filename or kind.value,
            content_type=content_type,
            minio_client=self.minio_client,
            folder=f"{kind.value}/{owner.id}",
            convert_images=kind == UploadKind.AVATAR,
        )
        saved = await self.portfolio_repo.save_file({**file_data, "owner_id": owner.id, "kind": kind.value})
        return FileInDB(**saved)

    async def _replace(self, previous_file_id: Optional[str]) -> None:
        if not previous_file_id:
            return
        previous = await self.portfolio_repo.get_file(previous_file_id)
        if previous:
            remove_from_minio(self.minio_client, previous["object_name"])
            await self.portfolio_repo.delete_file(previous_file_id)

    async def upload_avatar(self, user: UserInDB, upload: UploadFile) -> ProfileResponse:
        stored = await self._store(user, UploadKind.AVATAR, upload)
        previous = await self.profile_service.profile_repo.get_profile(user.id, user.role_kind) or {}
        profile = await self.profile_service.set_file_fields(user, {
            "avatar_file_id": stored.file_id,
            "avatar_url": stored.url,
        })
        await self._replace(previous.get("avatar_file_id"))
        return profile

    async def upload_cv(self, user: UserInDB, upload: UploadFile) -> ProfileResponse:
        if user.role_kind != RoleKind.APPLICANT:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only applicants can upload a CV")

        stored = await self._store(user, UploadKind.CV, upload)
        previous = await self.profile_service.profile_repo.get_profile(user.id, user.role_kind) or {}
        profile = await self.profile_service.set_file_fields(user, {
            "cv_file_id": stored.file_id,
            "cv_url": stored.url,
        })
        await self._replace(previous.get("cv_file_id"))
        return profile

    async def add_portfolio_item(
        self, user: UserInDB, upload: UploadFile, description: Optional[str] = None
    ) -> PortfolioItemResponse:
        original_name = upload.filename or "file"
        stored = await self._store(user, UploadKind.PORTFOLIO, upload)
        item = await self.portfolio_repo.create_item({
            "student_id": user.id,
            "file_id": stored.file_id,
            "file_name": original_name,
            "file_type": stored.file_type,
            "file_url": stored.url,
            "description": description.strip() if description and description.strip() else None,
        })
        logger.info(f"Portfolio item {item['id']} added for {user.id}")
        return PortfolioItemResponse(**item)

    async def list_portfolio(self, student_id: str) -> List[PortfolioItemResponse]:
        items = await self.portfolio_repo.list_items(student_id)
        return [PortfolioItemResponse(**item) for item in items]

    async def delete_portfolio_item(self, user: UserInDB, item_id: str) -> None:
        item = await self.portfolio_repo.get_item(item_id, user.id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Portfolio item not found")

        await self.portfolio_repo.delete_item(item_id, user.id)
        await self._replace(item.get("file_id"))

    async def get_file_content(self, file_id: str) -> Tuple[FileInDB, bytes]:
        """Metadata and bytes of a stored file, for serving it back"""
        file_record = await self.portfolio_repo.get_file(file_id)
        if not file_record:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"File '{file_id}' not found")
        stored = FileInDB(**file_record)
        return stored, read_from_minio(self.minio_client, stored.object_name)
