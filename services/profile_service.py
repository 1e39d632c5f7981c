from typing import Any, Dict, List, Union

from fastapi import HTTPException, status
from pydantic import BaseModel

from db.schemas.users_schema import UserInDB
from logger.logger import logger
from models.enums import RoleKind
from models.profiles_model import (
    CompanyProfileBase,
    CompanyProfileResponse,
    StudentProfileBase,
    StudentProfileResponse,
)
from repos.profile_repo import ProfileRepository

ProfileResponse = Union[StudentProfileResponse, CompanyProfileResponse]

class ProfileService:
    """
    Service layer for applicant and company profiles
    The role of the account decides which profile collection is used.
    """

    def __init__(self, profile_repository: ProfileRepository):
        self.profile_repo = profile_repository

    @staticmethod
    def _to_response(profile: Dict[str, Any], role_kind: RoleKind) -> ProfileResponse:
        if role_kind == RoleKind.ORGANIZATION:
            return CompanyProfileResponse(**profile)
        return StudentProfileResponse(**profile)

    @staticmethod
    def _check_payload(user: UserInDB, payload: BaseModel) -> None:
        expected = CompanyProfileBase if user.role_kind == RoleKind.ORGANIZATION else StudentProfileBase
        if not isinstance(payload, expected):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Profile fields do not match a {user.role_kind.value} account"
            )

    async def get_my_profile(self, user: UserInDB) -> ProfileResponse:
        profile = await self.profile_repo.get_profile(user.id, user.role_kind)
        if not profile:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
        return self._to_response(profile, user.role_kind)

    async def save_my_profile(self, user: UserInDB, payload: BaseModel) -> ProfileResponse:
        """Create or replace the editable fields of the caller's profile"""
        self._check_payload(user, payload)
        profile = await self.profile_repo.upsert_profile(user.id, user.role_kind, payload.model_dump())
        logger.info(f"Profile saved for user {user.id} ({user.role_kind.value})")
        return self._to_response(profile, user.role_kind)

    async def update_my_profile(self, user: UserInDB, payload: BaseModel) -> ProfileResponse:
        """Change only the fields that were sent"""
        self._check_payload(user, payload)
        fields = payload.model_dump(exclude_unset=True)
        if not fields:
            return await self.get_my_profile(user)

        profile = await self.profile_repo.update_profile(user.id, user.role_kind, fields)
        if not profile:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
        return self._to_response(profile, user.role_kind)

    async def set_file_fields(self, user: UserInDB, fields: Dict[str, Any]) -> ProfileResponse:
        """Attach uploaded avatar / CV information to the caller's profile"""
        profile = await self.profile_repo.upsert_profile(user.id, user.role_kind, fields)
        return self._to_response(profile, user.role_kind)

    async def get_student_profile(self, student_id: str) -> StudentProfileResponse:
        profile = await self.profile_repo.get_profile(student_id, RoleKind.APPLICANT)
        if not profile:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        return StudentProfileResponse(**profile)

    async def get_company_profile(self, company_id: str) -> CompanyProfileResponse:
        profile = await self.profile_repo.get_profile(company_id, RoleKind.ORGANIZATION)
        if not profile:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found")
        return CompanyProfileResponse(**profile)

    async def list_students(self, skip: int = 0, limit: int = 50) -> List[StudentProfileResponse]:
        profiles = await self.profile_repo.list_student_profiles(skip, limit)
        return [StudentProfileResponse(**profile) for profile in profiles]
