from typing import Any, Dict, Iterable, List, Optional

from pymongo import ReturnDocument

from models.enums import RoleKind
from models.profiles_model import ApplicantSummary, ProfileSummary, resolve_display_name
from db.mongodb import overwrite_mongodb_id
from utils.time import get_current_utc_time

class ProfileRepository:
    """
    Repository for the two profile collections
    Applicant profiles live in `student_profiles`, company profiles in
    `company_profiles`; both are keyed by the owning user's id.
    """

    def __init__(self, db):
        self.db = db
        self.collections = {
            RoleKind.APPLICANT: db.student_profiles,
            RoleKind.ORGANIZATION: db.company_profiles,
        }

    async def get_profile(self, user_id: str, role_kind: RoleKind) -> Optional[Dict[str, Any]]:
        profile = await self.collections[role_kind].find_one({"_id": user_id})
        return overwrite_mongodb_id(profile)

    async def upsert_profile(self, user_id: str, role_kind: RoleKind, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create the profile if needed and set the given fields"""
        now = get_current_utc_time()
        profile = await self.collections[role_kind].find_one_and_update(
            {"_id": user_id},
            {
                "$set": {**fields, "updated_at": now},
                "$setOnInsert": {"created_at": now}
            },
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return overwrite_mongodb_id(profile)

    async def update_profile(self, user_id: str, role_kind: RoleKind, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Set the given fields on an existing profile; None if there is no profile"""
        profile = await self.collections[role_kind].find_one_and_update(
            {"_id": user_id},
            {"$set": {**fields, "updated_at": get_current_utc_time()}},
            return_document=ReturnDocument.AFTER
        )
        return overwrite_mongodb_id(profile)

    async def list_student_profiles(self, skip: int = 0, limit: int = 50) -> List[Dict[str, Any]]:
        cursor = self.db.student_profiles.find({}).sort("updated_at", -1).skip(skip).limit(limit)
        profiles = await cursor.to_list(length=limit)
        return [overwrite_mongodb_id(profile) for profile in profiles]

    async def get_company_names(self, company_ids: Iterable[str]) -> Dict[str, Optional[str]]:
        ids = list(set(company_ids))
        if not ids:
            return {}
        cursor = self.db.company_profiles.find({"_id": {"$in": ids}}, projection={"company_name": 1})
        companies = await cursor.to_list(length=None)
        return {company["_id"]: company.get("company_name") for company in companies}

    async def get_summaries(self, user_ids: Iterable[str]) -> Dict[str, ProfileSummary]:
        """
        Batch profile lookup
        Ids without a profile in either collection are simply absent from the result.
        """
        ids = list(set(user_ids))
        if not ids:
            return {}

        summaries: Dict[str, ProfileSummary] = {}
        for role_kind, collection in self.collections.items():
            cursor = collection.find({"_id": {"$in": ids}})
            for profile in await cursor.to_list(length=None):
                summaries[profile["_id"]] = self.to_summary(profile, role_kind)
        return summaries

    async def get_applicant_summaries(self, user_ids: Iterable[str]) -> Dict[str, ApplicantSummary]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        cursor = self.db.student_profiles.find({"_id": {"$in": ids}})
        profiles = await cursor.to_list(length=None)
        return {
            profile["_id"]: ApplicantSummary(
                **self.to_summary(profile, RoleKind.APPLICANT).model_dump(),
                university=profile.get("university"),
                career=profile.get("career"),
            )
            for profile in profiles
        }

    @staticmethod
    def to_summary(profile: Dict[str, Any], role_kind: RoleKind) -> ProfileSummary:
        organization_name = profile.get("company_name") if role_kind == RoleKind.ORGANIZATION else None
        return ProfileSummary(
            id=str(profile.get("_id", profile.get("id"))),
            display_name=resolve_display_name(role_kind, profile.get("full_name"), organization_name),
            avatar_url=profile.get("avatar_url"),
            organization_name=organization_name,
            role_kind=role_kind,
        )
