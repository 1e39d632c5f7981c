from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from db.mongodb import convert_to_object_id, overwrite_mongodb_id
from utils.time import get_current_utc_time

class DuplicateApplicationError(Exception):
    """The applicant already applied to this opportunity"""
    pass

class ApplicationRepository:
    """Repository for applications to opportunities"""

    def __init__(self, db):
        self.db = db
        self.applications = db.applications

    async def create_application(self, application_data: Dict[str, Any]) -> Dict[str, Any]:
        now = get_current_utc_time()
        application_data = {**application_data, "created_at": now, "updated_at": now}
        try:
            result = await self.applications.insert_one(application_data)
        except DuplicateKeyError:
            raise DuplicateApplicationError()
        application_data["_id"] = result.inserted_id
        return overwrite_mongodb_id(application_data)

    async def find_application(self, opportunity_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        application = await self.applications.find_one({"opportunity_id": opportunity_id, "user_id": user_id})
        return overwrite_mongodb_id(application)

    async def get_application(self, application_id: str) -> Optional[Dict[str, Any]]:
        object_id = convert_to_object_id(application_id)
        if object_id is None:
            return None
        application = await self.applications.find_one({"_id": object_id})
        return overwrite_mongodb_id(application)

    async def list_for_opportunities(self, opportunity_ids: List[str]) -> List[Dict[str, Any]]:
        """Applications received for any of the given opportunities, newest first"""
        if not opportunity_ids:
            return []
        cursor = self.applications.find({"opportunity_id": {"$in": opportunity_ids}}).sort("created_at", -1)
        applications = await cursor.to_list(length=None)
        return [overwrite_mongodb_id(application) for application in applications]

    async def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        cursor = self.applications.find({"user_id": user_id}).sort("created_at", -1)
        applications = await cursor.to_list(length=None)
        return [overwrite_mongodb_id(application) for application in applications]

    async def update_status(self, application_id: str, status: str) -> Optional[Dict[str, Any]]:
        object_id = convert_to_object_id(application_id)
        if object_id is None:
            return None
        application = await self.applications.find_one_and_update(
            {"_id": object_id},
            {"$set": {"status": status, "updated_at": get_current_utc_time()}},
            return_document=ReturnDocument.AFTER
        )
        return overwrite_mongodb_id(application)

    async def delete_for_opportunity(self, opportunity_id: str) -> int:
        result = await self.applications.delete_many({"opportunity_id": opportunity_id})
        return result.deleted_count
