from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from db.mongodb import convert_to_object_id, overwrite_mongodb_id
from utils.time import get_current_utc_time

class OpportunityRepository:
    """
    Repository for opportunity (job posting) documents
    Write operations are always scoped by company_id so a company can only
    touch its own postings.
    """

    def __init__(self, db):
        self.db = db
        self.opportunities = db.opportunities

    async def create_opportunity(self, opportunity_data: Dict[str, Any]) -> Dict[str, Any]:
        now = get_current_utc_time()
        opportunity_data = {**opportunity_data, "created_at": now, "updated_at": now}
        result = await self.opportunities.insert_one(opportunity_data)
        opportunity_data["_id"] = result.inserted_id
        return overwrite_mongodb_id(opportunity_data)

    async def get_opportunity(self, opportunity_id: str) -> Optional[Dict[str, Any]]:
        object_id = convert_to_object_id(opportunity_id)
        if object_id is None:
            return None
        opportunity = await self.opportunities.find_one({"_id": object_id})
        return overwrite_mongodb_id(opportunity)

    async def list_opportunities(self, skip: int = 0, limit: int = 50) -> List[Dict[str, Any]]:
        """Newest opportunities first"""
        cursor = self.opportunities.find({}).sort("created_at", -1).skip(skip).limit(limit)
        opportunities = await cursor.to_list(length=limit)
        return [overwrite_mongodb_id(opportunity) for opportunity in opportunities]

    async def list_company_opportunities(self, company_id: str) -> List[Dict[str, Any]]:
        cursor = self.opportunities.find({"company_id": company_id}).sort("created_at", -1)
        opportunities = await cursor.to_list(length=None)
        return [overwrite_mongodb_id(opportunity) for opportunity in opportunities]

    async def get_titles(self, opportunity_ids: List[str]) -> Dict[str, str]:
        """Map opportunity id to title; unknown or invalid ids are left out"""
        object_ids = [oid for oid in (convert_to_object_id(i) for i in set(opportunity_ids)) if oid]
        if not object_ids:
            return {}
        cursor = self.opportunities.find({"_id": {"$in": object_ids}}, projection={"title": 1})
        return {str(doc["_id"]): doc.get("title") for doc in await cursor.to_list(length=None)}

    async def update_opportunity(self, opportunity_id: str, company_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        object_id = convert_to_object_id(opportunity_id)
        if object_id is None:
            return None
        opportunity = await self.opportunities.find_one_and_update(
            {"_id": object_id, "company_id": company_id},
            {"$set": {**fields, "updated_at": get_current_utc_time()}},
            return_document=ReturnDocument.AFTER
        )
        return overwrite_mongodb_id(opportunity)

    async def delete_opportunity(self, opportunity_id: str, company_id: str) -> bool:
        object_id = convert_to_object_id(opportunity_id)
        if object_id is None:
            return False
        result = await self.opportunities.delete_one({"_id": object_id, "company_id": company_id})
        return result.deleted_count > 0
