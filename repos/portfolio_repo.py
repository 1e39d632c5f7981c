from typing import Any, Dict, List, Optional

from db.mongodb import convert_to_object_id, overwrite_mongodb_id
from utils.time import get_current_utc_time

class PortfolioRepository:
    """Repository for portfolio items and the metadata of uploaded files"""

    def __init__(self, db):
        self.db = db
        self.portfolio = db.student_portfolio
        self.files = db.files

    async def save_file(self, file_data: Dict[str, Any]) -> Dict[str, Any]:
        """Store object storage metadata so the file can be served later"""
        file_data = {**file_data, "uploaded_at": get_current_utc_time()}
        await self.files.insert_one(file_data)
        file_data.pop("_id", None)
        return file_data

    async def get_file(self, file_id: str) -> Optional[Dict[str, Any]]:
        return await self.files.find_one({"file_id": file_id}, projection={"_id": 0})

    async def delete_file(self, file_id: str) -> None:
        await self.files.delete_one({"file_id": file_id})

    async def create_item(self, item_data: Dict[str, Any]) -> Dict[str, Any]:
        item_data = {**item_data, "created_at": get_current_utc_time()}
        result = await self.portfolio.insert_one(item_data)
        item_data["_id"] = result.inserted_id
        return overwrite_mongodb_id(item_data)

    async def list_items(self, student_id: str) -> List[Dict[str, Any]]:
        """Newest portfolio items first"""
        cursor = self.portfolio.find({"student_id": student_id}).sort("created_at", -1)
        items = await cursor.to_list(length=None)
        return [overwrite_mongodb_id(item) for item in items]

    async def get_item(self, item_id: str, student_id: str) -> Optional[Dict[str, Any]]:
        object_id = convert_to_object_id(item_id)
        if object_id is None:
            return None
        item = await self.portfolio.find_one({"_id": object_id, "student_id": student_id})
        return overwrite_mongodb_id(item)

    async def delete_item(self, item_id: str, student_id: str) -> bool:
        object_id = convert_to_object_id(item_id)
        if object_id is None:
            return False
        result = await self.portfolio.delete_one({"_id": object_id, "student_id": student_id})
        return result.deleted_count > 0
