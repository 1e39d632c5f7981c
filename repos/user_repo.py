from typing import Dict, Optional, Any
from bson import ObjectId

from db.schemas.users_schema import UserInDB
from db.mongodb import convert_to_object_id

class UserRepository:
    """
    Repository for account-related database operations
    Handles all direct interactions with the `users` collection
    """

    def __init__(self, db):
        self.db = db

    @staticmethod
    def _to_user(user_dict: Optional[Dict[str, Any]]) -> Optional[UserInDB]:
        if not user_dict:
            return None
        # Convert ObjectId to string
        if isinstance(user_dict.get("_id"), ObjectId):
            user_dict["_id"] = str(user_dict["_id"])
        return UserInDB(**user_dict)

    async def find_by_email(self, email: str) -> Optional[UserInDB]:
        """Find a user by email, case-insensitively"""
        user_dict = await self.db.users.find_one({"email": email.lower()})
        return self._to_user(user_dict)

    async def find_by_id(self, user_id: str) -> Optional[UserInDB]:
        object_id = convert_to_object_id(user_id)
        if object_id is None:
            return None
        user_dict = await self.db.users.find_one({"_id": object_id})
        return self._to_user(user_dict)

    async def create_user(self, user_dict: Dict[str, Any]) -> UserInDB:
        """
        Create a new user in the database
        Returns UserInDB model
        """
        user_dict = {**user_dict, "email": user_dict["email"].lower()}
        result = await self.db.users.insert_one(user_dict)
        user_dict["_id"] = result.inserted_id
        return self._to_user(user_dict)

    async def update_user(self, user_id: str, update_data: Dict[str, Any]) -> bool:
        object_id = convert_to_object_id(user_id)
        if object_id is None:
            return False
        result = await self.db.users.update_one({"_id": object_id}, {"$set": update_data})
        return result.matched_count > 0
