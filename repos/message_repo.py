from typing import Any, Dict, List, Optional
from bson import ObjectId

from db.mongodb import convert_to_object_id
from mappers.messages_mapper import message_doc_to_record
from utils.time import get_current_utc_time

class MessageRepository:
    """Message store: direct access to the `messages` collection"""

    def __init__(self, db):
        self.db = db
        self.messages = db.messages

    async def create_message(self, message_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new, unread message and return it as a record"""
        message_dict = dict(message_dict)
        message_dict["created_at"] = get_current_utc_time()
        message_dict["is_read"] = False
        message_dict["read_at"] = None

        result = await self.messages.insert_one(message_dict)
        message_dict["_id"] = result.inserted_id
        return message_doc_to_record(message_dict)

    async def get_messages_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """All messages the user sent or received, in no particular order"""
        cursor = self.messages.find({
            "$or": [
                {"sender_id": user_id},
                {"receiver_id": user_id}
            ]
        })
        messages = await cursor.to_list(length=None)
        return [message_doc_to_record(message) for message in messages]

    async def get_message(self, message_id: str) -> Optional[Dict[str, Any]]:
        object_id = convert_to_object_id(message_id)
        if object_id is None:
            return None
        message = await self.messages.find_one({"_id": object_id})
        return message_doc_to_record(message) if message else None

    async def mark_conversation_as_read(self, conversation_id: str, receiver_id: str) -> int:
        """Mark every unread message addressed to receiver_id in the conversation as read"""
        result = await self.messages.update_many(
            {
                "conversation_id": conversation_id,
                "receiver_id": receiver_id,
                "is_read": False
            },
            {
                "$set": {
                    "is_read": True,
                    "read_at": get_current_utc_time()
                }
            }
        )
        return result.modified_count

    async def mark_message_as_read(self, message_id: str, receiver_id: str) -> Optional[Dict[str, Any]]:
        """Mark a single message as read; None when receiver_id is not its receiver"""
        object_id = convert_to_object_id(message_id)
        if object_id is None:
            return None

        message = await self.messages.find_one({"_id": object_id, "receiver_id": receiver_id})
        if not message:
            return None

        # Read is terminal, keep the first read_at
        if not message.get("is_read"):
            now = get_current_utc_time()
            await self.messages.update_one(
                {"_id": object_id, "is_read": {"$ne": True}},
                {"$set": {"is_read": True, "read_at": now}}
            )
            message["is_read"] = True
            message["read_at"] = now

        return message_doc_to_record(message)

    async def detach_opportunity(self, opportunity_id: str) -> None:
        """Detach messages from an opportunity that no longer exists"""
        await self.messages.update_many(
            {"related_opportunity_id": opportunity_id},
            {"$set": {"related_opportunity_id": None}}
        )
