from typing import Dict, Any, List, Optional

from pymongo import ReturnDocument

from db.mongodb import convert_to_object_id, overwrite_mongodb_id
from utils.time import get_current_utc_time

class NotificationRepository:
    """
    Repository for notification-related database operations
    Handles all direct interactions with the database for the application feed
    """

    def __init__(self, db):
        self.db = db

    async def create_notification(self, notification_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new notification
        Returns the created notification data
        """
        notification_data = dict(notification_data)
        result = await self.db.notifications.insert_one(notification_data)
        notification_data["_id"] = result.inserted_id
        return overwrite_mongodb_id(notification_data)

    async def get_user_notifications(self, user_id: str, unread_only: bool = False) -> List[Dict[str, Any]]:
        """
        Get all notifications for a user
        If unread_only is True, returns only unread notifications
        """
        query = {"recipient_id": user_id}

        if unread_only:
            query["is_read"] = False

        cursor = self.db.notifications.find(query).sort("created_at", -1)  # Newest first
        notifications = await cursor.to_list(length=100)  # Limit to 100 notifications

        return [overwrite_mongodb_id(notification) for notification in notifications]

    async def mark_notification_as_read(self, notification_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Mark a specific notification as read
        Returns the updated notification if it belongs to the user, None otherwise
        """
        object_id = convert_to_object_id(notification_id)
        if object_id is None:
            return None

        updated_notification = await self.db.notifications.find_one_and_update(
            {"_id": object_id, "recipient_id": user_id},
            {"$set": {"is_read": True, "read_at": get_current_utc_time()}},
            return_document=ReturnDocument.AFTER
        )
        return overwrite_mongodb_id(updated_notification)

    async def mark_all_notifications_as_read(self, user_id: str) -> int:
        """
        Mark all unread notifications for a user as read
        Returns the number of notifications updated
        """
        result = await self.db.notifications.update_many(
            {
                "recipient_id": user_id,
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

    async def delete_notification(self, notification_id: str, user_id: str) -> bool:
        """
        Delete a notification
        Returns True if a notification of this user was deleted
        """
        object_id = convert_to_object_id(notification_id)
        if object_id is None:
            return False

        result = await self.db.notifications.delete_one({"_id": object_id, "recipient_id": user_id})
        return result.deleted_count > 0
