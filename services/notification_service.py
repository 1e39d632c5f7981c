from typing import Dict, Any, List

from fastapi import HTTPException, status

from logger.logger import logger
from models.enums import ApplicationStatus
from models.notifications_model import NotificationType, NotificationCreate, NotificationResponse
from repos.notification_repo import NotificationRepository
from utils.time import get_current_utc_time


class NotificationService:
    """
    Service layer for the application notification feed
    Application events are kept out of the message inbox and land here instead.
    """

    def __init__(self, notification_repository: NotificationRepository):
        self.notification_repo = notification_repository

    async def create_notification(self, notification: NotificationCreate) -> NotificationResponse:
        """Create a new notification"""
        notification_data = {
            **notification.model_dump(),
            "notification_type": notification.notification_type.value,
            "created_at": get_current_utc_time(),
            "is_read": False,
            "read_at": None,
        }
        notification_db = await self.notification_repo.create_notification(notification_data)
        return self._notification_db_to_response(notification_db)

    async def get_user_notifications(self, user_id: str, unread_only: bool = False) -> List[NotificationResponse]:
        """Get all notifications for a user"""
        notifications_db = await self.notification_repo.get_user_notifications(user_id, unread_only)
        return [self._notification_db_to_response(notification) for notification in notifications_db]

    async def mark_notification_as_read(self, notification_id: str, user_id: str) -> NotificationResponse:
        """Mark a notification as read and return it"""
        notification_db = await self.notification_repo.mark_notification_as_read(notification_id, user_id)
        if not notification_db:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
        return self._notification_db_to_response(notification_db)

    async def mark_all_notifications_as_read(self, user_id: str) -> int:
        """Mark all notifications for a user as read"""
        return await self.notification_repo.mark_all_notifications_as_read(user_id)

    async def delete_notification(self, notification_id: str, user_id: str) -> None:
        """Delete a notification"""
        if not await self.notification_repo.delete_notification(notification_id, user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

    async def notify_application_received(
        self, application_id: str, applicant_id: str, applicant_name: str, company_id: str, opportunity_title: str
    ) -> None:
        """Tell a company that someone applied to one of its opportunities"""
        await self._notify_quietly(NotificationCreate(
            recipient_id=company_id,
            sender_id=applicant_id,
            sender_name=applicant_name,
            notification_type=NotificationType.APPLICATION_RECEIVED,
            source_id=application_id,
            message=f"{applicant_name} applied to {opportunity_title}",
        ))

    async def notify_application_status_changed(
        self,
        application_id: str,
        company_id: str,
        company_name: str,
        applicant_id: str,
        opportunity_title: str,
        new_status: ApplicationStatus,
    ) -> None:
        """Tell an applicant that a company accepted or rejected their application"""
        await self._notify_quietly(NotificationCreate(
            recipient_id=applicant_id,
            sender_id=company_id,
            sender_name=company_name,
            notification_type=NotificationType.APPLICATION_STATUS_CHANGED,
            source_id=application_id,
            message=f"Your application to {opportunity_title} was {new_status.value}",
        ))

    async def _notify_quietly(self, notification: NotificationCreate) -> None:
        # A lost notification must not fail the application change that caused it
        try:
            await self.create_notification(notification)
        except Exception as e:
            logger.error(
                f"Failed to create {notification.notification_type.value} notification "
                f"for {notification.recipient_id}: {e}"
            )

    def _notification_db_to_response(self, notification_db: Dict[str, Any]) -> NotificationResponse:
        """Convert a notification DB record to a response model"""
        return NotificationResponse(**notification_db)
