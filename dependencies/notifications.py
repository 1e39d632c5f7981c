from fastapi import Depends
from typing import Annotated

from services.notification_service import NotificationService
from .repositories import get_notification_repository

def get_notification_service(notification_repo = Depends(get_notification_repository)) -> NotificationService:
    """Create and return a NotificationService instance"""
    return NotificationService(notification_repo)

# Create a type alias for dependency injection
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
