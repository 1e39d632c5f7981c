from fastapi import Depends
from typing import Annotated

from services.application_service import ApplicationService
from .message import get_message_service
from .notifications import get_notification_service
from .repositories import get_application_repository, get_opportunity_repository, get_profile_repository

def get_application_service(
        application_repo = Depends(get_application_repository),
        opportunity_repo = Depends(get_opportunity_repository),
        profile_repo = Depends(get_profile_repository),
        notification_service = Depends(get_notification_service),
        message_service = Depends(get_message_service)
    ):
    """Create and return an ApplicationService instance"""
    return ApplicationService(application_repo, opportunity_repo, profile_repo, notification_service, message_service)

ApplicationServiceDep = Annotated[ApplicationService, Depends(get_application_service)]
