from fastapi import Depends
from typing import Annotated

from services.message_service import MessageService
from .repositories import get_message_repository, get_opportunity_repository, get_profile_repository

def get_message_service(
        message_repo = Depends(get_message_repository),
        profile_repo = Depends(get_profile_repository),
        opportunity_repo = Depends(get_opportunity_repository)
    ):
    """Create and return a MessageService instance"""
    return MessageService(message_repo, profile_repo, opportunity_repo)

MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
