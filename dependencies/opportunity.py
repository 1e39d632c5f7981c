from fastapi import Depends
from typing import Annotated

from services.opportunity_service import OpportunityService
from .repositories import (
    get_application_repository,
    get_message_repository,
    get_opportunity_repository,
    get_profile_repository,
)

def get_opportunity_service(
        opportunity_repo = Depends(get_opportunity_repository),
        profile_repo = Depends(get_profile_repository),
        application_repo = Depends(get_application_repository),
        message_repo = Depends(get_message_repository)
    ):
    """Create and return an OpportunityService instance"""
    return OpportunityService(opportunity_repo, profile_repo, application_repo, message_repo)

OpportunityServiceDep = Annotated[OpportunityService, Depends(get_opportunity_service)]
