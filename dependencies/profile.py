from fastapi import Depends
from typing import Annotated

from services.profile_service import ProfileService
from .repositories import get_profile_repository

def get_profile_service(profile_repo = Depends(get_profile_repository)):
    """Create and return a ProfileService instance"""
    return ProfileService(profile_repo)

ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
