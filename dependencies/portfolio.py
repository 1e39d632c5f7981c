from fastapi import Depends
from typing import Annotated

from services.portfolio_service import PortfolioService
from .db import ObjectStorage
from .profile import get_profile_service
from .repositories import get_portfolio_repository

def get_portfolio_service(
        minio_client: ObjectStorage,
        portfolio_repo = Depends(get_portfolio_repository),
        profile_service = Depends(get_profile_service)
    ):
    """Create and return a PortfolioService instance"""
    return PortfolioService(portfolio_repo, profile_service, minio_client)

PortfolioServiceDep = Annotated[PortfolioService, Depends(get_portfolio_service)]
