"""
Repository factories, one per collection group.
Service dependencies in the sibling modules build on these.
"""
from repos.application_repo import ApplicationRepository
from repos.message_repo import MessageRepository
from repos.notification_repo import NotificationRepository
from repos.opportunity_repo import OpportunityRepository
from repos.portfolio_repo import PortfolioRepository
from repos.profile_repo import ProfileRepository
from .db import DB

def get_profile_repository(db: DB) -> ProfileRepository:
    return ProfileRepository(db)

def get_message_repository(db: DB) -> MessageRepository:
    return MessageRepository(db)

def get_opportunity_repository(db: DB) -> OpportunityRepository:
    return OpportunityRepository(db)

def get_application_repository(db: DB) -> ApplicationRepository:
    return ApplicationRepository(db)

def get_notification_repository(db: DB) -> NotificationRepository:
    return NotificationRepository(db)

def get_portfolio_repository(db: DB) -> PortfolioRepository:
    return PortfolioRepository(db)
