from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException, status

from db.schemas.users_schema import UserInDB
from logger.logger import logger
from models.application_model import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationsDashboard,
    OpportunityApplications,
    OpportunityRef,
)
from models.enums import ApplicationStatus, RoleKind
from models.message_model import MessageResponse
from models.profiles_model import resolve_display_name
from repos.application_repo import ApplicationRepository, DuplicateApplicationError
from repos.opportunity_repo import OpportunityRepository
from repos.profile_repo import ProfileRepository
from services.message_service import MessageService
from services.notification_service import NotificationService

# Opening line a company sends when it reaches out about an application
DEFAULT_CONTACT_MESSAGE = "Hi! I'd like to get in touch with you about your application."

class ApplicationService:
    """
    Service layer for the apply-to-opportunity workflow
    """

    def __init__(
        self,
        application_repo: ApplicationRepository,
        opportunity_repo: OpportunityRepository,
        profile_repo: ProfileRepository,
        notification_service: NotificationService,
        message_service: MessageService,
    ):
        self.application_repo = application_repo
        self.opportunity_repo = opportunity_repo
        self.profile_repo = profile_repo
        self.notification_service = notification_service
        self.message_service = message_service

    async def apply(self, applicant: UserInDB, application: ApplicationCreate) -> ApplicationResponse:
        """Submit an application; applicants need a profile and may apply only once"""
        profile = await self.profile_repo.get_profile(applicant.id, RoleKind.APPLICANT)
        if not profile:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Profile not found. Complete your profile before applying."
            )

        opportunity = await self.opportunity_repo.get_opportunity(application.opportunity_id)
        if not opportunity:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Opportunity not found")

        if await self.application_repo.find_application(application.opportunity_id, applicant.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You already applied to this opportunity")

        note = application.message.strip() if application.message and application.message.strip() else None
        try:
            created = await self.application_repo.create_application({
                "user_id": applicant.id,
                "opportunity_id": application.opportunity_id,
                "message": note,
                "status": ApplicationStatus.PENDING.value,
            })
        except DuplicateApplicationError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="You already applied to this opportunity")

        applicant_name = resolve_display_name(RoleKind.APPLICANT, profile.get("full_name"))
        await self.notification_service.notify_application_received(
            application_id=created["id"],
            applicant_id=applicant.id,
            applicant_name=applicant_name,
            company_id=opportunity["company_id"],
            opportunity_title=opportunity["title"],
        )
        logger.info(f"User {applicant.id} applied to opportunity {application.opportunity_id}")

        return ApplicationResponse(**created, opportunity_title=opportunity["title"])

    async def list_my_applications(self, applicant_id: str) -> List[ApplicationResponse]:
        applications = await self.application_repo.list_for_user(applicant_id)
        titles = await self.opportunity_repo.get_titles([a["opportunity_id"] for a in applications])
        return [
            ApplicationResponse(**application, opportunity_title=titles.get(application["opportunity_id"]))
            for application in applications
        ]

    async def get_dashboard(self, company_id: str) -> ApplicationsDashboard:
        """Applications a company received, grouped by its opportunities"""
        opportunities = await self.opportunity_repo.list_company_opportunities(company_id)
        applications = await self.application_repo.list_for_opportunities([o["id"] for o in opportunities])
        applicants = await self.profile_repo.get_applicant_summaries(a["user_id"] for a in applications)

        grouped: Dict[str, List[ApplicationResponse]] = {o["id"]: [] for o in opportunities}
        titles = {o["id"]: o["title"] for o in opportunities}
        for application in applications:
            grouped[application["opportunity_id"]].append(ApplicationResponse(
                **application,
                opportunity_title=titles.get(application["opportunity_id"]),
                applicant=applicants.get(application["user_id"]),
            ))

        return ApplicationsDashboard(
            total_applications=len(applications),
            applications_by_opportunity=[
                OpportunityApplications(
                    opportunity=OpportunityRef(id=o["id"], title=o["title"]),
                    applications=grouped[o["id"]],
                    total_applications=len(grouped[o["id"]]),
                )
                for o in opportunities
            ],
        )

    async def update_status(
        self, application_id: str, company_id: str, new_status: ApplicationStatus
    ) -> ApplicationResponse:
        """Accept or reject an application to one of the company's opportunities"""
        application, opportunity = await self._get_owned_application(application_id, company_id)

        updated = await self.application_repo.update_status(application_id, new_status.value)
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

        if application.get("status") != new_status.value:
            company = await self.profile_repo.get_profile(company_id, RoleKind.ORGANIZATION) or {}
            await self.notification_service.notify_application_status_changed(
                application_id=application_id,
                company_id=company_id,
                company_name=resolve_display_name(RoleKind.ORGANIZATION, organization_name=company.get("company_name")),
                applicant_id=application["user_id"],
                opportunity_title=opportunity["title"],
                new_status=new_status,
            )

        return ApplicationResponse(**updated, opportunity_title=opportunity["title"])

    async def contact_applicant(
        self, application_id: str, company_id: str, content: Optional[str] = None
    ) -> MessageResponse:
        """Open a conversation with an applicant about their application"""
        application, opportunity = await self._get_owned_application(application_id, company_id)
        return await self.message_service.send_reply(
            sender_id=company_id,
            receiver_id=application["user_id"],
            content=content if content is not None else DEFAULT_CONTACT_MESSAGE,
            related_opportunity_id=opportunity["id"],
        )

    async def _get_owned_application(
        self, application_id: str, company_id: str
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        application = await self.application_repo.get_application(application_id)
        if not application:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

        opportunity = await self.opportunity_repo.get_opportunity(application["opportunity_id"])
        if not opportunity or opportunity["company_id"] != company_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
        return application, opportunity
