from typing import List

from fastapi import APIRouter, status

from dependencies.auth import ApplicantUser, CompanyUser
from dependencies.application import ApplicationServiceDep
from models.application_model import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationsDashboard,
    ApplicationStatusUpdate,
    ContactApplicantRequest,
)
from models.message_model import MessageResponse

router = APIRouter()

@router.post("/", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_opportunity(
    application: ApplicationCreate,
    current_user: ApplicantUser,
    application_service: ApplicationServiceDep
):
    """Apply to an opportunity; the company gets a notification"""
    return await application_service.apply(current_user, application)

@router.get("/mine", response_model=List[ApplicationResponse])
async def list_my_applications(current_user: ApplicantUser, application_service: ApplicationServiceDep):
    return await application_service.list_my_applications(current_user.id)

@router.get("/dashboard", response_model=ApplicationsDashboard)
async def get_applications_dashboard(current_user: CompanyUser, application_service: ApplicationServiceDep):
    """Applications received by the current company, grouped by opportunity"""
    return await application_service.get_dashboard(current_user.id)

@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    current_user: CompanyUser,
    application_service: ApplicationServiceDep
):
    return await application_service.update_status(application_id, current_user.id, update.status)

@router.post("/{application_id}/contact", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def contact_applicant(
    application_id: str,
    request: ContactApplicantRequest,
    current_user: CompanyUser,
    application_service: ApplicationServiceDep
):
    """Send the applicant a message tied to the opportunity they applied to"""
    return await application_service.contact_applicant(application_id, current_user.id, request.content)
