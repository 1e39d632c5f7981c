from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from models.enums import ApplicationStatus
from models.profiles_model import ApplicantSummary

class ApplicationCreate(BaseModel):
    """An applicant applying to an opportunity, with an optional note"""
    opportunity_id: str
    message: Optional[str] = None

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class ApplicationResponse(BaseModel):
    id: str
    user_id: str
    opportunity_id: str
    opportunity_title: Optional[str] = None
    message: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    applicant: Optional[ApplicantSummary] = None
    created_at: datetime
    updated_at: datetime

class OpportunityRef(BaseModel):
    id: str
    title: str

class OpportunityApplications(BaseModel):
    """Applications received for one of the company's opportunities"""
    opportunity: OpportunityRef
    applications: List[ApplicationResponse] = []
    total_applications: int = 0

class ApplicationsDashboard(BaseModel):
    total_applications: int = 0
    applications_by_opportunity: List[OpportunityApplications] = []

class ContactApplicantRequest(BaseModel):
    content: Optional[str] = None
