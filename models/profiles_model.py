from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from models.enums import RoleKind

# Shown when a profile carries neither a person nor a company name
DEFAULT_DISPLAY_NAME = "User"


def resolve_display_name(
    role_kind: RoleKind,
    full_name: Optional[str] = None,
    organization_name: Optional[str] = None,
) -> str:
    """Companies are shown by their company name, everybody else by their full name"""
    if role_kind == RoleKind.ORGANIZATION:
        candidates = (organization_name, full_name)
    else:
        candidates = (full_name, organization_name)

    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return DEFAULT_DISPLAY_NAME


class ProfileSummary(BaseModel):
    """Display data for a participant, as used by the inbox and dashboards"""
    id: str
    display_name: str = DEFAULT_DISPLAY_NAME
    avatar_url: Optional[str] = None
    organization_name: Optional[str] = None
    role_kind: RoleKind


class ApplicantSummary(ProfileSummary):
    """Profile summary with the academic fields companies see on applications"""
    university: Optional[str] = None
    career: Optional[str] = None


class StudentProfileBase(BaseModel):
    """Fields an applicant can edit on their profile"""
    full_name: Optional[str] = None
    university: Optional[str] = None
    career: Optional[str] = None
    student_id: Optional[str] = None
    graduation_year: Optional[str] = None
    major: Optional[str] = None
    gpa: Optional[str] = None
    bio: Optional[str] = None


class StudentProfileUpdate(StudentProfileBase):
    """Partial update; unset fields are left untouched"""
    pass


class StudentProfileResponse(StudentProfileBase):
    id: str
    role_kind: RoleKind = RoleKind.APPLICANT
    avatar_url: Optional[str] = None
    avatar_file_id: Optional[str] = None
    cv_url: Optional[str] = None
    cv_file_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CompanyProfileBase(BaseModel):
    """Fields a company can edit on its profile"""
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    company_website: Optional[str] = None
    company_size: Optional[str] = None


class CompanyProfileUpdate(CompanyProfileBase):
    """Partial update; unset fields are left untouched"""
    pass


class CompanyProfileResponse(CompanyProfileBase):
    id: str
    role_kind: RoleKind = RoleKind.ORGANIZATION
    avatar_url: Optional[str] = None
    avatar_file_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
