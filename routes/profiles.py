from typing import List, Union

from fastapi import APIRouter, Query

from dependencies.auth import CurrentActiveUser, CompanyUser
from dependencies.profile import ProfileServiceDep
from dependencies.portfolio import PortfolioServiceDep
from models.portfolio_model import PortfolioItemResponse
from models.profiles_model import (
    CompanyProfileBase,
    CompanyProfileResponse,
    CompanyProfileUpdate,
    StudentProfileBase,
    StudentProfileResponse,
    StudentProfileUpdate,
)

router = APIRouter()

@router.get("/me", response_model=Union[StudentProfileResponse, CompanyProfileResponse])
async def get_my_profile(current_user: CurrentActiveUser, profile_service: ProfileServiceDep):
    """Profile of the current user, whichever role they have"""
    return await profile_service.get_my_profile(current_user)

# Both roles' fields are all optional, so each role gets its own body type
@router.put("/me/student", response_model=StudentProfileResponse)
async def save_my_student_profile(
    profile: StudentProfileBase,
    current_user: CurrentActiveUser,
    profile_service: ProfileServiceDep
):
    """Create or replace an applicant profile"""
    return await profile_service.save_my_profile(current_user, profile)

@router.patch("/me/student", response_model=StudentProfileResponse)
async def update_my_student_profile(
    profile: StudentProfileUpdate,
    current_user: CurrentActiveUser,
    profile_service: ProfileServiceDep
):
    return await profile_service.update_my_profile(current_user, profile)

@router.put("/me/company", response_model=CompanyProfileResponse)
async def save_my_company_profile(
    profile: CompanyProfileBase,
    current_user: CurrentActiveUser,
    profile_service: ProfileServiceDep
):
    """Create or replace a company profile"""
    return await profile_service.save_my_profile(current_user, profile)

@router.patch("/me/company", response_model=CompanyProfileResponse)
async def update_my_company_profile(
    profile: CompanyProfileUpdate,
    current_user: CurrentActiveUser,
    profile_service: ProfileServiceDep
):
    return await profile_service.update_my_profile(current_user, profile)

@router.get("/students", response_model=List[StudentProfileResponse])
async def list_students(
    current_user: CompanyUser,
    profile_service: ProfileServiceDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100)
):
    """Explore applicants (companies only)"""
    return await profile_service.list_students(skip, limit)

@router.get("/students/{student_id}", response_model=StudentProfileResponse)
async def get_student(student_id: str, current_user: CurrentActiveUser, profile_service: ProfileServiceDep):
    return await profile_service.get_student_profile(student_id)

@router.get("/students/{student_id}/portfolio", response_model=List[PortfolioItemResponse])
async def get_student_portfolio(
    student_id: str,
    current_user: CurrentActiveUser,
    portfolio_service: PortfolioServiceDep
):
    return await portfolio_service.list_portfolio(student_id)

@router.get("/companies/{company_id}", response_model=CompanyProfileResponse)
async def get_company(company_id: str, current_user: CurrentActiveUser, profile_service: ProfileServiceDep):
    return await profile_service.get_company_profile(company_id)
