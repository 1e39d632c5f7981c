from typing import List, Optional, Union

from fastapi import APIRouter, File, Form, Response, UploadFile, status

from dependencies.auth import ApplicantUser, CurrentActiveUser
from dependencies.portfolio import PortfolioServiceDep
from models.portfolio_model import PortfolioItemResponse
from models.profiles_model import CompanyProfileResponse, StudentProfileResponse

router = APIRouter()

@router.post("/avatar", response_model=Union[StudentProfileResponse, CompanyProfileResponse])
async def upload_avatar(
    current_user: CurrentActiveUser,
    portfolio_service: PortfolioServiceDep,
    file: UploadFile = File(...)
):
    """Replace the current user's avatar; images are stored as WebP"""
    return await portfolio_service.upload_avatar(current_user, file)

@router.post("/cv", response_model=StudentProfileResponse)
async def upload_cv(
    current_user: ApplicantUser,
    portfolio_service: PortfolioServiceDep,
    file: UploadFile = File(...)
):
    return await portfolio_service.upload_cv(current_user, file)

@router.post("/portfolio", response_model=PortfolioItemResponse, status_code=status.HTTP_201_CREATED)
async def add_portfolio_item(
    current_user: ApplicantUser,
    portfolio_service: PortfolioServiceDep,
    file: UploadFile = File(...),
    description: Optional[str] = Form(None)
):
    return await portfolio_service.add_portfolio_item(current_user, file, description)

@router.get("/portfolio", response_model=List[PortfolioItemResponse])
async def list_my_portfolio(current_user: ApplicantUser, portfolio_service: PortfolioServiceDep):
    return await portfolio_service.list_portfolio(current_user.id)

@router.delete("/portfolio/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_portfolio_item(
    item_id: str,
    current_user: ApplicantUser,
    portfolio_service: PortfolioServiceDep
):
    """Remove a portfolio item and its stored file"""
    await portfolio_service.delete_portfolio_item(current_user, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
