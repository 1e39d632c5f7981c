from typing import List

from fastapi import APIRouter, Query, Response, status

from dependencies.auth import CurrentActiveUser, CompanyUser
from dependencies.opportunity import OpportunityServiceDep
from models.opportunity_model import OpportunityCreate, OpportunityResponse, OpportunityUpdate

router = APIRouter()

@router.post("/", response_model=OpportunityResponse, status_code=status.HTTP_201_CREATED)
async def create_opportunity(
    opportunity: OpportunityCreate,
    current_user: CompanyUser,
    opportunity_service: OpportunityServiceDep
):
    """Publish a new opportunity for the current company"""
    return await opportunity_service.create_opportunity(current_user.id, opportunity)

@router.get("/", response_model=List[OpportunityResponse])
async def list_opportunities(
    current_user: CurrentActiveUser,
    opportunity_service: OpportunityServiceDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100)
):
    """All opportunities, newest first"""
    return await opportunity_service.list_opportunities(skip, limit)

@router.get("/mine", response_model=List[OpportunityResponse])
async def list_my_opportunities(current_user: CompanyUser, opportunity_service: OpportunityServiceDep):
    return await opportunity_service.list_company_opportunities(current_user.id)

@router.get("/{opportunity_id}", response_model=OpportunityResponse)
async def get_opportunity(
    opportunity_id: str,
    current_user: CurrentActiveUser,
    opportunity_service: OpportunityServiceDep
):
    return await opportunity_service.get_opportunity(opportunity_id)

@router.patch("/{opportunity_id}", response_model=OpportunityResponse)
async def update_opportunity(
    opportunity_id: str,
    update: OpportunityUpdate,
    current_user: CompanyUser,
    opportunity_service: OpportunityServiceDep
):
    """Edit one of the current company's opportunities"""
    return await opportunity_service.update_opportunity(opportunity_id, current_user.id, update)

@router.delete("/{opportunity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_opportunity(
    opportunity_id: str,
    current_user: CompanyUser,
    opportunity_service: OpportunityServiceDep
):
    """Delete an opportunity and the applications it received"""
    await opportunity_service.delete_opportunity(opportunity_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
