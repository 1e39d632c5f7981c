from typing import List

from fastapi import HTTPException, status

from logger.logger import logger
from models.opportunity_model import OpportunityCreate, OpportunityResponse, OpportunityUpdate
from repos.application_repo import ApplicationRepository
from repos.message_repo import MessageRepository
from repos.opportunity_repo import OpportunityRepository
from repos.profile_repo import ProfileRepository

class OpportunityService:
    """
    Service layer for job postings
    A company only sees "not found" for postings it does not own.
    """

    def __init__(
        self,
        opportunity_repo: OpportunityRepository,
        profile_repo: ProfileRepository,
        application_repo: ApplicationRepository,
        message_repo: MessageRepository,
    ):
        self.opportunity_repo = opportunity_repo
        self.profile_repo = profile_repo
        self.application_repo = application_repo
        self.message_repo = message_repo

    async def create_opportunity(self, company_id: str, opportunity: OpportunityCreate) -> OpportunityResponse:
        created = await self.opportunity_repo.create_opportunity({
            **opportunity.model_dump(),
            "company_id": company_id,
        })
        logger.info(f"Opportunity {created['id']} created by company {company_id}")
        return (await self._with_company_names([created]))[0]

    async def get_opportunity(self, opportunity_id: str) -> OpportunityResponse:
        opportunity = await self.opportunity_repo.get_opportunity(opportunity_id)
        if not opportunity:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Opportunity not found")
        return (await self._with_company_names([opportunity]))[0]

    async def list_opportunities(self, skip: int = 0, limit: int = 50) -> List[OpportunityResponse]:
        opportunities = await self.opportunity_repo.list_opportunities(skip, limit)
        return await self._with_company_names(opportunities)

    async def list_company_opportunities(self, company_id: str) -> List[OpportunityResponse]:
        opportunities = await self.opportunity_repo.list_company_opportunities(company_id)
        return await self._with_company_names(opportunities)

    async def update_opportunity(
        self, opportunity_id: str, company_id: str, update: OpportunityUpdate
    ) -> OpportunityResponse:
        fields = update.model_dump(exclude_unset=True, exclude_none=True)
        if not fields:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

        updated = await self.opportunity_repo.update_opportunity(opportunity_id, company_id, fields)
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Opportunity not found")
        return (await self._with_company_names([updated]))[0]

    async def delete_opportunity(self, opportunity_id: str, company_id: str) -> None:
        """Delete a posting together with the applications it received"""
        deleted = await self.opportunity_repo.delete_opportunity(opportunity_id, company_id)
        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Opportunity not found")

        removed = await self.application_repo.delete_for_opportunity(opportunity_id)
        await self.message_repo.detach_opportunity(opportunity_id)
        logger.info(f"Opportunity {opportunity_id} deleted with {removed} applications")

    async def _with_company_names(self, opportunities: List[dict]) -> List[OpportunityResponse]:
        names = await self.profile_repo.get_company_names(o["company_id"] for o in opportunities)
        return [
            OpportunityResponse(**opportunity, company_name=names.get(opportunity["company_id"]))
            for opportunity in opportunities
        ]
