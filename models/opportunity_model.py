from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

class OpportunityBase(BaseModel):
    """Fields of a job / project posting"""
    title: str
    description: str
    location: str
    type: str
    duration: str
    salary: str = ""

    @field_validator("title", "description", "location", "type", "duration")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

class OpportunityCreate(OpportunityBase):
    pass

class OpportunityUpdate(BaseModel):
    """Partial update of an opportunity"""
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    duration: Optional[str] = None
    salary: Optional[str] = None

    @field_validator("title", "description", "location", "type", "duration")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip() if v is not None else v

class OpportunityResponse(OpportunityBase):
    id: str
    company_id: str
    company_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
