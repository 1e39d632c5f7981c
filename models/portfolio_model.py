from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class PortfolioItemResponse(BaseModel):
    """A file in an applicant's portfolio"""
    id: str
    student_id: str
    file_id: str
    file_name: str
    file_type: str
    file_url: str
    description: Optional[str] = None
    created_at: datetime
