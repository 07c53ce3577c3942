"""
Audit record of a notification attempt for a high-severity report.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class Notification(BaseModel):
    id: str
    report_id: str = Field(..., alias="reportId", description="Originating report")
    subject: str
    message: str
    recipients: List[str] = Field(default_factory=list)
    transport: str = Field(..., description="Mail transport used for the attempt")
    delivered: bool = False
    attempts: int = 0
    error: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        populate_by_name = True
