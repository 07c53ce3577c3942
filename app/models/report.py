"""
Pydantic models for street-dog incident reports.
These models handle validation for report submission and responses.

Wire format uses camelCase (dogCount, contactNumber, reportedBy) to match
what the citizen form and the municipal dashboard send and read.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List, Dict
from enum import Enum


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReportStatus(str, Enum):
    """
    Triage states for a report.
    Every report starts as PENDING. No terminal state is enforced.
    """
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class DogCount(str, Enum):
    """Bucketed number of dogs seen."""
    ONE_TO_TWO = "1-2"
    THREE_TO_FIVE = "3-5"
    SIX_TO_TEN = "6-10"
    MORE_THAN_TEN = "10+"


class ReportCreate(BaseModel):
    """
    Model for creating a new report (incoming POST request).
    These are the fields citizens provide when submitting a report.
    Unknown fields are rejected; system fields (id, status, timestamp) are not accepted.
    """
    location: str = Field(..., min_length=1, max_length=300, description="Where the dogs were seen")
    severity: Severity = Field(..., description="low | medium | high")
    dog_count: DogCount = Field(..., alias="dogCount", description="1-2 | 3-5 | 6-10 | 10+")
    description: str = Field(..., min_length=1, max_length=2000, description="What the citizen observed")
    contact_number: str = Field(..., min_length=1, max_length=30, alias="contactNumber", description="Reporter phone number")
    reported_by: Optional[str] = Field(None, max_length=100, alias="reportedBy", description="Optional reporter name")
    photos: List[str] = Field(default_factory=list, description="References to already-stored photos")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "location": "MG Road, Near City Mall",
                "severity": "high",
                "dogCount": "6-10",
                "description": "Pack of aggressive dogs blocking pedestrian path",
                "contactNumber": "+91 9876543210",
                "reportedBy": "Rajesh Kumar",
            }
        }


class StatusUpdate(BaseModel):
    """
    Body of PUT /reports/{id}/status.
    Kept as a plain string so the store owns the enumeration check.
    """
    status: str = Field(..., description="pending | in-progress | resolved | dismissed")

    class Config:
        extra = "forbid"


class Report(BaseModel):
    """
    Model for report responses (what API returns).
    Includes system-generated fields like ID and timestamp.
    """
    id: str = Field(..., description="Document ID assigned by the store")
    location: str
    severity: Severity
    status: ReportStatus = ReportStatus.PENDING
    dog_count: DogCount = Field(..., alias="dogCount")
    description: str
    contact_number: str = Field(..., alias="contactNumber")
    photos: List[str] = Field(default_factory=list)
    timestamp: datetime = Field(..., description="When the report was stored")
    reported_by: Optional[str] = Field(None, alias="reportedBy")

    class Config:
        populate_by_name = True


class ReportFilter(BaseModel):
    """
    Conjunction of optional predicates used by the dashboard.
    `text` matches a case-insensitive substring of the location or the id.
    """
    status: Optional[ReportStatus] = None
    severity: Optional[Severity] = None
    text: Optional[str] = None

    def is_empty(self) -> bool:
        return self.status is None and self.severity is None and not self.text


class ReportSummary(BaseModel):
    """Dashboard counters."""
    total: int = 0
    pending: int = 0
    in_progress: int = Field(0, alias="inProgress")
    resolved: int = 0
    dismissed: int = 0
    high_severity: int = Field(0, alias="highSeverity")
    by_severity: Dict[str, int] = Field(default_factory=dict, alias="bySeverity")

    class Config:
        populate_by_name = True
