from datetime import date, datetime
from typing import Optional

from models.report import ReportStatus
from pydantic import BaseModel, Field, field_validator


class ReportBase(BaseModel):
    """Fields shared by report submission and update"""

    branch_name: str = Field(..., description="Branch owning the ATM", max_length=100)
    atm_id: str = Field(..., description="ATM identifier", max_length=32)
    atm_status: ReportStatus = Field(..., description="UP, DOWN or PARKED")
    reason_for_downtime: Optional[str] = Field(
        None, description="Fault category key or free text"
    )

    @field_validator("branch_name", "atm_id")
    def validate_required_text(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError("Branch name and ATM ID are required")
        return v.strip()

    @field_validator("atm_status", mode="before")
    def validate_status(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("reason_for_downtime")
    def blank_reason_to_none(cls, v):
        if v is None or len(v.strip()) == 0:
            return None
        return v


class ReportCreate(ReportBase):
    """Schema for submitting a status report"""

    downtime_start: Optional[datetime] = None
    downtime_end: Optional[datetime] = None
    expected_restoration_time: Optional[datetime] = None
    follow_up_status: Optional[str] = Field(None, max_length=50)
    performance_score: Optional[float] = None


class ReportUpdate(ReportBase):
    """Full replacement of the editable report fields"""

    pass


class ReportResponse(BaseModel):
    """Report row as stored"""

    id: int
    branch_name: str
    atm_id: str
    atm_status: str
    downtime_start: Optional[datetime] = None
    downtime_end: Optional[datetime] = None
    downtime_duration_hours: Optional[float] = None
    reason_for_downtime: Optional[str] = None
    expected_restoration_time: Optional[datetime] = None
    follow_up_status: Optional[str] = None
    performance_score: Optional[float] = None
    report_date: date
    reporting_window: str
    created_at: datetime

    class Config:
        from_attributes = True
