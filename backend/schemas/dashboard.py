from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SLABreach(BaseModel):
    """DOWN report whose elapsed downtime exceeds the SLA threshold"""

    model_config = ConfigDict(populate_by_name=True)

    atm_id: str = Field(..., alias="atmId")
    branch: str
    issue: Optional[str] = Field(None, description="Reason text as submitted")
    down_minutes: int = Field(..., alias="downMinutes")
    since: datetime
    severity: str


class SLASummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    threshold_minutes: int = Field(..., alias="thresholdMinutes")
    breaches: List[SLABreach]


class BranchHeat(BaseModel):
    """Per-branch counts for today used to rank and color the heat map"""

    model_config = ConfigDict(populate_by_name=True)

    branch: str
    up: int
    down: int
    parked: int
    faults: int
    sla_breaches: int = Field(..., alias="slaBreaches")
    heat_score: int = Field(..., alias="heatScore")


class DashboardSummary(BaseModel):
    """Dashboard summary response model"""

    model_config = ConfigDict(populate_by_name=True)

    atm_status: Dict[str, int] = Field(..., alias="atmStatus")
    faults: Dict[str, int]
    sla: SLASummary
    branches: List[BranchHeat]
    generated_at: datetime = Field(..., alias="generatedAt")
