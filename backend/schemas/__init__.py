from .auth import LoginRequest, Token, TokenData, UserResponse
from .common import ErrorResponse, OkResponse
from .dashboard import BranchHeat, DashboardSummary, SLABreach, SLASummary
from .report import ReportCreate, ReportResponse, ReportUpdate

__all__ = [
    # Auth
    "LoginRequest",
    "Token",
    "TokenData",
    "UserResponse",
    # Common
    "OkResponse",
    "ErrorResponse",
    # Reports
    "ReportCreate",
    "ReportUpdate",
    "ReportResponse",
    # Dashboard
    "DashboardSummary",
    "SLABreach",
    "SLASummary",
    "BranchHeat",
]
