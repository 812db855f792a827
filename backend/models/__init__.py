"""Database models package"""

# Import the base here to ensure all models are registered
from database.session import Base

from .report import Report, ReportStatus
from .user import User, UserRole

__all__ = ["Report", "ReportStatus", "User", "UserRole", "Base"]
