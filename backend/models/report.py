from datetime import datetime
from enum import Enum

from database import Base
from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship


class ReportStatus(str, Enum):
    """Observed ATM availability"""

    UP = "UP"
    DOWN = "DOWN"
    PARKED = "PARKED"


class Report(Base):
    """One ATM status observation logged by branch staff"""

    __tablename__ = "atm_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    branch_name = Column(String(100), nullable=False, index=True)
    atm_id = Column(String(32), nullable=False, index=True)
    atm_status = Column(String(10), nullable=False)

    # Populated only for DOWN reports
    downtime_start = Column(DateTime)
    downtime_end = Column(DateTime)
    downtime_duration_hours = Column(Float)

    reason_for_downtime = Column(Text)
    expected_restoration_time = Column(DateTime)
    follow_up_status = Column(String(50))
    performance_score = Column(Float)

    # Stamped by the server at insert time
    report_date = Column(Date, nullable=False)
    reporting_window = Column(String(11), nullable=False)

    created_by = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    creator = relationship("User", back_populates="reports")

    __table_args__ = (
        Index("idx_report_date_window", "report_date", "reporting_window"),
        Index("idx_report_date_status", "report_date", "atm_status"),
    )
