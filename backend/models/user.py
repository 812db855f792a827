from datetime import datetime
from enum import Enum

from database import Base
from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship


class UserRole(str, Enum):
    """Roles carried in issued tokens"""

    ADMIN = "ADMIN"
    OPERATOR = "OPERATOR"


class User(Base):
    """Staff accounts allowed to submit and review reports"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default=UserRole.OPERATOR.value, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    reports = relationship("Report", back_populates="creator")
