"""
Role assignment records.
"""
from sqlalchemy import Column, String, Boolean, DateTime
import enum
from app.database import Base
from app.db_types import new_id, utcnow


class Role(str, enum.Enum):
    """
    Identity-provider groups, most to least privileged.

    - SUPER_ADMIN: everything, including audit logs, system config and role assignments
    - HR_ADMIN: full HR records access, read-only role assignments
    - HR_OFFICER: day-to-day employee and leave administration
    - EMPLOYEE: self-service (read, submit leave)
    """
    SUPER_ADMIN = "SUPER_ADMIN"
    HR_ADMIN = "HR_ADMIN"
    HR_OFFICER = "HR_OFFICER"
    EMPLOYEE = "EMPLOYEE"


# Display precedence, highest first
ROLE_PRECEDENCE = [Role.SUPER_ADMIN, Role.HR_ADMIN, Role.HR_OFFICER, Role.EMPLOYEE]


class UserRole(Base):
    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String, unique=True, nullable=False, index=True)
    user_email = Column(String, nullable=False, index=True)
    user_name = Column(String, nullable=False)
    role = Column(String, nullable=False)
    department = Column(String, nullable=True)
    assigned_by = Column(String, nullable=True)
    assigned_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<UserRole {self.user_email} ({self.role})>"
