# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    employee, leave_request, performance_review,
    audit_log, system_config, user_role,
)

# Explicit class exports for cleaner imports
from .employee import Employee
from .leave_request import LeaveRequest
from .performance_review import PerformanceReview
from .audit_log import AuditLog
from .system_config import SystemConfig
from .user_role import UserRole

__all__ = [
    "Employee",
    "LeaveRequest",
    "PerformanceReview",
    "AuditLog",
    "SystemConfig",
    "UserRole",
]
