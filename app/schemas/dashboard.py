from typing import Dict

from app.schemas.base import CamelModel


class DashboardStats(CamelModel):
    total_employees: int
    active_employees: int
    on_leave: int
    new_hires: int
    departments: Dict[str, int]


class AdminSummary(CamelModel):
    user_roles: int
    active_user_roles: int
    audit_entries: int
    active_config_keys: int
