"""
Dashboard views over the employee list: search, filters, headline counts and
the staged record editor behind the create/view/edit modal.
"""
import logging
from collections import Counter
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from app.core.config import settings
from app.core.exceptions import AppException
from app.core.permissions import Entity
from app.models.employee import EmployeeStatus
from app.schemas.dashboard import AdminSummary, DashboardStats
from app.schemas.employee import EmployeeResponse
from app.services.records import RecordService

logger = logging.getLogger(__name__)

ALL = "all"
UNASSIGNED = "Unassigned"


def _active_filter(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def matches_search(employee: EmployeeResponse, query: str) -> bool:
    """Case-insensitive substring match over name, employee id and email."""
    needle = query.lower()
    haystacks = (employee.full_name, employee.employee_id, employee.email)
    return any(needle in (value or "").lower() for value in haystacks)


def filter_employees(
    employees: Iterable[EmployeeResponse],
    search: Optional[str] = None,
    department: Optional[str] = None,
    status: Optional[str] = None,
) -> List[EmployeeResponse]:
    """Search AND department AND status. None, "" or "all" disables a predicate."""
    result = []
    for employee in employees:
        if search and not matches_search(employee, search):
            continue
        if _active_filter(department) and employee.department != department:
            continue
        if _active_filter(status) and employee.status != status:
            continue
        result.append(employee)
    return result


def new_hire_cutoff(today: date, window_months: Optional[int] = None) -> date:
    months = settings.new_hire_window_months if window_months is None else window_months
    return today - relativedelta(months=months)


def is_new_hire(hire_date: Optional[date], today: date, window_months: Optional[int] = None) -> bool:
    """Hired strictly after the same calendar day `window_months` ago."""
    if hire_date is None:
        return False
    return hire_date > new_hire_cutoff(today, window_months)


def department_counts(employees: Iterable[EmployeeResponse]) -> Dict[str, int]:
    return dict(Counter(employee.department or UNASSIGNED for employee in employees))


def compute_stats(employees: List[EmployeeResponse], today: Optional[date] = None) -> DashboardStats:
    today = today or date.today()
    return DashboardStats(
        total_employees=len(employees),
        active_employees=sum(1 for e in employees if e.status == EmployeeStatus.ACTIVE),
        on_leave=sum(1 for e in employees if e.status == EmployeeStatus.ON_LEAVE),
        new_hires=sum(1 for e in employees if is_new_hire(e.hire_date, today)),
        departments=department_counts(employees),
    )


def admin_summary(service: RecordService) -> AdminSummary:
    """System counters for the super-admin panel. Each list re-checks the policy."""
    return AdminSummary(
        user_roles=len(service.list(Entity.USER_ROLE)),
        active_user_roles=len(service.list(Entity.USER_ROLE, {"isActive": True})),
        audit_entries=len(service.list(Entity.AUDIT_LOG)),
        active_config_keys=len(service.list(Entity.SYSTEM_CONFIG, {"isActive": True})),
    )


class EditorMode(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    CREATE = "create"


class EmployeeEditor:
    """
    Backs the employee modal. Edits are staged locally and committed as a
    single create or update on save. A failed save keeps the modal open with
    the draft intact and the error available for display.
    """

    def __init__(self, service: RecordService):
        self.service = service
        self.is_open = False
        self.mode = EditorMode.VIEW
        self.record: Optional[EmployeeResponse] = None
        self.draft: Dict[str, Any] = {}
        self.error: Optional[AppException] = None

    def open(self, mode: EditorMode, record: Optional[EmployeeResponse] = None) -> None:
        if mode is not EditorMode.CREATE and record is None:
            raise ValueError(f"{mode.value} mode needs an existing employee")
        self.is_open = True
        self.mode = mode
        self.record = record if mode is not EditorMode.CREATE else None
        self.draft = {}
        self.error = None

    def stage(self, **changes: Any) -> None:
        if not self.is_open:
            raise ValueError("editor is closed")
        if self.mode is EditorMode.VIEW:
            raise ValueError("view mode is read-only")
        self.draft.update(changes)

    def save(self) -> Optional[EmployeeResponse]:
        """Commit the draft. Returns the saved record, or None if the service refused it."""
        if not self.is_open or self.mode is EditorMode.VIEW:
            raise ValueError("nothing to save")
        try:
            if self.mode is EditorMode.CREATE:
                saved = self.service.create(Entity.EMPLOYEE, self.draft)
            else:
                saved = self.service.update(Entity.EMPLOYEE, self.record.id, self.draft)
        except AppException as e:
            logger.warning(f"Employee save failed: {e.message}", extra={"code": e.error_code})
            self.error = e
            return None
        self.close()
        return saved

    def close(self) -> None:
        self.is_open = False
        self.mode = EditorMode.VIEW
        self.record = None
        self.draft = {}
        self.error = None
