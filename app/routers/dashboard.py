from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.permissions import Entity
from app.routers.auth_deps import get_record_service
from app.services.dashboard import admin_summary, compute_stats, filter_employees
from app.services.records import RecordService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/employees")
def search_employees(
    search: Optional[str] = Query(None, description="Substring of name, employee id or email"),
    department: Optional[str] = Query(None, description="Exact department, or 'all'"),
    status: Optional[str] = Query(None, description="Exact status, or 'all'"),
    service: RecordService = Depends(get_record_service),
):
    employees = service.list(Entity.EMPLOYEE)
    matches = filter_employees(employees, search=search, department=department, status=status)
    return [employee.model_dump(mode="json", by_alias=True) for employee in matches]


@router.get("/stats")
def get_stats(
    today: Optional[date] = Query(None, description="Reference date for new-hire counting"),
    service: RecordService = Depends(get_record_service),
):
    stats = compute_stats(service.list(Entity.EMPLOYEE), today=today)
    return stats.model_dump(by_alias=True)


@router.get("/admin")
def get_admin_summary(service: RecordService = Depends(get_record_service)):
    """Super-admin panel counters. Other roles get 403 from the record policy."""
    return admin_summary(service).model_dump(by_alias=True)
