from datetime import date, datetime
from typing import Optional

from pydantic import field_validator

from app.models.leave_request import LeaveStatus, LeaveType
from app.schemas.base import RecordInput, RecordResponse, reject_null


class LeaveRequestCreate(RecordInput):
    employee_id: str
    leave_type: Optional[LeaveType] = None
    start_date: date
    end_date: date
    days_requested: int
    status: LeaveStatus = LeaveStatus.PENDING
    reason: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None


class LeaveRequestUpdate(RecordInput):
    employee_id: Optional[str] = None
    leave_type: Optional[LeaveType] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    days_requested: Optional[int] = None
    status: Optional[LeaveStatus] = None
    reason: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    @field_validator("employee_id", "start_date", "end_date", "days_requested", "status")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class LeaveRequestResponse(RecordResponse):
    employee_id: str
    leave_type: Optional[LeaveType] = None
    start_date: date
    end_date: date
    days_requested: int
    status: LeaveStatus
    reason: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
