from datetime import date
from typing import Optional

from pydantic import EmailStr, field_validator

from app.models.employee import (
    DEFAULT_ANNUAL_LEAVE,
    DEFAULT_SICK_LEAVE,
    EmployeeStatus,
    EmploymentType,
    PayFrequency,
)
from app.schemas.base import RecordInput, RecordResponse, reject_null


class EmployeeFields(RecordInput):
    """Optional fields shared by create and update."""
    preferred_name: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    nationality: Optional[str] = None
    national_id: Optional[str] = None
    residential_address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None
    supervisor_id: Optional[str] = None
    work_location: Optional[str] = None

    salary: Optional[float] = None
    pay_frequency: Optional[PayFrequency] = None
    bank_account_number: Optional[str] = None
    tax_file_number: Optional[str] = None

    last_review_date: Optional[date] = None
    performance_rating: Optional[str] = None


class EmployeeCreate(EmployeeFields):
    employee_id: Optional[str] = None  # generated when omitted
    full_name: str
    email: EmailStr
    department: str
    position: str
    employment_type: EmploymentType = EmploymentType.PERMANENT
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    hire_date: date
    annual_leave_balance: int = DEFAULT_ANNUAL_LEAVE
    sick_leave_balance: int = DEFAULT_SICK_LEAVE


class EmployeeUpdate(EmployeeFields):
    """Partial patch. employeeId is fixed at creation and cannot be patched."""
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    department: Optional[str] = None
    position: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    status: Optional[EmployeeStatus] = None
    hire_date: Optional[date] = None
    annual_leave_balance: Optional[int] = None
    sick_leave_balance: Optional[int] = None

    @field_validator(
        "full_name", "email", "department", "position", "employment_type",
        "status", "hire_date", "annual_leave_balance", "sick_leave_balance",
    )
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class EmployeeResponse(RecordResponse):
    employee_id: str
    full_name: str
    preferred_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    nationality: Optional[str] = None
    national_id: Optional[str] = None
    residential_address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    department: str
    position: str
    employment_type: Optional[EmploymentType] = None
    status: Optional[EmployeeStatus] = None
    hire_date: date
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None
    supervisor_id: Optional[str] = None
    work_location: Optional[str] = None

    salary: Optional[float] = None
    pay_frequency: Optional[PayFrequency] = None
    bank_account_number: Optional[str] = None
    tax_file_number: Optional[str] = None

    annual_leave_balance: Optional[int] = None
    sick_leave_balance: Optional[int] = None

    last_review_date: Optional[date] = None
    performance_rating: Optional[str] = None

    created_by: Optional[str] = None
    updated_by: Optional[str] = None
