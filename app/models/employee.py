"""
Employee Model.
Identity, employment, compensation and leave-balance data for one person.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Float
from sqlalchemy.orm import relationship
import enum
from app.database import Base
from app.db_types import EncryptedString, new_id, utcnow


class EmploymentType(str, enum.Enum):
    PERMANENT = "PERMANENT"
    CONTRACT = "CONTRACT"
    CASUAL = "CASUAL"
    INTERN = "INTERN"


class EmployeeStatus(str, enum.Enum):
    """No transition rules: any status may follow any other."""
    ACTIVE = "ACTIVE"
    ON_LEAVE = "ON_LEAVE"
    SUSPENDED = "SUSPENDED"
    SEPARATED = "SEPARATED"


class PayFrequency(str, enum.Enum):
    WEEKLY = "WEEKLY"
    FORTNIGHTLY = "FORTNIGHTLY"
    MONTHLY = "MONTHLY"


DEFAULT_ANNUAL_LEAVE = 20
DEFAULT_SICK_LEAVE = 10


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=new_id)
    employee_id = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=False, index=True)
    preferred_name = Column(String, nullable=True)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    marital_status = Column(String, nullable=True)
    nationality = Column(String, nullable=True)
    national_id = Column(String, nullable=True)
    residential_address = Column(String, nullable=True)
    emergency_contact_name = Column(String, nullable=True)
    emergency_contact_phone = Column(String, nullable=True)

    # Employment
    department = Column(String, nullable=False, index=True)
    position = Column(String, nullable=False)
    employment_type = Column(String, default=EmploymentType.PERMANENT.value)
    status = Column(String, default=EmployeeStatus.ACTIVE.value, index=True)
    hire_date = Column(Date, nullable=False)
    contract_start_date = Column(Date, nullable=True)
    contract_end_date = Column(Date, nullable=True)
    supervisor_id = Column(String, nullable=True)
    work_location = Column(String, nullable=True)

    # Compensation (restricted)
    salary = Column(Float, nullable=True)
    pay_frequency = Column(String, nullable=True)
    bank_account_number = Column(EncryptedString, nullable=True)
    tax_file_number = Column(EncryptedString, nullable=True)

    # Leave
    annual_leave_balance = Column(Integer, default=DEFAULT_ANNUAL_LEAVE)
    sick_leave_balance = Column(Integer, default=DEFAULT_SICK_LEAVE)

    # Performance snapshot
    last_review_date = Column(Date, nullable=True)
    performance_rating = Column(String, nullable=True)

    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    leave_requests = relationship("LeaveRequest", back_populates="employee")
    performance_reviews = relationship("PerformanceReview", back_populates="employee")

    def __repr__(self):
        return f"<Employee {self.employee_id} ({self.status})>"
