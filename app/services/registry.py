"""
Entity schema registry: which table, which input/output schemas and which
record-level rules belong to each entity.
"""
from dataclasses import dataclass
from typing import Dict, Tuple, Type

from app.core.permissions import Entity
from app.database import Base
from app.models import AuditLog, Employee, LeaveRequest, PerformanceReview, SystemConfig, UserRole
from app.schemas.admin import (
    AuditLogCreate, AuditLogResponse, AuditLogUpdate,
    SystemConfigCreate, SystemConfigResponse, SystemConfigUpdate,
    UserRoleCreate, UserRoleResponse, UserRoleUpdate,
)
from app.schemas.base import RecordInput, RecordResponse
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.schemas.leave import LeaveRequestCreate, LeaveRequestResponse, LeaveRequestUpdate
from app.schemas.performance import (
    PerformanceReviewCreate, PerformanceReviewResponse, PerformanceReviewUpdate,
)


@dataclass(frozen=True)
class EntityDefinition:
    entity: Entity
    model: Type[Base]
    create_schema: Type[RecordInput]
    update_schema: Type[RecordInput]
    response_schema: Type[RecordResponse]
    collection: str
    unique_fields: Tuple[str, ...] = ()
    # employee_id holds the id of an Employee record
    references_employee: bool = False
    # created_by / updated_by are stamped from the caller
    stamps_authors: bool = False
    # masked in audit payloads and never filterable
    sensitive_fields: Tuple[str, ...] = ()
    audited: bool = True


REGISTRY: Dict[Entity, EntityDefinition] = {
    Entity.EMPLOYEE: EntityDefinition(
        entity=Entity.EMPLOYEE,
        model=Employee,
        create_schema=EmployeeCreate,
        update_schema=EmployeeUpdate,
        response_schema=EmployeeResponse,
        collection="employees",
        unique_fields=("employee_id",),
        stamps_authors=True,
        sensitive_fields=("bank_account_number", "tax_file_number"),
    ),
    Entity.LEAVE_REQUEST: EntityDefinition(
        entity=Entity.LEAVE_REQUEST,
        model=LeaveRequest,
        create_schema=LeaveRequestCreate,
        update_schema=LeaveRequestUpdate,
        response_schema=LeaveRequestResponse,
        collection="leave-requests",
        references_employee=True,
    ),
    Entity.PERFORMANCE_REVIEW: EntityDefinition(
        entity=Entity.PERFORMANCE_REVIEW,
        model=PerformanceReview,
        create_schema=PerformanceReviewCreate,
        update_schema=PerformanceReviewUpdate,
        response_schema=PerformanceReviewResponse,
        collection="performance-reviews",
        references_employee=True,
    ),
    Entity.AUDIT_LOG: EntityDefinition(
        entity=Entity.AUDIT_LOG,
        model=AuditLog,
        create_schema=AuditLogCreate,
        update_schema=AuditLogUpdate,
        response_schema=AuditLogResponse,
        collection="audit-logs",
        audited=False,
    ),
    Entity.SYSTEM_CONFIG: EntityDefinition(
        entity=Entity.SYSTEM_CONFIG,
        model=SystemConfig,
        create_schema=SystemConfigCreate,
        update_schema=SystemConfigUpdate,
        response_schema=SystemConfigResponse,
        collection="system-configs",
        unique_fields=("config_key",),
    ),
    Entity.USER_ROLE: EntityDefinition(
        entity=Entity.USER_ROLE,
        model=UserRole,
        create_schema=UserRoleCreate,
        update_schema=UserRoleUpdate,
        response_schema=UserRoleResponse,
        collection="user-roles",
        unique_fields=("user_id",),
    ),
}

_BY_COLLECTION: Dict[str, EntityDefinition] = {d.collection: d for d in REGISTRY.values()}


def definition_for(entity: Entity) -> EntityDefinition:
    return REGISTRY[entity]


def definition_for_collection(collection: str) -> EntityDefinition:
    """Raises KeyError for an unknown collection slug."""
    return _BY_COLLECTION[collection]


def collections() -> Tuple[str, ...]:
    return tuple(_BY_COLLECTION)
