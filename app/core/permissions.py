"""
Authorization policy for record entities.

A static grant table maps (entity, grantee) to the operations allowed.
Grantees are identity-provider groups plus the AUTHENTICATED pseudo-group,
which every signed-in caller matches. A caller's effective permissions are
the union of every grant they match.
"""
import logging
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Set

from app.core.exceptions import PermissionDenied
from app.models.user_role import Role
from app.schemas.auth import Identity

audit_logger = logging.getLogger("app.audit")


class Entity(str, Enum):
    EMPLOYEE = "Employee"
    LEAVE_REQUEST = "LeaveRequest"
    PERFORMANCE_REVIEW = "PerformanceReview"
    AUDIT_LOG = "AuditLog"
    SYSTEM_CONFIG = "SystemConfig"
    USER_ROLE = "UserRole"


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


AUTHENTICATED = "AUTHENTICATED"

ALL: FrozenSet[Operation] = frozenset(Operation)
READ_ONLY: FrozenSet[Operation] = frozenset({Operation.READ})

POLICY: Dict[Entity, Dict[str, FrozenSet[Operation]]] = {
    Entity.EMPLOYEE: {
        Role.SUPER_ADMIN.value: ALL,
        Role.HR_ADMIN.value: ALL,
        Role.HR_OFFICER.value: frozenset({Operation.READ, Operation.CREATE, Operation.UPDATE}),
        AUTHENTICATED: READ_ONLY,
    },
    Entity.LEAVE_REQUEST: {
        Role.SUPER_ADMIN.value: ALL,
        Role.HR_ADMIN.value: ALL,
        Role.HR_OFFICER.value: ALL,
        AUTHENTICATED: frozenset({Operation.READ, Operation.CREATE}),
    },
    Entity.PERFORMANCE_REVIEW: {
        Role.SUPER_ADMIN.value: ALL,
        Role.HR_ADMIN.value: ALL,
        AUTHENTICATED: READ_ONLY,
    },
    Entity.AUDIT_LOG: {
        Role.SUPER_ADMIN.value: ALL,
    },
    Entity.SYSTEM_CONFIG: {
        Role.SUPER_ADMIN.value: ALL,
    },
    Entity.USER_ROLE: {
        Role.SUPER_ADMIN.value: ALL,
        Role.HR_ADMIN.value: READ_ONLY,
    },
}


def grantees_for(identity: Identity) -> Set[str]:
    """Every policy grantee the caller matches. Anonymous callers match none."""
    if not identity.authenticated:
        return set()
    return {AUTHENTICATED, *identity.groups}


def allowed_operations(entity: Entity, identity: Identity) -> Set[Operation]:
    grants = POLICY.get(entity, {})
    allowed: Set[Operation] = set()
    for grantee in grantees_for(identity):
        allowed.update(grants.get(grantee, ()))
    return allowed


def is_allowed(entity: Entity, operation: Operation, identity: Identity) -> bool:
    return operation in allowed_operations(entity, identity)


def check_permission(entity: Entity, operation: Operation, identity: Identity) -> None:
    """Raise PermissionDenied unless the caller may perform `operation` on `entity`."""
    if is_allowed(entity, operation, identity):
        return
    audit_logger.warning(
        "access denied",
        extra={
            "entity": entity.value,
            "operation": operation.value,
            "subject": identity.subject,
            "groups": list(identity.groups),
        },
    )
    caller = identity.role if identity.authenticated else "Anonymous caller"
    raise PermissionDenied(f"{caller} may not {operation.value} {entity.value} records")


def readable_entities(identity: Identity) -> Iterable[Entity]:
    return [entity for entity in Entity if is_allowed(entity, Operation.READ, identity)]
