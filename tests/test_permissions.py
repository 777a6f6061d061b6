import pytest
from app.core.exceptions import PermissionDenied
from app.core.permissions import (
    Entity,
    Operation,
    allowed_operations,
    check_permission,
    is_allowed,
    readable_entities,
)
from app.schemas.auth import Identity


def test_anonymous_caller_is_denied_everything():
    """Callers without a session match no grant at all."""
    anonymous = Identity.anonymous()
    for entity in Entity:
        assert allowed_operations(entity, anonymous) == set()
    assert readable_entities(anonymous) == []


def test_plain_employee_permissions(identity_for):
    """Any signed-in caller reads HR records and may submit leave."""
    employee = identity_for()
    assert allowed_operations(Entity.EMPLOYEE, employee) == {Operation.READ}
    assert allowed_operations(Entity.LEAVE_REQUEST, employee) == {Operation.READ, Operation.CREATE}
    assert allowed_operations(Entity.PERFORMANCE_REVIEW, employee) == {Operation.READ}
    assert not is_allowed(Entity.AUDIT_LOG, Operation.READ, employee)
    assert not is_allowed(Entity.USER_ROLE, Operation.READ, employee)
    assert readable_entities(employee) == [
        Entity.EMPLOYEE, Entity.LEAVE_REQUEST, Entity.PERFORMANCE_REVIEW,
    ]


def test_hr_officer_cannot_delete_employees(identity_for):
    officer = identity_for("HR_OFFICER")
    assert allowed_operations(Entity.EMPLOYEE, officer) == {
        Operation.READ, Operation.CREATE, Operation.UPDATE,
    }
    assert is_allowed(Entity.LEAVE_REQUEST, Operation.DELETE, officer)
    assert not is_allowed(Entity.PERFORMANCE_REVIEW, Operation.UPDATE, officer)


def test_hr_admin_reads_role_assignments_only(identity_for):
    admin = identity_for("HR_ADMIN")
    assert allowed_operations(Entity.USER_ROLE, admin) == {Operation.READ}
    assert not is_allowed(Entity.SYSTEM_CONFIG, Operation.READ, admin)
    assert not is_allowed(Entity.AUDIT_LOG, Operation.READ, admin)


def test_super_admin_has_everything(identity_for):
    root = identity_for("SUPER_ADMIN")
    for entity in Entity:
        assert allowed_operations(entity, root) == set(Operation)


def test_permissions_are_the_union_of_groups(identity_for):
    """Membership in several groups grants whatever any of them grants."""
    both = identity_for("HR_OFFICER", "HR_ADMIN")
    assert is_allowed(Entity.EMPLOYEE, Operation.DELETE, both)
    assert is_allowed(Entity.USER_ROLE, Operation.READ, both)


def test_unknown_group_falls_back_to_authenticated_grants(identity_for):
    contractor = identity_for("CONTRACTORS")
    assert allowed_operations(Entity.EMPLOYEE, contractor) == {Operation.READ}


def test_check_permission_raises_with_readable_message(identity_for):
    with pytest.raises(PermissionDenied) as exc:
        check_permission(Entity.EMPLOYEE, Operation.DELETE, identity_for("HR_OFFICER"))
    assert exc.value.status_code == 403
    assert exc.value.message == "HR_OFFICER may not delete Employee records"

    with pytest.raises(PermissionDenied) as exc:
        check_permission(Entity.EMPLOYEE, Operation.READ, Identity.anonymous())
    assert exc.value.message.startswith("Anonymous caller")


def test_check_permission_passes_silently_when_allowed(identity_for):
    assert check_permission(Entity.SYSTEM_CONFIG, Operation.UPDATE, identity_for("SUPER_ADMIN")) is None
