import pytest

from app.core.exceptions import PermissionDenied
from app.core.permissions import Entity, Operation
from app.services.events import ChangeEvent, ChangeFeed


def _event(entity=Entity.EMPLOYEE, record_id="rec-1"):
    return ChangeEvent(entity, Operation.UPDATE, record_id)


def test_feed_delivers_to_entity_subscribers_only():
    feed = ChangeFeed()
    employee_events, leave_events = [], []
    feed.subscribe(Entity.EMPLOYEE, employee_events.append)
    feed.subscribe(Entity.LEAVE_REQUEST, leave_events.append)

    feed.publish(_event())
    assert employee_events == [_event()]
    assert leave_events == []


def test_cancelled_subscription_receives_nothing():
    feed = ChangeFeed()
    received = []
    subscription = feed.subscribe(Entity.EMPLOYEE, received.append)
    assert feed.subscriber_count(Entity.EMPLOYEE) == 1

    subscription.cancel()
    subscription.cancel()
    feed.publish(_event())
    assert received == []
    assert feed.subscriber_count(Entity.EMPLOYEE) == 0


def test_subscription_as_context_manager():
    feed = ChangeFeed()
    with feed.subscribe(Entity.EMPLOYEE, lambda event: None) as subscription:
        assert subscription.active
    assert feed.subscriber_count(Entity.EMPLOYEE) == 0


def test_failing_subscriber_does_not_block_others():
    feed = ChangeFeed()
    received = []

    def broken(event):
        raise RuntimeError("display went away")

    feed.subscribe(Entity.EMPLOYEE, broken)
    feed.subscribe(Entity.EMPLOYEE, received.append)
    feed.publish(_event())
    assert received == [_event()]


def test_observe_delivers_initial_then_full_snapshots(service_for, employee_payload, feed):
    """Each change pushes the complete current result set, not a diff."""
    admin = service_for("HR_ADMIN")
    snapshots = []
    subscription = service_for().observe(Entity.EMPLOYEE, snapshots.append)
    assert snapshots == [[]]

    first = admin.create(Entity.EMPLOYEE, employee_payload(employeeId="EMP-1"))
    admin.create(Entity.EMPLOYEE, employee_payload(employeeId="EMP-2"))
    admin.update(Entity.EMPLOYEE, first.id, {"position": "Staff Engineer"})

    assert [len(snapshot) for snapshot in snapshots] == [0, 1, 2, 2]
    assert snapshots[-1][0].position == "Staff Engineer"

    subscription.cancel()
    admin.delete(Entity.EMPLOYEE, first.id)
    assert len(snapshots) == 4
    assert feed.subscriber_count(Entity.EMPLOYEE) == 0


def test_observe_applies_filters_to_every_snapshot(service_for, employee_payload):
    admin = service_for("HR_ADMIN")
    snapshots = []
    with admin.observe(Entity.EMPLOYEE, snapshots.append, {"department": "Finance"}):
        admin.create(Entity.EMPLOYEE, employee_payload(employeeId="EMP-1", department="Engineering"))
        admin.create(Entity.EMPLOYEE, employee_payload(employeeId="EMP-2", department="Finance"))

    assert [[e.employee_id for e in snapshot] for snapshot in snapshots] == [[], [], ["EMP-2"]]


def test_observe_is_refused_without_read_permission(anonymous_service, feed):
    snapshots = []
    with pytest.raises(PermissionDenied):
        anonymous_service.observe(Entity.EMPLOYEE, snapshots.append)
    assert snapshots == []
    assert feed.subscriber_count(Entity.EMPLOYEE) == 0


def test_audited_mutations_refresh_audit_log_observers(service_for, employee_payload):
    root = service_for("SUPER_ADMIN")
    snapshots = []
    with root.observe(Entity.AUDIT_LOG, snapshots.append):
        root.create(Entity.EMPLOYEE, employee_payload())
    assert [len(snapshot) for snapshot in snapshots] == [0, 1]
    assert snapshots[-1][0].action == "CREATE_EMPLOYEE"


def test_failed_mutation_publishes_nothing(service_for, employee_payload):
    snapshots = []
    with service_for("HR_ADMIN").observe(Entity.EMPLOYEE, snapshots.append):
        with pytest.raises(PermissionDenied):
            service_for().create(Entity.EMPLOYEE, employee_payload())
    assert snapshots == [[]]
