"""
Record service: create/read/update/delete and live queries for every entity.

Checks run in a fixed order so callers can tell failures apart:
schema validation, then the authorization policy, then record-level rules
(existence, employee references, uniqueness, dependent records).
"""
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python
from sqlalchemy import JSON
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.permissions import Entity, Operation, check_permission
from app.core.security import mask_payload
from app.db_types import new_id
from app.models import AuditLog, Employee, LeaveRequest, PerformanceReview
from app.schemas.auth import Identity
from app.schemas.base import RecordInput, RecordResponse
from app.services.base import BaseService
from app.services.events import ChangeEvent, ChangeFeed, Subscription, change_feed
from app.services.registry import EntityDefinition, definition_for

Snapshot = List[RecordResponse]


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _wire(name: str) -> str:
    return to_camel(name)


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "body"
    return ValidationError(field, error["msg"])


class RecordService(BaseService):
    def __init__(
        self,
        db: Session,
        identity: Identity,
        feed: Optional[ChangeFeed] = None,
        ip_address: Optional[str] = None,
    ):
        super().__init__(db, identity)
        self.feed = feed if feed is not None else change_feed
        self.ip_address = ip_address

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, entity: Entity, fields: Mapping[str, Any]) -> RecordResponse:
        definition = definition_for(entity)
        data = self._validate(definition.create_schema, fields, partial=False)
        check_permission(entity, Operation.CREATE, self.identity)

        with self.store_access():
            if definition.references_employee:
                self._require_employee(data["employee_id"])
            if entity is Entity.EMPLOYEE and not data.get("employee_id"):
                data["employee_id"] = self._next_employee_id()
            self._check_unique(definition, data)
            if definition.stamps_authors:
                data["created_by"] = self.identity.actor

            record = definition.model(id=new_id(), **data)
            self.db.add(record)
            audit_id = self._audit(definition, Operation.CREATE, record.id, data)
            self.db.commit()
            response = definition.response_schema.model_validate(record)

        self._logger.info(f"Created {entity.value} {response.id} by {self.identity.actor}")
        self._publish(definition, Operation.CREATE, response.id, audit_id)
        return response

    def update(self, entity: Entity, record_id: str, fields: Mapping[str, Any]) -> RecordResponse:
        """Partial patch: only the supplied fields change."""
        definition = definition_for(entity)
        data = self._validate(definition.update_schema, fields, partial=True)
        check_permission(entity, Operation.UPDATE, self.identity)

        with self.store_access():
            record = self._load(definition, record_id)
            if definition.references_employee and "employee_id" in data:
                self._require_employee(data["employee_id"])
            self._check_unique(definition, data, exclude_id=record_id)

            for name, value in data.items():
                setattr(record, name, value)
            if definition.stamps_authors:
                record.updated_by = self.identity.actor

            audit_id = self._audit(definition, Operation.UPDATE, record_id, data)
            self.db.commit()
            response = definition.response_schema.model_validate(record)

        self._logger.info(
            f"Updated {entity.value} {record_id} by {self.identity.actor}",
            extra={"fields": sorted(data)},
        )
        self._publish(definition, Operation.UPDATE, record_id, audit_id)
        return response

    def delete(self, entity: Entity, record_id: str) -> None:
        """Permanent removal. Employees with dependent records cannot be deleted."""
        definition = definition_for(entity)
        check_permission(entity, Operation.DELETE, self.identity)

        with self.store_access():
            record = self._load(definition, record_id)
            if entity is Entity.EMPLOYEE:
                self._check_dependents(record)
            snapshot = definition.response_schema.model_validate(record).model_dump()
            self.db.delete(record)
            audit_id = self._audit(definition, Operation.DELETE, record_id, snapshot)
            self.db.commit()

        self._logger.info(f"Deleted {entity.value} {record_id} by {self.identity.actor}")
        self._publish(definition, Operation.DELETE, record_id, audit_id)

    def get(self, entity: Entity, record_id: str) -> RecordResponse:
        definition = definition_for(entity)
        check_permission(entity, Operation.READ, self.identity)
        with self.store_access():
            record = self._load(definition, record_id)
            return definition.response_schema.model_validate(record)

    def list(self, entity: Entity, filters: Optional[Mapping[str, Any]] = None) -> Snapshot:
        """All records of `entity`, oldest first, matching every filter exactly."""
        definition = definition_for(entity)
        criteria = self._parse_filters(definition, filters or {})
        check_permission(entity, Operation.READ, self.identity)

        with self.store_access():
            model = definition.model
            query = self.db.query(model)
            for name, value in criteria.items():
                query = query.filter(getattr(model, name) == value)
            records = query.order_by(model.created_at, model.id).all()
            return [definition.response_schema.model_validate(record) for record in records]

    def observe(
        self,
        entity: Entity,
        on_snapshot: Callable[[Snapshot], None],
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Subscription:
        """
        Live variant of `list`. Delivers the current result set immediately and
        a complete fresh one after every committed change to `entity`, until the
        returned subscription is cancelled. Each snapshot replaces the last.

        Snapshots are recomputed on this service's session in the publishing
        thread, so use it only where mutations run on the same thread. Callers
        on another thread (the websocket route) subscribe to `feed` directly and
        re-list on their own side.
        """
        initial = self.list(entity, filters)

        def _on_change(event: ChangeEvent) -> None:
            on_snapshot(self.list(entity, filters))

        subscription = self.feed.subscribe(entity, _on_change)
        on_snapshot(initial)
        return subscription

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate(self, schema: Type[RecordInput], fields: Any, partial: bool) -> Dict[str, Any]:
        if not isinstance(fields, Mapping):
            raise ValidationError("body", "expected an object of field values")
        try:
            parsed = schema.model_validate(dict(fields))
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e
        dumped = parsed.model_dump(exclude_unset=partial)
        return {name: _plain(value) for name, value in dumped.items()}

    def _parse_filters(self, definition: EntityDefinition, filters: Mapping[str, Any]) -> Dict[str, Any]:
        fields = definition.response_schema.model_fields
        by_wire = {field.alias or name: name for name, field in fields.items()}
        columns = definition.model.__table__.c

        criteria: Dict[str, Any] = {}
        for key, raw in filters.items():
            name = key if key in fields else by_wire.get(key)
            if name is None:
                raise ValidationError(key, f"is not a field of {definition.entity.value}")
            if name in definition.sensitive_fields or isinstance(columns[name].type, JSON):
                raise ValidationError(_wire(name), "cannot be used as a filter")
            try:
                value = TypeAdapter(fields[name].annotation).validate_python(raw)
            except PydanticValidationError as e:
                raise ValidationError(_wire(name), e.errors()[0]["msg"]) from e
            criteria[name] = _plain(value)
        return criteria

    def _load(self, definition: EntityDefinition, record_id: str):
        record = self.db.get(definition.model, record_id)
        if record is None:
            raise NotFoundError(definition.entity.value, record_id)
        return record

    def _require_employee(self, employee_id: str) -> None:
        if self.db.get(Employee, employee_id) is None:
            raise ValidationError("employeeId", "does not reference an existing employee")

    def _next_employee_id(self) -> str:
        candidate = int(time.time() * 1000)
        while self.db.query(Employee.id).filter(Employee.employee_id == f"EMP{candidate}").first():
            candidate += 1
        return f"EMP{candidate}"

    def _check_unique(self, definition: EntityDefinition, data: Dict[str, Any], exclude_id: Optional[str] = None):
        model = definition.model
        for name in definition.unique_fields:
            value = data.get(name)
            if value is None:
                continue
            query = self.db.query(model.id).filter(getattr(model, name) == value)
            if exclude_id is not None:
                query = query.filter(model.id != exclude_id)
            if query.first() is not None:
                raise ConflictError(
                    f"{definition.entity.value} with {_wire(name)}={value!r} already exists",
                    details={"field": _wire(name)},
                )

    def _check_dependents(self, employee: Employee) -> None:
        leave_count = self.db.query(LeaveRequest).filter(LeaveRequest.employee_id == employee.id).count()
        review_count = self.db.query(PerformanceReview).filter(PerformanceReview.employee_id == employee.id).count()
        if leave_count or review_count:
            raise ConflictError(
                f"Employee {employee.employee_id} still has {leave_count} leave request(s) "
                f"and {review_count} performance review(s)",
                details={"leaveRequests": leave_count, "performanceReviews": review_count},
            )

    def _audit(self, definition: EntityDefinition, operation: Operation, record_id: str, changes: Dict[str, Any]) -> Optional[str]:
        """Stage an audit entry in the mutation's own transaction."""
        if not definition.audited:
            return None
        payload = mask_payload(changes, definition.sensitive_fields)
        entry = AuditLog(
            id=new_id(),
            action=f"{operation.value.upper()}_{definition.entity.name}",
            performed_by=self.identity.actor,
            target_entity=definition.entity.value,
            target_id=record_id,
            changes=to_jsonable_python({_wire(key): value for key, value in payload.items()}),
            ip_address=self.ip_address,
        )
        self.db.add(entry)
        return entry.id

    def _publish(self, definition: EntityDefinition, operation: Operation, record_id: str, audit_id: Optional[str]):
        self.feed.publish(ChangeEvent(definition.entity, operation, record_id))
        if audit_id is not None:
            self.feed.publish(ChangeEvent(Entity.AUDIT_LOG, Operation.CREATE, audit_id))
