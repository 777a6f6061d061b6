"""
Schemas for the SUPER_ADMIN entities: audit log, system configuration and role assignments.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from app.db_types import utcnow
from app.models.user_role import Role
from app.schemas.base import RecordInput, RecordResponse, reject_null


class AuditLogCreate(RecordInput):
    action: str
    performed_by: str
    target_entity: str
    target_id: str
    changes: Optional[Any] = None
    ip_address: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)


class AuditLogUpdate(RecordInput):
    action: Optional[str] = None
    performed_by: Optional[str] = None
    target_entity: Optional[str] = None
    target_id: Optional[str] = None
    changes: Optional[Any] = None
    ip_address: Optional[str] = None
    timestamp: Optional[datetime] = None

    @field_validator("action", "performed_by", "target_entity", "target_id", "timestamp")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class AuditLogResponse(RecordResponse):
    action: str
    performed_by: str
    target_entity: str
    target_id: str
    changes: Optional[Any] = None
    ip_address: Optional[str] = None
    timestamp: datetime


class SystemConfigCreate(RecordInput):
    config_key: str
    config_value: Any
    description: Optional[str] = None
    is_active: bool = True

    @field_validator("config_value")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class SystemConfigUpdate(RecordInput):
    config_key: Optional[str] = None
    config_value: Optional[Any] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("config_key", "config_value", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class SystemConfigResponse(RecordResponse):
    config_key: str
    config_value: Any
    description: Optional[str] = None
    is_active: bool


class UserRoleCreate(RecordInput):
    user_id: str
    user_email: str
    user_name: str
    role: Role
    department: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_at: Optional[datetime] = None
    is_active: bool = True


class UserRoleUpdate(RecordInput):
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    role: Optional[Role] = None
    department: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_at: Optional[datetime] = None
    is_active: Optional[bool] = None

    @field_validator("user_id", "user_email", "user_name", "role", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class UserRoleResponse(RecordResponse):
    user_id: str
    user_email: str
    user_name: str
    role: Role
    department: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_at: Optional[datetime] = None
    is_active: bool
