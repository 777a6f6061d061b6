from sqlalchemy import Column, String, DateTime
from app.database import Base
from app.db_types import JSONType, new_id, utcnow

class AuditLog(Base):
    """Append-only record of a mutation. Written by the record service, never patched by it."""
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    action = Column(String, nullable=False, index=True)
    performed_by = Column(String, nullable=False, index=True)
    target_entity = Column(String, nullable=False, index=True)
    target_id = Column(String, nullable=False)
    changes = Column(JSONType, nullable=True)
    ip_address = Column(String, nullable=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
