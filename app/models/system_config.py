from sqlalchemy import Column, String, Boolean, DateTime
from app.database import Base
from app.db_types import JSONType, new_id, utcnow

class SystemConfig(Base):
    __tablename__ = "system_configs"

    id = Column(String(36), primary_key=True, default=new_id)
    config_key = Column(String, unique=True, nullable=False, index=True)
    config_value = Column(JSONType, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<SystemConfig {self.config_key}>"
