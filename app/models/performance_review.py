from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.db_types import new_id, utcnow

class PerformanceReview(Base):
    __tablename__ = "performance_reviews"

    id = Column(String(36), primary_key=True, default=new_id)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False, index=True)
    review_date = Column(Date, nullable=False)
    reviewer_id = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    strengths = Column(Text)
    areas_for_improvement = Column(Text)
    goals = Column(Text)
    comments = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    employee = relationship("Employee", back_populates="performance_reviews")
