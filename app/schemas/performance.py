from datetime import date
from typing import Optional

from pydantic import field_validator

from app.schemas.base import RecordInput, RecordResponse, reject_null


class PerformanceReviewCreate(RecordInput):
    employee_id: str
    review_date: date
    reviewer_id: str
    rating: int
    strengths: Optional[str] = None
    areas_for_improvement: Optional[str] = None
    goals: Optional[str] = None
    comments: Optional[str] = None


class PerformanceReviewUpdate(RecordInput):
    employee_id: Optional[str] = None
    review_date: Optional[date] = None
    reviewer_id: Optional[str] = None
    rating: Optional[int] = None
    strengths: Optional[str] = None
    areas_for_improvement: Optional[str] = None
    goals: Optional[str] = None
    comments: Optional[str] = None

    @field_validator("employee_id", "review_date", "reviewer_id", "rating")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class PerformanceReviewResponse(RecordResponse):
    employee_id: str
    review_date: date
    reviewer_id: str
    rating: int
    strengths: Optional[str] = None
    areas_for_improvement: Optional[str] = None
    goals: Optional[str] = None
    comments: Optional[str] = None
