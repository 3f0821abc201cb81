from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1, max_length=500)


class ReviewUpdate(ReviewCreate):
    pass


class ReviewResponse(BaseModel):
    id: str
    member_id: str
    event_id: str
    rating: int
    comment: str
    review_date: datetime
    member_name: Optional[str] = None

    class Config:
        from_attributes = True
