from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ReviewBase(BaseModel):
    school_id: str
    user_id: str
    # Reviewer's display name at submission time
    user_name: str
    rating: int
    comment: str = ""


class ReviewRecord(ReviewBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


class ReviewCreate(BaseModel):
    rating: int = Field(0, ge=0, le=5)
    comment: str = ""


class ReviewOut(ReviewRecord):
    display_name: str
    avatar_url: Optional[str] = None


class AdminReviewOut(ReviewRecord):
    school_name: str
    reviewer: str
