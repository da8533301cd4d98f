# services/school_directory/schemas/schools.py

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class CourseType(str, Enum):
    JLPT_N5 = "JLPT N5"
    JLPT_N4 = "JLPT N4"
    JLPT_N3 = "JLPT N3"
    JLPT_N2 = "JLPT N2"
    JLPT_N1 = "JLPT N1"


class Schedule(str, Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    FULL_DAY = "Full-day"


class SchoolBase(BaseModel):
    name: str
    address: str
    city: str
    phone: List[str] = Field(default_factory=list)
    google_maps_url: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None
    schedule: List[Schedule] = Field(default_factory=list)
    course_types: List[CourseType] = Field(default_factory=list)
    custom_courses: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    description: Optional[str] = None


class SchoolRecord(SchoolBase):
    id: str

    class Config:
        from_attributes = True


class SchoolCreate(SchoolBase):
    """Admin school form. Blank list entries are dropped before saving."""

    @field_validator("phone", "custom_courses", "images")
    @classmethod
    def drop_blank_entries(cls, value: List[str]) -> List[str]:
        return [item.strip() for item in value if item and item.strip()]

    @field_validator("phone")
    @classmethod
    def require_phone(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("At least one phone number is required")
        return value

    @field_validator("images")
    @classmethod
    def require_image(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("At least one image is required")
        return value


class SchoolListOut(BaseModel):
    count: int
    schools: List[SchoolRecord]


class SchoolDetailOut(BaseModel):
    school: SchoolRecord
    review_count: int
    average_rating: float
    all_courses: List[str]
    coordinates: Optional[Tuple[float, float]] = None
    map_embed_url: str
    is_saved: bool = False
