# services/school_directory/listing.py
"""Read-side helpers behind the listing, detail, review and admin screens."""
import math
import re
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel

from services.school_directory.schemas.reviews import ReviewRecord
from services.school_directory.schemas.schools import CourseType, Schedule, SchoolRecord
from services.school_directory.schemas.users import UserRecord, UserRole

_AT_COORDS = re.compile(r"@(-?\d+\.\d+),(-?\d+\.\d+)")
_QUERY_COORDS = re.compile(r"[?&](?:q|ll|center)=(-?\d+\.\d+),(-?\d+\.\d+)")

_MISSING_TABLE_MARKERS = ("Could not find the table", "schema cache", "no such table")


class SchoolFilters(BaseModel):
    search_term: str = ""
    location: str = ""
    course_type: Optional[CourseType] = None
    schedule: Optional[Schedule] = None


def filter_schools(schools: Iterable[SchoolRecord], filters: SchoolFilters) -> List[SchoolRecord]:
    result = list(schools)

    if filters.search_term:
        term = filters.search_term.lower()
        result = [
            school for school in result
            if term in school.name.lower()
            or any(term in course.lower() for course in school.custom_courses)
        ]
    if filters.location:
        result = [school for school in result if school.city == filters.location]
    if filters.course_type:
        result = [school for school in result if filters.course_type in school.course_types]
    if filters.schedule:
        result = [school for school in result if filters.schedule in school.schedule]

    return result


def unique_cities(schools: Iterable[SchoolRecord]) -> List[str]:
    return list(dict.fromkeys(school.city for school in schools))


def all_courses(school: SchoolRecord) -> List[str]:
    return [course.value for course in school.course_types] + list(school.custom_courses)


def extract_coordinates(school: SchoolRecord) -> Optional[Tuple[float, float]]:
    """Stored lat/lng, else coordinates embedded in the map URL."""
    lat, lng = school.lat, school.lng
    if not lat or not lng:
        match = _AT_COORDS.search(school.google_maps_url) or _QUERY_COORDS.search(school.google_maps_url)
        if match:
            lat, lng = float(match.group(1)), float(match.group(2))

    if lat is None or lng is None or math.isnan(lat) or math.isnan(lng) or lat == 0 or lng == 0:
        return None
    return lat, lng


def map_embed_url(school: SchoolRecord) -> str:
    if "/embed" in school.google_maps_url:
        return school.google_maps_url
    address = f"{school.address}, {school.city}" if school.city else school.address
    return f"https://maps.google.com/maps?q={quote(address)}&t=&z=15&ie=UTF8&iwloc=&output=embed"


def reviews_for_school(reviews: Iterable[ReviewRecord], school_id: str) -> List[ReviewRecord]:
    """Reviews of one school, newest first."""
    matching = [review for review in reviews if review.school_id == school_id]
    return sorted(matching, key=lambda review: review.created_at, reverse=True)


def average_rating(reviews: List[ReviewRecord]) -> float:
    if not reviews:
        return 0.0
    return sum(review.rating for review in reviews) / len(reviews)


def reviewer_display_name(review: ReviewRecord, users: Iterable[UserRecord]) -> str:
    reviewer = next((user for user in users if user.id == review.user_id), None)
    if reviewer is not None:
        if reviewer.username:
            return reviewer.username
        if reviewer.email:
            return reviewer.email.split("@")[0]
    return review.user_name


def reviewer_avatar(review: ReviewRecord, users: Iterable[UserRecord]) -> Optional[str]:
    reviewer = next((user for user in users if user.id == review.user_id), None)
    return reviewer.avatar_url if reviewer else None


def school_label(school_id: str, schools: Iterable[SchoolRecord]) -> str:
    school = next((s for s in schools if s.id == school_id), None)
    return school.name if school else f"Unknown School (ID: {school_id})"


def schools_per_city(schools: Iterable[SchoolRecord]) -> Dict[str, int]:
    return dict(Counter(school.city for school in schools))


def is_table_missing(error: Optional[str]) -> bool:
    if not error:
        return False
    if "relation" in error and "does not exist" in error:
        return True
    return any(marker in error for marker in _MISSING_TABLE_MARKERS)


def admin_count(users: Iterable[UserRecord]) -> int:
    return sum(1 for user in users if user.role == UserRole.ADMIN)


def can_change_role(user: UserRecord, users: Iterable[UserRecord]) -> bool:
    """The role control is disabled for the last remaining admin."""
    return not (user.role == UserRole.ADMIN and admin_count(users) <= 1)


def can_delete_user(user: UserRecord) -> bool:
    return user.role != UserRole.ADMIN
