from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from services.school_directory.dependencies import get_current_user, get_data, get_optional_session
from services.school_directory.listing import (
    SchoolFilters,
    all_courses,
    average_rating,
    extract_coordinates,
    filter_schools,
    map_embed_url,
    reviewer_avatar,
    reviewer_display_name,
    reviews_for_school,
    unique_cities,
)
from services.school_directory.schemas.reviews import ReviewBase, ReviewCreate, ReviewOut, ReviewRecord
from services.school_directory.schemas.schools import CourseType, Schedule, SchoolDetailOut, SchoolListOut
from services.school_directory.schemas.users import UserRecord, UserRole
from services.school_directory.session import Session
from services.school_directory.store import DataStore


router = APIRouter(tags=["Schools"])


def _review_out(review: ReviewRecord, data: DataStore) -> ReviewOut:
    return ReviewOut(
        **review.model_dump(),
        display_name=reviewer_display_name(review, data.users),
        avatar_url=reviewer_avatar(review, data.users),
    )


# --- SCHOOL LISTING ---
@router.get("/schools", response_model=SchoolListOut)
async def list_schools(
    search: str = "",
    location: str = "",
    course_type: Optional[CourseType] = None,
    schedule: Optional[Schedule] = None,
    data: DataStore = Depends(get_data),
):
    filters = SchoolFilters(
        search_term=search,
        location=location,
        course_type=course_type,
        schedule=schedule,
    )
    schools = filter_schools(data.schools, filters)
    return SchoolListOut(count=len(schools), schools=schools)


@router.get("/schools/cities", response_model=List[str])
async def list_cities(data: DataStore = Depends(get_data)):
    return unique_cities(data.schools)


# --- SCHOOL DETAIL ---
@router.get("/schools/{school_id}", response_model=SchoolDetailOut)
async def get_school(
    school_id: str,
    data: DataStore = Depends(get_data),
    session: Optional[Session] = Depends(get_optional_session),
):
    school = data.get_school(school_id)
    if not school:
        raise HTTPException(status_code=404, detail="School not found")

    reviews = reviews_for_school(data.reviews, school_id)
    return SchoolDetailOut(
        school=school,
        review_count=len(reviews),
        average_rating=average_rating(reviews),
        all_courses=all_courses(school),
        coordinates=extract_coordinates(school),
        map_embed_url=map_embed_url(school),
        is_saved=bool(session and school_id in session.saved_school_ids),
    )


# --- REVIEWS ---
@router.get("/schools/{school_id}/reviews", response_model=List[ReviewOut])
async def list_school_reviews(school_id: str, data: DataStore = Depends(get_data)):
    if not data.get_school(school_id):
        raise HTTPException(status_code=404, detail="School not found")
    return [_review_out(review, data) for review in reviews_for_school(data.reviews, school_id)]


@router.post("/schools/{school_id}/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
async def add_review(
    school_id: str,
    payload: ReviewCreate,
    data: DataStore = Depends(get_data),
    current_user: UserRecord = Depends(get_current_user),
):
    if not data.get_school(school_id):
        raise HTTPException(status_code=404, detail="School not found")

    if payload.rating == 0:
        raise HTTPException(status_code=400, detail="Please select a rating.")
    if not payload.comment.strip():
        raise HTTPException(status_code=400, detail="Please write a comment.")

    result = await data.add_review(ReviewBase(
        school_id=school_id,
        user_id=current_user.id,
        user_name=current_user.username or current_user.email,
        rating=payload.rating,
        comment=payload.comment,
    ))
    return _review_out(result.record, data)


@router.delete("/reviews/{review_id}")
async def delete_review(
    review_id: str,
    data: DataStore = Depends(get_data),
    current_user: UserRecord = Depends(get_current_user),
):
    review = data.get_review(review_id)
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")

    if review.user_id != current_user.id and current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own reviews",
        )

    result = await data.delete_review(review_id)
    return {"message": "Review deleted", "synced": result.ok}
