from typing import List

from fastapi import APIRouter, Depends, HTTPException

from services.school_directory.dependencies import get_current_user, get_data, get_session, require_member
from services.school_directory.schemas.schools import SchoolListOut
from services.school_directory.schemas.users import UserRecord
from services.school_directory.session import Session
from services.school_directory.store import DataStore


router = APIRouter(prefix="/saved", tags=["Saved Schools"])


@router.get("", response_model=SchoolListOut)
async def list_saved_schools(
    data: DataStore = Depends(get_data),
    session: Session = Depends(get_session),
    current_user: UserRecord = Depends(require_member),
):
    saved = set(session.saved_school_ids)
    # Collection order, not the order they were saved in
    schools = [school for school in data.schools if school.id in saved]
    return SchoolListOut(count=len(schools), schools=schools)


@router.post("/{school_id}/toggle", response_model=List[str])
async def toggle_saved_school(
    school_id: str,
    data: DataStore = Depends(get_data),
    session: Session = Depends(get_session),
    current_user: UserRecord = Depends(get_current_user),
):
    if not data.get_school(school_id) and school_id not in session.saved_school_ids:
        raise HTTPException(status_code=404, detail="School not found")
    return session.toggle_saved_school(school_id)
