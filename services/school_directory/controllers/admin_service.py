import logging
import os
import tempfile
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from services.school_directory.dependencies import get_data, require_admin
from services.school_directory.export import build_dashboard_workbook
from services.school_directory.listing import (
    can_change_role,
    can_delete_user,
    is_table_missing,
    school_label,
    schools_per_city,
)
from services.school_directory.schemas.admin import DashboardOut, ExportOut, SeedReport
from services.school_directory.schemas.reviews import AdminReviewOut
from services.school_directory.schemas.schools import SchoolCreate, SchoolRecord
from services.school_directory.schemas.users import AdminUserOut, RoleUpdate, UserRecord
from services.school_directory.store import DataStore


router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


def _admin_user_out(user: UserRecord, data: DataStore) -> AdminUserOut:
    return AdminUserOut(
        **user.model_dump(exclude={"password"}),
        can_change_role=can_change_role(user, data.users),
        can_delete=can_delete_user(user),
    )


# --- DASHBOARD ---
@router.get("/dashboard", response_model=DashboardOut)
async def dashboard(data: DataStore = Depends(get_data)):
    return DashboardOut(
        storage_mode=data.mode,
        total_schools=len(data.schools),
        total_users=len(data.users),
        total_reviews=len(data.reviews),
        schools_per_city=schools_per_city(data.schools),
        db_error=data.last_error,
        setup_required=is_table_missing(data.last_error),
    )


@router.get("/dashboard/export-excel")
async def export_dashboard_excel(data: DataStore = Depends(get_data)):
    wb = build_dashboard_workbook(
        schools_per_city(data.schools),
        total_schools=len(data.schools),
        total_users=len(data.users),
        total_reviews=len(data.reviews),
        storage_mode=data.mode,
    )

    # Save to temp file
    with tempfile.NamedTemporaryFile(delete=False, suffix=".xlsx") as tmp:
        wb.save(tmp.name)
        tmp_path = tmp.name

    return FileResponse(
        tmp_path,
        filename="dashboard_report.xlsx",
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        background=BackgroundTask(os.unlink, tmp_path),
    )


# --- EXPORT & SEED ---
@router.get("/export", response_model=ExportOut)
async def export_seed_code(data: DataStore = Depends(get_data)):
    return ExportOut(code=data.generate_export_code())


@router.post("/seed", response_model=SeedReport)
async def seed_database(data: DataStore = Depends(get_data)):
    report = await data.seed_database()
    if report.ok:
        logger.info("Seeded the remote database")
    return report


# --- SCHOOLS ---
@router.get("/schools", response_model=List[SchoolRecord])
async def list_schools(data: DataStore = Depends(get_data)):
    return data.schools


@router.post("/schools", response_model=SchoolRecord, status_code=status.HTTP_201_CREATED)
async def create_school(payload: SchoolCreate, data: DataStore = Depends(get_data)):
    result = await data.add_school(payload)
    return result.record


@router.put("/schools/{school_id}", response_model=SchoolRecord)
async def update_school(school_id: str, payload: SchoolCreate, data: DataStore = Depends(get_data)):
    if not data.get_school(school_id):
        raise HTTPException(status_code=404, detail="School not found")

    result = await data.update_school(SchoolRecord(id=school_id, **payload.model_dump()))
    return result.record


@router.delete("/schools/{school_id}")
async def delete_school(school_id: str, data: DataStore = Depends(get_data)):
    if not data.get_school(school_id):
        raise HTTPException(status_code=404, detail="School not found")

    result = await data.delete_school(school_id)
    return {"message": "School deleted", "synced": result.ok}


# --- USERS ---
@router.get("/users", response_model=List[AdminUserOut])
async def list_users(data: DataStore = Depends(get_data)):
    return [_admin_user_out(user, data) for user in data.users]


@router.patch("/users/{user_id}/role", response_model=AdminUserOut)
async def change_user_role(user_id: str, payload: RoleUpdate, data: DataStore = Depends(get_data)):
    user = data.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    # Disabled control for the last admin: nothing happens
    if not can_change_role(user, data.users) or payload.role == user.role:
        return _admin_user_out(user, data)

    result = await data.update_user_role(user_id, payload.role)
    return _admin_user_out(result.record, data)


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, data: DataStore = Depends(get_data)):
    user = data.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if not can_delete_user(user):
        return {"message": "Admin accounts cannot be deleted", "deleted": False}

    result = await data.delete_user(user_id)
    return {"message": "User deleted", "deleted": True, "synced": result.ok}


# --- REVIEWS ---
@router.get("/reviews", response_model=List[AdminReviewOut])
async def list_reviews(data: DataStore = Depends(get_data)):
    return [
        AdminReviewOut(
            **review.model_dump(),
            school_name=school_label(review.school_id, data.schools),
            reviewer=review.user_name.split("@")[0],
        )
        for review in data.reviews
    ]


@router.delete("/reviews/{review_id}")
async def delete_review(review_id: str, data: DataStore = Depends(get_data)):
    if not data.get_review(review_id):
        raise HTTPException(status_code=404, detail="Review not found")

    result = await data.delete_review(review_id)
    return {"message": "Review deleted", "synced": result.ok}
