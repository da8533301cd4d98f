from typing import Dict, Optional

from pydantic import BaseModel


class DashboardOut(BaseModel):
    storage_mode: str
    total_schools: int
    total_users: int
    total_reviews: int
    schools_per_city: Dict[str, int]
    db_error: Optional[str] = None
    setup_required: bool = False


class SeedReport(BaseModel):
    ok: bool
    errors: Dict[str, str] = {}
    message: str


class ExportOut(BaseModel):
    filename: str = "seed_data.py"
    code: str
