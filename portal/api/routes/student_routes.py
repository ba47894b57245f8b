"""
Student Routes

GET /students/me - Get own profile (null when not set up)
PUT /students/me - Create or update profile
GET /students/me/stats - Results and study material counts
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends

from portal.api.deps import get_store
from portal.db.store import Store
from portal.core.auth import get_current_user, get_optional_user, find_student
from portal.schemas.schemas import (
    ProfileUpsert, StudentResponse, ProfileSavedResponse, StudentStatsResponse
)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/me", response_model=Optional[StudentResponse])
async def get_profile(user: Optional[dict] = Depends(get_optional_user), store: Store = Depends(get_store)):
    """Current student's profile, or null if not logged in / not set up."""
    if not user:
        return None
    return find_student(store, user["user_id"])


@router.put("/me", response_model=ProfileSavedResponse)
async def save_profile(
    data: ProfileUpsert,
    user: dict = Depends(get_current_user),
    store: Store = Depends(get_store)
):
    """
    Create the profile on first call, update it afterwards.

    CGPA is never set here; see POST /results/cgpa/refresh.
    """
    fields = data.model_dump()
    existing = find_student(store, user["user_id"])

    if existing:
        fields["updated_at"] = datetime.now(timezone.utc)
        store.patch("students", existing["student_id"], fields)
        return ProfileSavedResponse(student_id=existing["student_id"], created=False)

    student = store.insert("students", {"user_id": user["user_id"], **fields})
    return ProfileSavedResponse(student_id=student["student_id"], created=True)


@router.get("/me/stats", response_model=Optional[StudentStatsResponse])
async def get_stats(user: Optional[dict] = Depends(get_optional_user), store: Store = Depends(get_store)):
    """Profile plus result count and material count for the current branch/semester."""
    if not user:
        return None

    student = find_student(store, user["user_id"])
    if not student:
        return None

    results = store.query("results.by_student", student["student_id"])
    materials = store.query(
        "study_materials.by_branch_semester", student["branch"], student["semester"]
    )

    return StudentStatsResponse(
        student=StudentResponse(**student),
        results_count=len(results),
        materials_count=len(materials)
    )
