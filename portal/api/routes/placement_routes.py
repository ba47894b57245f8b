"""
Placement Routes

GET /placements - All placements, newest first (optional status filter)
GET /placements/eligible - Upcoming placements the current student qualifies for
POST /placements - Post a placement drive
PUT /placements/{placement_id}/status - Set lifecycle status by hand
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from portal.api.deps import get_store
from portal.db.store import Store
from portal.core.auth import get_current_user, get_optional_user, find_student
from portal.core.errors import NotFoundError
from portal.services.eligibility import filter_eligible
from portal.schemas.schemas import (
    PlacementCreate, PlacementResponse, PlacementStatus, PlacementStatusUpdate
)

router = APIRouter(prefix="/placements", tags=["Placements"])


@router.get("", response_model=List[PlacementResponse])
async def list_placements(
    status: Optional[PlacementStatus] = Query(None),
    store: Store = Depends(get_store)
):
    """All placements, newest first."""
    if status:
        return store.query("placements.by_status", status.value, descending=True)
    return store.scan("placements", descending=True)


@router.get("/eligible", response_model=List[PlacementResponse])
async def eligible_placements(
    user: Optional[dict] = Depends(get_optional_user),
    store: Store = Depends(get_store)
):
    """
    Upcoming placements matching the student's branch and CGPA.

    Students without a CGPA are not filtered out by CGPA criteria.
    """
    if not user:
        return []

    student = find_student(store, user["user_id"])
    if not student:
        return []

    upcoming = store.query("placements.by_status", PlacementStatus.upcoming.value)
    return filter_eligible(student["branch"], student["cgpa"], upcoming)


@router.post("", response_model=PlacementResponse, status_code=201)
async def create_placement(
    data: PlacementCreate,
    user: dict = Depends(get_current_user),
    store: Store = Depends(get_store)
):
    """Post a placement drive. Status is whatever the poster sets."""
    values = data.model_dump()
    values["status"] = data.status.value
    values["created_by"] = user["user_id"]
    return store.insert("placements", values)


@router.put("/{placement_id}/status", response_model=PlacementResponse)
async def update_status(
    placement_id: int,
    data: PlacementStatusUpdate,
    user: dict = Depends(get_current_user),
    store: Store = Depends(get_store)
):
    """Move a placement between upcoming/ongoing/completed. Poster or admin only."""
    placement = store.get("placements", placement_id)
    if not placement:
        raise NotFoundError("Placement not found")

    if placement["created_by"] != user["user_id"] and not user["is_admin"]:
        raise HTTPException(status_code=403, detail="Only the poster or an admin can change status")

    return store.patch("placements", placement_id, {"status": data.status.value})
