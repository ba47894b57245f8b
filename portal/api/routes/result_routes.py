"""
Result Routes

GET /results - My results (optionally one semester)
POST /results - Add a result
GET /results/sgpa - SGPA for one semester
GET /results/cgpa - CGPA plus per-semester SGPA
POST /results/cgpa/refresh - Recompute CGPA and save it on the profile
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from portal.api.deps import get_store
from portal.db.store import Store
from portal.core.auth import get_optional_user, get_current_student, find_student
from portal.services.grading import term_average, cumulative_average, term_breakdown
from portal.schemas.schemas import (
    ResultCreate, ResultResponse, SgpaResponse, CgpaResponse, TermSummary
)

router = APIRouter(prefix="/results", tags=["Results"])


def _student_or_none(user: Optional[dict], store: Store) -> Optional[dict]:
    if not user:
        return None
    return find_student(store, user["user_id"])


@router.get("", response_model=List[ResultResponse])
async def list_results(
    semester: Optional[int] = Query(None, ge=1),
    user: Optional[dict] = Depends(get_optional_user),
    store: Store = Depends(get_store)
):
    """Results for the current student. Empty when not logged in or no profile."""
    student = _student_or_none(user, store)
    if not student:
        return []

    if semester:
        return store.query("results.by_student_semester", student["student_id"], semester)
    return store.query("results.by_student", student["student_id"])


@router.post("", response_model=ResultResponse, status_code=201)
async def add_result(
    data: ResultCreate,
    student: dict = Depends(get_current_student),
    store: Store = Depends(get_store)
):
    """Add a subject result to the current student's record."""
    values = data.model_dump()
    values["exam_type"] = data.exam_type.value
    return store.insert("results", {"student_id": student["student_id"], **values})


@router.get("/sgpa", response_model=SgpaResponse)
async def get_sgpa(
    semester: int = Query(..., ge=1),
    user: Optional[dict] = Depends(get_optional_user),
    store: Store = Depends(get_store)
):
    """
    SGPA for a semester, as a two-decimal string.

    null when nothing in the semester has a recognised grade.
    """
    student = _student_or_none(user, store)
    if not student:
        return SgpaResponse(semester=semester, sgpa=None)

    results = store.query("results.by_student_semester", student["student_id"], semester)
    return SgpaResponse(semester=semester, sgpa=term_average(results))


@router.get("/cgpa", response_model=CgpaResponse)
async def get_cgpa(user: Optional[dict] = Depends(get_optional_user), store: Store = Depends(get_store)):
    """CGPA across all semesters with the SGPA of each."""
    student = _student_or_none(user, store)
    if not student:
        return CgpaResponse(cgpa=None, semesters=[])

    results = store.query("results.by_student", student["student_id"])
    return CgpaResponse(
        cgpa=cumulative_average(results),
        semesters=[TermSummary(**t) for t in term_breakdown(results)]
    )


@router.post("/cgpa/refresh", response_model=CgpaResponse)
async def refresh_cgpa(student: dict = Depends(get_current_student), store: Store = Depends(get_store)):
    """
    Recompute CGPA and store it on the profile.

    An undefined CGPA leaves the stored value untouched.
    """
    results = store.query("results.by_student", student["student_id"])
    cgpa = cumulative_average(results)
    if cgpa is not None:
        store.patch("students", student["student_id"], {"cgpa": float(cgpa)})

    return CgpaResponse(
        cgpa=cgpa,
        semesters=[TermSummary(**t) for t in term_breakdown(results)]
    )
