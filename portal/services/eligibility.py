"""
Placement eligibility.

A student sees an upcoming placement when
- their branch is listed in eligible_branches, or "All" is listed, AND
- the placement has no CGPA criteria, or the student has no CGPA yet,
  or the student's CGPA meets the criteria.

A student without a CGPA passes the CGPA check. Eligibility is computed
on every read; nothing about it is stored.
"""

from typing import Iterable, List, Mapping, Optional

ALL_BRANCHES = "All"


def branch_eligible(branch: str, eligible_branches: Iterable[str]) -> bool:
    branches = list(eligible_branches or [])
    return branch in branches or ALL_BRANCHES in branches


def cgpa_eligible(cgpa: Optional[float], cgpa_criteria: Optional[float]) -> bool:
    if cgpa_criteria is None or cgpa is None:
        return True
    return cgpa >= cgpa_criteria


def is_eligible(branch: str, cgpa: Optional[float], placement: Mapping) -> bool:
    return (
        branch_eligible(branch, placement.get("eligible_branches"))
        and cgpa_eligible(cgpa, placement.get("cgpa_criteria"))
    )


def filter_eligible(branch: str, cgpa: Optional[float], placements: Iterable[Mapping]) -> List[Mapping]:
    """
    Keep the placements this student qualifies for.

    Pure filter: the caller passes only "upcoming" placements.
    """
    return [p for p in placements if is_eligible(branch, cgpa, p)]
