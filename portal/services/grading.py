"""
Grade-point aggregation.

SGPA = sum(points(grade) * credits) / sum(credits) over one semester,
CGPA is the same formula over every semester.

Only results carrying one of the eight recognised grade letters count.
Marks (internal/external/total) are display-only and never used here.
When no result counts, the average is undefined (None), not 0.00.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Optional, Dict, List

GRADE_POINTS: Dict[str, int] = {
    "S": 10,
    "A+": 9,
    "A": 8,
    "B+": 7,
    "B": 6,
    "C": 5,
    "P": 4,
    "F": 0,
}

TWO_PLACES = Decimal("0.01")


def grade_points(grade: Optional[str]) -> Optional[int]:
    """Point value of a grade letter, None if missing or unrecognised."""
    if grade is None:
        return None
    return GRADE_POINTS.get(grade)


def weighted_average(results: Iterable[Mapping]) -> Optional[Decimal]:
    total_credits = 0
    total_points = 0

    for result in results:
        points = grade_points(result.get("grade"))
        if points is None:
            continue
        credits = result["credits"]
        total_credits += credits
        total_points += points * credits

    if total_credits == 0:
        return None

    # Both totals are integers, so the division is exact before rounding
    average = Decimal(total_points) / Decimal(total_credits)
    return average.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def term_average(results: Iterable[Mapping]) -> Optional[Decimal]:
    """SGPA for results that all belong to one student and one semester."""
    return weighted_average(results)


def cumulative_average(results: Iterable[Mapping]) -> Optional[Decimal]:
    """CGPA over every result of one student."""
    return weighted_average(results)


def term_breakdown(results: Iterable[Mapping]) -> List[dict]:
    """SGPA per semester, in semester order."""
    by_semester: Dict[int, list] = {}
    for result in results:
        by_semester.setdefault(result["semester"], []).append(result)

    return [
        {"semester": semester, "sgpa": term_average(rows), "subjects": len(rows)}
        for semester, rows in sorted(by_semester.items())
    ]
