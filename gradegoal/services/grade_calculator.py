"""Grade calculation service: current average, needed average and projection"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from gradegoal.database.records import Course, Item
from gradegoal.utils.helpers import is_finite_number, to_number_or_none

NEED_UNAVAILABLE = "unavailable"
NEED_ACHIEVED = "achieved"
NEED_POSSIBLE = "possible"
NEED_IMPOSSIBLE = "impossible"


@dataclass(frozen=True)
class ResultRow:
    """An item together with its resolved numeric weight and score"""
    item: Item
    weight: Optional[float]
    score: Optional[float]

    @property
    def pending(self) -> bool:
        return self.score is None


@dataclass(frozen=True)
class Results:
    """Derived figures for one course; recomputed on every read"""
    total_weight: float
    completed_weight: float
    remaining_weight: float
    weighted_points_earned: float
    current_average: float
    needed_average_on_remaining: Optional[float]
    projected_final: float
    rows: Tuple[ResultRow, ...]

    @property
    def pending_rows(self) -> Tuple[ResultRow, ...]:
        return tuple(row for row in self.rows if row.pending)


def _points(row: ResultRow) -> float:
    return (row.weight or 0.0) * (row.score or 0.0) / 100


def resolve_row(item: Any) -> ResultRow:
    """Resolve an item's raw weight and score; anything non-numeric is absent"""
    return ResultRow(
        item=item,
        weight=to_number_or_none(getattr(item, "weight", None)),
        score=to_number_or_none(getattr(item, "score", None)),
    )


def compute(course: Course) -> Results:
    """
    Compute the derived results for a course

    Never raises: missing or malformed weights count as zero and missing or
    malformed scores mark an item as pending.

    Args:
        course: Course whose items and target are evaluated

    Returns:
        Results with totals, averages and the resolved per-item rows
    """
    rows = tuple(resolve_row(item) for item in (getattr(course, "items", None) or ()))

    total_weight = sum(((row.weight or 0.0) for row in rows), 0.0)
    completed = [row for row in rows if not row.pending]
    completed_weight = sum(((row.weight or 0.0) for row in completed), 0.0)
    weighted_points = sum((_points(row) for row in completed), 0.0)

    current_average = weighted_points / completed_weight * 100 if completed_weight > 0 else 0.0

    # Weights may be edited below the already graded weight mid-entry
    remaining_weight = max(0.0, total_weight - completed_weight)

    target = to_number_or_none(getattr(course, "target", None))
    if remaining_weight > 0 and target is not None:
        needed = (target / 100 * total_weight - weighted_points) / remaining_weight * 100
    else:
        needed = None

    # Pending items count as zero here, unlike current_average
    projected_points = sum((_points(row) for row in rows), 0.0)
    projected_final = projected_points / total_weight * 100 if total_weight > 0 else 0.0

    return Results(
        total_weight=total_weight,
        completed_weight=completed_weight,
        remaining_weight=remaining_weight,
        weighted_points_earned=weighted_points,
        current_average=current_average,
        needed_average_on_remaining=needed,
        projected_final=projected_final,
        rows=rows,
    )


def item_need(results: Results, row: ResultRow) -> Optional[float]:
    """
    Uniform score a pending item needs, floored at zero

    Every pending item shares the same figure. Graded items and courses
    without a solvable target have no need.
    """
    if not row.pending:
        return None
    needed = results.needed_average_on_remaining
    if not is_finite_number(needed):
        return None
    return max(0.0, needed)


def describe_needed(needed: Optional[float]) -> Tuple[str, Optional[float]]:
    """
    Classify the aggregate needed average for display

    Returns:
        (status, display_value) where display_value is floored at 0 and left
        unclamped above 100 so the UI can flag it as out of reach
    """
    if not is_finite_number(needed):
        return NEED_UNAVAILABLE, None
    if needed <= 0:
        return NEED_ACHIEVED, 0.0
    if needed > 100:
        return NEED_IMPOSSIBLE, needed
    return NEED_POSSIBLE, needed
