# study_planner/validation.py
from typing import List, Sequence

from .dates import time_to_minutes
from .models import DailyRoutine, Subject


class PlanInputError(ValueError):
    """Raised when subjects or routine are not ready for scheduling."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


def missing_exam_dates(subjects: Sequence[Subject]) -> List[Subject]:
    return [s for s in subjects if s.exam_date is None]


def _check_time(label: str, value: str, problems: List[str]) -> int:
    try:
        return time_to_minutes(value)
    except ValueError as exc:
        problems.append(f"{label}: {exc}")
        return -1


def check_routine(routine: DailyRoutine) -> List[str]:
    problems: List[str] = []
    start = _check_time("study start", routine.study_start_time, problems)
    end = _check_time("study end", routine.study_end_time, problems)
    if start >= 0 and end >= 0 and end < start:
        problems.append("study end must not be before study start")

    for meal in routine.meal_times:
        _check_time("meal time", meal, problems)

    if routine.break_duration < 0:
        problems.append("break duration must not be negative")
    if routine.sleep_duration < 0:
        problems.append("sleep duration must not be negative")
    return problems


def check_plan_inputs(subjects: Sequence[Subject], routine: DailyRoutine) -> List[str]:
    """Every reason the inputs cannot be scheduled yet; empty when ready."""
    problems: List[str] = []
    if not subjects:
        problems.append("add at least one subject")

    for s in subjects:
        label = s.name.strip() or s.id
        if not s.name.strip():
            problems.append(f"subject {s.id} has no name")
        if not isinstance(s.difficulty, int) or not 1 <= s.difficulty <= 5:
            problems.append(f"{label}: difficulty must be between 1 and 5")
        if s.exam_date is None:
            problems.append(f"{label}: exam date is not set")

    problems.extend(check_routine(routine))
    return problems


def ensure_plan_inputs(subjects: Sequence[Subject], routine: DailyRoutine) -> None:
    problems = check_plan_inputs(subjects, routine)
    if problems:
        raise PlanInputError(problems)
