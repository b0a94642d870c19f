# study_planner/slots.py
from typing import Iterable, List, Optional, Tuple

from .dates import time_to_minutes
from .models import DailyRoutine, SessionRules

Interval = Tuple[int, int]  # (start, end) in minutes since midnight


def build_meal_blocks(meal_times: Iterable[str],
                      window: Interval,
                      buffer_minutes: int = 30) -> List[Interval]:
    """Meal buffers lying entirely inside the study window, sorted by start."""
    start, end = window
    blocks = []
    for meal in meal_times:
        m_start = time_to_minutes(meal)
        m_end = m_start + buffer_minutes
        # partially overlapping meals are ignored, not clipped
        if m_start >= start and m_end <= end:
            blocks.append((m_start, m_end))
    return sorted(blocks)


def get_study_slots(study_start: str,
                    study_end: str,
                    meal_times: Iterable[str],
                    buffer_minutes: int = 30) -> List[Interval]:
    """
    Free study intervals for one day: the study window minus meal buffers.

    Returns:
        chronological, non-overlapping (start, end) minute offsets
    """
    window = (time_to_minutes(study_start), time_to_minutes(study_end))
    meals = build_meal_blocks(meal_times, window, buffer_minutes)

    slots: List[Interval] = []
    cursor = window[0]
    for m_start, m_end in meals:
        if cursor < m_start:
            slots.append((cursor, m_start))
        cursor = max(cursor, m_end)

    if cursor < window[1]:
        slots.append((cursor, window[1]))
    return slots


def routine_slots(routine: DailyRoutine, rules: Optional[SessionRules] = None) -> List[Interval]:
    rules = rules or SessionRules()
    return get_study_slots(
        routine.study_start_time,
        routine.study_end_time,
        routine.meal_times,
        buffer_minutes=rules.meal_buffer_minutes,
    )


def total_minutes(slots: Iterable[Interval]) -> int:
    return sum(end - start for start, end in slots)


def estimated_study_hours(routine: DailyRoutine, rules: Optional[SessionRules] = None) -> float:
    """Effective study hours per day once meals are taken out."""
    return round(total_minutes(routine_slots(routine, rules)) / 60, 1)
