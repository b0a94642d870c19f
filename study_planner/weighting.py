# study_planner/weighting.py
import logging
from datetime import date
from typing import List, Sequence

from .dates import days_between
from .models import Subject, WeightedSubject

logger = logging.getLogger(__name__)


# (max days remaining, urgency multiplier), inclusive upper bounds
URGENCY_THRESHOLDS = (
    (3, 3.0),    # critical
    (7, 2.5),    # high
    (14, 2.0),   # medium
    (30, 1.5),   # normal
)
BASE_URGENCY = 1.0

HIGH_PRIORITY_WEIGHT = 10
MEDIUM_PRIORITY_WEIGHT = 5


def days_until_exam(exam_date: date, today: date) -> int:
    """Days left before the exam, never below 1 (past and same-day exams count as 1)."""
    return max(1, days_between(today, exam_date))


def calculate_urgency(days_remaining: int) -> float:
    for max_days, urgency in URGENCY_THRESHOLDS:
        if days_remaining <= max_days:
            return urgency
    return BASE_URGENCY


def calculate_weight(difficulty: int, urgency: float) -> float:
    return difficulty * urgency


def priority_label(weight: float) -> str:
    if weight >= HIGH_PRIORITY_WEIGHT:
        return "high"
    if weight >= MEDIUM_PRIORITY_WEIGHT:
        return "medium"
    return "low"


def weigh_subject(subject: Subject, today: date) -> WeightedSubject:
    if subject.exam_date is None:
        raise ValueError(f"subject {subject.name!r} ({subject.id}) has no exam date")

    days_remaining = days_until_exam(subject.exam_date, today)
    urgency = calculate_urgency(days_remaining)
    weight = calculate_weight(subject.difficulty, urgency)
    return WeightedSubject(
        subject=subject,
        days_remaining=days_remaining,
        urgency=urgency,
        weight=weight,
        priority=priority_label(weight),
    )


def rank_subjects(subjects: Sequence[Subject], today: date) -> List[WeightedSubject]:
    """
    Weigh every subject against `today` and sort heaviest first.

    The sort is stable, so equal weights keep their input order.
    """
    weighted = [weigh_subject(s, today) for s in subjects]
    ranked = sorted(weighted, key=lambda ws: ws.weight, reverse=True)
    for ws in ranked:
        logger.debug("%s: %d days, urgency %.1f, weight %.1f (%s)",
                     ws.name, ws.days_remaining, ws.urgency, ws.weight, ws.priority)
    return ranked
