# study_planner/scheduler.py
import logging
from datetime import date
from typing import Optional, Sequence

from .allocator import allocate_week
from .dates import start_of_week, to_calendar_date
from .models import DailyRoutine, SessionRules, Subject, WeeklySchedule
from .slots import routine_slots
from .stats import aggregate
from .weighting import rank_subjects

logger = logging.getLogger(__name__)


def generate_schedule(subjects: Sequence[Subject],
                      routine: DailyRoutine,
                      today: date,
                      rules: Optional[SessionRules] = None) -> WeeklySchedule:
    """
    Generate the study week that contains `today`.

    `today` is passed in rather than read from the clock; any time of day is
    dropped. Every subject needs an exam date and a difficulty in 1..5.
    Calling this with no subjects yields an empty schedule whose
    earliest_exam_days is None.
    """
    rules = rules or SessionRules()
    today = to_calendar_date(today)

    if not subjects:
        logger.warning("generating a schedule with no subjects")

    # 1) Weight and rank subjects by difficulty x urgency
    ranked = rank_subjects(subjects, today)

    # 2) Free study intervals, identical for every day
    slots = routine_slots(routine, rules)
    logger.debug("daily study slots: %s", slots)

    # 3) Carve the week into sessions and breaks
    blocks = allocate_week(ranked, slots, routine.break_duration, rules)

    # 4) Summaries
    stats = aggregate(subjects, ranked, blocks, days_per_week=rules.days_per_week)

    logger.info("scheduled %d subjects into %d blocks (%.1f study hours)",
                len(subjects), len(blocks), stats.total_study_hours)
    return WeeklySchedule(
        week_start=start_of_week(today),
        blocks=blocks,
        stats=stats,
    )
