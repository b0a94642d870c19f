# study_planner/allocator.py
import logging
from typing import List, Optional, Sequence

import numpy as np

from .dates import minutes_to_time
from .models import (
    BREAK_COLOR_INDEX,
    BREAK_SUBJECT_ID,
    BREAK_SUBJECT_NAME,
    ScheduleBlock,
    SessionRules,
    WeightedSubject,
)
from .slots import Interval, total_minutes

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (Python's round() is banker's)."""
    return int(np.floor(value + 0.5))


def session_target(subject: WeightedSubject,
                   total_weight: float,
                   daily_minutes: int,
                   rules: SessionRules) -> int:
    """Session length proportional to the subject's share of the total weight, clamped."""
    proportional = round_half_up(subject.weight / total_weight * daily_minutes)
    return min(rules.max_session_minutes, max(rules.min_session_minutes, proportional))


def _study_block(block_id: str, subject: WeightedSubject, day: int,
                 start: int, duration: int) -> ScheduleBlock:
    return ScheduleBlock(
        id=block_id,
        subject_id=subject.id,
        subject_name=subject.name,
        start_time=minutes_to_time(start),
        end_time=minutes_to_time(start + duration),
        duration=duration,
        priority=subject.priority,
        color_index=subject.subject.color_index,
        day=day,
        is_break=False,
    )


def _break_block(block_id: str, day: int, start: int, duration: int) -> ScheduleBlock:
    return ScheduleBlock(
        id=block_id,
        subject_id=BREAK_SUBJECT_ID,
        subject_name=BREAK_SUBJECT_NAME,
        start_time=minutes_to_time(start),
        end_time=minutes_to_time(start + duration),
        duration=duration,
        priority="low",
        color_index=BREAK_COLOR_INDEX,
        day=day,
        is_break=True,
    )


def allocate_day(day: int,
                 ranked: Sequence[WeightedSubject],
                 slots: Sequence[Interval],
                 break_minutes: int,
                 rules: Optional[SessionRules] = None) -> List[ScheduleBlock]:
    """
    Fill one day's free intervals with study sessions and breaks.

    The rotation restarts from the heaviest subject every day and advances on
    every attempt, whether or not a block was emitted.
    """
    rules = rules or SessionRules()
    if not ranked:
        return []

    total_weight = sum(s.weight for s in ranked)
    if total_weight <= 0:
        raise ValueError("total subject weight must be positive; check difficulties")

    daily_minutes = total_minutes(slots)
    blocks: List[ScheduleBlock] = []
    rotation = 0

    def next_id() -> str:
        return f"d{day}-{len(blocks) + 1:02d}"

    for slot_start, slot_end in slots:
        current = slot_start
        while current < slot_end:
            subject = ranked[rotation % len(ranked)]
            target = session_target(subject, total_weight, daily_minutes, rules)
            duration = min(target, slot_end - current)

            if duration >= rules.min_useful_minutes:
                blocks.append(_study_block(next_id(), subject, day, current, duration))
                current += duration

                if break_minutes > 0 and current + break_minutes <= slot_end:
                    blocks.append(_break_block(next_id(), day, current, break_minutes))
                    current += break_minutes
            else:
                # leftover too short to be useful
                current = slot_end

            rotation += 1

    return blocks


def allocate_week(ranked: Sequence[WeightedSubject],
                  slots: Sequence[Interval],
                  break_minutes: int,
                  rules: Optional[SessionRules] = None) -> List[ScheduleBlock]:
    """Blocks for every day of the week, day-major then chronological."""
    rules = rules or SessionRules()
    blocks: List[ScheduleBlock] = []
    for day in range(rules.days_per_week):
        day_blocks = allocate_day(day, ranked, slots, break_minutes, rules)
        logger.debug("day %d: %d blocks", day, len(day_blocks))
        blocks.extend(day_blocks)
    return blocks
