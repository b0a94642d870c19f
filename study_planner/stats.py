# study_planner/stats.py
from typing import List, Sequence

import pandas as pd

from .allocator import round_half_up
from .dates import time_to_minutes
from .models import (
    ScheduleBlock,
    ScheduleStats,
    Subject,
    SubjectBreakdown,
    WeeklySchedule,
    WeightedSubject,
)

BLOCK_COLUMNS = [
    "id", "subject_id", "subject_name", "day", "start_time", "end_time",
    "duration", "priority", "color_index", "is_break",
]


def blocks_frame(blocks: Sequence[ScheduleBlock]) -> pd.DataFrame:
    """One row per block, in generation order."""
    return pd.DataFrame([{
        "id": b.id,
        "subject_id": b.subject_id,
        "subject_name": b.subject_name,
        "day": b.day,
        "start_time": b.start_time,
        "end_time": b.end_time,
        "duration": b.duration,
        "priority": b.priority,
        "color_index": b.color_index,
        "is_break": b.is_break,
    } for b in blocks], columns=BLOCK_COLUMNS)


def schedule_frame(schedule: WeeklySchedule) -> pd.DataFrame:
    """Blocks frame with calendar dates and start/end timestamps attached."""
    df = blocks_frame(schedule.blocks)
    week_start = pd.Timestamp(schedule.week_start)
    df["date"] = [week_start + pd.Timedelta(days=int(d)) for d in df["day"]]
    df["start"] = [d + pd.Timedelta(minutes=time_to_minutes(t)) for d, t in zip(df["date"], df["start_time"])]
    df["end"] = [d + pd.Timedelta(minutes=time_to_minutes(t)) for d, t in zip(df["date"], df["end_time"])]
    return df


def _to_hours(minutes: int) -> float:
    # one decimal, half-up
    return round_half_up(minutes / 60 * 10) / 10


def aggregate(subjects: Sequence[Subject],
              ranked: Sequence[WeightedSubject],
              blocks: Sequence[ScheduleBlock],
              days_per_week: int = 7) -> ScheduleStats:
    df = blocks_frame(blocks)
    study = df.loc[~df["is_break"].astype(bool)]
    total_minutes = int(study["duration"].sum())
    per_subject = study.groupby("subject_id")["duration"].sum()

    days_left = {ws.id: ws.days_remaining for ws in ranked}
    breakdown: List[SubjectBreakdown] = []
    for subject in subjects:
        minutes = int(per_subject.get(subject.id, 0))
        share = round_half_up(minutes / total_minutes * 100) if total_minutes > 0 else 0
        breakdown.append(SubjectBreakdown(
            subject_id=subject.id,
            total_minutes=minutes,
            days_until_exam=days_left.get(subject.id, 0),
            percentage=share,
        ))

    total_hours = _to_hours(total_minutes)
    return ScheduleStats(
        total_study_hours=total_hours,
        earliest_exam_days=min(ws.days_remaining for ws in ranked) if ranked else None,
        subject_breakdown=breakdown,
        average_daily_hours=round_half_up(total_hours / days_per_week * 10) / 10,
    )


def ranked_breakdown(schedule: WeeklySchedule) -> List[SubjectBreakdown]:
    """Breakdown rows with the nearest exam first."""
    return sorted(schedule.stats.subject_breakdown, key=lambda b: b.days_until_exam)
