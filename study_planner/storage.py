# study_planner/storage.py
"""
JSON snapshot of the planner state: subjects, routine and last schedule.

Dates are stored as ISO-8601 strings. The file is rewritten on every save.
"""
import json
import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .dates import to_calendar_date
from .models import (
    DailyRoutine,
    ScheduleBlock,
    ScheduleStats,
    Subject,
    SubjectBreakdown,
    WeeklySchedule,
)

logger = logging.getLogger(__name__)

SUBJECTS_KEY = "subjects"
ROUTINE_KEY = "routine"
SCHEDULE_KEY = "schedule"


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_date(value: Optional[str]) -> Optional[date]:
    return to_calendar_date(value) if value else None


def subject_to_dict(subject: Subject) -> Dict[str, Any]:
    data = asdict(subject)
    data["exam_date"] = _iso(subject.exam_date)
    return data


def subject_from_dict(data: Dict[str, Any]) -> Subject:
    return Subject(
        id=str(data["id"]),
        name=data.get("name", ""),
        difficulty=int(data.get("difficulty", 3)),
        notes=data.get("notes") or "",
        color_index=int(data.get("color_index", 0)),
        exam_date=_parse_date(data.get("exam_date")),
    )


def routine_to_dict(routine: DailyRoutine) -> Dict[str, Any]:
    data = asdict(routine)
    data["meal_times"] = list(routine.meal_times)
    return data


def routine_from_dict(data: Dict[str, Any]) -> DailyRoutine:
    defaults = DailyRoutine()
    return DailyRoutine(
        study_start_time=data.get("study_start_time", defaults.study_start_time),
        study_end_time=data.get("study_end_time", defaults.study_end_time),
        sleep_duration=data.get("sleep_duration", defaults.sleep_duration),
        meal_times=tuple(data.get("meal_times", defaults.meal_times)),
        break_duration=int(data.get("break_duration", defaults.break_duration)),
    )


def schedule_to_dict(schedule: WeeklySchedule) -> Dict[str, Any]:
    data = asdict(schedule)
    data["week_start"] = _iso(schedule.week_start)
    return data


def schedule_from_dict(data: Dict[str, Any]) -> WeeklySchedule:
    stats = data.get("stats") or {}
    return WeeklySchedule(
        week_start=_parse_date(data["week_start"]),
        blocks=[ScheduleBlock(**b) for b in data.get("blocks", [])],
        stats=ScheduleStats(
            total_study_hours=stats.get("total_study_hours", 0.0),
            earliest_exam_days=stats.get("earliest_exam_days"),
            subject_breakdown=[SubjectBreakdown(**b) for b in stats.get("subject_breakdown", [])],
            average_daily_hours=stats.get("average_daily_hours", 0.0),
        ),
    )


class PlannerStore:
    """Keeps the planner state in a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def _write(self, state: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2)

    def _update(self, key: str, value: Any) -> None:
        state = self._read()
        state[key] = value
        self._write(state)
        logger.debug("saved %s to %s", key, self.path)

    def save_subjects(self, subjects: List[Subject]) -> None:
        self._update(SUBJECTS_KEY, [subject_to_dict(s) for s in subjects])

    def load_subjects(self) -> List[Subject]:
        return [subject_from_dict(d) for d in self._read().get(SUBJECTS_KEY, [])]

    def save_routine(self, routine: DailyRoutine) -> None:
        self._update(ROUTINE_KEY, routine_to_dict(routine))

    def load_routine(self) -> Optional[DailyRoutine]:
        data = self._read().get(ROUTINE_KEY)
        return routine_from_dict(data) if data else None

    def save_schedule(self, schedule: WeeklySchedule) -> None:
        self._update(SCHEDULE_KEY, schedule_to_dict(schedule))

    def load_schedule(self) -> Optional[WeeklySchedule]:
        data = self._read().get(SCHEDULE_KEY)
        return schedule_from_dict(data) if data else None

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("cleared planner state at %s", self.path)
