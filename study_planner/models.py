# study_planner/models.py
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Tuple


BREAK_SUBJECT_ID = "break"
BREAK_SUBJECT_NAME = "Break"
BREAK_COLOR_INDEX = -1
PALETTE_SIZE = 8

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    difficulty: int                   # 1..5
    notes: str = ""
    color_index: int = 0              # 0..7, cosmetic
    exam_date: Optional[date] = None  # time-of-day ignored


@dataclass(frozen=True)
class DailyRoutine:
    study_start_time: str = "09:00"   # HH:MM
    study_end_time: str = "18:00"     # HH:MM, same day as start
    sleep_duration: float = 8         # hours, informational
    meal_times: Tuple[str, ...] = ("12:00", "19:00")
    break_duration: int = 15          # minutes between sessions


@dataclass(frozen=True)
class SessionRules:
    meal_buffer_minutes: int = 30
    min_session_minutes: int = 30
    max_session_minutes: int = 90     # fatigue cap
    min_useful_minutes: int = 20      # shorter leftovers are dropped
    days_per_week: int = 7


@dataclass(frozen=True)
class WeightedSubject:
    subject: Subject
    days_remaining: int
    urgency: float
    weight: float
    priority: str                     # "high" | "medium" | "low"

    @property
    def id(self) -> str:
        return self.subject.id

    @property
    def name(self) -> str:
        return self.subject.name


@dataclass(frozen=True)
class ScheduleBlock:
    id: str
    subject_id: str
    subject_name: str
    start_time: str                   # HH:MM
    end_time: str                     # HH:MM
    duration: int                     # minutes
    priority: str
    color_index: int
    day: int                          # 0=Sunday .. 6=Saturday
    is_break: bool = False


@dataclass(frozen=True)
class SubjectBreakdown:
    subject_id: str
    total_minutes: int
    days_until_exam: int
    percentage: int = 0               # share of the week's study minutes


@dataclass(frozen=True)
class ScheduleStats:
    total_study_hours: float
    earliest_exam_days: Optional[int]  # None when there are no subjects
    subject_breakdown: List[SubjectBreakdown] = field(default_factory=list)
    average_daily_hours: float = 0.0


@dataclass(frozen=True)
class WeeklySchedule:
    week_start: date                  # Sunday on/before today
    blocks: List[ScheduleBlock]
    stats: ScheduleStats

    def blocks_for_day(self, day: int) -> List[ScheduleBlock]:
        return [b for b in self.blocks if b.day == day]

    def date_for_day(self, day: int) -> date:
        return self.week_start + timedelta(days=day)

    def study_blocks(self) -> List[ScheduleBlock]:
        return [b for b in self.blocks if not b.is_break]
