"""Weekly study planner: urgency-weighted allocation of study sessions."""
from .models import DailyRoutine, ScheduleBlock, SessionRules, Subject, WeeklySchedule
from .scheduler import generate_schedule
from .tips import get_study_tips

__all__ = [
    "DailyRoutine",
    "ScheduleBlock",
    "SessionRules",
    "Subject",
    "WeeklySchedule",
    "generate_schedule",
    "get_study_tips",
]
