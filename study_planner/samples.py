# study_planner/samples.py
from datetime import date, timedelta
from typing import List, Optional

from .models import PALETTE_SIZE, Subject


def next_color_index(count: int) -> int:
    """Palette slot for the subject added after `count` existing ones."""
    return count % PALETTE_SIZE


def sample_subjects(today: Optional[date] = None) -> List[Subject]:
    """
    Demo subjects. Exam dates are left unset unless `today` is given, in which
    case they are spread over the next few weeks.
    """
    rows = [
        ("1", "Mathematics", 4, "Focus on calculus", 10),
        ("2", "Physics", 5, "Quantum mechanics chapter", 5),
        ("3", "History", 2, "Review timeline", 21),
        ("4", "English Literature", 3, "", 40),
    ]
    subjects = []
    for i, (sid, name, difficulty, notes, offset) in enumerate(rows):
        subjects.append(Subject(
            id=sid,
            name=name,
            difficulty=difficulty,
            notes=notes,
            color_index=next_color_index(i),
            exam_date=today + timedelta(days=offset) if today else None,
        ))
    return subjects
