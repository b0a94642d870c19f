from datetime import date, timedelta

import pytest

from study_planner.allocator import (
    allocate_day,
    allocate_week,
    round_half_up,
    session_target,
)
from study_planner.models import SessionRules, Subject
from study_planner.weighting import rank_subjects

TODAY = date(2024, 5, 1)
RULES = SessionRules()


def _ranked(*specs):
    """specs: (id, difficulty, days until exam)"""
    subjects = [
        Subject(id=sid, name=sid.title(), difficulty=d, color_index=i,
                exam_date=TODAY + timedelta(days=days))
        for i, (sid, d, days) in enumerate(specs)
    ]
    return rank_subjects(subjects, TODAY)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_session_targets_are_proportional_then_clamped():
    ranked = _ranked(("physics", 5, 2), ("art", 5, 60))  # weights 15 and 5
    heavy, light = ranked

    assert session_target(heavy, 20, 180, RULES) == 90   # 135 capped
    assert session_target(light, 20, 180, RULES) == 45


def test_short_target_is_raised_to_minimum():
    ranked = _ranked(("physics", 5, 2), ("music", 1, 60))  # weights 15 and 1
    assert session_target(ranked[1], 16, 180, RULES) == 30


def test_day_alternates_subjects_with_breaks():
    ranked = _ranked(("physics", 5, 2), ("art", 5, 60))

    blocks = allocate_day(0, ranked, [(540, 720)], break_minutes=15)

    assert [(b.subject_id, b.start_time, b.end_time, b.duration) for b in blocks] == [
        ("physics", "09:00", "10:30", 90),
        ("break", "10:30", "10:45", 15),
        ("art", "10:45", "11:30", 45),
        ("break", "11:30", "11:45", 15),
    ]
    assert [b.id for b in blocks] == ["d0-01", "d0-02", "d0-03", "d0-04"]
    assert blocks[0].priority == "high"
    assert blocks[0].color_index == 0
    assert blocks[1].is_break and blocks[1].color_index == -1
    assert blocks[1].subject_name == "Break" and blocks[1].priority == "low"


def test_break_that_ends_exactly_at_interval_end_is_kept():
    ranked = _ranked(("physics", 5, 2))

    blocks = allocate_day(3, ranked, [(540, 645)], break_minutes=15)

    assert [(b.start_time, b.end_time, b.is_break) for b in blocks] == [
        ("09:00", "10:30", False),
        ("10:30", "10:45", True),
    ]
    assert all(b.day == 3 for b in blocks)


def test_no_break_when_interval_is_too_short_for_one():
    ranked = _ranked(("physics", 5, 2))

    blocks = allocate_day(0, ranked, [(540, 640)], break_minutes=15)

    # 90-minute session, 10 minutes left: no break, leftover dropped
    assert [(b.start_time, b.end_time, b.is_break) for b in blocks] == [
        ("09:00", "10:30", False),
    ]


def test_session_is_truncated_to_interval_remainder():
    ranked = _ranked(("physics", 5, 2))

    blocks = allocate_day(0, ranked, [(540, 600)], break_minutes=15)

    assert [(b.duration, b.is_break) for b in blocks] == [(60, False)]


def test_slivers_under_twenty_minutes_are_not_scheduled():
    ranked = _ranked(("physics", 5, 2))
    assert allocate_day(0, ranked, [(540, 555)], break_minutes=15) == []


def test_zero_break_duration_emits_no_break_blocks():
    ranked = _ranked(("physics", 5, 2), ("art", 5, 60))

    blocks = allocate_day(0, ranked, [(540, 720)], break_minutes=0)

    assert not any(b.is_break for b in blocks)
    assert [b.duration for b in blocks] == [90, 45, 45]


def test_rotation_restarts_every_day():
    ranked = _ranked(("physics", 5, 2), ("art", 5, 60))

    blocks = allocate_week(ranked, [(540, 720)], break_minutes=15)

    for day in range(7):
        first = next(b for b in blocks if b.day == day)
        assert first.subject_id == "physics"
    assert len(blocks) == 28


def test_no_subjects_no_blocks():
    assert allocate_week([], [(540, 720)], break_minutes=15) == []


def test_zero_total_weight_is_an_input_error():
    subject = Subject(id="x", name="X", difficulty=0, exam_date=TODAY)
    ranked = rank_subjects([subject], TODAY)

    with pytest.raises(ValueError, match="weight"):
        allocate_day(0, ranked, [(540, 720)], break_minutes=15)
