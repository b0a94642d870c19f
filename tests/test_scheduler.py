from collections import defaultdict
from datetime import date, timedelta

import pytest

from study_planner.dates import time_to_minutes
from study_planner.models import DailyRoutine, Subject
from study_planner.samples import sample_subjects
from study_planner.scheduler import generate_schedule
from study_planner.slots import routine_slots, total_minutes

TODAY = date(2024, 5, 1)  # a Wednesday


def _subject(sid, difficulty, days_out, color_index=0):
    return Subject(id=sid, name=sid.title(), difficulty=difficulty,
                   color_index=color_index, exam_date=TODAY + timedelta(days=days_out))


def _morning_routine():
    return DailyRoutine(
        study_start_time="09:00",
        study_end_time="12:00",
        sleep_duration=8,
        meal_times=("12:00",),
        break_duration=15,
    )


def test_week_starts_on_the_previous_sunday():
    schedule = generate_schedule([_subject("math", 3, 10)], _morning_routine(), TODAY)
    assert schedule.week_start == date(2024, 4, 28)
    assert schedule.date_for_day(6) == date(2024, 5, 4)


def test_two_subject_week_totals():
    physics = _subject("physics", 5, 2)
    art = _subject("art", 5, 60, color_index=1)

    schedule = generate_schedule([art, physics], _morning_routine(), TODAY)
    stats = schedule.stats

    assert len(schedule.blocks) == 28
    assert stats.total_study_hours == 15.8        # 945 minutes
    assert stats.average_daily_hours == 2.3
    assert stats.earliest_exam_days == 2
    # breakdown follows input order, not weight order
    assert [(b.subject_id, b.total_minutes, b.days_until_exam, b.percentage)
            for b in stats.subject_breakdown] == [
        ("art", 315, 60, 33),
        ("physics", 630, 2, 67),
    ]


def test_squeezed_out_subjects_report_zero_minutes():
    routine = DailyRoutine(study_start_time="09:00", study_end_time="10:00",
                           meal_times=(), break_duration=15)
    subjects = [_subject("music", 1, 60), _subject("art", 5, 60), _subject("physics", 5, 2)]

    schedule = generate_schedule(subjects, routine, TODAY)

    totals = {b.subject_id: b.total_minutes for b in schedule.stats.subject_breakdown}
    assert totals == {"music": 0, "art": 0, "physics": 43 * 7}
    assert [b.subject_id for b in schedule.stats.subject_breakdown] == ["music", "art", "physics"]


def test_no_subjects_gives_empty_schedule():
    schedule = generate_schedule([], DailyRoutine(), TODAY)

    assert schedule.blocks == []
    assert schedule.stats.total_study_hours == 0
    assert schedule.stats.earliest_exam_days is None
    assert schedule.stats.subject_breakdown == []


def test_subject_without_exam_date_is_rejected():
    with pytest.raises(ValueError):
        generate_schedule([Subject(id="1", name="Math", difficulty=3)], DailyRoutine(), TODAY)


def test_generation_is_deterministic():
    subjects = sample_subjects(TODAY)
    first = generate_schedule(subjects, DailyRoutine(), TODAY)
    second = generate_schedule(subjects, DailyRoutine(), TODAY)
    assert first == second


def test_schedule_invariants_for_default_routine():
    routine = DailyRoutine()
    schedule = generate_schedule(sample_subjects(TODAY), routine, TODAY)
    free_minutes = total_minutes(routine_slots(routine))

    by_day = defaultdict(list)
    for block in schedule.blocks:
        by_day[block.day].append(block)

    assert set(by_day) == set(range(7))
    for day, blocks in by_day.items():
        study = [b for b in blocks if not b.is_break]
        assert all(20 <= b.duration <= 90 for b in study)
        assert sum(b.duration for b in study) <= free_minutes

        spans = [(time_to_minutes(b.start_time), time_to_minutes(b.end_time)) for b in blocks]
        assert spans == sorted(spans)
        for (_, prev_end), (next_start, _) in zip(spans, spans[1:]):
            assert prev_end <= next_start
        for (start, end), block in zip(spans, blocks):
            assert end - start == block.duration


def test_blocks_never_overlap_meals():
    routine = DailyRoutine(study_start_time="09:00", study_end_time="13:00",
                           meal_times=("11:00",), break_duration=10)
    schedule = generate_schedule(sample_subjects(TODAY), routine, TODAY)

    for block in schedule.blocks:
        start, end = time_to_minutes(block.start_time), time_to_minutes(block.end_time)
        assert end <= 660 or start >= 690


def test_today_with_time_of_day_is_truncated():
    from datetime import datetime

    subjects = [_subject("math", 3, 3)]
    at_night = generate_schedule(subjects, _morning_routine(), datetime(2024, 5, 1, 23, 59))
    at_midnight = generate_schedule(subjects, _morning_routine(), TODAY)
    assert at_night == at_midnight
