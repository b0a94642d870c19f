# main.py
import logging
from datetime import date

import matplotlib.pyplot as plt
import pandas as pd

from study_planner.models import DAY_NAMES, DailyRoutine
from study_planner.samples import sample_subjects
from study_planner.scheduler import generate_schedule
from study_planner.stats import schedule_frame
from study_planner.validation import ensure_plan_inputs


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    today = date.today()
    subjects = sample_subjects(today)

    routine = DailyRoutine(
        study_start_time="09:00",
        study_end_time="18:00",
        sleep_duration=8,
        meal_times=("12:00", "19:00"),
        break_duration=15,
    )

    ensure_plan_inputs(subjects, routine)
    schedule = generate_schedule(subjects, routine, today)

    df = schedule_frame(schedule)
    df["weekday"] = df["day"].map(lambda d: DAY_NAMES[d])

    print(f"=== Week of {schedule.week_start:%B %d, %Y} ===")
    print(df[["weekday", "start_time", "end_time", "subject_name", "duration", "priority"]]
          .to_string(index=False))
    print()
    print(f"Total study hours: {schedule.stats.total_study_hours}")
    print(f"Earliest exam in:  {schedule.stats.earliest_exam_days} days")

    names = {s.id: s.name for s in subjects}
    breakdown = pd.DataFrame([{
        "subject": names[b.subject_id],
        "hours": b.total_minutes / 60,
        "days_until_exam": b.days_until_exam,
    } for b in schedule.stats.subject_breakdown])
    print(breakdown.to_string(index=False))

    # Weekly hours per subject
    plt.figure(figsize=(8, 3))
    plt.bar(breakdown["subject"], breakdown["hours"])
    plt.title("Planned study hours this week")
    plt.ylabel("Hours")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
