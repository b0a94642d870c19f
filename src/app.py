import logging
import os
from dataclasses import replace
from datetime import date, datetime

import streamlit as st
import pandas as pd
import plotly.express as px

from streamlit_calendar import calendar

from study_planner.models import DailyRoutine, Subject
from study_planner.samples import next_color_index, sample_subjects
from study_planner.scheduler import generate_schedule
from study_planner.slots import estimated_study_hours
from study_planner.stats import ranked_breakdown, schedule_frame
from study_planner.storage import PlannerStore
from study_planner.tips import describe_urgency, get_study_tips
from study_planner.validation import check_plan_inputs, check_routine
from study_planner.weighting import days_until_exam

from prometheus_client import start_http_server, Summary, Counter


logging.basicConfig(level=logging.INFO)

STATE_PATH = os.environ.get("STUDY_PLANNER_STATE", "planner_state.json")
METRICS_PORT = int(os.environ.get("STUDY_PLANNER_METRICS_PORT", "8000"))

PALETTE = ["#1f77b4", "#ff7f0e", "#2ca02c", "#d62728",
           "#9467bd", "#8c564b", "#e377c2", "#17becf"]
BREAK_COLOR = "#7f7f7f"


# Create metrics only once
if "SCHEDULE_TIME" not in st.session_state:
    st.session_state.SCHEDULE_TIME = Summary(
        "schedule_generation_seconds",
        "Time spent generating the weekly study schedule",
    )
SCHEDULE_TIME = st.session_state.SCHEDULE_TIME

if "SCHEDULE_COUNTER" not in st.session_state:
    st.session_state.SCHEDULE_COUNTER = Counter(
        "schedule_generations_total",
        "Schedule generation attempts by outcome",
        ["outcome"],  # ok | rejected
    )
SCHEDULE_COUNTER = st.session_state.SCHEDULE_COUNTER

if "metrics_started" not in st.session_state:
    start_http_server(METRICS_PORT)
    st.session_state.metrics_started = True


# Session State Setup
store = PlannerStore(STATE_PATH)

if "subjects" not in st.session_state:
    st.session_state.subjects = store.load_subjects()      # list[Subject]

if "routine" not in st.session_state:
    st.session_state.routine = store.load_routine() or DailyRoutine()

if "schedule" not in st.session_state:
    st.session_state.schedule = store.load_schedule()      # WeeklySchedule | None


def set_subjects(subjects):
    st.session_state.subjects = subjects
    store.save_subjects(subjects)


today = date.today()


# Sidebar: Subjects
st.sidebar.title("Study Planner")

st.sidebar.subheader("Add Subject")
with st.sidebar.form("subject_form"):
    s_name = st.text_input("Subject name", key="s_name")
    s_difficulty = st.slider("Difficulty (1 easy, 5 hard)", 1, 5, 3)
    s_notes = st.text_input("Notes", key="s_notes")
    s_exam = st.date_input("Exam date", value=today, key="s_exam")
    add_subject = st.form_submit_button("Add Subject")
    if add_subject:
        if s_name.strip():
            subjects = st.session_state.subjects
            set_subjects(subjects + [
                Subject(
                    id=f"s{datetime.now():%Y%m%d%H%M%S%f}",
                    name=s_name.strip(),
                    difficulty=int(s_difficulty),
                    notes=s_notes,
                    color_index=next_color_index(len(subjects)),
                    exam_date=s_exam,
                )
            ])
        else:
            st.sidebar.error("Please enter a subject name.")

if st.sidebar.button("Load sample data"):
    set_subjects(sample_subjects(today))

# Sidebar: Routine
st.sidebar.subheader("Daily Routine")
routine = st.session_state.routine
study_start = st.sidebar.time_input(
    "Study from", value=datetime.strptime(routine.study_start_time, "%H:%M").time())
study_end = st.sidebar.time_input(
    "Study until", value=datetime.strptime(routine.study_end_time, "%H:%M").time())
sleep_hours = st.sidebar.slider("Sleep (hours)", 4, 12, int(routine.sleep_duration))
meals_raw = st.sidebar.text_input("Meal times (HH:MM, comma separated)",
                                  value=", ".join(routine.meal_times))
break_minutes = st.sidebar.slider("Break between sessions (minutes)", 5, 30,
                                  int(routine.break_duration), step=5)

new_routine = DailyRoutine(
    study_start_time=study_start.strftime("%H:%M"),
    study_end_time=study_end.strftime("%H:%M"),
    sleep_duration=sleep_hours,
    meal_times=tuple(m.strip() for m in meals_raw.split(",") if m.strip()),
    break_duration=int(break_minutes),
)
if new_routine != routine:
    st.session_state.routine = new_routine
    store.save_routine(new_routine)
routine = st.session_state.routine

routine_problems = check_routine(routine)
if not routine_problems:
    st.sidebar.caption(f"About {estimated_study_hours(routine)} hours of effective study time per day")

if st.sidebar.button("Clear all data"):
    store.clear()
    st.session_state.subjects = []
    st.session_state.routine = DailyRoutine()
    st.session_state.schedule = None


# Main: Subjects
st.title("Weekly Study Schedule")

st.markdown("### Subjects")
if st.session_state.subjects:
    for subject in st.session_state.subjects:
        cols = st.columns([3, 1, 2, 1])
        cols[0].markdown(f"**{subject.name}**  \n{subject.notes}")
        cols[1].write(f"Difficulty {subject.difficulty}")
        if subject.exam_date:
            days = days_until_exam(subject.exam_date, today)
            _, message = describe_urgency(days)
            cols[2].write(f"Exam {subject.exam_date:%b %d, %Y}: {days} days ({message})")
        else:
            new_date = cols[2].date_input("Exam date", value=None, key=f"exam_{subject.id}")
            if new_date:
                set_subjects([replace(s, exam_date=new_date) if s.id == subject.id else s
                              for s in st.session_state.subjects])
                st.rerun()
        if cols[3].button("Remove", key=f"rm_{subject.id}"):
            set_subjects([s for s in st.session_state.subjects if s.id != subject.id])
            st.rerun()
        with st.expander(f"Study tips for {subject.name}"):
            for tip in get_study_tips(subject.difficulty):
                st.write(f"- {tip}")
else:
    st.write("No subjects yet.")


if st.button("Generate Schedule"):
    problems = check_plan_inputs(st.session_state.subjects, routine)
    if problems:
        SCHEDULE_COUNTER.labels(outcome="rejected").inc()
        for p in problems:
            st.error(p)
    else:
        with SCHEDULE_TIME.time():
            schedule = generate_schedule(st.session_state.subjects, routine, today)
        SCHEDULE_COUNTER.labels(outcome="ok").inc()
        st.session_state.schedule = schedule
        store.save_schedule(schedule)


# Calendar view
schedule = st.session_state.schedule
if schedule is not None and schedule.blocks:
    st.markdown(f"## Week of {schedule.week_start:%B %d, %Y}")

    c1, c2, c3 = st.columns(3)
    c1.metric("Total study hours", f"{schedule.stats.total_study_hours}h")
    c2.metric("Nearest exam", f"{schedule.stats.earliest_exam_days} days away")
    c3.metric("Daily average", f"{schedule.stats.average_daily_hours}h")

    df = schedule_frame(schedule)
    events = []
    for _, row in df.iterrows():
        events.append({
            "title": row["subject_name"],
            "start": pd.Timestamp(row["start"]).isoformat(),
            "end": pd.Timestamp(row["end"]).isoformat(),
            "id": row["id"],
            "color": BREAK_COLOR if row["is_break"] else PALETTE[row["color_index"] % len(PALETTE)],
        })

    cal_options = {
        "initialView": "timeGridWeek",
        "initialDate": schedule.week_start.isoformat(),
        "slotMinTime": f"{routine.study_start_time}:00",
        "slotMaxTime": f"{routine.study_end_time}:00",
        "allDaySlot": False,
        "nowIndicator": True,
        "firstDay": 0,  # Sunday
    }
    calendar(events=events, options=cal_options, key="calendar")

    # Per-subject breakdown
    names = {s.id: s.name for s in st.session_state.subjects}
    bdf = pd.DataFrame([{
        "subject": names.get(b.subject_id, b.subject_id),
        "hours": round(b.total_minutes / 60, 1),
        "share": b.percentage,
        "days_until_exam": b.days_until_exam,
    } for b in ranked_breakdown(schedule)])
    st.markdown("### Time per subject")
    fig = px.bar(bdf, x="subject", y="hours", hover_data=["share", "days_until_exam"],
                 labels={"subject": "Subject", "hours": "Hours"})
    st.plotly_chart(fig, use_container_width=True)
else:
    st.info("Add subjects with exam dates and click **Generate Schedule** to see the week.")
