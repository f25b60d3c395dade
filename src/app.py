import streamlit as st
import pandas as pd
import plotly.express as px
from datetime import datetime

from weekplan.models import (
    CycleDetected,
    FixedTask,
    FlexibleTask,
    SchedulerPrefs,
    TimeWindow,
)
from weekplan.reporting import schedule_to_frame, unscheduled_to_frame
from weekplan.scheduler import generate_schedule
from weekplan.timegrid import DAY_NAMES, MINUTES_PER_DAY, SLOT_MINUTES


def minute_of_day(t) -> int:
    return t.hour * 60 + t.minute


# Session State Setup
if "tasks" not in st.session_state:
    st.session_state.tasks = []         # list[FixedTask | FlexibleTask]

if "prefs" not in st.session_state:
    st.session_state.prefs = SchedulerPrefs()

if "result" not in st.session_state:
    st.session_state.result = None

if "week_start" not in st.session_state:
    # Sunday of the current week; day index 0 is Sunday
    today = pd.Timestamp.now().normalize()
    st.session_state.week_start = today - pd.Timedelta(days=(today.weekday() + 1) % 7)


# Sidebar: Inputs
st.sidebar.title("Weekly Planner")

# Active hours
st.sidebar.subheader("Daily active hours")
active_start = st.sidebar.number_input("Day starts (hour)", 0, 23,
                                       value=st.session_state.prefs.active_start_minutes // 60)
active_end = st.sidebar.number_input("Day ends (hour)", 1, 24,
                                     value=st.session_state.prefs.active_end_minutes // 60)
st.session_state.prefs = SchedulerPrefs(int(active_start) * 60, int(active_end) * 60)

task_ids = [t.id for t in st.session_state.tasks]

# Add Fixed Event
st.sidebar.subheader("Add Fixed Event")
with st.sidebar.form("fixed_form"):
    fe_id = st.text_input("Name", key="fe_id")
    fe_day = st.selectbox("Day", list(range(7)), format_func=lambda d: DAY_NAMES[d], key="fe_day")
    fe_start = st.time_input("Start", key="fe_start", step=SLOT_MINUTES * 60)
    fe_end = st.time_input("End", key="fe_end", step=SLOT_MINUTES * 60)
    add_fixed = st.form_submit_button("Add Fixed Event")
    if add_fixed:
        if fe_id and fe_id not in task_ids and fe_end > fe_start:
            base = fe_day * MINUTES_PER_DAY
            st.session_state.tasks.append(
                FixedTask(
                    id=fe_id,
                    time_window=TimeWindow(base + minute_of_day(fe_start),
                                           base + minute_of_day(fe_end)),
                )
            )
        else:
            st.sidebar.error("Please enter a new name and ensure end > start")

# Add Flexible Task
st.sidebar.subheader("Add Recurring Task")
with st.sidebar.form("task_form"):
    t_id = st.text_input("Name", key="t_id")
    t_dur = st.number_input("Duration (minutes)", min_value=SLOT_MINUTES, max_value=12 * 60,
                            step=SLOT_MINUTES, value=60)
    t_days = st.multiselect("Days", list(range(7)), default=list(range(7)),
                            format_func=lambda d: DAY_NAMES[d])
    t_window_enable = st.checkbox("Own time window?", key="t_window_enable")
    t_win_start = st.time_input("Not before", key="t_win_start", step=SLOT_MINUTES * 60)
    t_win_end = st.time_input("Finish by", key="t_win_end", step=SLOT_MINUTES * 60)
    t_prereqs = st.multiselect("After (same day)", task_ids, key="t_prereqs")
    add_task = st.form_submit_button("Add Task")
    if add_task:
        if t_id and t_id not in task_ids:
            window = None
            if t_window_enable:
                window = TimeWindow(minute_of_day(t_win_start), minute_of_day(t_win_end))
            st.session_state.tasks.append(
                FlexibleTask(
                    id=t_id,
                    duration=int(t_dur),
                    days=list(t_days),
                    allowed_window=window,
                    prerequisites=list(t_prereqs),
                )
            )
        else:
            st.sidebar.error("Please enter a new task name.")

if st.sidebar.button("Clear all"):
    st.session_state.tasks = []
    st.session_state.result = None


# Main: Generate Schedule
st.title("Weekly Planner")

st.markdown("### Current Tasks")
if st.session_state.tasks:
    st.dataframe(pd.DataFrame([{
        "id": t.id,
        "type": t.type.value,
        "duration": getattr(t, "duration", None),
        "days": ", ".join(DAY_NAMES[d] for d in t.days) if getattr(t, "days", None) else None,
        "after": ", ".join(t.prerequisites),
    } for t in st.session_state.tasks]))
else:
    st.write("No tasks yet.")


if st.button("Generate Schedule"):
    try:
        st.session_state.result = generate_schedule(st.session_state.tasks, st.session_state.prefs)
    except CycleDetected as e:
        st.session_state.result = None
        st.error(f"Cycle detected among: {', '.join(e.remaining)}")


result = st.session_state.result
if result is not None:
    blocks = schedule_to_frame(result)
    st.markdown("## Weekly View")

    if not blocks.empty:
        week_start = st.session_state.week_start
        blocks["Start"] = [week_start + pd.Timedelta(minutes=s * SLOT_MINUTES) for s in blocks["start_slot"]]
        blocks["Finish"] = [week_start + pd.Timedelta(minutes=e * SLOT_MINUTES) for e in blocks["end_slot"]]
        fig = px.timeline(blocks, x_start="Start", x_end="Finish", y="day", color="id",
                          category_orders={"day": list(DAY_NAMES)})
        fig.update_yaxes(autorange="reversed")
        st.plotly_chart(fig, use_container_width=True)
        st.dataframe(blocks[["id", "day", "start", "end"]])
    else:
        st.write("Nothing could be placed.")

    missed = unscheduled_to_frame(result)
    if not missed.empty:
        st.markdown("### Unscheduled")
        st.dataframe(missed)
    st.caption(f"Generated {datetime.now():%H:%M:%S}")
else:
    st.info("Add some events/tasks and click **Generate Schedule** to see the week.")
