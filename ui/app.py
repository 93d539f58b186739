"""
Job Sequencer - Streamlit Dashboard

Interactive web interface for the job sequencer.

Dashboard Structure:
    - Input Zone: Upload jobs, pick a scenario, add jobs by hand
    - Control Zone: Run the sequencer
    - Output Zone: Sequence, KPIs, slot timeline, baseline comparison

Run with: streamlit run ui/app.py
"""

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from datetime import datetime
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.job import Job
from models.schedule import Schedule
from scheduler.greedy_scheduler import GreedyScheduler
from utils.baseline_scheduler import BaselineScheduler
from utils.config_loader import load_config
from utils.data_generator import (
    REFERENCE_SCENARIOS,
    create_scenario,
    export_schedule_to_csv,
    generate_random_jobs,
    read_uploaded_jobs,
)
from utils.logger import setup_logging

# Page configuration
st.set_page_config(
    page_title="Job Sequencer",
    page_icon="🗓️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize session state
if 'config' not in st.session_state:
    st.session_state.config = load_config()
    policy = st.session_state.config['policy']
    setup_logging(policy.log_level, policy.log_format)
if 'jobs' not in st.session_state:
    st.session_state.jobs = []
if 'result' not in st.session_state:
    st.session_state.result = None
if 'baseline_schedule' not in st.session_state:
    st.session_state.baseline_schedule = None
if 'uploaded_file_id' not in st.session_state:
    st.session_state.uploaded_file_id = None


def main():
    """Main application function."""

    st.title("🗓️ Job Sequencer")
    st.markdown("Unit-time jobs, one per slot, profit only when on time.")
    st.markdown("---")

    with st.sidebar:
        st.markdown("### Navigation")
        page = st.radio("Go to:", ["📥 Input", "🎯 Sequence", "📊 Results"], index=0)

        st.markdown("---")
        st.markdown("### Quick Actions")
        if st.button("🎲 Generate Random Jobs"):
            st.session_state.jobs = generate_random_jobs(12, max_deadline=5)
            st.session_state.result = None
            st.rerun()

        if st.button("🔄 Reset All"):
            st.session_state.jobs = []
            st.session_state.result = None
            st.session_state.baseline_schedule = None
            st.rerun()

        st.markdown("---")
        st.info(f"📦 {len(st.session_state.jobs)} jobs loaded")

    if page == "📥 Input":
        render_input_zone()
    elif page == "🎯 Sequence":
        render_control_zone()
    else:
        render_output_zone()


def render_input_zone():
    """Render the Input Zone - job upload and entry."""

    st.subheader("📥 Jobs")
    col1, col2 = st.columns([1, 1])

    with col1:
        uploaded_file = st.file_uploader("Upload Job List (CSV: job_id, deadline, profit)", type=['csv'])
        # Reruns keep the same upload; only a new file replaces the job list
        try:
            jobs = read_uploaded_jobs(uploaded_file, st.session_state.uploaded_file_id)
        except ValueError as e:
            st.error(f"❌ {e}")
        else:
            if jobs is not None:
                st.session_state.jobs = jobs
                st.session_state.uploaded_file_id = uploaded_file.file_id
                st.session_state.result = None
                st.success(f"✅ Loaded {len(jobs)} jobs from CSV")

        scenario_name = st.selectbox("Reference scenario", sorted(REFERENCE_SCENARIOS))
        if st.button("Load scenario"):
            scenario = create_scenario(scenario_name)
            st.session_state.jobs = scenario['jobs']
            st.session_state.result = None
            st.success(f"✅ {scenario['description']}")

    with col2:
        with st.expander("➕ Add Job Manually", expanded=True):
            with st.form("manual_job_form"):
                job_id = st.text_input("Job ID", value=f"J{len(st.session_state.jobs)+1:03d}")
                deadline = st.number_input("Deadline (slot)", min_value=1, max_value=100, value=1)
                profit = st.number_input("Profit", value=10, step=1)

                if st.form_submit_button("Add Job"):
                    st.session_state.jobs.append(Job(job_id, int(deadline), int(profit)))
                    st.success(f"✅ Added job {job_id}")
                    st.rerun()

    if st.session_state.jobs:
        st.markdown(f"**Current Jobs: {len(st.session_state.jobs)}**")
        st.dataframe(
            pd.DataFrame([j.to_dict() for j in st.session_state.jobs]),
            use_container_width=True,
            hide_index=True
        )


def render_control_zone():
    """Render the Control Zone - run the sequencer."""

    st.subheader("🎯 Run")
    if not st.session_state.jobs:
        st.warning("⚠️ Load or add jobs first.")
        return

    policy = st.session_state.config['policy']
    reject_duplicates = st.checkbox("Reject duplicate job IDs", value=policy.reject_duplicate_ids)
    with_baseline = st.checkbox("Compare with baseline slot-filling scheduler", value=True)

    if st.button("🚀 Sequence Jobs", type="primary"):
        run_sequencer(reject_duplicates, with_baseline)


def run_sequencer(reject_duplicates: bool, with_baseline: bool):
    """Run the greedy sequencer (and optionally the baseline) on the loaded jobs."""
    jobs = st.session_state.jobs
    result = GreedyScheduler(reject_duplicate_ids=reject_duplicates).schedule(jobs)
    st.session_state.result = result

    if not result.is_ok:
        st.session_state.baseline_schedule = None
        st.error("❌ Invalid job input")
        for error in result.errors:
            st.markdown(f"- {error}")
        return

    if with_baseline:
        st.session_state.baseline_schedule, _ = BaselineScheduler().schedule(jobs)
    else:
        st.session_state.baseline_schedule = None

    st.success(f"✅ Sequenced {len(result.job_ids)} jobs. See 📊 Results.")


def render_output_zone():
    """Render the Output Zone - results and visualizations."""

    st.subheader("📊 Results")
    result = st.session_state.result

    if result is None:
        st.info("ℹ️ Run the sequencer first to see results here.")
        return

    if not result.is_ok:
        st.error("❌ Sequencing refused")
        st.code("\n".join(result.errors))
        return

    schedule = result.schedule
    kpis = schedule.kpis

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Profit", kpis.total_profit)
    col2.metric("Jobs Selected", kpis.num_selected, delta=f"-{kpis.num_dropped} dropped", delta_color="off")
    col3.metric("Slot Utilization", f"{kpis.slot_utilization:.1f}%")
    col4.metric("Profit Left Out", kpis.dropped_profit, delta_color="inverse")

    st.markdown(f"**Sequence:** {' → '.join(schedule.job_ids) or '-'}")
    st.plotly_chart(create_slot_chart(schedule), use_container_width=True)

    baseline = st.session_state.baseline_schedule
    if baseline is not None:
        st.markdown("### ⚖️ Greedy vs Baseline")
        comparison_df = pd.DataFrame({
            'Metric': ['Sequence', 'Total Profit', 'Jobs Selected'],
            'Baseline (slot-filling)': [', '.join(baseline.job_ids), baseline.total_profit, len(baseline.assignments)],
            'Greedy (max-heap)': [', '.join(schedule.job_ids), kpis.total_profit, kpis.num_selected],
        })
        st.dataframe(comparison_df.astype(str), use_container_width=True, hide_index=True)

    col_left, col_right = st.columns([1, 1])
    with col_left:
        st.markdown("### 🗑️ Dropped Jobs")
        if schedule.dropped:
            st.dataframe(pd.DataFrame([j.to_dict() for j in schedule.dropped]),
                         use_container_width=True, hide_index=True)
        else:
            st.markdown("None")
    with col_right:
        st.markdown("### 📝 Explanation")
        st.text_area("Explanation", schedule.explanation, height=250, disabled=True,
                     label_visibility="collapsed")

    st.download_button(
        label="📄 Download Schedule (CSV)",
        data=export_schedule_to_csv(schedule),
        file_name=f"sequence_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv",
        mime="text/csv"
    )


def create_slot_chart(schedule: Schedule) -> go.Figure:
    """Create a Plotly timeline with one bar per occupied slot."""

    fig = go.Figure()

    for assignment in schedule.assignments:
        job = assignment.job
        fig.add_trace(go.Bar(
            name=job.job_id,
            x=[1],
            y=["Slots"],
            base=assignment.slot - 1,
            orientation='h',
            marker=dict(color='#1f77b4', line=dict(color='white', width=2)),
            text=f"{job.job_id}<br>profit {job.profit}",
            textposition='inside',
            textfont=dict(color='white', size=11),
            hovertemplate=(
                f"<b>{job.job_id}</b><br>"
                f"Slot: {assignment.slot}<br>"
                f"Deadline: {job.deadline}<br>"
                f"Profit: {job.profit}<extra></extra>"
            ),
            showlegend=False
        ))

    horizon = schedule.kpis.horizon if schedule.kpis else len(schedule.assignments)
    fig.update_layout(
        title="Slot Timeline",
        xaxis=dict(
            title="Time slot",
            range=[0, max(horizon, 1)],
            tickmode='array',
            tickvals=[slot - 0.5 for slot in range(1, horizon + 1)],
            ticktext=[str(slot) for slot in range(1, horizon + 1)]
        ),
        barmode='overlay',
        height=220,
        plot_bgcolor='#f5f5f5',
        showlegend=False
    )
    fig.update_xaxes(showgrid=True, gridwidth=1, gridcolor='white')

    return fig


if __name__ == "__main__":
    main()
