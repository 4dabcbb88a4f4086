"""
Production Pace Dashboard - Main Application

Manual production tracking: operators log hourly output per product line and
the dashboard compares smoothed pace against the pace required to finish the
planned schedule on time.
"""

import streamlit as st
import logging

from utils.config import load_config, validate_config, get_app_config, get_log_level

# Load configuration
load_config()

# Configure logging
logging.basicConfig(
    level=get_log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from core.forecasting.sequencer import flatten_production_log
from core.forecasting.summary import build_hourly_history, count_idle_hours, summarize_plant
from ui.entry_form import render_adjustments, render_entry_form, render_schedule_editor
from ui.log_display import ActivityLog, render_activity_log
from ui.metrics_display import render_executive_view, render_history_view, render_report
from ui.scenario_manager import render_scenario_import, render_scenario_manager
from ui.setup_form import render_setup_form
from utils.formatting import report_filename

# Streamlit page config
st.set_page_config(
    page_title="Production Pace Dashboard",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Validate configuration
config_errors = validate_config()
if config_errors:
    st.error("❌ Configuration errors detected:")
    for error in config_errors:
        st.error(error)
    st.stop()

app_config = get_app_config()
activity_log = ActivityLog("activity_log")

st.title("🏭 Production Pace Dashboard")

# ============================================================================
# SETUP
# ============================================================================

if 'production_state' not in st.session_state:
    new_state = render_setup_form()

    with st.expander("📂 Or import a saved scenario", expanded=False):
        imported_state = render_scenario_import(activity_log, key_prefix="setup")

    started = new_state or imported_state
    if started is not None:
        st.session_state['production_state'] = started
        activity_log.add_success("Production run started")
        st.rerun()
    st.stop()

state = st.session_state['production_state']

# ============================================================================
# SIDEBAR
# ============================================================================

with st.sidebar:
    st.header("ℹ️ Run")
    st.metric("Planned Hours", state.schedule.total_planned_hours)
    st.metric("Logged Hours", len(state.log))
    st.caption(f"**Timezone:** {app_config['timezone']}")

    if st.button("🔄 Reset Run", type="secondary"):
        del st.session_state['production_state']
        activity_log.add_warning("Run reset")
        st.rerun()

    render_activity_log(activity_log)

# ============================================================================
# FORECAST
# ============================================================================

result = state.forecast()
summary = summarize_plant(result)

tab_exec, tab_entry, tab_history, tab_scenarios, tab_report = st.tabs(
    ["Executive", "Entry", "History", "Scenarios", "Report"]
)

with tab_exec:
    render_executive_view(result, summary)

with tab_entry:
    render_entry_form(state, activity_log)
    st.divider()
    render_adjustments(state, result, activity_log)
    render_schedule_editor(state, activity_log)

with tab_history:
    events = flatten_production_log(state.log, state.product_ids)
    render_history_view(
        build_hourly_history(events, state.products),
        count_idle_hours(events, state.products),
        state.products
    )

with tab_scenarios:
    imported = render_scenario_manager(state, activity_log)
    if imported is not None:
        st.session_state['production_state'] = imported
        st.rerun()

with tab_report:
    render_report(
        result,
        summary,
        report_filename(app_config['report_file_prefix'], app_config['timezone'])
    )
