"""
Scenario Manager UI Component

Export the current state as JSON and import a saved scenario.
"""

import streamlit as st
import logging
from typing import Optional

from core.errors import ScenarioImportError
from core.scenario.serialization import export_scenario, import_scenario
from core.state.production_state import ProductionState
from ui.log_display import ActivityLog

logger = logging.getLogger(__name__)


def render_scenario_import(activity_log: ActivityLog, key_prefix: str = "scenario") -> Optional[ProductionState]:
    """
    Text area + button for importing a scenario.

    Returns:
        The imported state, or None when nothing (valid) was imported
    """
    import_text = st.text_area("Paste scenario JSON", height=300, key=f"{key_prefix}_import_text")

    if not st.button("📤 Import Scenario", key=f"{key_prefix}_import_button"):
        return None

    try:
        state = import_scenario(import_text)
    except ScenarioImportError as e:
        st.error(f"❌ Import failed: {e}")
        activity_log.add_error(f"Scenario import failed: {e}")
        return None

    activity_log.add_success(
        f"Scenario imported: {len(state.products)} products, {len(state.log)} logged hours"
    )
    return state


def render_scenario_manager(state: ProductionState, activity_log: ActivityLog) -> Optional[ProductionState]:
    """
    Export / import page.

    Returns:
        The imported state to replace the current one, or None
    """
    col1, col2 = st.columns(2)

    with col1:
        st.subheader("💾 Export Current Scenario")
        scenario_json = export_scenario(state)
        st.code(scenario_json, language="json")
        st.download_button(
            label="📥 Download Scenario (JSON)",
            data=scenario_json,
            file_name="scenario.json",
            mime="application/json"
        )

    with col2:
        st.subheader("📂 Import Scenario")
        st.caption("Importing replaces the whole current run.")
        return render_scenario_import(activity_log, key_prefix="manager")
