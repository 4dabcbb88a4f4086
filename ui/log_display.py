"""
Activity Log UI Component

Session-scoped record of operator actions (hours logged, adjustments, imports).
"""

import streamlit as st
from typing import List, Dict
from datetime import datetime


class ActivityLog:
    """Collects operator activity for display in the sidebar."""

    LEVEL_ICONS = {
        "success": "🟢",
        "warning": "🟡",
        "error": "🔴",
        "info": "🔵"
    }

    def __init__(self, session_key: str = "activity_log", max_entries: int = 200):
        self.session_key = session_key
        self.max_entries = max_entries
        if session_key not in st.session_state:
            st.session_state[session_key] = []

    def add_info(self, message: str):
        self._add("info", message)

    def add_success(self, message: str):
        self._add("success", message)

    def add_warning(self, message: str):
        self._add("warning", message)

    def add_error(self, message: str):
        self._add("error", message)

    def _add(self, level: str, message: str):
        entries = st.session_state[self.session_key]
        entries.append({
            "timestamp": datetime.now().strftime("%H:%M:%S"),
            "level": level,
            "message": message
        })
        # Oldest entries drop off first
        del entries[:-self.max_entries]

    def clear(self):
        st.session_state[self.session_key] = []

    def get_entries(self) -> List[Dict]:
        return st.session_state.get(self.session_key, [])


def render_activity_log(activity_log: ActivityLog):
    """
    Render the activity log as a collapsible list, newest first.

    Args:
        activity_log: ActivityLog instance with entries
    """
    entries = activity_log.get_entries()

    if not entries:
        return

    with st.expander(f"📋 Activity ({len(entries)})", expanded=False):
        for entry in reversed(entries):
            icon = ActivityLog.LEVEL_ICONS.get(entry.get("level"), "⚪")
            st.markdown(f"{icon} `[{entry.get('timestamp', '')}]` {entry.get('message', '')}")

        if st.button("Clear Activity", key="clear_activity_button"):
            activity_log.clear()
            st.rerun()
