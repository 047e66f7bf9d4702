"""
common/notifications.py

The toast surface. The portal service is handed a Notifier instead of
reaching for Streamlit directly, so it can run (and be tested) without a
browser session.
"""

import logging

import streamlit as st

logger = logging.getLogger(__name__)


class Notifier:
    def success(self, title: str, description: str = "") -> None:
        raise NotImplementedError

    def error(self, title: str, description: str = "") -> None:
        raise NotImplementedError


class StreamlitNotifier(Notifier):
    """Shows notifications as Streamlit toasts (errors also go to the log)."""

    def success(self, title, description=""):
        st.toast(f"**{title}** {description}".strip(), icon="✅")

    def error(self, title, description=""):
        logger.warning("%s: %s", title, description)
        st.toast(f"**{title}** {description}".strip(), icon="🚨")
