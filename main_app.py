import importlib
import logging
import os

import streamlit as st

import config
import portal_schema
from common.layout import render_frame
from common.notifications import StreamlitNotifier
from portal_service import PortalService, build_store
from ui_nav import build_sidebar

logger = logging.getLogger(__name__)

# -------------------------------------------
# PAGE CONFIG
# -------------------------------------------
st.set_page_config(
    page_title=f"{config.PORTAL_TITLE} Portal",
    page_icon="🚁",
    layout="wide",
    initial_sidebar_state="expanded"
)

logging.basicConfig(
    level=os.environ.get("PORTAL_LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def _read_secrets() -> dict:
    """Streamlit secrets as a plain dict; empty when no secrets.toml exists."""
    try:
        return dict(st.secrets)
    except Exception as e:  # Streamlit raises its own error types for a missing/broken file
        logger.info("No Streamlit secrets available (%s); using environment only", e)
        return {}


@st.cache_resource
def get_service_parts():
    """Built once per server process: settings and the store they describe."""
    settings = config.load_store_settings(_read_secrets(), os.environ)
    if settings["backend"] == "local":
        portal_schema.initialize_database(settings["db_path"])
    return settings, build_store(settings)


@st.cache_data(ttl=60, show_spinner=False)
def get_connection_status(_service: PortalService) -> bool:
    return _service.check_connection()


# 1. Data store + service -----------------------------
settings, store = get_service_parts()
service = PortalService(store=store, notifier=StreamlitNotifier())

# 2. Draw sidebar + get nav state ---------------------
nav_state = build_sidebar(
    section_icons=config.SECTION_ICONS,
    pages=config.ALL_PAGES,
    source_name=service.source_name,
    connected=get_connection_status(service),
)

if nav_state["refresh"]:
    get_connection_status.clear()
    st.rerun()

active_section = nav_state["active_section"]
active_page_label = nav_state["active_page_label"]
page_config = config.ALL_PAGES[active_section][active_page_label]

# 3. Load and render the chosen page ------------------
try:
    module = importlib.import_module(f"apps.{page_config['module']}")
    body_component, meta = module.render_page(service=service)
except ModuleNotFoundError:
    # "Coming soon" placeholder
    body_component = None
    meta = {
        "title_override": active_page_label,
        "last_updated": "N/A",
        "data_source": service.source_name,
        "coming_soon": True
    }
except Exception as e:
    # Any other error from within the page module
    logger.exception("Rendering '%s' failed", active_page_label)
    st.error(f"An error occurred while rendering '{active_page_label}'.")
    st.exception(e)
    body_component = None
    meta = {"title_override": "Page Error"}

# 4. Wrap it in the portal frame ----------------------
render_frame(
    title_override = meta.get("title_override", active_page_label),
    body_component = body_component,
    last_updated   = meta.get("last_updated", "N/A"),
    owner          = meta.get("owner", page_config.get("owner", "TBD")),
    data_source    = meta.get("data_source", service.source_name),
    coming_soon    = meta.get("coming_soon", False)
)
