# config.py

"""
Portal-wide settings: which pages exist, the table names, and where the
data store settings come from.
"""

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

PORTAL_TITLE = "HeliVenture Airways"
PORTAL_SUBTITLE = "System Description & Safety Management Portal"

# Which pages exist in the portal.
# Each section has pages. Each page maps to a module under apps/.
ALL_PAGES = {
    "Organization": {
        "Org Chart": {
            "module": "organization.org_chart",
            "owner": "Head of Operations",
        },
    },
    "Fleet": {
        "Fleet Gallery": {
            "module": "fleet.fleet_gallery",
            "owner": "Technical Services",
        },
    },
    "Processes": {
        "Operational Processes": {
            "module": "processes.process_flow",
            "owner": "Quality Manager",
        },
    },
    "Safety": {
        "Risk Matrix": {
            "module": "safety.risk_matrix",
            "owner": "Safety Manager",
        },
    },
}

# Sidebar icons for each section
SECTION_ICONS = {
    "Organization": "🏢",
    "Fleet":        "🚁",
    "Processes":    "🔁",
    "Safety":       "🛡️",
}

# Remote tables
TABLE_AIRCRAFT = "aircraft"
TABLE_EMPLOYEES = "employees"
TABLE_DEPARTMENTS = "departments"
TABLE_POSITIONS = "positions"
TABLE_DROPDOWN_OPTIONS = "dropdown_options"
TABLE_RISK_ASSESSMENTS = "risk_assessments"
TABLE_OPERATIONAL_PROCESSES = "operational_processes"

ALL_TABLES = [
    TABLE_AIRCRAFT,
    TABLE_EMPLOYEES,
    TABLE_DEPARTMENTS,
    TABLE_POSITIONS,
    TABLE_DROPDOWN_OPTIONS,
    TABLE_RISK_ASSESSMENTS,
    TABLE_OPERATIONAL_PROCESSES,
]

# dropdown_options.category values used by the fleet form
REFERENCE_CATEGORIES = ["capability", "equipment", "location"]

# Local fallback store
DEFAULT_DB_PATH = "portal.db"
DEFAULT_FILES_PATH = "PortalFiles"
DEFAULT_REQUEST_TIMEOUT = 30.0


def is_valid_url(url) -> bool:
    try:
        parsed = urlparse(str(url))
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_store_settings(*sources) -> dict:
    """
    Reads the data store settings from the given mappings, first hit wins
    (main_app passes Streamlit secrets, then os.environ).

    The hosted backend is only used when BOTH its url and key are present
    and the url is valid; otherwise the portal runs on the local database.
    """

    def lookup(*names, default=None):
        for source in sources:
            for name in names:
                value = source.get(name) if source else None
                if value not in (None, ""):
                    return value
        return default

    url = lookup("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
    key = lookup("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY")
    timeout_raw = lookup("PORTAL_REQUEST_TIMEOUT", default=DEFAULT_REQUEST_TIMEOUT)
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid PORTAL_REQUEST_TIMEOUT %r", timeout_raw)
        timeout = DEFAULT_REQUEST_TIMEOUT

    use_hosted = bool(url and key and is_valid_url(url))
    if not use_hosted:
        logger.warning(
            "Hosted data store not configured (url: %s, key: %s, valid url: %s); using local database",
            "set" if url else "missing",
            "set" if key else "missing",
            is_valid_url(url) if url else False,
        )

    return {
        "backend": "hosted" if use_hosted else "local",
        "supabase_url": url if use_hosted else None,
        "supabase_key": key if use_hosted else None,
        "db_path": lookup("PORTAL_DB_PATH", default=DEFAULT_DB_PATH),
        "files_path": lookup("PORTAL_FILES_PATH", default=DEFAULT_FILES_PATH),
        "timeout": timeout,
    }
