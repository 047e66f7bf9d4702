# common/fleet.py

"""
Form rules for the Fleet page's add/edit aircraft form.

The form is passed around as a plain `form_data` dict with these keys:
    type, registration, configuration,
    passenger_capacity, max_takeoff_weight, max_cruise_speed, range, service_ceiling,
    capabilities (list), base_locations (list), special_equipment (list),
    inspections (list of {type, interval}), common_issues (text, one per line)
"""

import os
import time
from typing import Dict, Optional

from common.models import Aircraft

IMAGE_BUCKET = "aircraft-images"
ALLOWED_IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]


def validate_aircraft_form(form_data: dict) -> Dict[str, str]:
    """Returns {field: message}. Empty dict means the form is good to save."""
    errors = {}
    if not (form_data.get("type") or "").strip():
        errors["type"] = "Aircraft type is required"
    if not (form_data.get("registration") or "").strip():
        errors["registration"] = "Registration number is required"
    if not form_data.get("capabilities"):
        errors["capabilities"] = "At least one capability is required"
    if not form_data.get("base_locations"):
        errors["locations"] = "At least one base location is required"
    return errors


def split_common_issues(text: Optional[str]):
    """One issue per line, blank lines dropped."""
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


def build_aircraft_payload(form_data: dict, image_url: Optional[str]) -> dict:
    """Shapes the form into an `aircraft` table row (without the id)."""
    return {
        "type": form_data.get("type", "").strip(),
        "registration": form_data.get("registration", "").strip(),
        "configuration": form_data.get("configuration", ""),
        "capabilities": list(form_data.get("capabilities") or []),
        "base_location": list(form_data.get("base_locations") or []),
        "special_equipment": list(form_data.get("special_equipment") or []),
        "image_url": image_url,
        "specifications": {
            "passenger_capacity": form_data.get("passenger_capacity", ""),
            "max_takeoff_weight": form_data.get("max_takeoff_weight", ""),
            "max_cruise_speed": form_data.get("max_cruise_speed", ""),
            "range": form_data.get("range", ""),
            "service_ceiling": form_data.get("service_ceiling", ""),
        },
        "maintenance": {
            "inspections": [
                {"type": i.get("type", ""), "interval": i.get("interval", "")}
                for i in form_data.get("inspections") or []
            ],
            "common_issues": split_common_issues(form_data.get("common_issues")),
        },
    }


def form_from_aircraft(aircraft: Aircraft) -> dict:
    """Prefills the edit form from an existing aircraft."""
    specs = aircraft.specifications
    return {
        "type": aircraft.type,
        "registration": aircraft.registration,
        "configuration": aircraft.configuration,
        "passenger_capacity": specs.passenger_capacity,
        "max_takeoff_weight": specs.max_takeoff_weight,
        "max_cruise_speed": specs.max_cruise_speed,
        "range": specs.range,
        "service_ceiling": specs.service_ceiling,
        "capabilities": list(aircraft.capabilities),
        "base_locations": list(aircraft.base_location),
        "special_equipment": list(aircraft.special_equipment),
        "inspections": [{"type": i.type, "interval": i.interval} for i in aircraft.maintenance.inspections],
        "common_issues": "\n".join(aircraft.maintenance.common_issues),
    }


def image_file_name(original_name: str, now: Optional[float] = None) -> str:
    """Stored images are named '<epoch millis>.<original extension>'."""
    extension = os.path.splitext(original_name)[1].lstrip(".").lower() or "png"
    millis = int((time.time() if now is None else now) * 1000)
    return f"{millis}.{extension}"


def file_name_from_url(url: Optional[str]) -> Optional[str]:
    """The object name is the last path segment of its public url."""
    if not url:
        return None
    name = url.replace("\\", "/").rstrip("/").split("/")[-1]
    return name or None
