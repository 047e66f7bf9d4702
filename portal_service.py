"""
Portal Service (The "Gatekeeper")

===============================================================================
PURPOSE:
===============================================================================
This file is the **single gatekeeper** between the portal pages and the
data store. Pages never talk to a store directly: they are handed a
`PortalService` and call its methods.

The service is built with two collaborators, passed in by main_app.py:

- `store`:    a DataStore (hosted or local, see common/data_store.py)
- `notifier`: where user-facing success/error messages go

===============================================================================
BUSINESS LOGIC:
===============================================================================
1.  **Reads never crash a page.**
    - A failed fetch is turned into an error notification and the page
      gets demo data instead (common/demo_data.py).
    - Rows that fail validation are skipped and counted; the rest of the
      table is still shown.

2.  **Writes report back.**
    - Every write returns the StoreResult so the page can decide whether
      to close its form. Success and failure are both notified.

===============================================================================
QUICK NAVIGATION / FUNCTION LIST
===============================================================================
    [F-STORE]  build_store(), PortalService.check_connection()
    [F-RISK]   fetch_risk_assessments()
    [F-ORG]    fetch_employees(), fetch_departments(), fetch_positions(),
               save_employee(), delete_employee()
    [F-FLEET]  fetch_aircraft(), fetch_reference_data(), add_reference_item(),
               add_aircraft(), edit_aircraft(), delete_aircraft()
    [F-PROC]   fetch_operations()
-------------------------------------------------------------------------------
"""

import logging
from typing import Dict, List, Optional

import config
from common import demo_data
from common.data_store import DataStore, SQLiteStore, StoreResult, SupabaseStore
from common.fleet import (
    IMAGE_BUCKET,
    build_aircraft_payload,
    file_name_from_url,
    image_file_name,
    validate_aircraft_form,
)
from common.models import (
    Aircraft,
    Department,
    DropdownOption,
    Employee,
    HazardRecord,
    OperationType,
    Position,
    rows_to_records,
)
from common.notifications import Notifier
from common.org_tree import OrgStructureError, build_hierarchy

logger = logging.getLogger(__name__)

NO_MATCH = "No matching record was found."


# --- [F-STORE] ----------------------------------------------------------------------

def build_store(settings: dict) -> DataStore:
    """Creates the store described by config.load_store_settings()."""
    if settings["backend"] == "hosted":
        return SupabaseStore(settings["supabase_url"], settings["supabase_key"], timeout=settings["timeout"])
    return SQLiteStore(settings["db_path"], settings["files_path"])


class PortalService:
    def __init__(self, store: DataStore, notifier: Notifier):
        self.store = store
        self.notifier = notifier

    @property
    def source_name(self) -> str:
        return self.store.name

    def check_connection(self) -> bool:
        """(For Sidebar) True if a trivial read against `aircraft` succeeds."""
        result = self.store.select(config.TABLE_AIRCRAFT, limit=1)
        if not result.ok:
            logger.error("Data store connection check failed: %s", result.error)
            return False
        return True

    # --- [H] Private helpers ---------------------------------------------------------

    def _fetch_rows(self, table: str, error_title: str, demo_rows: Optional[list],
                    filters=None, order=None, fallback_when_empty=True) -> list:
        """
        [PRIVATE] Reads a table. On failure notifies `error_title` and
        returns `demo_rows`; an empty table also falls back unless told not to.
        """
        result = self.store.select(table, filters=filters, order=order)
        if not result.ok:
            self.notifier.error(error_title, result.error or "Unknown error occurred")
            logger.warning("Using demo rows for '%s' after fetch failure", table)
            return list(demo_rows or [])
        rows = result.data or []
        if not rows and fallback_when_empty and demo_rows:
            logger.info("No rows in '%s', using demo rows", table)
            return list(demo_rows)
        return rows

    def _ingest(self, rows: list, record_cls, what: str) -> list:
        """[PRIVATE] Validates rows into records. Bad rows are skipped and reported."""
        records, errors = rows_to_records(rows, record_cls)
        if errors:
            for message in errors:
                logger.warning("Skipped invalid %s row: %s", what, message)
            self.notifier.error(
                f"Skipped {len(errors)} invalid {what} record(s)",
                errors[0] if len(errors) == 1 else f"{errors[0]} (and {len(errors) - 1} more)",
            )
        return records

    # --- [F-RISK] ---------------------------------------------------------------------

    def fetch_risk_assessments(self) -> List[HazardRecord]:
        rows = self._fetch_rows(
            config.TABLE_RISK_ASSESSMENTS, "Error fetching risk data", demo_data.DEMO_RISK_ASSESSMENTS,
        )
        return self._ingest(rows, HazardRecord, "hazard")

    # --- [F-ORG] ----------------------------------------------------------------------

    def fetch_employees(self) -> List[Employee]:
        rows = self._fetch_rows(
            config.TABLE_EMPLOYEES, "Failed to fetch employees data", demo_data.DEMO_EMPLOYEES,
            order="id", fallback_when_empty=False,
        )
        return self._ingest(rows, Employee, "employee")

    def fetch_departments(self) -> List[Department]:
        rows = self._fetch_rows(
            config.TABLE_DEPARTMENTS, "Error fetching organization data", demo_data.DEMO_DEPARTMENTS,
        )
        return self._ingest(rows, Department, "department")

    def fetch_positions(self) -> List[Position]:
        rows = self._fetch_rows(
            config.TABLE_POSITIONS, "Error fetching organization data", demo_data.DEMO_POSITIONS,
        )
        return self._ingest(rows, Position, "position")

    def save_employee(self, form_data: dict, current: List[Employee],
                      employee_id: Optional[str] = None) -> StoreResult:
        """
        Adds (employee_id=None) or updates an employee.
        The change is checked against the current staff list first so a
        save can never leave the org chart without a single root or with
        a reporting loop.
        """
        values = {k: v for k, v in form_data.items() if k != "id"}
        values["manager_id"] = values.get("manager_id") or None

        if not (values.get("name") or "").strip() or not (values.get("title") or "").strip():
            return self._write_failed("Failed to save employee data", "Name and title are required.")

        candidate = Employee.from_row({**values, "id": employee_id or "__new__"})
        staff = [e for e in current if e.id != candidate.id] + [candidate]
        try:
            build_hierarchy(staff)
        except OrgStructureError as e:
            return self._write_failed("Failed to save employee data", str(e))

        if employee_id is None:
            result = self.store.insert(config.TABLE_EMPLOYEES, [values])
            success = "Employee added successfully"
        else:
            result = self.store.update(config.TABLE_EMPLOYEES, values, {"id": employee_id})
            success = "Employee updated successfully"

        if not result.ok:
            return self._write_failed("Failed to save employee data", result.error)
        if employee_id is not None and not result.data:
            return self._write_failed("Failed to save employee data", NO_MATCH)
        logger.info("%s: %s", success, values.get("name"))
        self.notifier.success("Success", success)
        return result

    def delete_employee(self, employee: Employee, current: List[Employee]) -> StoreResult:
        reports = [e.name for e in current if e.manager_id == employee.id]
        if reports:
            return self._write_failed(
                "Failed to delete employee",
                f"{employee.name} still has direct reports: {', '.join(reports)}.",
            )
        result = self.store.delete(config.TABLE_EMPLOYEES, {"id": employee.id})
        if not result.ok:
            return self._write_failed("Failed to delete employee", result.error)
        if not result.data:
            return self._write_failed("Failed to delete employee", NO_MATCH)
        logger.info("Deleted employee %s (%s)", employee.name, employee.id)
        self.notifier.success("Success", "Employee deleted successfully")
        return result

    def _write_failed(self, title: str, description: str) -> StoreResult:
        logger.error("%s: %s", title, description)
        self.notifier.error(title, description)
        return StoreResult(error=description)

    # --- [F-FLEET] ----------------------------------------------------------------------

    def fetch_aircraft(self) -> List[Aircraft]:
        rows = self._fetch_rows(config.TABLE_AIRCRAFT, "Error fetching aircraft data", demo_data.DEMO_AIRCRAFT)
        return self._ingest(rows, Aircraft, "aircraft")

    def fetch_reference_data(self) -> Dict[str, List[DropdownOption]]:
        """
        (For Fleet form dropdowns) Options per category. A category with no
        rows gets the placeholder defaults; a failed fetch is reported once.
        """
        reference = {}
        failures = []
        for category in config.REFERENCE_CATEGORIES:
            defaults = demo_data.DEFAULT_DROPDOWN_OPTIONS.get(category, [])
            result = self.store.select(config.TABLE_DROPDOWN_OPTIONS, filters={"category": category})
            if not result.ok:
                failures.append(result.error)
                rows = defaults
            else:
                rows = result.data or defaults
            reference[category] = [DropdownOption.from_row(r) for r in rows]
        if failures:
            self.notifier.error("Error fetching reference data", failures[0] or "Unknown error occurred")
        return reference

    def add_reference_item(self, category: str, value: str) -> Optional[DropdownOption]:
        value = (value or "").strip()
        if not value:
            self._write_failed(f"Error adding {category}", "A value is required.")
            return None
        result = self.store.insert(config.TABLE_DROPDOWN_OPTIONS, [{"category": category, "value": value}])
        if not result.ok or not result.data:
            self._write_failed(f"Error adding {category}", result.error or "Nothing was inserted.")
            return None
        self.notifier.success("Success", f"New {category} has been added.")
        return DropdownOption.from_row(result.data[0])

    def _upload_image(self, image) -> StoreResult:
        """
        [PRIVATE] Uploads a Streamlit UploadedFile (anything with `.name`,
        `.type` and `.getvalue()`) and returns its public url as data.
        """
        file_name = image_file_name(image.name)
        logger.info("Uploading image %s as %s", image.name, file_name)
        result = self.store.upload(IMAGE_BUCKET, file_name, image.getvalue(), getattr(image, "type", None))
        if not result.ok:
            return result
        return StoreResult(data=self.store.public_url(IMAGE_BUCKET, file_name))

    def _remove_image(self, image_url: Optional[str]) -> None:
        """[PRIVATE] Best-effort removal; a failure is logged and ignored."""
        file_name = file_name_from_url(image_url)
        if not file_name:
            return
        result = self.store.remove(IMAGE_BUCKET, [file_name])
        if not result.ok:
            logger.error("Error deleting image %s: %s", file_name, result.error)

    def add_aircraft(self, form_data: dict, image=None) -> StoreResult:
        errors = validate_aircraft_form(form_data)
        if errors:
            return self._write_failed("Error adding aircraft", "; ".join(errors.values()))

        image_url = None
        if image is not None:
            uploaded = self._upload_image(image)
            if not uploaded.ok:
                return self._write_failed("Error adding aircraft", uploaded.error)
            image_url = uploaded.data

        payload = build_aircraft_payload(form_data, image_url)
        result = self.store.insert(config.TABLE_AIRCRAFT, [payload])
        if not result.ok:
            return self._write_failed("Error adding aircraft", result.error)
        logger.info("Aircraft added: %s", payload["type"])
        self.notifier.success("Aircraft added", f"{payload['type']} has been added to the fleet.")
        return result

    def edit_aircraft(self, aircraft: Aircraft, form_data: dict, image=None) -> StoreResult:
        errors = validate_aircraft_form(form_data)
        if errors:
            return self._write_failed("Error updating aircraft", "; ".join(errors.values()))

        image_url = aircraft.image_url
        if image is not None:
            uploaded = self._upload_image(image)
            if not uploaded.ok:
                return self._write_failed("Error updating aircraft", uploaded.error)
            image_url = uploaded.data

        payload = build_aircraft_payload(form_data, image_url)
        result = self.store.update(config.TABLE_AIRCRAFT, payload, {"id": aircraft.id})
        if not result.ok or not result.data:
            # Row still points at the old image; drop the orphaned upload
            if image_url != aircraft.image_url:
                self._remove_image(image_url)
            return self._write_failed("Error updating aircraft", result.error or NO_MATCH)
        if image_url != aircraft.image_url:
            self._remove_image(aircraft.image_url)
        logger.info("Aircraft %s updated", aircraft.id)
        self.notifier.success("Aircraft updated", f"{payload['type']} has been updated.")
        return result

    def delete_aircraft(self, aircraft: Aircraft) -> StoreResult:
        result = self.store.delete(config.TABLE_AIRCRAFT, {"id": aircraft.id})
        if not result.ok:
            return self._write_failed("Error deleting aircraft", result.error)
        if not result.data:
            return self._write_failed("Error deleting aircraft", NO_MATCH)
        self._remove_image(aircraft.image_url)
        logger.info("Aircraft %s deleted", aircraft.id)
        self.notifier.success("Aircraft deleted", "The aircraft has been removed from the fleet.")
        return result

    # --- [F-PROC] -----------------------------------------------------------------------

    def fetch_operations(self) -> List[OperationType]:
        rows = self._fetch_rows(
            config.TABLE_OPERATIONAL_PROCESSES, "Error fetching process data", demo_data.DEMO_OPERATIONS,
        )
        return self._ingest(rows, OperationType, "operation")
