import os

import pytest

import config
from common.data_store import SupabaseStore, SQLiteStore
from common.demo_data import (
    DEMO_AIRCRAFT,
    DEMO_EMPLOYEES,
    DEMO_OPERATIONS,
    DEMO_RISK_ASSESSMENTS,
)
from common.models import Employee
from portal_service import build_store


def _aircraft_form(**overrides):
    form = {
        "type": "Bell 407",
        "registration": "XU-407",
        "configuration": "Utility",
        "passenger_capacity": "6",
        "capabilities": ["Medevac"],
        "base_locations": ["Main Heliport"],
        "special_equipment": [],
        "inspections": [{"type": "Daily", "interval": "Every flying day"}],
        "common_issues": "Starter wear\n\n",
    }
    form.update(overrides)
    return form


# --- Store selection ---

def test_build_store_picks_backend(tmp_path):
    local = build_store({"backend": "local", "db_path": str(tmp_path / "p.db"), "files_path": str(tmp_path)})
    assert isinstance(local, SQLiteStore)

    hosted = build_store({"backend": "hosted", "supabase_url": "https://x.supabase.co",
                          "supabase_key": "k", "timeout": 3.0})
    assert isinstance(hosted, SupabaseStore)
    assert hosted.timeout == 3.0


def test_check_connection(service, broken_service):
    assert service.check_connection() is True
    assert broken_service.check_connection() is False


# --- Risk register ---

def test_risk_fetch_failure_falls_back_to_demo(broken_service, notifier):
    records = broken_service.fetch_risk_assessments()
    assert len(records) == len(DEMO_RISK_ASSESSMENTS)
    assert notifier.error_titles == ["Error fetching risk data"]


def test_risk_empty_table_falls_back_to_demo(service, notifier):
    records = service.fetch_risk_assessments()
    assert [r.id for r in records] == [row["id"] for row in DEMO_RISK_ASSESSMENTS]
    assert notifier.errors == []


def test_risk_invalid_rows_are_skipped(service, sqlite_store, notifier):
    good = dict(DEMO_RISK_ASSESSMENTS[0])
    bad = dict(DEMO_RISK_ASSESSMENTS[1], inherent_likelihood=7)
    sqlite_store.insert(config.TABLE_RISK_ASSESSMENTS, [good, bad])

    records = service.fetch_risk_assessments()
    assert [r.id for r in records] == ["risk-001"]
    assert notifier.error_titles == ["Skipped 1 invalid hazard record(s)"]
    assert "risk-002" in notifier.errors[0][1]


# --- Organization ---

def test_employees_fetch_failure_uses_demo_staff(broken_service, notifier):
    employees = broken_service.fetch_employees()
    assert len(employees) == len(DEMO_EMPLOYEES)
    assert notifier.error_titles == ["Failed to fetch employees data"]


def test_employees_empty_table_stays_empty(service):
    assert service.fetch_employees() == []


def test_departments_and_positions_fall_back(service):
    assert service.fetch_departments()
    assert service.fetch_positions()


def test_add_first_employee_then_report(service, notifier):
    result = service.save_employee({"name": "Jane", "title": "CEO", "department": "Exec"}, [])
    assert result.ok
    ceo_id = result.data[0]["id"]

    current = service.fetch_employees()
    result = service.save_employee(
        {"name": "Sam", "title": "Pilot", "department": "Ops", "manager_id": ceo_id}, current,
    )
    assert result.ok
    assert notifier.success_messages == ["Employee added successfully", "Employee added successfully"]

    staff = service.fetch_employees()
    assert {e.name: e.manager_id for e in staff} == {"Jane": None, "Sam": ceo_id}


def test_update_employee(service, sqlite_store, notifier):
    sqlite_store.insert(config.TABLE_EMPLOYEES, [{"id": "1", "name": "Jane", "title": "CEO", "manager_id": None}])
    current = service.fetch_employees()

    result = service.save_employee({"id": "1", "name": "Jane", "title": "Managing Director"}, current, employee_id="1")
    assert result.ok
    assert service.fetch_employees()[0].title == "Managing Director"
    assert notifier.success_messages == ["Employee updated successfully"]


def test_second_top_level_employee_is_rejected(service, sqlite_store, notifier):
    sqlite_store.insert(config.TABLE_EMPLOYEES, [{"id": "1", "name": "Jane", "title": "CEO", "manager_id": None}])
    current = service.fetch_employees()

    result = service.save_employee({"name": "Rogue", "title": "CEO 2"}, current)
    assert not result.ok
    assert notifier.error_titles == ["Failed to save employee data"]
    assert len(service.fetch_employees()) == 1


def test_reporting_loop_is_rejected(service, notifier):
    current = [
        Employee(id="1", name="A", title="CEO", department="X"),
        Employee(id="2", name="B", title="COO", department="X", manager_id="1"),
        Employee(id="3", name="C", title="Pilot", department="X", manager_id="2"),
    ]
    result = service.save_employee({"name": "B", "title": "COO", "manager_id": "3"}, current, employee_id="2")
    assert not result.ok
    assert "loop" in result.error


def test_missing_name_is_rejected(service, notifier):
    result = service.save_employee({"name": " ", "title": "CEO"}, [])
    assert not result.ok
    assert notifier.error_titles == ["Failed to save employee data"]


def test_delete_employee(service, sqlite_store, notifier):
    sqlite_store.insert(config.TABLE_EMPLOYEES, [
        {"id": "1", "name": "Jane", "title": "CEO", "manager_id": None},
        {"id": "2", "name": "Sam", "title": "Pilot", "manager_id": "1"},
    ])
    current = service.fetch_employees()
    jane, sam = current

    blocked = service.delete_employee(jane, current)
    assert not blocked.ok
    assert "Sam" in blocked.error
    assert notifier.error_titles == ["Failed to delete employee"]

    assert service.delete_employee(sam, current).ok
    assert notifier.success_messages == ["Employee deleted successfully"]
    assert [e.id for e in service.fetch_employees()] == ["1"]


def test_update_of_missing_employee_is_a_failure(service, notifier):
    # Empty table: nothing to update even though the form came from a stale list
    current = [Employee(id="1", name="Jane", title="CEO", department="Exec")]
    result = service.save_employee({"name": "Jane", "title": "MD"}, current, employee_id="1")
    assert not result.ok
    assert result.error == "No matching record was found."
    assert notifier.error_titles == ["Failed to save employee data"]
    assert notifier.success_messages == []


def test_delete_of_missing_employee_is_a_failure(broken_service, service, notifier):
    demo_staff = broken_service.fetch_employees()
    pilot = next(e for e in demo_staff if not any(o.manager_id == e.id for o in demo_staff))

    result = service.delete_employee(pilot, demo_staff)
    assert not result.ok
    assert result.error == "No matching record was found."
    assert notifier.error_titles[-1] == "Failed to delete employee"
    assert notifier.success_messages == []


def test_employee_write_failure_is_notified(broken_service, notifier):
    result = broken_service.save_employee({"name": "Jane", "title": "CEO"}, [])
    assert not result.ok
    assert notifier.error_titles == ["Failed to save employee data"]


# --- Fleet ---

def test_fleet_falls_back_to_demo(service, broken_service, notifier):
    assert [a.id for a in service.fetch_aircraft()] == [row["id"] for row in DEMO_AIRCRAFT]
    assert notifier.errors == []
    assert len(broken_service.fetch_aircraft()) == len(DEMO_AIRCRAFT)
    assert notifier.error_titles == ["Error fetching aircraft data"]


def test_reference_data_defaults_and_additions(service, notifier):
    reference = service.fetch_reference_data()
    assert set(reference) == {"capability", "equipment", "location"}
    assert [o.value for o in reference["location"]] == ["Main Heliport", "Hospital Helipad"]

    option = service.add_reference_item("location", "  Siem Reap Base ")
    assert option.value == "Siem Reap Base"
    assert notifier.success_messages == ["New location has been added."]
    assert [o.value for o in service.fetch_reference_data()["location"]] == ["Siem Reap Base"]

    assert service.add_reference_item("location", "") is None


def test_reference_data_fetch_failure(broken_service, notifier):
    reference = broken_service.fetch_reference_data()
    assert [o.value for o in reference["capability"]] == ["VFR Operations", "Scenic tours"]
    assert notifier.error_titles == ["Error fetching reference data"]


def test_add_aircraft_with_image(service, sqlite_store, notifier, upload):
    result = service.add_aircraft(_aircraft_form(), image=upload)
    assert result.ok

    aircraft = service.fetch_aircraft()
    assert len(aircraft) == 1
    added = aircraft[0]
    assert added.base_location == ("Main Heliport",)
    assert added.maintenance.common_issues == ("Starter wear",)
    assert added.image_url.endswith(".jpg")
    assert os.path.exists(added.image_url)
    assert notifier.successes == [("Aircraft added", "Bell 407 has been added to the fleet.")]


def test_add_aircraft_validation(service, notifier):
    result = service.add_aircraft(_aircraft_form(type="", base_locations=[]))
    assert not result.ok
    assert "Aircraft type is required" in result.error
    assert "At least one base location is required" in result.error
    assert notifier.error_titles == ["Error adding aircraft"]


def test_add_aircraft_upload_failure_stops_insert(broken_service, notifier, upload):
    result = broken_service.add_aircraft(_aircraft_form(), image=upload)
    assert not result.ok
    assert notifier.error_titles == ["Error adding aircraft"]


def test_edit_aircraft_replaces_image(service, notifier, upload, make_upload):
    service.add_aircraft(_aircraft_form(), image=upload)
    original = service.fetch_aircraft()[0]
    old_image = original.image_url

    replacement = make_upload(name="new.png", content=b"new", type="image/png")
    result = service.edit_aircraft(original, _aircraft_form(registration="XU-408"), image=replacement)
    assert result.ok

    edited = service.fetch_aircraft()[0]
    assert edited.registration == "XU-408"
    assert edited.image_url.endswith(".png")
    assert os.path.exists(edited.image_url)
    assert edited.image_url != old_image
    assert not os.path.exists(old_image)
    assert notifier.successes[-1][0] == "Aircraft updated"


def test_edit_aircraft_without_image_keeps_url(service, upload):
    service.add_aircraft(_aircraft_form(), image=upload)
    original = service.fetch_aircraft()[0]

    service.edit_aircraft(original, _aircraft_form(configuration="VIP"))
    edited = service.fetch_aircraft()[0]
    assert edited.configuration == "VIP"
    assert edited.image_url == original.image_url


def test_delete_aircraft_removes_image(service, notifier, upload):
    service.add_aircraft(_aircraft_form(), image=upload)
    aircraft = service.fetch_aircraft()[0]

    assert service.delete_aircraft(aircraft).ok
    assert not os.path.exists(aircraft.image_url)
    assert notifier.successes[-1] == ("Aircraft deleted", "The aircraft has been removed from the fleet.")


def test_delete_aircraft_continues_when_image_removal_fails(service, sqlite_store, monkeypatch, upload):
    service.add_aircraft(_aircraft_form(), image=upload)
    aircraft = service.fetch_aircraft()[0]

    from common.data_store import StoreResult
    monkeypatch.setattr(sqlite_store, "remove", lambda bucket, paths: StoreResult(error="storage down"))

    assert service.delete_aircraft(aircraft).ok
    # Table is empty again, so the demo fleet shows
    assert [a.id for a in service.fetch_aircraft()] == [row["id"] for row in DEMO_AIRCRAFT]


# --- Processes ---

def test_operations_fall_back_to_demo(service, broken_service, notifier):
    assert [o.id for o in service.fetch_operations()] == [row["id"] for row in DEMO_OPERATIONS]
    broken_service.fetch_operations()
    assert notifier.error_titles == ["Error fetching process data"]


@pytest.mark.parametrize("table", [config.TABLE_AIRCRAFT, config.TABLE_OPERATIONAL_PROCESSES])
def test_stored_rows_win_over_demo(service, sqlite_store, table):
    row = {"id": "custom", "type": "R44", "registration": "XU-044", "name": "Custom op", "phases": []}
    sqlite_store.insert(table, [row])
    fetched = service.fetch_aircraft() if table == config.TABLE_AIRCRAFT else service.fetch_operations()
    assert [r.id for r in fetched] == ["custom"]


def test_edit_of_demo_aircraft_is_a_failure(service, sqlite_store, notifier, upload):
    demo = service.fetch_aircraft()[0]

    result = service.edit_aircraft(demo, _aircraft_form(), image=upload)
    assert not result.ok
    assert result.error == "No matching record was found."
    assert notifier.error_titles == ["Error updating aircraft"]
    assert notifier.successes == []
    assert sqlite_store.select(config.TABLE_AIRCRAFT).data == []
    # the upload made for the failed edit is cleaned up
    assert os.listdir(os.path.join(sqlite_store.files_root, "aircraft-images")) == []


def test_delete_of_demo_aircraft_is_a_failure(service, notifier):
    demo = service.fetch_aircraft()[0]

    result = service.delete_aircraft(demo)
    assert not result.ok
    assert result.error == "No matching record was found."
    assert notifier.error_titles == ["Error deleting aircraft"]
    assert notifier.successes == []


def test_failed_update_keeps_old_image(service, sqlite_store, monkeypatch, notifier, upload, make_upload):
    service.add_aircraft(_aircraft_form(), image=upload)
    original = service.fetch_aircraft()[0]

    from common.data_store import StoreResult
    monkeypatch.setattr(sqlite_store, "update", lambda table, values, match: StoreResult(error="db locked"))

    replacement = make_upload(name="new.png", content=b"new", type="image/png")
    result = service.edit_aircraft(original, _aircraft_form(), image=replacement)
    assert not result.ok
    assert notifier.error_titles == ["Error updating aircraft"]
    assert os.path.exists(original.image_url)
    stored = os.listdir(os.path.join(sqlite_store.files_root, "aircraft-images"))
    assert stored == [os.path.basename(original.image_url)]
