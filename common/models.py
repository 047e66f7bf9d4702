"""
common/models.py

Typed records for every table the portal reads.

The hosted tables are loosely shaped (some rows were written with
camelCase keys by the first prototype, newer rows use snake_case), so each
record has a `from_row()` that accepts either spelling and a `to_row()`
that always writes snake_case.

`from_row()` is the ingestion boundary: it is the ONLY place a row is
checked. Anything downstream (risk classification, org tree, process
graph) assumes the record is valid.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


class InvalidRecordError(ValueError):
    """A row from the data store failed validation at ingestion."""


# --- Helpers -----------------------------------------------------------------

def _pick(row: dict, snake: str, camel: Optional[str] = None, default=None):
    """Reads `snake` from the row, falling back to its camelCase spelling."""
    if snake in row and row[snake] is not None:
        return row[snake]
    if camel and camel in row and row[camel] is not None:
        return row[camel]
    return default


def _text(value) -> str:
    return "" if value is None else str(value)


def _text_tuple(value) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _rating(row: dict, record_id: str, snake: str, camel: str) -> int:
    """Ratings must be whole numbers between 1 and 5."""
    raw = value = _pick(row, snake, camel)
    if isinstance(value, bool):
        value = None
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            value = int(value.strip())
        except ValueError:
            value = None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not 1 <= value <= 5:
        raise InvalidRecordError(
            f"Hazard '{record_id}': {snake} must be an integer between 1 and 5, got {raw!r}"
        )
    return value


# --- Risk register (risk_assessments) ------------------------------------------

@dataclass(frozen=True)
class RiskControl:
    id: str
    description: str


@dataclass(frozen=True)
class HazardRecord:
    id: str
    hazard: str
    description: str
    consequences: Tuple[str, ...]
    inherent_likelihood: int
    inherent_severity: int
    residual_likelihood: int
    residual_severity: int
    controls: Tuple[RiskControl, ...] = ()
    responsible_person: str = ""
    monitoring_method: str = ""
    category: str = "Uncategorised"

    @classmethod
    def from_row(cls, row: dict) -> "HazardRecord":
        record_id = _text(row.get("id"))
        if not record_id:
            raise InvalidRecordError("Hazard row has no id")
        hazard = _text(row.get("hazard"))
        if not hazard:
            raise InvalidRecordError(f"Hazard '{record_id}' has no hazard label")

        controls = []
        for i, control in enumerate(row.get("controls") or []):
            if isinstance(control, dict):
                controls.append(RiskControl(
                    id=_text(control.get("id")) or f"{record_id}-control-{i + 1}",
                    description=_text(control.get("description")),
                ))
            else:
                controls.append(RiskControl(id=f"{record_id}-control-{i + 1}", description=_text(control)))

        return cls(
            id=record_id,
            hazard=hazard,
            description=_text(row.get("description")),
            consequences=_text_tuple(row.get("consequences")),
            inherent_likelihood=_rating(row, record_id, "inherent_likelihood", "inherentLikelihood"),
            inherent_severity=_rating(row, record_id, "inherent_severity", "inherentSeverity"),
            residual_likelihood=_rating(row, record_id, "residual_likelihood", "residualLikelihood"),
            residual_severity=_rating(row, record_id, "residual_severity", "residualSeverity"),
            controls=tuple(controls),
            responsible_person=_text(_pick(row, "responsible_person", "responsiblePerson")),
            monitoring_method=_text(_pick(row, "monitoring_method", "monitoringMethod")),
            category=_text(row.get("category")) or "Uncategorised",
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "hazard": self.hazard,
            "description": self.description,
            "consequences": list(self.consequences),
            "inherent_likelihood": self.inherent_likelihood,
            "inherent_severity": self.inherent_severity,
            "residual_likelihood": self.residual_likelihood,
            "residual_severity": self.residual_severity,
            "controls": [{"id": c.id, "description": c.description} for c in self.controls],
            "responsible_person": self.responsible_person,
            "monitoring_method": self.monitoring_method,
            "category": self.category,
        }


# --- Fleet (aircraft, dropdown_options) ----------------------------------------

PLACEHOLDER_IMAGE_URL = "/api/placeholder/400/320"


@dataclass(frozen=True)
class Inspection:
    type: str
    interval: str


@dataclass(frozen=True)
class AircraftSpecifications:
    passenger_capacity: str = ""
    max_takeoff_weight: str = ""
    max_cruise_speed: str = ""
    range: str = ""
    service_ceiling: str = ""

    @classmethod
    def from_row(cls, row: Optional[dict]) -> "AircraftSpecifications":
        row = row or {}
        return cls(
            passenger_capacity=_text(_pick(row, "passenger_capacity", "passengerCapacity", "")),
            max_takeoff_weight=_text(_pick(row, "max_takeoff_weight", "maxTakeoffWeight", "")),
            max_cruise_speed=_text(_pick(row, "max_cruise_speed", "maxCruiseSpeed", "")),
            range=_text(row.get("range", "")),
            service_ceiling=_text(_pick(row, "service_ceiling", "serviceCeiling", "")),
        )

    def to_row(self) -> dict:
        return {
            "passenger_capacity": self.passenger_capacity,
            "max_takeoff_weight": self.max_takeoff_weight,
            "max_cruise_speed": self.max_cruise_speed,
            "range": self.range,
            "service_ceiling": self.service_ceiling,
        }


@dataclass(frozen=True)
class MaintenanceInfo:
    inspections: Tuple[Inspection, ...] = ()
    common_issues: Tuple[str, ...] = ()

    @classmethod
    def from_row(cls, row: Optional[dict]) -> "MaintenanceInfo":
        row = row or {}
        inspections = tuple(
            Inspection(type=_text(i.get("type")), interval=_text(i.get("interval")))
            for i in (row.get("inspections") or [])
            if isinstance(i, dict)
        )
        return cls(
            inspections=inspections,
            common_issues=_text_tuple(_pick(row, "common_issues", "commonIssues")),
        )

    def to_row(self) -> dict:
        return {
            "inspections": [{"type": i.type, "interval": i.interval} for i in self.inspections],
            "common_issues": list(self.common_issues),
        }


@dataclass(frozen=True)
class Aircraft:
    id: str
    type: str
    registration: str
    configuration: str = ""
    capabilities: Tuple[str, ...] = ()
    base_location: Tuple[str, ...] = ()
    special_equipment: Tuple[str, ...] = ()
    image_url: Optional[str] = None
    specifications: AircraftSpecifications = field(default_factory=AircraftSpecifications)
    maintenance: MaintenanceInfo = field(default_factory=MaintenanceInfo)
    status: str = ""

    @property
    def display_image(self) -> str:
        return self.image_url or PLACEHOLDER_IMAGE_URL

    @classmethod
    def from_row(cls, row: dict) -> "Aircraft":
        record_id = _text(row.get("id"))
        if not record_id:
            raise InvalidRecordError("Aircraft row has no id")
        registration = row.get("registration")
        if isinstance(registration, (list, tuple)):
            registration = ", ".join(str(r) for r in registration)
        return cls(
            id=record_id,
            type=_text(row.get("type")),
            registration=_text(registration),
            configuration=_text(row.get("configuration")),
            capabilities=_text_tuple(row.get("capabilities")),
            base_location=_text_tuple(_pick(row, "base_location", "baseLocations")),
            special_equipment=_text_tuple(_pick(row, "special_equipment", "specialEquipment")),
            image_url=_pick(row, "image_url", "imageUrl"),
            specifications=AircraftSpecifications.from_row(row.get("specifications")),
            # Older demo rows used 'maintenance_info'
            maintenance=MaintenanceInfo.from_row(_pick(row, "maintenance", "maintenance_info")),
            status=_text(row.get("status")),
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "registration": self.registration,
            "configuration": self.configuration,
            "capabilities": list(self.capabilities),
            "base_location": list(self.base_location),
            "special_equipment": list(self.special_equipment),
            "image_url": self.image_url,
            "specifications": self.specifications.to_row(),
            "maintenance": self.maintenance.to_row(),
            "status": self.status,
        }


@dataclass(frozen=True)
class DropdownOption:
    id: str
    category: str
    value: str

    @classmethod
    def from_row(cls, row: dict) -> "DropdownOption":
        return cls(id=_text(row.get("id")), category=_text(row.get("category")), value=_text(row.get("value")))


# --- Organization (employees, departments, positions) ----------------------------

@dataclass(frozen=True)
class Employee:
    id: str
    name: str
    title: str
    department: str
    location: str = ""
    manager_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Employee":
        record_id = _text(row.get("id"))
        if not record_id:
            raise InvalidRecordError("Employee row has no id")
        manager_id = _pick(row, "manager_id", "managerId")
        return cls(
            id=record_id,
            name=_text(row.get("name")),
            title=_text(row.get("title")),
            department=_text(row.get("department")),
            location=_text(row.get("location")),
            manager_id=str(manager_id) if manager_id not in (None, "") else None,
            email=row.get("email") or None,
            phone=row.get("phone") or None,
            bio=row.get("bio") or None,
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "department": self.department,
            "location": self.location,
            "manager_id": self.manager_id,
            "email": self.email,
            "phone": self.phone,
            "bio": self.bio,
        }


@dataclass(frozen=True)
class Department:
    id: str
    name: str
    color: str = "#1F77B4"

    @classmethod
    def from_row(cls, row: dict) -> "Department":
        return cls(
            id=_text(row.get("id")),
            name=_text(row.get("name")),
            color=_text(_pick(row, "color", "departmentColor")) or "#1F77B4",
        )


@dataclass(frozen=True)
class Position:
    id: str
    title: str
    department: str = ""
    responsibilities: Tuple[str, ...] = ()
    reports_to: str = ""
    interfaces: Tuple[str, ...] = ()
    authority_limits: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "Position":
        return cls(
            id=_text(row.get("id")),
            title=_text(row.get("title")),
            department=_text(row.get("department")),
            responsibilities=_text_tuple(row.get("responsibilities")),
            reports_to=_text(_pick(row, "reports_to", "reportsTo")),
            interfaces=_text_tuple(row.get("interfaces")),
            authority_limits=_text(_pick(row, "authority_limits", "authorityLimits")),
        )


# --- Processes (operational_processes) -------------------------------------------

STEP_ICONS = {
    "clipboard": "📋",
    "user": "👤",
    "clock": "⏱️",
    "file": "📄",
    "alert": "⚠️",
    "check": "✅",
}


@dataclass(frozen=True)
class ProcessStep:
    id: str
    name: str
    description: str
    department: str
    department_color: str
    personnel_responsible: str
    procedure_reference: str
    critical_safety_points: Tuple[str, ...] = ()
    decision_authority: Optional[str] = None
    tools_used: Tuple[str, ...] = ()
    documentation_required: Tuple[str, ...] = ()
    common_issues: Tuple[str, ...] = ()
    icon: str = "clipboard"
    is_safety_critical: bool = False

    @property
    def icon_glyph(self) -> str:
        return STEP_ICONS.get(self.icon, STEP_ICONS["clipboard"])

    @classmethod
    def from_row(cls, row: dict) -> "ProcessStep":
        return cls(
            id=_text(row.get("id")),
            name=_text(row.get("name")),
            description=_text(row.get("description")),
            department=_text(row.get("department")),
            department_color=_text(_pick(row, "department_color", "departmentColor")) or "#6B7280",
            personnel_responsible=_text(_pick(row, "personnel_responsible", "personnelResponsible")),
            procedure_reference=_text(_pick(row, "procedure_reference", "procedureReference")),
            critical_safety_points=_text_tuple(_pick(row, "critical_safety_points", "criticalSafetyPoints")),
            decision_authority=_pick(row, "decision_authority", "decisionAuthority"),
            tools_used=_text_tuple(_pick(row, "tools_used", "toolsUsed")),
            documentation_required=_text_tuple(_pick(row, "documentation_required", "documentationRequired")),
            common_issues=_text_tuple(_pick(row, "common_issues", "commonIssues")),
            icon=_text(row.get("icon")) or "clipboard",
            is_safety_critical=bool(_pick(row, "is_safety_critical", "isSafetyCritical", False)),
        )


@dataclass(frozen=True)
class ProcessPhase:
    name: str
    steps: Tuple[ProcessStep, ...]


@dataclass(frozen=True)
class OperationType:
    id: str
    name: str
    phases: Tuple[ProcessPhase, ...]

    @classmethod
    def from_row(cls, row: dict) -> "OperationType":
        record_id = _text(row.get("id"))
        if not record_id:
            raise InvalidRecordError("Operation row has no id")
        phases = []
        for phase in row.get("phases") or []:
            if not isinstance(phase, dict):
                raise InvalidRecordError(f"Operation '{record_id}': phase must be a mapping, got {phase!r}")
            steps = phase.get("steps") or []
            if not all(isinstance(s, dict) for s in steps):
                raise InvalidRecordError(f"Operation '{record_id}': every step must be a mapping")
            phases.append(ProcessPhase(
                name=_text(phase.get("name")),
                steps=tuple(ProcessStep.from_row(s) for s in steps),
            ))
        return cls(id=record_id, name=_text(row.get("name")), phases=tuple(phases))

    @property
    def steps(self) -> Tuple[ProcessStep, ...]:
        return tuple(step for phase in self.phases for step in phase.steps)


def rows_to_records(rows, record_cls) -> Tuple[list, list]:
    """
    Converts raw rows into records.
    Returns (records, errors); bad rows are reported, not raised.
    """
    records, errors = [], []
    for row in rows or []:
        try:
            records.append(record_cls.from_row(row))
        except InvalidRecordError as e:
            errors.append(str(e))
    return records, errors
