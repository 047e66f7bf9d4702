# common/demo_data.py

"""
Demo rows used when the data store is unreachable or a table is empty.

These are RAW rows (plain dicts shaped like the hosted tables), not
records. The portal service pushes them through the same `from_row()`
ingestion as live data, so the demo register is validated too.

`portal_schema.py --seed` also loads these into a fresh local database.
"""

DEMO_RISK_ASSESSMENTS = [
    {
        "id": "risk-001",
        "hazard": "Weather Deterioration",
        "description": "Sudden degradation of visibility during monsoon season operations",
        "consequences": [
            "Forced landing in unsuitable terrain",
            "Spatial disorientation",
            "Controlled flight into terrain (CFIT)",
            "Passenger injuries",
        ],
        "inherent_likelihood": 4,
        "inherent_severity": 5,
        "controls": [
            {"id": "control-001", "description": "Conservative weather minimums above regulatory requirements"},
            {"id": "control-002", "description": "Extensive local weather knowledge training"},
            {"id": "control-003", "description": "Multiple weather information sources"},
            {"id": "control-004", "description": "Predetermined turn-back points and protocols"},
            {"id": "control-005", "description": "Weather radar equipment in all aircraft"},
        ],
        "residual_likelihood": 2,
        "residual_severity": 5,
        "responsible_person": "Director of Flight Operations",
        "monitoring_method": "Weather-related incident reports, pilot feedback, flight data monitoring",
        "category": "Weather",
    },
    {
        "id": "risk-002",
        "hazard": "Bird Strike",
        "description": "Collision with birds during low-altitude scenic flights",
        "consequences": [
            "Windshield penetration",
            "Engine damage or failure",
            "Control surface damage",
            "Forced landing",
        ],
        "inherent_likelihood": 4,
        "inherent_severity": 4,
        "controls": [
            {"id": "control-006", "description": "Bird hazard awareness in route planning"},
            {"id": "control-007", "description": "Avoidance of known bird concentration areas"},
            {"id": "control-008", "description": "Reduced airspeed in high-risk areas"},
            {"id": "control-009", "description": "Enhanced windshield specifications"},
        ],
        "residual_likelihood": 3,
        "residual_severity": 3,
        "responsible_person": "Chief Pilot",
        "monitoring_method": "Bird strike reports, seasonal migration pattern updates",
        "category": "Wildlife",
    },
    {
        "id": "risk-003",
        "hazard": "Confined Area Operations",
        "description": "Landing in confined areas with limited approach/departure paths",
        "consequences": [
            "Tail rotor strike",
            "Main rotor strike",
            "Dynamic rollover",
            "Brownout/whiteout conditions",
        ],
        "inherent_likelihood": 3,
        "inherent_severity": 5,
        "controls": [
            {"id": "control-010", "description": "Confined area operations training for all pilots"},
            {"id": "control-011", "description": "Pre-approved landing site database with hazard information"},
            {"id": "control-012", "description": "Ground reconnaissance procedures"},
            {"id": "control-013", "description": "Dual-pilot operations for new landing sites"},
            {"id": "control-014", "description": "Minimum approach/departure path requirements"},
        ],
        "residual_likelihood": 2,
        "residual_severity": 4,
        "responsible_person": "Chief Pilot",
        "monitoring_method": "Landing site assessment reports, incident data tracking",
        "category": "Landing Sites",
    },
    {
        "id": "risk-004",
        "hazard": "Engine Failure",
        "description": "Single engine failure during critical phases of flight",
        "consequences": [
            "Forced autorotation landing",
            "Aircraft damage",
            "Passenger injuries",
            "Fatal accident",
        ],
        "inherent_likelihood": 2,
        "inherent_severity": 5,
        "controls": [
            {"id": "control-015", "description": "Enhanced maintenance program exceeding manufacturer requirements"},
            {"id": "control-016", "description": "Regular emergency procedures training in simulator"},
            {"id": "control-017", "description": "Continuous flight path assessment training"},
            {"id": "control-018", "description": "Route planning to maximize autorotation landing options"},
            {"id": "control-019", "description": "Enhanced engine monitoring systems"},
        ],
        "residual_likelihood": 1,
        "residual_severity": 5,
        "responsible_person": "Director of Maintenance",
        "monitoring_method": "Engine trend monitoring, borescope inspections, parts replacement tracking",
        "category": "Mechanical",
    },
    {
        "id": "risk-005",
        "hazard": "FOD Ingestion",
        "description": "Foreign Object Debris ingestion during takeoff/landing at unprepared sites",
        "consequences": [
            "Engine damage",
            "Engine power loss",
            "Compressor stalls",
            "Forced landing",
        ],
        "inherent_likelihood": 3,
        "inherent_severity": 4,
        "controls": [
            {"id": "control-020", "description": "FOD inspection procedures for all landing sites"},
            {"id": "control-021", "description": "Particle separator systems on all aircraft"},
            {"id": "control-022", "description": "Pilot training on FOD avoidance techniques"},
            {"id": "control-023", "description": "Ground crew FOD awareness training"},
        ],
        "residual_likelihood": 2,
        "residual_severity": 3,
        "responsible_person": "Director of Maintenance",
        "monitoring_method": "FOD incident reports, engine inspection findings",
        "category": "Mechanical",
    },
    {
        "id": "risk-006",
        "hazard": "Passenger Behavior",
        "description": "Unsafe passenger behavior during flight operations",
        "consequences": [
            "Interference with flight controls",
            "Distraction of pilot",
            "Disruption of center of gravity",
            "Personal injuries",
        ],
        "inherent_likelihood": 3,
        "inherent_severity": 3,
        "controls": [
            {"id": "control-024", "description": "Comprehensive pre-flight passenger briefing"},
            {"id": "control-025", "description": "Passenger management training for pilots"},
            {"id": "control-026", "description": "Physical barriers to prevent access to controls"},
            {"id": "control-027", "description": "Clear and visible safety placards in multiple languages"},
        ],
        "residual_likelihood": 2,
        "residual_severity": 2,
        "responsible_person": "Chief Pilot",
        "monitoring_method": "Passenger behavior incident reports, pilot feedback",
        "category": "Passengers",
    },
    {
        "id": "risk-007",
        "hazard": "Night Operations",
        "description": "Operations during hours of darkness, particularly in areas with limited ground lighting",
        "consequences": [
            "Spatial disorientation",
            "Controlled flight into terrain",
            "Loss of situational awareness",
            "Landing in unsuitable areas",
        ],
        "inherent_likelihood": 3,
        "inherent_severity": 5,
        "controls": [
            {"id": "control-028", "description": "Enhanced night operations training beyond regulatory requirements"},
            {"id": "control-029", "description": "Night vision imaging systems (NVIS) for critical operations"},
            {"id": "control-030", "description": "Illuminated landing site equipment"},
            {"id": "control-031", "description": "Multi-crew operations for complex night missions"},
            {"id": "control-032", "description": "Conservative weather minimums for night operations"},
        ],
        "residual_likelihood": 2,
        "residual_severity": 4,
        "responsible_person": "Director of Flight Operations",
        "monitoring_method": "Night operations tracking, incident reports, NVIS equipment checks",
        "category": "Operations",
    },
    {
        "id": "risk-008",
        "hazard": "Pilot Fatigue",
        "description": "Pilot fatigue due to irregular scheduling, consecutive duty days, or circadian disruption",
        "consequences": [
            "Impaired decision making",
            "Reduced situational awareness",
            "Slower reaction times",
            "Procedural errors",
        ],
        "inherent_likelihood": 4,
        "inherent_severity": 4,
        "controls": [
            {"id": "control-033", "description": "Fatigue risk management system beyond regulatory requirements"},
            {"id": "control-034", "description": "Conservative duty time limitations"},
            {"id": "control-035", "description": "Fatigue awareness training for pilots and schedulers"},
            {"id": "control-036", "description": "Non-punitive fatigue reporting system"},
            {"id": "control-037", "description": "Bio-mathematical fatigue modeling for complex schedules"},
        ],
        "residual_likelihood": 2,
        "residual_severity": 3,
        "responsible_person": "Director of Flight Operations",
        "monitoring_method": "Fatigue reports, duty time monitoring, sleep quality assessments",
        "category": "Human Factors",
    },
    {
        "id": "risk-009",
        "hazard": "Maintenance Error",
        "description": "Critical maintenance error leading to in-flight system failure",
        "consequences": [
            "Aircraft system malfunction",
            "Control system failure",
            "Forced landing",
            "Aircraft damage or loss",
        ],
        "inherent_likelihood": 3,
        "inherent_severity": 5,
        "controls": [
            {"id": "control-038", "description": "Detailed task cards with verification steps"},
            {"id": "control-039", "description": "Independent inspection requirements for critical systems"},
            {"id": "control-040", "description": "Maintenance human factors training program"},
            {"id": "control-041", "description": "Non-punitive error reporting system"},
            {"id": "control-042", "description": "Maintenance quality assurance program"},
        ],
        "residual_likelihood": 1,
        "residual_severity": 5,
        "responsible_person": "Director of Maintenance",
        "monitoring_method": "Maintenance error reports, quality assurance findings, test flight reports",
        "category": "Maintenance",
    },
]

DEMO_AIRCRAFT = [
    {
        "id": "1",
        "type": "EC120B",
        "registration": "XU-168",
        "configuration": "Executive configuration with 5 passenger seats and premium leather interior.",
        "capabilities": ["Scenic/charter flights", "Medevac", "Light utility operations"],
        "base_location": ["Phnom Penh International Airport"],
        "special_equipment": ["Standard configuration"],
        "image_url": None,
        "specifications": {
            "passenger_capacity": "4",
            "max_takeoff_weight": "1,715 kg",
            "max_cruise_speed": "220 km/h",
            "range": "710 km",
            "service_ceiling": "5,182 m",
        },
        "maintenance": {
            "inspections": [
                {"type": "100-Hour Inspection", "interval": "Every 100 flight hours"},
                {"type": "Annual Inspection", "interval": "Every 12 months"},
            ],
            "common_issues": [
                "Tail rotor drive shaft bearing wear",
                "Main transmission chip detector false indications",
            ],
        },
        "status": "Deregistered for return to Australia",
    },
]

# Used per category when dropdown_options has nothing for it.
DEFAULT_DROPDOWN_OPTIONS = {
    "capability": [
        {"id": "cap1", "category": "capability", "value": "VFR Operations"},
        {"id": "cap2", "category": "capability", "value": "Scenic tours"},
    ],
    "equipment": [
        {"id": "eq1", "category": "equipment", "value": "Wire Strike Protection"},
        {"id": "eq2", "category": "equipment", "value": "Enhanced avionics"},
    ],
    "location": [
        {"id": "loc1", "category": "location", "value": "Main Heliport"},
        {"id": "loc2", "category": "location", "value": "Hospital Helipad"},
    ],
}

DEMO_DEPARTMENTS = [
    {"id": "dept-exec", "name": "Executive Leadership", "color": "#1E40AF"},
    {"id": "dept-ops", "name": "Flight Operations", "color": "#3B82F6"},
    {"id": "dept-maint", "name": "Engineering & Maintenance", "color": "#10B981"},
    {"id": "dept-safety", "name": "Safety & Compliance", "color": "#EF4444"},
    {"id": "dept-commercial", "name": "Commercial", "color": "#8B5CF6"},
]

DEMO_EMPLOYEES = [
    {"id": "1", "name": "Jane Smith", "title": "Chief Executive Officer",
     "department": "Executive Leadership", "location": "Phnom Penh HQ", "manager_id": None},
    {"id": "2", "name": "Michael Chen", "title": "Chief Operating Officer",
     "department": "Executive Leadership", "location": "Phnom Penh HQ", "manager_id": "1"},
    {"id": "3", "name": "Sarah Johnson", "title": "Director of Flight Operations",
     "department": "Flight Operations", "location": "Phnom Penh International Airport", "manager_id": "2"},
    {"id": "4", "name": "Robert Davis", "title": "Chief Pilot",
     "department": "Flight Operations", "location": "Phnom Penh International Airport", "manager_id": "3"},
    {"id": "5", "name": "David Lee", "title": "Director of Maintenance",
     "department": "Engineering & Maintenance", "location": "Main Heliport", "manager_id": "2"},
    {"id": "6", "name": "Priya Sharma", "title": "Safety Manager",
     "department": "Safety & Compliance", "location": "Phnom Penh HQ", "manager_id": "2"},
    {"id": "7", "name": "Thomas Wilson", "title": "Chief Financial Officer",
     "department": "Executive Leadership", "location": "Phnom Penh HQ", "manager_id": "1"},
    {"id": "8", "name": "Elena Rodriguez", "title": "Commercial Director",
     "department": "Commercial", "location": "Siem Reap Office", "manager_id": "1"},
]

DEMO_POSITIONS = [
    {
        "id": "pos-ceo",
        "title": "Chief Executive Officer",
        "department": "Executive Leadership",
        "responsibilities": ["Strategic direction", "Business development",
                             "Final authority in major decisions", "Ultimate accountability for safety"],
        "reports_to": "Board of Directors",
        "interfaces": ["Board", "Executive Team", "Regulatory Authorities"],
        "authority_limits": "Can approve expenditures up to $500,000",
    },
    {
        "id": "pos-coo",
        "title": "Chief Operating Officer",
        "department": "Executive Leadership",
        "responsibilities": ["Oversee day-to-day operations", "Implement strategic initiatives",
                             "Resource allocation"],
        "reports_to": "CEO",
        "interfaces": ["CEO", "Department Directors", "Key Clients"],
        "authority_limits": "Can approve expenditures up to $250,000",
    },
    {
        "id": "pos-dir-ops",
        "title": "Director of Flight Operations",
        "department": "Flight Operations",
        "responsibilities": ["Oversee all flying activities", "Ensure adherence to safety protocols",
                             "Crew management"],
        "reports_to": "COO",
        "interfaces": ["COO", "Chief Pilot", "Safety Manager"],
        "authority_limits": "Can approve expenditures up to $50,000",
    },
    {
        "id": "pos-chief-pilot",
        "title": "Chief Pilot",
        "department": "Flight Operations",
        "responsibilities": ["Lead pilot team", "Training oversight", "SOP development"],
        "reports_to": "Director of Flight Operations",
        "interfaces": ["Director of Flight Operations", "Pilots", "Training Manager"],
        "authority_limits": "Can approve flight-specific decisions",
    },
    {
        "id": "pos-safety",
        "title": "Safety Manager",
        "department": "Safety & Compliance",
        "responsibilities": ["Run the safety management system", "Hazard identification and risk assessment",
                             "Safety reporting and investigation"],
        "reports_to": "COO",
        "interfaces": ["COO", "All Departments", "Regulatory Authorities"],
        "authority_limits": "Can ground aircraft for safety concerns",
    },
]

_OPS = "#3B82F6"
_MAINT = "#10B981"
_COMM = "#8B5CF6"

DEMO_OPERATIONS = [
    {
        "id": "scenic",
        "name": "Scenic Tourism Operations",
        "phases": [
            {
                "name": "Pre-Flight Phase",
                "steps": [
                    {
                        "id": "booking", "name": "Booking and Scheduling",
                        "description": "Process customer bookings for scenic flights, allocate time slots, "
                                       "and manage passenger information.",
                        "department": "Commercial", "department_color": _COMM,
                        "personnel_responsible": "Booking Agent",
                        "procedure_reference": "SOP-COM-01, Section 2",
                        "documentation_required": ["Passenger manifest", "Booking confirmation form"],
                        "common_issues": ["Last-minute booking changes",
                                          "Weight and balance constraints with multiple passengers"],
                        "icon": "clipboard", "is_safety_critical": False,
                    },
                    {
                        "id": "weather", "name": "Weather Assessment",
                        "description": "Comprehensive evaluation of current and forecast weather conditions "
                                       "along the planned scenic route.",
                        "department": "Flight Operations", "department_color": _OPS,
                        "personnel_responsible": "Operations Officer, Pilot-in-Command",
                        "procedure_reference": "SOP-OPS-04, Section 3",
                        "critical_safety_points": ["Visibility requirements: minimum 5km",
                                                   "Wind limitations: maximum 25 knots",
                                                   "Thunderstorm proximity: minimum 10NM clearance"],
                        "decision_authority": "Final assessment by PIC",
                        "tools_used": ["METAR", "Meteorological forecast", "Visual observations"],
                        "documentation_required": ["Weather briefing form"],
                        "common_issues": ["Rapidly changing monsoon conditions",
                                          "Localized weather phenomena not in forecasts"],
                        "icon": "alert", "is_safety_critical": True,
                    },
                    {
                        "id": "aircraft-prep", "name": "Aircraft Preparation",
                        "description": "Preparation of the helicopter for the scheduled scenic flight, "
                                       "including fueling and pre-flight inspection.",
                        "department": "Maintenance", "department_color": _MAINT,
                        "personnel_responsible": "Aircraft Technician, Pilot-in-Command",
                        "procedure_reference": "SOP-MNT-02, Section 4",
                        "critical_safety_points": ["Fuel quantity verification", "Control systems check",
                                                   "Rotor system inspection"],
                        "tools_used": ["Fuel dipstick", "Inspection checklist", "Torque wrench"],
                        "documentation_required": ["Pre-flight inspection log", "Maintenance release form"],
                        "common_issues": ["FOD on landing areas",
                                          "Minor maintenance discoveries during inspection"],
                        "icon": "check", "is_safety_critical": True,
                    },
                    {
                        "id": "passenger-briefing", "name": "Passenger Briefing",
                        "description": "Safety briefing for passengers, including emergency procedures, "
                                       "boarding/deboarding, and in-flight expectations.",
                        "department": "Flight Operations", "department_color": _OPS,
                        "personnel_responsible": "Pilot-in-Command or Ground Crew",
                        "procedure_reference": "SOP-OPS-07, Section 2",
                        "critical_safety_points": ["Emergency exit operation",
                                                   "Approaching/departing helicopter safely",
                                                   "Use of seatbelts and headsets"],
                        "documentation_required": ["Passenger briefing checklist"],
                        "common_issues": ["Language barriers with international tourists",
                                          "Distracted passengers taking photos"],
                        "icon": "user", "is_safety_critical": True,
                    },
                ],
            },
            {
                "name": "Flight Execution Phase",
                "steps": [
                    {
                        "id": "takeoff", "name": "Takeoff Procedures",
                        "description": "Safe execution of helicopter takeoff for scenic flight, including "
                                       "final checks and ATC coordination.",
                        "department": "Flight Operations", "department_color": _OPS,
                        "personnel_responsible": "Pilot-in-Command",
                        "procedure_reference": "SOP-OPS-10, Section 3",
                        "critical_safety_points": ["Power check before liftoff", "Obstacle clearance path",
                                                   "Abort criteria and procedures"],
                        "decision_authority": "Pilot-in-Command",
                        "common_issues": ["Changing wind conditions during takeoff",
                                          "Weight and balance variations"],
                        "icon": "alert", "is_safety_critical": True,
                    },
                    {
                        "id": "route-execution", "name": "Scenic Route Navigation",
                        "description": "Flying the planned scenic route while providing commentary and "
                                       "ensuring passenger comfort and safety.",
                        "department": "Flight Operations", "department_color": _OPS,
                        "personnel_responsible": "Pilot-in-Command",
                        "procedure_reference": "SOP-OPS-12, Section 2",
                        "tools_used": ["GPS navigation", "Route maps", "Radio communication"],
                        "common_issues": ["Other air traffic in popular scenic areas",
                                          "Passenger photo requests requiring course adjustments"],
                        "icon": "check", "is_safety_critical": False,
                    },
                    {
                        "id": "landing", "name": "Landing Procedures",
                        "description": "Safe execution of helicopter landing at the conclusion of the "
                                       "scenic flight.",
                        "department": "Flight Operations", "department_color": _OPS,
                        "personnel_responsible": "Pilot-in-Command",
                        "procedure_reference": "SOP-OPS-15, Section 4",
                        "critical_safety_points": ["Landing site assessment", "Approach path selection",
                                                   "Go-around criteria"],
                        "decision_authority": "Pilot-in-Command",
                        "common_issues": ["Changing wind conditions during approach", "FOD at landing area"],
                        "icon": "alert", "is_safety_critical": True,
                    },
                ],
            },
            {
                "name": "Post-Flight Phase",
                "steps": [
                    {
                        "id": "aircraft-securing", "name": "Aircraft Securing",
                        "description": "Proper shutdown and securing of the helicopter after completion of "
                                       "the scenic flight.",
                        "department": "Flight Operations", "department_color": _OPS,
                        "personnel_responsible": "Pilot-in-Command",
                        "procedure_reference": "SOP-OPS-18, Section 1",
                        "documentation_required": ["Post-flight checklist"],
                        "icon": "check", "is_safety_critical": False,
                    },
                    {
                        "id": "documentation", "name": "Flight Documentation",
                        "description": "Completion of all required post-flight documentation, including "
                                       "flight logs and technical log entries.",
                        "department": "Flight Operations", "department_color": _OPS,
                        "personnel_responsible": "Pilot-in-Command",
                        "procedure_reference": "SOP-OPS-20, Section 2",
                        "documentation_required": ["Journey log", "Flight time record", "Technical log entry"],
                        "icon": "file", "is_safety_critical": False,
                    },
                    {
                        "id": "maintenance-feedback", "name": "Maintenance Feedback",
                        "description": "Communication of any aircraft issues or observations to the "
                                       "maintenance department.",
                        "department": "Maintenance", "department_color": _MAINT,
                        "personnel_responsible": "Pilot-in-Command, Maintenance Controller",
                        "procedure_reference": "SOP-MNT-09, Section 3",
                        "documentation_required": ["Defect report form (if applicable)"],
                        "common_issues": ["Minor discrepancies that don't affect airworthiness",
                                          "Trending issues requiring monitoring"],
                        "icon": "clipboard", "is_safety_critical": False,
                    },
                ],
            },
        ],
    },
    {
        "id": "charter",
        "name": "Executive Charter Operations",
        "phases": [
            {
                "name": "Pre-Flight Phase",
                "steps": [
                    {
                        "id": "vip-coordination", "name": "VIP Client Coordination",
                        "description": "Detailed coordination with executive clients regarding schedule, "
                                       "requirements, and preferences.",
                        "department": "Commercial", "department_color": _COMM,
                        "personnel_responsible": "VIP Services Coordinator",
                        "procedure_reference": "SOP-COM-05, Section 3",
                        "documentation_required": ["VIP passenger details", "Special request form"],
                        "icon": "user", "is_safety_critical": False,
                    },
                ],
            },
        ],
    },
    {
        "id": "offshore",
        "name": "Offshore Support Operations",
        "phases": [
            {
                "name": "Pre-Flight Phase",
                "steps": [
                    {
                        "id": "offshore-weather", "name": "Offshore Weather and Sea State Check",
                        "description": "Assessment of weather, sea state and helideck conditions at the "
                                       "destination installation.",
                        "department": "Flight Operations", "department_color": _OPS,
                        "personnel_responsible": "Operations Officer, Pilot-in-Command",
                        "procedure_reference": "SOP-OPS-30, Section 1",
                        "critical_safety_points": ["Helideck motion limits", "Sea state for ditching survival"],
                        "decision_authority": "Pilot-in-Command",
                        "icon": "alert", "is_safety_critical": True,
                    },
                    {
                        "id": "survival-equipment", "name": "Survival Equipment Check",
                        "description": "Verification of flotation, life rafts and passenger immersion suits.",
                        "department": "Maintenance", "department_color": _MAINT,
                        "personnel_responsible": "Aircraft Technician",
                        "procedure_reference": "SOP-MNT-12, Section 2",
                        "documentation_required": ["Survival equipment checklist"],
                        "icon": "check", "is_safety_critical": True,
                    },
                ],
            },
        ],
    },
]
