# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FDA Food Code self-inspection checklist (D1-D40).

Pass/fail checklist scored as a percentage of assessed items. Records
written under this framework store the reduced ``responses`` shape.

The live label uses this framework's own Pass/Fail bands (90/70), not the
generic 80/50 "Compliant"/"Needs Improvement" bands, so 4 of 6 compliant
(67%) reads "Fail - Unsatisfactory". Frameworks loaded from YAML that omit
``bands`` get the generic bands.
"""

from __future__ import annotations

from food_audit.data.models import AssessmentItem, AssessmentSection, ScoringModel
from food_audit.frameworks.config import FrameworkConfig, ScoreBand


def _items(category: str, rows: list[tuple[str, str, bool]]) -> list[AssessmentItem]:
    return [
        AssessmentItem(code=code, category=category, text=text, has_evidence=evidence)
        for code, text, evidence in rows
    ]


FDA_SECTIONS: list[AssessmentSection] = [
    AssessmentSection(
        key="person_in_charge_personnel",
        label="Person In Charge & Personnel",
        items=_items("Person In Charge & Personnel", [
            ("D1", "Certified Food Protection Manager is on-site during all hours of "
                   "operation with a valid certificate", False),
            ("D2", "Person In Charge is present and demonstrates knowledge of foodborne "
                   "disease prevention and applicable food laws", False),
            ("D3", "Employee health policy addresses the Big 5 illnesses; symptomatic "
                   "employees are excluded or restricted", False),
            ("D4", "Proper handwashing practiced at designated handwash sinks", True),
            ("D5", "No bare-hand contact with ready-to-eat food", False),
            ("D6", "Food employees wear clean outer clothing", False),
            ("D7", "Effective hair restraints worn by food employees", False),
            ("D8", "Single-use gloves used properly and changed between tasks", False),
        ]),
    ),
    AssessmentSection(
        key="temperature_control",
        label="Temperature Control",
        items=_items("Temperature Control", [
            ("D9", "Cold holding: TCS food held at 41F (5C) or below", True),
            ("D10", "Hot holding: TCS food held at 135F (57C) or above", True),
            ("D11", "Cooking - poultry reaches 165F (74C) for 15 seconds", True),
            ("D12", "Cooking - ground meat and fish reach 155F (68C) for 15 seconds", True),
            ("D13", "Cooking - whole meat, fish and eggs reach 145F (63C) for 15 seconds", True),
            ("D14", "Cooking - eggs for immediate service reach 145F (63C) for 15 seconds", True),
            ("D15", "Cooling: 135F to 70F within 2 hours, then to 41F within 4 hours", True),
            ("D16", "Reheating: TCS food reheated to 165F (74C) within 2 hours", True),
            ("D17", "Date marking: refrigerated RTE TCS food marked with a use-by date "
                    "of no more than 7 days", True),
            ("D18", "Thawing conducted by approved methods", True),
        ]),
    ),
    AssessmentSection(
        key="time_temperature_management",
        label="Time as a Public Health Control",
        items=_items("Time as a Public Health Control", [
            ("D19", "Food held under time as a public health control is discarded after "
                    "4 hours and marked with its discard time", True),
        ]),
    ),
    AssessmentSection(
        key="food_source_protection",
        label="Food Source & Protection",
        items=_items("Food Source & Protection", [
            ("D20", "Food obtained from approved, inspected sources", False),
            ("D21", "Shellfish tags retained for 90 days", False),
            ("D22", "Parasite destruction for raw or undercooked fish", False),
            ("D23", "Food protected from cross-contamination; raw animal foods stored "
                    "below ready-to-eat foods", False),
            ("D24", "Packaged food carries complete labels including allergens", False),
            ("D25", "Consumer advisory provided for raw or undercooked animal foods", False),
            ("D26", "First in, first out stock rotation practiced", False),
            ("D27", "Food stored in food-grade, labelled containers", False),
        ]),
    ),
    AssessmentSection(
        key="facilities_equipment",
        label="Facilities & Equipment",
        items=_items("Facilities & Equipment", [
            ("D28", "Handwashing sinks accessible and supplied with warm water, soap, "
                    "and towels", True),
            ("D29", "Warewashing reaches proper wash, rinse and sanitize conditions", False),
            ("D30", "Food-contact surfaces cleaned and sanitized at least every 4 hours; "
                    "sanitizer concentration tested", True),
            ("D31", "Non-food-contact surfaces clean and in good repair", False),
            ("D32", "Ventilation hoods and filters clean and adequate", False),
            ("D33", "Adequate lighting in preparation, warewashing and storage areas", False),
            ("D34", "Plumbing in good repair with backflow prevention where required", False),
            ("D35", "Toilet facilities adequate, clean and self-closing", False),
        ]),
    ),
    AssessmentSection(
        key="compliance_records",
        label="Compliance & Records",
        items=_items("Compliance & Records", [
            ("D36", "HACCP plan implemented where required", False),
            ("D37", "Variance documentation on file for specialized processing", False),
            ("D38", "Employee health agreements signed by all food employees", False),
            ("D39", "Temperature monitoring logs maintained and reviewed daily", False),
            ("D40", "Cleaning and sanitizing schedules maintained and documented", False),
        ]),
    ),
]


FDA_FRAMEWORK = FrameworkConfig(
    id="fda",
    name="FDA Food Safety Compliance",
    short_name="FDA",
    cert_body="Local Health Department",
    assessment_title="Food Code Self-Inspection (D1-D40)",
    model=ScoringModel.percentage,
    sections=FDA_SECTIONS,
    bands=[
        ScoreBand(min=90, label="Pass - Excellent", color="green"),
        ScoreBand(min=70, label="Pass - Satisfactory", color="yellow"),
        ScoreBand(min=0, label="Fail - Unsatisfactory", color="red"),
    ],
)
