# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Brisbane City Council "Eat Safe" food safety checklist (A1-A40).

Items are organized by the council form's five headings:
  - General Requirements (A1-A10)
  - Food Handling Controls (A11-A25)
  - Health and Hygiene Requirements (A26-A30)
  - Cleaning, Sanitising and Maintenance (A31-A35)
  - Miscellaneous (A36-A40)

Each item lists the non-compliance severities the form allows for it.
The star rating is predicted from the severity counts using the ladder in
``BCC_TIERS``.
"""

from __future__ import annotations

from food_audit.data.models import AssessmentItem, AssessmentSection, ScoringModel, Severity
from food_audit.frameworks.config import FrameworkConfig, TierRule

MINOR = Severity.minor
MAJOR = Severity.major
CRITICAL = Severity.critical


def _section(key: str, label: str, rows: list[tuple]) -> AssessmentSection:
    """Build a section from ``(code, text, severities[, detail[, has_evidence]])`` rows."""
    items = []
    for row in rows:
        code, text, severities = row[:3]
        detail = row[3] if len(row) > 3 else None
        has_evidence = row[4] if len(row) > 4 else False
        items.append(AssessmentItem(
            code=code,
            category=label,
            text=text,
            detail=detail,
            severities=severities,
            has_evidence=has_evidence,
        ))
    return AssessmentSection(key=key, label=label, items=items)


# =========================================================================
# Checklist
# =========================================================================

BCC_SECTIONS: list[AssessmentSection] = [
    _section("general_requirements", "General Requirements", [
        ("A1", "Licence - Is your Council food business licence current?",
         [MINOR], "i.e. no outstanding fees"),
        ("A2", "Licence - Is the current licence displayed prominently on the premises?",
         [MINOR, MAJOR]),
        ("A3", "Licence Conditions - Is your business complying with all site specific "
               "licence conditions (if applicable)?", [MINOR]),
        ("A4", "Previous non-compliances - Has your business fixed all previous "
               "non-compliance items?", [MINOR, MAJOR]),
        ("A5", "Design - Does your business comply with the structural requirements of "
               "the Food Safety Standards?", [MINOR]),
        ("A6", "Food Safety Supervisor - Have you notified Council who your Food Safety "
               "Supervisor is/are?", [MAJOR]),
        ("A7", "Food Safety Supervisor - Is the Food Safety Supervisor reasonably "
               "available/contactable?", [MINOR, MAJOR]),
        ("A8", "Food Safety Supervisor - Does the FSS have an RTO issued certificate that "
               "is no more than 5 years old?", [MINOR, MAJOR]),
        ("A9", "Food Safety Program - If required, does your food business have an "
               "accredited Food Safety Program?", [MAJOR], "Category 1 and 2 businesses only"),
        ("A10", "Skills and knowledge - Do you and your employees have appropriate skills "
                "and knowledge in food safety and hygiene matters?", [MINOR, CRITICAL]),
    ]),
    _section("food_handling_controls", "Food Handling Controls", [
        ("A11", "Receival - Is food protected from contamination at receival and are "
                "potentially hazardous foods accepted at the correct temperature?",
         [MINOR, CRITICAL], None, True),
        ("A12", "Food storage - Is all food stored appropriately so that it is protected "
                "from contamination?", [MINOR, MAJOR], "cold room / fridge, freezer, dry store"),
        ("A13", "Food storage - Is potentially hazardous food stored under temperature "
                "control?", [MINOR, MAJOR],
         "cold food = 5C and below, hot food = 60C and above, frozen food = remain frozen",
         True),
        ("A14", "Food processing - Are suitable measures in place to prevent "
                "contamination?", [MINOR, MAJOR], "e.g. cross contamination"),
        ("A15", "Food processing - Is potentially hazardous food that is ready to eat and "
                "held outside of temperature control monitored correctly?",
         [MINOR, CRITICAL], "e.g. 2 hour / 4 hour rule", True),
        ("A16", "Thawing - Are acceptable methods used to thaw food?",
         [MINOR, MAJOR], None, True),
        ("A17", "Cooling - Are acceptable methods used to cool food?",
         [MINOR, MAJOR], None, True),
        ("A18", "Reheating - Are appropriate reheating procedures followed?",
         [MINOR, CRITICAL], None, True),
        ("A19", "Food display - Is food on display protected from contamination?",
         [MINOR, MAJOR]),
        ("A20", "Food display - Is potentially hazardous food displayed under correct "
                "temperature control?", [MINOR, MAJOR], None, True),
        ("A21", "Food packaging - Is food packaged in a manner that protects it from "
                "contamination?", [MINOR]),
        ("A22", "Food transportation - Is food transported in a manner that protects it "
                "from contamination and keeps it at the appropriate temperature?",
         [MINOR], None, True),
        ("A23", "Food for disposal - Do you use acceptable arrangements for throwing out "
                "food?", [MINOR]),
        ("A24", "Food recall - If you are a wholesale supplier, manufacturer or importer "
                "of food, does your food business comply with the food recall "
                "requirements?", [MINOR]),
        ("A25", "Alternative methods - Are your documented alternative compliance methods "
                "acceptable?", [MINOR],
         "i.e. receipt, storage, cooling, reheating, display, transport"),
    ]),
    _section("health_hygiene", "Health and Hygiene Requirements", [
        ("A26", "Contact with food - Does your business minimise the risk of "
                "contamination of food and food contact surfaces?", [MINOR, CRITICAL]),
        ("A27", "Health of food handlers - Do you ensure staff members do not engage in "
                "food handling if they are suffering from a food-borne illness or are "
                "sick?", [MINOR, MAJOR]),
        ("A28", "Hygiene - Do food handlers exercise good hygiene practices?",
         [MINOR, CRITICAL],
         "e.g. cleanliness of clothing, not eating over surfaces, washing hands "
         "correctly and at appropriate times, jewellery"),
        ("A29", "Hand washing facilities - Does your business have adequate hand washing "
                "facilities?", [MINOR, CRITICAL],
         "soap, warm running water, single use towel, easily accessible basin"),
        ("A30", "Duty of food business - Do you inform food handlers of their obligations "
                "and take measures to ensure they do not contaminate food?",
         [MINOR, CRITICAL]),
    ]),
    _section("cleaning_maintenance", "Cleaning, Sanitising and Maintenance", [
        ("A31", "Cleanliness - Are the floors, walls and ceilings maintained in a clean "
                "condition?", [MINOR, CRITICAL]),
        ("A32", "Cleanliness - Are the fixtures, fittings and equipment maintained in a "
                "clean condition?", [MINOR, MAJOR, CRITICAL],
         "mechanical exhaust ventilation, fridges, coolrooms, freezers, benches, "
         "shelves, cooking equipment", True),
        ("A33", "Sanitation - Has your business provided clean and sanitary equipment "
                "including eating/drinking utensils and food contact surfaces? Are food "
                "contact surfaces sanitised correctly?", [MINOR, MAJOR], None, True),
        ("A34", "Maintenance - Does your business ensure no damaged (cracked/broken) "
                "utensils, crockery, cutting boards are used?", [MINOR, CRITICAL]),
        ("A35", "Maintenance - Are your premises' fixtures, fittings and equipment "
                "maintained in a good state of repair and working order?",
         [MINOR, CRITICAL],
         "floors, walls & ceilings, fixtures, fittings & equipment, mechanical exhaust "
         "ventilation"),
    ]),
    _section("miscellaneous", "Miscellaneous", [
        ("A36", "Thermometer - Does your food business (if handling potentially hazardous "
                "food) have a thermometer?", [MINOR, CRITICAL]),
        ("A37", "Single Use Items - Are single use items protected from contamination "
                "until use and not used more than once?", [MINOR]),
        ("A38", "Toilet - Are adequate staff toilets provided and in a clean state?",
         [MINOR, CRITICAL]),
        ("A39", "Animals and pests - Is your food business completely free from animals "
                "or vermin (assistance animals exempt)?", [MINOR, MAJOR]),
        ("A40", "Animals and pests - Are animals and pests prevented from being on the "
                "premises?", [MINOR, CRITICAL]),
    ]),
]


# =========================================================================
# Star ladder, evaluated top-down
# =========================================================================

BCC_TIERS: list[TierRule] = [
    # 0 non-compliances
    TierRule(minor_max=0, major_max=0, critical_max=0,
             tier_value=5, tier_label="Excellent", color="green"),
    # 1-3 minor only
    TierRule(minor_max=3, major_max=0, critical_max=0,
             tier_value=4, tier_label="Very Good", color="green"),
    # 4-5 minor only
    TierRule(minor_max=5, major_max=0, critical_max=0,
             tier_value=3, tier_label="Good", color="yellow"),
    # 6+ minor, or 1-2 major, or 1 critical
    TierRule(minor_max=None, major_max=2, critical_max=1,
             tier_value=2, tier_label="Poor", color="dark_orange"),
    # 3+ major, or 2+ critical
    TierRule(minor_max=None, major_max=None, critical_max=None,
             tier_value=0, tier_label="Non-Compliant", color="red"),
]


BCC_FRAMEWORK = FrameworkConfig(
    id="bcc",
    name="BCC Eat Safe Compliance",
    short_name="BCC",
    cert_body="Brisbane City Council",
    assessment_title="Self-Assessment (A1-A40)",
    model=ScoringModel.tiered,
    sections=BCC_SECTIONS,
    tiers=BCC_TIERS,
)
