"""
Wizard steps and the in-progress application draft.
"""

import copy
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional


class WizardStep(IntEnum):
    PERSONAL_INFO = 1
    INSURANCE_DETAILS = 2
    MEDICAL_INFO = 3
    SUMMARY = 4


# Draft section filled in by each form step
STEP_SECTIONS: Dict[WizardStep, str] = {
    WizardStep.PERSONAL_INFO: "personal_info",
    WizardStep.INSURANCE_DETAILS: "insurance_info",
    WizardStep.MEDICAL_INFO: "medical_info",
}

STEP_TITLES: Dict[WizardStep, Dict[str, str]] = {
    WizardStep.PERSONAL_INFO: {"title": "Personal Information", "subtitle": "Basic details"},
    WizardStep.INSURANCE_DETAILS: {"title": "Insurance Details", "subtitle": "Current coverage"},
    WizardStep.MEDICAL_INFO: {"title": "Medical Information", "subtitle": "Health details"},
    WizardStep.SUMMARY: {"title": "Summary", "subtitle": "Review & submit"},
}

# Wire names of the draft sections
SECTION_KEYS = {
    "personal_info": "personalInfo",
    "insurance_info": "insuranceInfo",
    "medical_info": "medicalInfo",
}


@dataclass
class ApplicationDraft:
    """
    Unsubmitted application data, one mapping per form section.

    Sections hold whatever the user has entered so far; nothing here is
    validated.
    """

    personal_info: Dict[str, Any] = field(default_factory=dict)
    insurance_info: Dict[str, Any] = field(default_factory=dict)
    medical_info: Dict[str, Any] = field(default_factory=dict)

    def section(self, name: str) -> Dict[str, Any]:
        if name not in SECTION_KEYS:
            raise ValueError(f"Unknown draft section: {name}")
        return getattr(self, name)

    def merge(self, name: str, data: Mapping[str, Any]) -> None:
        """
        Shallow-merge new values into a section.

        Keys not in ``data`` keep their values; list values such as
        medications or benefits replace the stored list outright.
        """
        section = self.section(name)
        section.update(copy.deepcopy(dict(data)))

    def is_empty(self) -> bool:
        return not (self.personal_info or self.insurance_info or self.medical_info)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            wire_name: copy.deepcopy(self.section(name))
            for name, wire_name in SECTION_KEYS.items()
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Mapping[str, Any]]]) -> "ApplicationDraft":
        data = data or {}
        return cls(**{
            name: copy.deepcopy(dict(data.get(wire_name) or {}))
            for name, wire_name in SECTION_KEYS.items()
        })
