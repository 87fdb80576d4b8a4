"""
Profile model for form autofill.

The profile is loaded once, before any fill logic runs, and passed explicitly
to every component. It is immutable for the duration of a pass: an absent or
blank attribute is treated as unset and never written.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# Store key -> Profile attribute
SCALAR_KEYS = {
    "fullName": "full_name",
    "email": "email",
    "phone": "phone",
    "linkedin": "linkedin",
    "github": "github",
    "website": "website",
    "summary": "summary",
    "skills": "skills",
    # Address
    "address1": "address1",
    "address2": "address2",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "country": "country",
}

WORK_EXPERIENCE_KEY = "workExperience"

PROFILE_KEYS = tuple(SCALAR_KEYS) + (WORK_EXPERIENCE_KEY,)

# Store key -> WorkExperience attribute
EXPERIENCE_KEYS = {
    "title": "title",
    "company": "company",
    "location": "location",
    "startDate": "start_date",
    "endDate": "end_date",
    "description": "description",
    "current": "current",
    "enabled": "enabled",
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


TRUE_STRINGS = ("true", "1", "yes", "on")


def as_flag(value: Any) -> bool:
    """Strict boolean read: the string "false" is false, not a non-empty string."""
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return value is True or value == 1


@dataclass(frozen=True)
class WorkExperience:
    """One work-history entry, as produced by the external editor."""

    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    current: bool = False
    enabled: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WorkExperience":
        return cls(
            title=_text(data.get("title")),
            company=_text(data.get("company")),
            location=_text(data.get("location")),
            start_date=_text(data.get("startDate")),
            end_date=_text(data.get("endDate")),
            description=_text(data.get("description")),
            current=as_flag(data.get("current")),
            # Only an explicit false disables an entry
            enabled=data.get("enabled") is not False,
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for key, attr in EXPERIENCE_KEYS.items()}


@dataclass(frozen=True)
class Profile:
    """Applicant data consumed read-only by the autofill engine."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""
    summary: str = ""
    skills: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    work_experience: Tuple[WorkExperience, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Profile":
        """Build a profile from store data; missing keys are simply unset."""
        data = data or {}
        values = {attr: _text(data.get(key)) for key, attr in SCALAR_KEYS.items()}

        entries = data.get(WORK_EXPERIENCE_KEY) or []
        if not isinstance(entries, (list, tuple)):
            entries = []
        values["work_experience"] = tuple(
            WorkExperience.from_mapping(entry)
            for entry in entries
            if isinstance(entry, Mapping)
        )
        return cls(**values)

    @property
    def first_name(self) -> str:
        return name_parts(self.full_name)[0]

    @property
    def last_name(self) -> str:
        return name_parts(self.full_name)[1]

    def enabled_experience(self) -> Tuple[WorkExperience, ...]:
        """Entries in editor order, without the disabled ones."""
        return tuple(exp for exp in self.work_experience if exp.enabled)


def name_parts(full_name: str) -> Tuple[str, str]:
    """
    Split a full name into (first, last).

    The first whitespace-separated token is the first name, everything after
    it is the last name: "Mary Ann Smith" -> ("Mary", "Ann Smith").
    """
    parts = (full_name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def load_profile(store) -> Profile:
    """Explicit initialization step: read the store once and freeze it."""
    return Profile.from_mapping(store.load())
