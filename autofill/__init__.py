"""
Form autofill engine for job applications.

Usage:
    from autofill import HtmlDocument, load_profile, trigger
    from storage import ProfileStore

    profile = load_profile(ProfileStore())
    outcome = trigger(HtmlDocument(html, url="https://boards.greenhouse.io/acme"), profile)
    print(outcome.fields_filled)
"""

from .dom import Document, Element, HtmlDocument
from .profile import Profile, WorkExperience, load_profile
from .runner import FillOutcome, detect_context, trigger
from .setter import FillReport

__all__ = [
    "Document",
    "Element",
    "HtmlDocument",
    "Profile",
    "WorkExperience",
    "load_profile",
    "FillOutcome",
    "FillReport",
    "detect_context",
    "trigger",
]
