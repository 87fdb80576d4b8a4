"""
Site strategies.

A strategy fills the fields it knows by platform-specific identifiers, then
always hands the rest of the page to the generic rule engine in backfill mode
and finally runs the work experience filler. A missing element is never an
error: each lookup falls through to the next selector, then to the engine.

Lookups are declarative: GREENHOUSE_LOOKUPS and WORKDAY_AUTOMATION_IDS list
the candidate selectors in priority order and first_present() walks them.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .config import FIELD_SELECTOR, GREENHOUSE_HOST, WORKDAY_HOST
from .dom import Document, Element
from .hints import hint_for
from .profile import Profile
from .rules import SUMMARY_VOCAB, RuleEngine, website_link
from .setter import FillReport, Mutation, apply_mutation
from .work_experience import fill_work_experience

logger = logging.getLogger(__name__)

ValueGetter = Callable[[Profile], str]


def first_present(root, selectors: Sequence[str]) -> Optional[Element]:
    """
    Ranked-candidate lookup.

    Returns the first element found by the first selector that finds one,
    or None. `root` is a Document or an Element.
    """
    for selector in selectors:
        element = root.query_selector(selector)
        if element is not None:
            return element
    return None


# ═══════════════════════════════════════════════════════════════════
# GREENHOUSE
# ═══════════════════════════════════════════════════════════════════

# (source, profile value, candidate selectors)
GREENHOUSE_LOOKUPS: List[Tuple[str, ValueGetter, Tuple[str, ...]]] = [
    ("greenhouse.first_name", lambda p: p.first_name, (
        'input[name="job_application[first_name]"]',
        'input[name*="first_name"]',
    )),
    ("greenhouse.last_name", lambda p: p.last_name, (
        'input[name="job_application[last_name]"]',
        'input[name*="last_name"]',
    )),
    ("greenhouse.email", lambda p: p.email, (
        'input[name="job_application[email]"]',
        'input[type="email"]',
        'input[name*="email"]',
    )),
    ("greenhouse.phone", lambda p: p.phone, (
        'input[name="job_application[phone]"]',
        'input[type="tel"]',
        'input[name*="phone"]',
    )),
    ("greenhouse.linkedin", lambda p: p.linkedin, (
        'input[name*="linkedin"]',
        'input[placeholder*="LinkedIn" i]',
    )),
    ("greenhouse.github", lambda p: p.github, (
        'input[name*="github"]',
        'input[placeholder*="GitHub" i]',
    )),
    # No website attribute needed: LinkedIn, then GitHub
    ("greenhouse.website", website_link, (
        'input[name*="website"]',
        'input[placeholder*="website" i]',
    )),
]


def fill_lookup(document: Document, selectors: Sequence[str], value: str,
                report: FillReport, source: str) -> bool:
    if not value:
        return False
    element = first_present(document, selectors)
    if element is None:
        logger.debug(f"{source}: no element for {selectors[0]}")
        return False
    return apply_mutation(Mutation(element, value, source=source), report)


def fill_greenhouse_summary(document: Document, profile: Profile, report: FillReport) -> int:
    """Every empty textarea that asks about the applicant gets the summary."""
    if not profile.summary:
        return 0
    filled = 0
    for textarea in document.query_selector_all("textarea"):
        if textarea.value:
            continue
        if SUMMARY_VOCAB.search(hint_for(textarea)):
            mutation = Mutation(textarea, profile.summary, source="greenhouse.summary")
            if apply_mutation(mutation, report):
                filled += 1
    return filled


def autofill_greenhouse(document: Document, profile: Profile, report: FillReport) -> None:
    """Greenhouse: known selectors, then generic backfill, then experience."""
    for source, getter, selectors in GREENHOUSE_LOOKUPS:
        fill_lookup(document, selectors, getter(profile), report, source)
    fill_greenhouse_summary(document, profile, report)

    # Generic backfill covers everything else, address fields included
    RuleEngine().run(document, profile, report, skip_filled=True)
    fill_work_experience(document, profile, report)


# ═══════════════════════════════════════════════════════════════════
# WORKDAY
# ═══════════════════════════════════════════════════════════════════

# (source, profile value, data-automation-id values tried in order)
WORKDAY_AUTOMATION_IDS: List[Tuple[str, ValueGetter, Tuple[str, ...]]] = [
    ("workday.first_name", lambda p: p.first_name, ("legalNameSection_firstName", "firstName")),
    ("workday.last_name", lambda p: p.last_name, ("legalNameSection_lastName", "lastName")),
    ("workday.email", lambda p: p.email, ("email", "emailAddress")),
    ("workday.phone", lambda p: p.phone, ("phone-number", "phoneNumber")),
    ("workday.address1", lambda p: p.address1, ("addressLine1",)),
    ("workday.address2", lambda p: p.address2, ("addressLine2",)),
    ("workday.city", lambda p: p.city, ("city",)),
    ("workday.state", lambda p: p.state, ("state",)),
    ("workday.zip", lambda p: p.zip, ("postalCode", "zipCode")),
]

FORM_TAGS = ("input", "textarea", "select")


def automation_id_selectors(automation_id: str) -> Tuple[str, ...]:
    base = f'[data-automation-id="{automation_id}"]'
    return (f"{base} input", f"{base} textarea", f"{base} select", base)


def find_by_automation_id(document: Document, automation_id: str) -> Optional[Element]:
    """The tagged field itself, or the first field inside the tagged container."""
    base = first_present(document, automation_id_selectors(automation_id))
    if base is None:
        return None
    if base.tag in FORM_TAGS:
        return base
    return base.query_selector(FIELD_SELECTOR)


def set_by_automation_id(document: Document, automation_id: str, value: str,
                         report: FillReport, source: str = "") -> bool:
    if not value:
        return False
    element = find_by_automation_id(document, automation_id)
    if element is None:
        return False
    return apply_mutation(Mutation(element, value, source=source or automation_id), report)


def autofill_workday(document: Document, profile: Profile, report: FillReport) -> None:
    """Workday: data-automation-id lookups, then generic backfill, then experience."""
    for source, getter, automation_ids in WORKDAY_AUTOMATION_IDS:
        value = getter(profile)
        # Workday renders either id depending on the tenant; try all of them
        for automation_id in automation_ids:
            set_by_automation_id(document, automation_id, value, report, source)

    RuleEngine().run(document, profile, report, skip_filled=True)
    fill_work_experience(document, profile, report)


# ═══════════════════════════════════════════════════════════════════
# GENERIC
# ═══════════════════════════════════════════════════════════════════


def autofill_generic(document: Document, profile: Profile, report: FillReport) -> None:
    """Any other site: rules over every field, then experience."""
    RuleEngine().run(document, profile, report, skip_filled=False)

    first = document.query_selector("input, textarea")
    if first is not None:
        first.scroll_into_view()

    fill_work_experience(document, profile, report)


@dataclass(frozen=True)
class Strategy:
    name: str
    run: Callable[[Document, Profile, FillReport], None]


GREENHOUSE = Strategy("greenhouse", autofill_greenhouse)
WORKDAY = Strategy("workday", autofill_workday)
GENERIC = Strategy("generic", autofill_generic)

# Host substring -> strategy, checked in order
HOST_STRATEGIES: List[Tuple[str, Strategy]] = [
    (GREENHOUSE_HOST, GREENHOUSE),
    (WORKDAY_HOST, WORKDAY),
]

STRATEGIES: Dict[str, Strategy] = {s.name: s for s in (GREENHOUSE, WORKDAY, GENERIC)}


def strategy_for_host(host: str) -> Strategy:
    host = (host or "").lower()
    for marker, strategy in HOST_STRATEGIES:
        if marker in host:
            return strategy
    return GENERIC
