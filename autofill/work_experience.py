"""
Work experience (repeating group) filler.

Two independent strategies, both always run:

1. Indexed notation - fields named like experienceData[0].title,
   work[1][company], experience-0-title or data-index="0". Every enabled
   entry i is tried against a fixed list of selector shapes and every empty
   match is filled; the same logical field often exists twice in different
   layout variants and all copies are filled.

2. Section detection - containers whose class/id/data-section mention
   "experience" and hold a title- or company-like field. Block i is paired
   with enabled entry i, extra blocks are ignored, and fields inside each
   block are matched by hint.

Only enabled entries take part, and they are numbered among themselves: a
disabled first entry does not leave block 0 empty.
"""

import logging
import re
from typing import List, Sequence, Tuple

from .config import NON_DATA_INPUT_TYPES
from .dom import Document, Element
from .hints import describe_field
from .profile import Profile, WorkExperience
from .rules import TEXTAREA, Rule
from .setter import FillReport, set_checked, set_value

logger = logging.getLogger(__name__)

# (WorkExperience attribute, name/id keywords). Order is fill order.
INDEXED_FIELDS: List[Tuple[str, Sequence[str]]] = [
    ("title", ("title", "jobtitle", "job_title", "position", "role")),
    ("company", ("company", "companyname", "employer", "organization")),
    ("location", ("location", "city", "place")),
    ("start_date", ("startdate", "fromdate", "start", "begindate")),
    ("end_date", ("enddate", "todate", "end", "untildate")),
    ("description", ("description", "roledescription", "responsibilities", "duties", "achievements")),
]

CURRENT_KEYWORDS = ("current", "present", "currentlywork")

SECTION_SELECTOR = '[class*="experience"], [id*="experience"], [data-section*="experience"]'
SECTION_TITLE_SELECTOR = '[name*="title"], [placeholder*="title" i]'
SECTION_COMPANY_SELECTOR = '[name*="company"], [placeholder*="company" i]'
SECTION_CURRENT_SELECTOR = (
    'input[type="checkbox"][name*="current"], input[type="checkbox"][name*="present"]'
)

# Hint rules inside one experience block, first match wins
SECTION_RULES: List[Rule] = [
    Rule(
        "experience.title",
        re.compile(r"(title|position|role|job)"),
        lambda exp: exp.title,
        exclude=re.compile(r"company"),
        forbid_tags=TEXTAREA,
    ),
    Rule("experience.company", re.compile(r"(company|employer|organization)"), lambda exp: exp.company),
    Rule("experience.location", re.compile(r"(location|city|place)"), lambda exp: exp.location),
    Rule(
        "experience.start_date",
        re.compile(r"(start.*date|from.*date|begin.*date)"),
        lambda exp: exp.start_date,
    ),
    Rule(
        "experience.end_date",
        re.compile(r"(end.*date|to.*date|until.*date)"),
        lambda exp: "" if exp.current else exp.end_date,
    ),
    Rule(
        "experience.description",
        re.compile(r"(description|responsibilities|duties|role|achievement)"),
        lambda exp: exp.description,
        tags=TEXTAREA,
    ),
]


def indexed_selectors(index: int, keyword: str) -> List[str]:
    """Selector shapes used by forms that number their repeated fields."""
    return [
        f'[name*="[{index}].{keyword}"]',
        f'[name*="[{index}][{keyword}]"]',
        f'[name*="{index}.{keyword}"]',
        f'[name*="experience"][name*="{keyword}"][name*="{index}"]',
        f'[id*="experience-{index}-{keyword}"]',
        f'[data-index="{index}"][name*="{keyword}"]',
    ]


def checkbox_selectors(index: int, keyword: str) -> List[str]:
    return [
        f'input[type="checkbox"][name*="[{index}].{keyword}"]',
        f'input[type="checkbox"][name*="[{index}][{keyword}]"]',
        f'input[type="checkbox"][name*="{index}.{keyword}"]',
        f'input[type="checkbox"][id*="experience-{index}-{keyword}"]',
        f'input[type="checkbox"][data-index="{index}"][name*="{keyword}"]',
    ]


def _is_text_field(element: Element) -> bool:
    if element.tag == "textarea":
        return True
    return element.tag == "input" and element.input_type not in NON_DATA_INPUT_TYPES | {"checkbox", "radio"}


# ═══════════════════════════════════════════════════════════════════
# STRATEGY 1: INDEXED NOTATION
# ═══════════════════════════════════════════════════════════════════


def shadowing_keywords(attr: str, keyword: str) -> List[str]:
    """Longer keywords of other fields that contain `keyword`: "role" -> ["roledescription"]."""
    return [
        other_kw
        for other, other_keywords in INDEXED_FIELDS
        if other != attr
        for other_kw in other_keywords
        if keyword in other_kw and other_kw != keyword
    ]


def _names_other_field(element: Element, shadowed: Sequence[str]) -> bool:
    ident = f"{element.get_attribute('name') or ''} {element.get_attribute('id') or ''}".lower()
    return any(kw in ident for kw in shadowed)


def fill_indexed_field(document: Document, index: int, keywords: Sequence[str],
                       value: str, report: FillReport, source: str = "",
                       attr: str = "") -> int:
    """Fill every empty input/textarea matching any indexed shape."""
    if not value:
        return 0

    filled = 0
    for keyword in keywords:
        shadowed = shadowing_keywords(attr, keyword)
        for selector in indexed_selectors(index, keyword):
            for element in document.query_selector_all(selector):
                if element.value or not _is_text_field(element):
                    continue
                # experience[0].roledescription is not a "role" (title) field
                if _names_other_field(element, shadowed):
                    continue
                logger.debug(f"Filling work experience [{index}] {keyword} with {value!r}")
                if set_value(element, value, report, source):
                    filled += 1
    return filled


def fill_indexed_checkbox(document: Document, index: int, keywords: Sequence[str],
                          report: FillReport) -> int:
    filled = 0
    for keyword in keywords:
        for selector in checkbox_selectors(index, keyword):
            for element in document.query_selector_all(selector):
                if set_checked(element, report, f"experience[{index}].current"):
                    logger.debug(f"Checked 'currently work here' for experience [{index}]")
                    filled += 1
    return filled


def fill_indexed_entry(document: Document, index: int, exp: WorkExperience,
                       report: FillReport) -> int:
    filled = 0
    for attr, keywords in INDEXED_FIELDS:
        if attr == "end_date" and exp.current:
            # No end date for a current job, tick "currently work here" instead
            filled += fill_indexed_checkbox(document, index, CURRENT_KEYWORDS, report)
            continue
        filled += fill_indexed_field(
            document, index, keywords, getattr(exp, attr), report, f"experience[{index}].{attr}",
            attr=attr,
        )
    return filled


# ═══════════════════════════════════════════════════════════════════
# STRATEGY 2: SECTION DETECTION
# ═══════════════════════════════════════════════════════════════════


def _has_entry_fields(container: Element) -> bool:
    return bool(
        container.query_selector(SECTION_TITLE_SELECTOR)
        or container.query_selector(SECTION_COMPANY_SELECTOR)
    )


def _is_list_wrapper(container: Element) -> bool:
    """More than one title-like or company-like field means several entries."""
    return (
        len(container.query_selector_all(SECTION_TITLE_SELECTOR)) > 1
        or len(container.query_selector_all(SECTION_COMPANY_SELECTOR)) > 1
    )


def detect_sections(document: Document) -> List[Element]:
    """
    Experience blocks in document order.

    A wrapper around several entries (e.g. class="experience-list") is
    dropped in favour of the blocks inside it. Inside a block, matching
    per-field wrappers (class="experience-field") are part of that block,
    not blocks of their own.
    """
    sections: List[Element] = []
    for container in document.query_selector_all(SECTION_SELECTOR):
        if not _has_entry_fields(container) or _is_list_wrapper(container):
            continue
        # Ancestors come first in document order, so the outermost block wins
        if any(block.contains(container) for block in sections):
            continue
        sections.append(container)

    logger.info(f"Found {len(sections)} work experience sections")
    return sections


def fill_section(section: Element, exp: WorkExperience, report: FillReport) -> int:
    filled = 0
    for element in section.query_selector_all("input, textarea"):
        if not _is_text_field(element):
            continue
        view = describe_field(element)
        if view.value:
            continue

        hint = view.hint
        for rule in SECTION_RULES:
            mutation = rule.evaluate(view, hint, exp)
            if mutation is None:
                continue
            if set_value(element, mutation.value, report, mutation.source):
                filled += 1
            break

    if exp.current:
        checkbox = section.query_selector(SECTION_CURRENT_SELECTOR)
        if set_checked(checkbox, report, "experience.current"):
            filled += 1
    return filled


# ═══════════════════════════════════════════════════════════════════
# ENTRY POINT
# ═══════════════════════════════════════════════════════════════════


def fill_work_experience(document: Document, profile: Profile, report: FillReport) -> int:
    """Run both strategies over the enabled entries. Returns writes made."""
    if not profile.work_experience:
        logger.info("No work experience data found")
        return 0

    enabled = profile.enabled_experience()
    if not enabled:
        logger.info("No enabled work experiences found")
        return 0

    logger.info(
        f"Found {len(enabled)} enabled work experience entries "
        f"(out of {len(profile.work_experience)} total)"
    )

    filled = 0
    for index, exp in enumerate(enabled):
        filled += fill_indexed_entry(document, index, exp, report)

    for section, exp in zip(detect_sections(document), enabled):
        filled += fill_section(section, exp, report)

    return filled
