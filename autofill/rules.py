"""
Generic rule engine.

RULES is an ordered list. For each field the first rule that produces a
Mutation wins and later rules never see that field in the same pass. A rule
declines (returns None) when its profile value is missing, the field already
holds a value, the tag is not accepted, the hint does not match its
vocabulary, or its resolver finds nothing to write. A declining rule has no
side effects, so the next rule gets the same field.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, List, Optional, Pattern, Sequence

from .config import FIELD_SELECTOR, NON_DATA_INPUT_TYPES
from .dom import Document
from .hints import FieldView, describe_field
from .options import find_mobile_option, match_country_option, match_state_option
from .profile import Profile
from .setter import FillReport, Mutation, apply_mutation

logger = logging.getLogger(__name__)

# Rules read either the Profile or, in experience blocks, one WorkExperience
ValueGetter = Callable[[Any], str]
Resolver = Callable[[FieldView, str], Optional[str]]

TEXTAREA = frozenset({"textarea"})
INPUT = frozenset({"input"})

# Shared with the work-experience section filler and the Greenhouse strategy
LINE2_VOCAB = re.compile(r"(address line 2|address2|apt|apartment|suite|unit|floor)")
SUMMARY_VOCAB = re.compile(r"(summary|about you|about yourself|introduction|why.*you|tell us)")


@dataclass(frozen=True)
class Rule:
    """One (precondition, vocabulary, action) unit of the engine."""

    name: str
    pattern: Pattern
    value: ValueGetter
    exclude: Optional[Pattern] = None
    tags: Optional[FrozenSet[str]] = None
    forbid_tags: FrozenSet[str] = frozenset()
    resolve: Optional[Resolver] = None

    def matches(self, view: FieldView, hint: str) -> bool:
        """Vocabulary and tag checks only, no profile involved."""
        if self.tags is not None and view.tag not in self.tags:
            return False
        if view.tag in self.forbid_tags:
            return False
        if not self.pattern.search(hint):
            return False
        if self.exclude is not None and self.exclude.search(hint):
            return False
        return True

    def evaluate(self, view: FieldView, hint: str, source: Any) -> Optional[Mutation]:
        target = self.value(source)
        if not target or not view.is_empty:
            return None
        if not self.matches(view, hint):
            return None

        value = self.resolve(view, target) if self.resolve else target
        if value is None:
            return None
        return Mutation(view.element, value, source=self.name)


# ═══════════════════════════════════════════════════════════════════
# RESOLVERS
# ═══════════════════════════════════════════════════════════════════


def _options_sample(view: FieldView, limit: int = 5) -> str:
    return ", ".join(f'value="{v}" text="{t}"' for v, t in view.options[:limit])


def resolve_phone_type(view: FieldView, _target: str) -> Optional[str]:
    match = find_mobile_option(view.options)
    if match is None:
        logger.debug(f"No 'Mobile' option in phone type dropdown: {_options_sample(view)}")
        return None
    return match[0]


def resolve_state(view: FieldView, target: str) -> Optional[str]:
    if view.tag == "select":
        match = match_state_option(target, view.options)
        if match is None:
            logger.debug(f"Could not find state {target!r} in dropdown: {_options_sample(view)}")
            return None
        logger.debug(f"State match: value={match[0]!r} text={match[1]!r}")
        return match[0]
    if view.tag == "input":
        return target
    return None


def resolve_country(view: FieldView, target: str) -> Optional[str]:
    if view.tag == "select":
        match = match_country_option(target, view.options)
        if match is None:
            logger.debug(f"Could not find country {target!r} in dropdown: {_options_sample(view)}")
            return None
        return match[0]
    return target


def website_link(profile: Profile) -> str:
    """LinkedIn link, else GitHub link, else a stored website."""
    return profile.linkedin or profile.github or profile.website


# ═══════════════════════════════════════════════════════════════════
# RULES (order is priority)
# ═══════════════════════════════════════════════════════════════════

RULES: List[Rule] = [
    Rule("email", re.compile(r"email"), lambda p: p.email),
    Rule(
        "first_name",
        re.compile(r"(first name|given name|forename)"),
        lambda p: p.first_name,
        exclude=re.compile(r"(last|surname|family)"),
        forbid_tags=TEXTAREA,
    ),
    Rule(
        "last_name",
        re.compile(r"(last name|surname|family name)"),
        lambda p: p.last_name,
        forbid_tags=TEXTAREA,
    ),
    Rule(
        "full_name",
        re.compile(r"(full name|your name|name as it appears|legal name)"),
        lambda p: p.full_name,
        exclude=re.compile(r"(first|last|surname|family)"),
        forbid_tags=TEXTAREA,
    ),
    Rule(
        "phone_device_type",
        re.compile(r"(device.*type|phone.*type|type.*device|type.*phone)"),
        lambda p: "mobile",
        tags=frozenset({"select"}),
        resolve=resolve_phone_type,
    ),
    Rule("phone", re.compile(r"(phone|mobile|cell)"), lambda p: p.phone),
    Rule(
        "address_line1",
        re.compile(r"\baddress\b|(address line 1|address1|street address|home address|mailing address)"),
        lambda p: p.address1,
        exclude=LINE2_VOCAB,
        tags=INPUT,
    ),
    Rule("address_line2", LINE2_VOCAB, lambda p: p.address2, tags=INPUT),
    Rule("city", re.compile(r"\bcity\b"), lambda p: p.city),
    Rule(
        "state",
        re.compile(r"(state|province|region|cntry.*region)"),
        lambda p: p.state,
        resolve=resolve_state,
    ),
    Rule("zip", re.compile(r"(zip|postal code|postcode)"), lambda p: p.zip),
    Rule("country", re.compile(r"(country|nation)"), lambda p: p.country, resolve=resolve_country),
    Rule("linkedin", re.compile(r"linkedin"), lambda p: p.linkedin),
    Rule("github", re.compile(r"github"), lambda p: p.github),
    Rule("website", re.compile(r"(website|portfolio|personal site|personal url)"), website_link),
    Rule(
        "skills",
        re.compile(r"(skill|expertise|proficienc|competenc|capabilit)"),
        lambda p: p.skills,
        tags=TEXTAREA,
    ),
    Rule("summary", SUMMARY_VOCAB, lambda p: p.summary, tags=TEXTAREA),
]


def is_candidate(view: FieldView) -> bool:
    return not (view.tag == "input" and view.input_type in NON_DATA_INPUT_TYPES)


class RuleEngine:
    """Applies RULES to every field of a document, first match wins."""

    def __init__(self, rules: Sequence[Rule] = RULES):
        self.rules = list(rules)

    def classify(self, view: FieldView, profile: Profile) -> Optional[Mutation]:
        hint = view.hint
        for rule in self.rules:
            mutation = rule.evaluate(view, hint, profile)
            if mutation is not None:
                return mutation
        return None

    def run(self, document: Document, profile: Profile, report: FillReport,
            skip_filled: bool = False) -> int:
        """
        One pass over the fields present right now.

        Fields inserted while the pass runs are not revisited. With
        skip_filled (backfill mode) fields holding a value are skipped
        before any rule looks at them.
        """
        elements = document.query_selector_all(FIELD_SELECTOR)
        logger.info(f"Found {len(elements)} input/select/textarea elements")

        consumed = 0
        for element in elements:
            view = describe_field(element)
            if not is_candidate(view):
                continue
            if skip_filled and view.value:
                continue

            mutation = self.classify(view, profile)
            if mutation is not None and apply_mutation(mutation, report):
                consumed += 1

        logger.info(f"Rule engine filled {consumed} fields")
        return consumed
