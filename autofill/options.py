"""
Option matcher for <select> fields.

Given a target string and the (value, text) pairs of a select, pick the best
option or return None. No match is never an error: the caller leaves the
field untouched.

Every tier is tried across all options before the next tier, so an exact
match further down the list beats a loose match near the top.
"""

import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from utils.normalize import normalize_text, state_forms

from .dom import Option

RE_CODE_PAIR = re.compile(r"^[a-z]+-[a-z]+$")

# (value, text) lowercased and trimmed
Normalized = Tuple[str, str]
Tier = Callable[[str, str], bool]


def _normalized(options: Iterable[Option]) -> List[Tuple[Option, Normalized]]:
    """Pair each usable option with its normalized form."""
    result = []
    for value, text in options:
        # "Select..." placeholders carry an empty value
        if not (value or "").strip():
            continue
        result.append(((value, text), (normalize_text(value), normalize_text(text))))
    return result


def _first_by_tiers(options: Sequence[Option], tiers: Sequence[Tier]) -> Optional[Option]:
    candidates = _normalized(options)
    for tier in tiers:
        for option, (val, txt) in candidates:
            if tier(val, txt):
                return option
    return None


def match_option(target: str, options: Sequence[Option]) -> Optional[Option]:
    """Exact case-insensitive match on value or text, then substring."""
    wanted = normalize_text(target)
    if not wanted:
        return None
    return _first_by_tiers(options, [
        lambda val, txt: val == wanted or txt == wanted,
        lambda val, txt: wanted in val or wanted in txt,
    ])


def match_country_option(target: str, options: Sequence[Option]) -> Optional[Option]:
    """Countries have no lookup table: plain exact, then substring."""
    return match_option(target, options)


def state_tiers(abbr: Optional[str], full: Optional[str]) -> List[Tier]:
    """
    Ordered tests for a US state option.

    Handles the shapes state dropdowns use in practice: "FL", "Florida",
    "USA-FL", "Florida (FL)", "Florida - FL".
    """
    tiers: List[Tier] = []
    if abbr:
        tiers.append(lambda val, txt: val == abbr)
    if full:
        tiers.append(lambda val, txt: val == full)
    if abbr:
        tiers.append(lambda val, txt: txt == abbr)
    if full:
        tiers.append(lambda val, txt: txt == full)
    if abbr:
        tiers.append(lambda val, txt: val.endswith(f"-{abbr}"))
        tiers.append(lambda val, txt: abbr in val and bool(RE_CODE_PAIR.match(val)))
        tiers.append(lambda val, txt: txt.endswith(f"({abbr})"))
        tiers.append(lambda val, txt: f"({abbr})" in txt)
    if full:
        tiers.append(lambda val, txt: txt.startswith(full))

    # Loose fallback on either form
    if abbr:
        tiers.append(lambda val, txt: abbr in val or abbr in txt)
    if full:
        tiers.append(lambda val, txt: full in val or full in txt)
    return tiers


def match_state_option(target: str, options: Sequence[Option]) -> Optional[Option]:
    abbr, full = state_forms(target)
    if not abbr and not full:
        return None
    return _first_by_tiers(options, state_tiers(abbr, full))


def find_mobile_option(options: Sequence[Option]) -> Optional[Option]:
    """Phone-type dropdowns: only an option literally named "mobile" counts."""
    return _first_by_tiers(options, [
        lambda val, txt: val == "mobile" or txt == "mobile",
    ])
