import re
from typing import Optional, Tuple

STATE_MAP = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "district of columbia": "DC",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
}

# "fl" -> "florida"
ABBR_TO_STATE = {code.lower(): name for name, code in STATE_MAP.items()}

RE_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: Optional[str]) -> str:
    """Lowercase, trim and collapse inner whitespace."""
    if not value:
        return ""
    return RE_WHITESPACE.sub(" ", str(value)).strip().lower()


def state_forms(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Return (abbreviation, full_name) for a state given as either form.

    Both are lowercase. A two-letter value is taken as the abbreviation even
    when it is not a known state ("zz" -> ("zz", None)); a longer value is
    taken as the full name and its code looked up ("florida" -> ("fl",
    "florida")).
    """
    normalized = normalize_text(value)
    if not normalized:
        return None, None

    if len(normalized) == 2:
        return normalized, ABBR_TO_STATE.get(normalized)

    code = STATE_MAP.get(normalized)
    return (code.lower() if code else None), normalized
