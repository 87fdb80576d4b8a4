# Autofill configuration

import os
from pathlib import Path

from dotenv import load_dotenv

# Directories
AUTOFILL_DIR = Path(__file__).parent
PROJECT_ROOT = AUTOFILL_DIR.parent
DATA_DIR = PROJECT_ROOT / "data"

load_dotenv(PROJECT_ROOT / ".env")

PROFILE_PATH = Path(os.getenv("AUTOFILL_PROFILE_PATH", str(DATA_DIR / "profile.json")))
LOG_LEVEL = os.getenv("AUTOFILL_LOG_LEVEL", "INFO").upper()
HEADLESS = os.getenv("AUTOFILL_HEADLESS", "false").lower() in ("1", "true", "yes")

# Timeouts (seconds)
PAGE_LOAD_TIMEOUT = 60
FORM_SETTLE_WAIT = 2

# Deferred re-check for an embedded form that loads after the page
EMBED_RECHECK_DELAY = 2

# Browser settings
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"

BROWSER_ARGS = [
    '--disable-blink-features=AutomationControlled',
    '--no-sandbox',
    '--disable-dev-shm-usage',
]

# Elements the engine scans on every pass
FIELD_SELECTOR = "input, textarea, select"

# Input types that never carry profile data
NON_DATA_INPUT_TYPES = {"hidden", "submit", "button", "reset", "image", "file"}

# Notification sequence raised after every write (order matters)
WRITE_EVENTS = ("input", "change", "blur")

# Platform detection (host substrings)
GREENHOUSE_HOST = "greenhouse"
WORKDAY_HOST = "workday"

# Parent pages that host a Greenhouse form in a frame
GREENHOUSE_IFRAME_SELECTOR = 'iframe[id*="grnhse"], iframe[src*="greenhouse"]'

BLOCKED_CONTEXT_MESSAGE = (
    "Please scroll down to the application form in the embedded frame and "
    "trigger the autofill from inside the form."
)
