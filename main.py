# main.py
"""
Job Autofill API

    uvicorn main:app --reload --port 8000

GET   /health    liveness
GET   /profile   stored profile
PATCH /profile   partial profile update
POST  /autofill  open a page in Chromium and fill it once
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from autofill.client import BrowserClient, fill_open_page
from autofill.config import HEADLESS, LOG_LEVEL
from autofill.errors import DocumentError, UnknownProfileKey
from autofill.profile import load_profile
from storage.profile_store import ProfileStore

logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

PROFILE_STORE = ProfileStore()


app = FastAPI(
    title="Job Autofill",
    description="Fill job application forms from a stored profile",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class AutofillRequest(BaseModel):
    url: str
    headless: bool = HEADLESS
    frame: bool = False


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/profile")
def get_profile():
    return PROFILE_STORE.load()


@app.patch("/profile")
def update_profile(values: Dict[str, Any] = Body(...)):
    """
    Merge a partial profile. Unknown keys reject the whole update.
    """
    try:
        return PROFILE_STORE.save(values)
    except UnknownProfileKey as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/autofill")
def autofill(payload: AutofillRequest):
    """
    Open `url`, trigger autofill once and return the outcome with the fill report.
    """
    profile = load_profile(PROFILE_STORE)

    with BrowserClient(headless=payload.headless) as browser:
        try:
            browser.open_page(payload.url)
            outcome = fill_open_page(browser, profile, frame=payload.frame)
        except DocumentError as e:
            logger.warning(f"Autofill failed for {payload.url}: {e}")
            raise HTTPException(status_code=502, detail=str(e))

    return outcome.to_dict()
