"""
Autofill trigger.

trigger() is the single entry point behind the CLI and the HTTP endpoint.
It works out where it is running, picks a strategy and runs it once. Any
fault inside the strategy is caught here and logged; writes made before the
fault stay on the page and are listed in the outcome.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .config import (
    BLOCKED_CONTEXT_MESSAGE,
    EMBED_RECHECK_DELAY,
    GREENHOUSE_HOST,
    GREENHOUSE_IFRAME_SELECTOR,
)
from .dom import Document
from .profile import Profile
from .setter import FillReport
from .strategies import GREENHOUSE, Strategy, strategy_for_host

logger = logging.getLogger(__name__)

STATUS_FILLED = "filled"
STATUS_BLOCKED = "blocked"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class FillContext:
    """Where a trigger runs and what it may do there."""

    strategy: Optional[Strategy]
    blocked: bool = False
    message: str = ""


@dataclass
class FillOutcome:
    status: str
    strategy: str = ""
    message: str = ""
    error: Optional[str] = None
    report: FillReport = field(default_factory=FillReport)

    @property
    def fields_filled(self) -> int:
        return self.report.count

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "strategy": self.strategy,
            "message": self.message,
            "error": self.error,
            **self.report.to_dict(),
        }


def is_greenhouse_frame(document: Document) -> bool:
    return document.embedded and GREENHOUSE_HOST in document.host


def has_embedded_greenhouse(document: Document) -> bool:
    return document.query_selector(GREENHOUSE_IFRAME_SELECTOR) is not None


def detect_context(document: Document) -> FillContext:
    """
    Pick the strategy for a document.

    A page that only hosts a Greenhouse form in a cross-origin frame cannot
    be filled from the outside; the context is blocked and carries an
    instruction for the user instead.
    """
    if is_greenhouse_frame(document):
        logger.info("Inside Greenhouse iframe")
        return FillContext(GREENHOUSE)

    if has_embedded_greenhouse(document):
        logger.warning("Found Greenhouse iframe on page, form must be filled from inside it")
        return FillContext(None, blocked=True, message=BLOCKED_CONTEXT_MESSAGE)

    strategy = strategy_for_host(document.host)
    logger.info(f"{strategy.name.title()} mode for {document.host or 'local document'}")
    return FillContext(strategy)


def trigger(document: Document, profile: Profile) -> FillOutcome:
    """Run one autofill pass over `document`. Never raises."""
    report = FillReport()
    try:
        context = detect_context(document)
        if context.blocked:
            return FillOutcome(STATUS_BLOCKED, message=context.message, report=report)

        context.strategy.run(document, profile, report)
        logger.info(f"Autofill ({context.strategy.name}) filled {report.count} fields")
        return FillOutcome(STATUS_FILLED, strategy=context.strategy.name, report=report)

    except Exception as e:  # noqa: BLE001
        logger.exception(f"Autofill error: {e}")
        return FillOutcome(STATUS_ERROR, error=str(e), report=report)


def watch_for_embedded_form(document: Document, delay: float = EMBED_RECHECK_DELAY) -> bool:
    """
    Look for an embedded Greenhouse form now and once more after `delay`.

    Embeds are often injected after the page load event. The re-check runs
    once on the document's clock and is not retried.
    """
    if has_embedded_greenhouse(document):
        logger.info("Found Greenhouse iframe")
        return True

    document.wait(delay)
    found = has_embedded_greenhouse(document)
    if found:
        logger.info("Found Greenhouse iframe after deferred check")
    return found
