"""
Value setter - the only place the engine writes to a page.

Rules and strategies never touch elements. They return a Mutation and hand
it to apply_mutation(), which performs the write and raises the event
sequence a reactive front-end expects from real typing:

    input -> change -> blur   (all bubbling)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import WRITE_EVENTS
from .dom import Element

logger = logging.getLogger(__name__)

KIND_VALUE = "value"
KIND_CHECK = "check"


@dataclass(frozen=True)
class Mutation:
    """An intended write, produced by a rule or strategy."""

    element: Optional[Element]
    value: Optional[str] = None
    source: str = ""
    kind: str = KIND_VALUE
    only_if_empty: bool = True


@dataclass
class FilledField:
    source: str
    element: str
    value: str
    events: List[str] = field(default_factory=list)


@dataclass
class FillReport:
    """Every write performed during one trigger."""

    filled: List[FilledField] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.filled)

    @property
    def events(self) -> List[str]:
        return [event for item in self.filled for event in item.events]

    def sources(self) -> List[str]:
        return [item.source for item in self.filled]

    def to_dict(self) -> dict:
        return {
            "fields_filled": self.count,
            "filled_details": [
                {"source": item.source, "field": item.element, "value": item.value[:50]}
                for item in self.filled
            ],
        }


def set_value(element: Optional[Element], value, report: Optional[FillReport] = None,
              source: str = "") -> bool:
    """
    Write `value` into `element` and raise input/change/blur.

    No-op when the element is missing, the value is None, or the element
    already holds the same value. Returns True when a write happened.
    """
    if element is None or value is None:
        return False

    value = str(value)
    if str(element.value) == value:
        return False

    element.assign(value)
    for event in WRITE_EVENTS:
        element.dispatch(event)

    logger.debug(f"{source or 'write'}: {element.describe()} <- {value[:40]!r}")
    if report is not None:
        report.filled.append(FilledField(source, element.describe(), value, list(WRITE_EVENTS)))
    return True


def set_checked(element: Optional[Element], report: Optional[FillReport] = None,
                source: str = "") -> bool:
    """Tick a checkbox and raise a bubbling change event, once."""
    if element is None or element.checked:
        return False

    element.mark_checked()
    element.dispatch("change")

    logger.debug(f"{source or 'check'}: {element.describe()} checked")
    if report is not None:
        report.filled.append(FilledField(source, element.describe(), "checked", ["change"]))
    return True


def apply_mutation(mutation: Optional[Mutation], report: Optional[FillReport] = None) -> bool:
    """Perform a Mutation. The live value is re-read right before writing."""
    if mutation is None or mutation.element is None:
        return False

    if mutation.kind == KIND_CHECK:
        return set_checked(mutation.element, report, mutation.source)

    if mutation.only_if_empty and mutation.element.value:
        return False

    return set_value(mutation.element, mutation.value, report, mutation.source)
