"""
Document adapters.

The engine never talks to a browser directly. It works against two small
interfaces:

    Element   - one form field or container (read attributes/value, write)
    Document  - a page or frame (query elements, host, embedding)

Two implementations exist: the live Playwright page in client.py and the
static HtmlDocument below, which parses saved HTML with BeautifulSoup and
records every dispatched event. HtmlDocument backs dry runs and the tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from .errors import DocumentError

# (value, text) pair of a <select> option
Option = Tuple[str, str]


class Element(ABC):
    """A DOM element as seen by the engine."""

    @property
    @abstractmethod
    def tag(self) -> str:
        """Lowercase tag name."""

    @property
    @abstractmethod
    def input_type(self) -> str:
        """DOM `type` property: text, email, select-one, textarea, ..."""

    @property
    @abstractmethod
    def value(self) -> str:
        """Current value, stringified."""

    @property
    @abstractmethod
    def checked(self) -> bool:
        ...

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[str]:
        ...

    @abstractmethod
    def label_text(self) -> str:
        """Text of label[for=id], else of the nearest enclosing label."""

    @abstractmethod
    def options(self) -> List[Option]:
        ...

    @abstractmethod
    def query_selector_all(self, selector: str) -> List["Element"]:
        ...

    def query_selector(self, selector: str) -> Optional["Element"]:
        found = self.query_selector_all(selector)
        return found[0] if found else None

    @abstractmethod
    def contains(self, other: "Element") -> bool:
        """True when `other` is a descendant of this element."""

    # Raw primitives. Only setter.apply_mutation calls these.

    @abstractmethod
    def assign(self, value: str) -> None:
        ...

    @abstractmethod
    def mark_checked(self) -> None:
        ...

    @abstractmethod
    def dispatch(self, event: str) -> None:
        """Raise a bubbling DOM event on the element."""

    def scroll_into_view(self) -> None:
        pass

    def describe(self) -> str:
        """Short selector-like description for logs and reports."""
        text = self.tag
        el_id = self.get_attribute("id")
        name = self.get_attribute("name")
        if el_id:
            text += f"#{el_id}"
        if name:
            text += f'[name="{name}"]'
        return text


class Document(ABC):
    """A page or frame the engine can scan."""

    url: str = ""
    embedded: bool = False

    @property
    def host(self) -> str:
        return (urlparse(self.url).hostname or "").lower()

    @abstractmethod
    def query_selector_all(self, selector: str) -> List[Element]:
        ...

    def query_selector(self, selector: str) -> Optional[Element]:
        found = self.query_selector_all(selector)
        return found[0] if found else None

    def wait(self, seconds: float) -> None:
        """Fixed delay on the document's own clock."""


# ═══════════════════════════════════════════════════════════════════
# STATIC HTML
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class DispatchedEvent:
    element: str
    event: str
    bubbles: bool = True
    target: int = 0


class HtmlElement(Element):
    """Element backed by a BeautifulSoup tag."""

    def __init__(self, node: Tag, document: "HtmlDocument"):
        self.node = node
        self.document = document

    def __eq__(self, other):
        return isinstance(other, HtmlElement) and other.node is self.node

    def __hash__(self):
        return id(self.node)

    def __repr__(self):
        return f"<HtmlElement {self.describe()}>"

    @property
    def tag(self) -> str:
        return (self.node.name or "").lower()

    @property
    def input_type(self) -> str:
        if self.tag == "input":
            return (self.node.get("type") or "text").strip().lower()
        if self.tag == "select":
            return "select-multiple" if self.node.has_attr("multiple") else "select-one"
        if self.tag == "textarea":
            return "textarea"
        return ""

    @property
    def value(self) -> str:
        if self.tag == "textarea":
            return self.node.get_text()
        if self.tag == "select":
            return self._selected_value()
        if self.tag == "input":
            default = "on" if self.input_type in ("checkbox", "radio") else ""
            return self.node.get("value", default)
        return ""

    @property
    def checked(self) -> bool:
        return self.node.has_attr("checked")

    def get_attribute(self, name: str) -> Optional[str]:
        value = self.node.get(name)
        if isinstance(value, list):
            # bs4 splits multi-valued attributes such as class
            return " ".join(value)
        return value

    def label_text(self) -> str:
        el_id = self.node.get("id")
        if el_id:
            label = self.document.soup.find("label", attrs={"for": el_id})
            if label:
                return label.get_text(" ", strip=True)
        parent = self.node.find_parent("label")
        if parent:
            return parent.get_text(" ", strip=True)
        return ""

    def options(self) -> List[Option]:
        if self.tag != "select":
            return []
        return [_option_pair(opt) for opt in self.node.find_all("option")]

    def query_selector_all(self, selector: str) -> List[Element]:
        return [HtmlElement(node, self.document) for node in self.node.select(selector)]

    def assign(self, value: str) -> None:
        value = str(value)
        if self.tag == "textarea":
            self.node.string = value
        elif self.tag == "select":
            self._select(value)
        else:
            self.node["value"] = value

    def contains(self, other: Element) -> bool:
        if not isinstance(other, HtmlElement) or other.node is self.node:
            return False
        return any(parent is self.node for parent in other.node.parents)

    def mark_checked(self) -> None:
        self.node["checked"] = ""

    def dispatch(self, event: str) -> None:
        self.document.events.append(DispatchedEvent(self.describe(), event, target=id(self.node)))

    def _selected_value(self) -> str:
        if id(self.node) in self.document.cleared_selects:
            return ""
        options = self.node.find_all("option")
        for opt in options:
            if opt.has_attr("selected"):
                return _option_pair(opt)[0]
        return _option_pair(options[0])[0] if options else ""

    def _select(self, value: str) -> None:
        matched = False
        for opt in self.node.find_all("option"):
            if not matched and _option_pair(opt)[0] == value:
                opt["selected"] = ""
                matched = True
            elif opt.has_attr("selected"):
                del opt["selected"]
        # A value with no option leaves nothing selected, as in a browser
        if matched:
            self.document.cleared_selects.discard(id(self.node))
        else:
            self.document.cleared_selects.add(id(self.node))


def _option_pair(opt: Tag) -> Option:
    text = opt.get_text().strip()
    value = opt.get("value")
    return (value if value is not None else text), text


class HtmlDocument(Document):
    """
    A saved page, parsed once.

    Writes change the parsed tree in place, so `html()` returns the filled
    form. Every dispatched event is appended to `events`.
    """

    def __init__(self, html: str, url: str = "", embedded: bool = False):
        self.soup = BeautifulSoup(html, "html.parser")
        self.url = url
        self.embedded = embedded
        self.events: List[DispatchedEvent] = []
        self.cleared_selects = set()

    @classmethod
    def from_file(cls, path: Path, url: str = "", embedded: bool = False) -> "HtmlDocument":
        try:
            html = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise DocumentError(f"Cannot read {path}: {e}") from e
        return cls(html, url=url or Path(path).resolve().as_uri(), embedded=embedded)

    def query_selector_all(self, selector: str) -> List[Element]:
        return [HtmlElement(node, self) for node in self.soup.select(selector)]

    def html(self) -> str:
        return str(self.soup)

    def events_for(self, element: Element) -> List[str]:
        target = id(element.node)
        return [ev.event for ev in self.events if ev.target == target]
