"""
Browser client and live-page document adapter.

Usage:
    from autofill.client import BrowserClient

    with BrowserClient() as browser:
        browser.open_page("https://boards.greenhouse.io/...")
        outcome = trigger(browser.document(), profile)
"""

import logging
from typing import List, Optional
from urllib.parse import urlparse

from playwright.sync_api import Browser, BrowserContext, ElementHandle, Frame, Page, sync_playwright

from .config import BROWSER_ARGS, FORM_SETTLE_WAIT, GREENHOUSE_HOST, PAGE_LOAD_TIMEOUT, USER_AGENT
from .dom import Document, Element, Option
from .errors import DocumentError
from .profile import Profile
from .runner import FillOutcome, trigger, watch_for_embedded_form

logger = logging.getLogger(__name__)

LABEL_TEXT_JS = """
el => {
    if (el.id) {
        const label = document.querySelector(`label[for="${CSS.escape(el.id)}"]`);
        if (label) return label.innerText || "";
    }
    const parent = el.closest("label");
    return parent ? (parent.innerText || "") : "";
}
"""

OPTIONS_JS = "el => Array.from(el.options || []).map(o => [o.value, o.textContent || ''])"


class PageElement(Element):
    """Element backed by a Playwright ElementHandle."""

    def __init__(self, handle: ElementHandle):
        self.handle = handle
        self._tag: Optional[str] = None

    def __repr__(self):
        return f"<PageElement {self.describe()}>"

    @property
    def tag(self) -> str:
        if self._tag is None:
            self._tag = self.handle.evaluate("el => el.tagName.toLowerCase()")
        return self._tag

    @property
    def input_type(self) -> str:
        return self.handle.evaluate("el => (el.type || '').toLowerCase()")

    @property
    def value(self) -> str:
        return self.handle.evaluate("el => el.value == null ? '' : String(el.value)")

    @property
    def checked(self) -> bool:
        return bool(self.handle.evaluate("el => !!el.checked"))

    def get_attribute(self, name: str) -> Optional[str]:
        return self.handle.get_attribute(name)

    def label_text(self) -> str:
        return self.handle.evaluate(LABEL_TEXT_JS) or ""

    def options(self) -> List[Option]:
        if self.tag != "select":
            return []
        return [(value, text.strip()) for value, text in self.handle.evaluate(OPTIONS_JS)]

    def query_selector_all(self, selector: str) -> List[Element]:
        return [PageElement(h) for h in self.handle.query_selector_all(selector)]

    def assign(self, value: str) -> None:
        self.handle.evaluate("(el, v) => { el.value = v; }", value)

    def contains(self, other: Element) -> bool:
        if not isinstance(other, PageElement):
            return False
        return bool(self.handle.evaluate("(el, other) => el !== other && el.contains(other)", other.handle))

    def mark_checked(self) -> None:
        self.handle.evaluate("el => { el.checked = true; }")

    def dispatch(self, event: str) -> None:
        # Playwright events bubble by default
        self.handle.dispatch_event(event)

    def scroll_into_view(self) -> None:
        self.handle.scroll_into_view_if_needed()


class PageDocument(Document):
    """A live page or frame."""

    def __init__(self, frame: Frame):
        self.frame = frame

    @property
    def url(self) -> str:
        return self.frame.url

    @property
    def embedded(self) -> bool:
        return self.frame.parent_frame is not None

    def query_selector_all(self, selector: str) -> List[Element]:
        return [PageElement(h) for h in self.frame.query_selector_all(selector)]

    def wait(self, seconds: float) -> None:
        self.frame.wait_for_timeout(seconds * 1000)


class BrowserClient:
    """Chromium session that hands out documents to the autofill runner."""

    def __init__(self, headless: bool = False):
        self.headless = headless
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def start(self):
        """Start browser instance."""
        self.playwright = sync_playwright().start()
        self.browser = self.playwright.chromium.launch(
            headless=self.headless,
            args=BROWSER_ARGS,
        )
        self.context = self.browser.new_context(
            viewport={"width": 1400, "height": 900},
            user_agent=USER_AGENT,
        )
        self.page = self.context.new_page()
        print("✅ Browser started")

    def close(self):
        """Close browser and cleanup."""
        if self.browser:
            self.browser.close()
        if self.playwright:
            self.playwright.stop()
        print("✅ Browser closed")

    def open_page(self, url: str) -> None:
        """Open `url` and give client-side forms a moment to render."""
        print(f"🌐 Opening: {url}")
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=PAGE_LOAD_TIMEOUT * 1000)
        except Exception as e:
            raise DocumentError(f"Failed to open {url}: {e}") from e
        self.page.wait_for_timeout(FORM_SETTLE_WAIT * 1000)
        print(f"📄 Page title: {self.page.title()}")

    def document(self) -> PageDocument:
        return PageDocument(self.page.main_frame)

    def frame_document(self, host_marker: str) -> Optional[PageDocument]:
        """Document for the first child frame whose host contains `host_marker`."""
        for frame in self.page.frames:
            if frame.parent_frame is None:
                continue
            host = (urlparse(frame.url).hostname or "").lower()
            if host_marker in host:
                return PageDocument(frame)
        logger.debug(f"No frame with host matching {host_marker!r}")
        return None


def fill_open_page(browser: BrowserClient, profile: Profile, frame: bool = False) -> FillOutcome:
    """
    Trigger autofill on the page the browser has open.

    With `frame`, the fill runs inside the embedded Greenhouse form, the way
    a user would trigger it from within the frame.
    """
    document = browser.document()
    embedded = watch_for_embedded_form(document)

    if frame:
        target = browser.frame_document(GREENHOUSE_HOST) if embedded else None
        if target is None:
            raise DocumentError("No embedded Greenhouse form found on this page")
        document = target

    return trigger(document, profile)
