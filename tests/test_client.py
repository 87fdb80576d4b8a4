"""
Tests for autofill/client.py

Playwright handles are replaced with MagicMock; no browser is launched.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from autofill import client
from autofill.client import BrowserClient, PageDocument, PageElement, fill_open_page
from autofill.errors import DocumentError
from autofill.profile import Profile
from autofill.runner import FillOutcome, STATUS_FILLED


# ============ Fixtures ============

def make_frame(url, parent=None):
    frame = MagicMock()
    frame.url = url
    frame.parent_frame = parent
    frame.query_selector_all.return_value = []
    return frame


@pytest.fixture
def browser():
    """BrowserClient with a mocked page: main frame plus one Greenhouse child."""
    main_frame = make_frame("https://acme.com/careers/1")
    child = make_frame("https://boards.greenhouse.io/embed/job_app?for=acme", parent=main_frame)

    instance = BrowserClient(headless=True)
    instance.page = MagicMock()
    instance.page.main_frame = main_frame
    instance.page.frames = [main_frame, child]
    return instance


# ============ PageElement ============

class TestPageElement:
    """Tests for the Playwright element adapter."""

    def test_dispatch_and_assign(self):
        handle = MagicMock()
        element = PageElement(handle)

        element.assign("Jane")
        element.dispatch("input")

        handle.evaluate.assert_called_once_with("(el, v) => { el.value = v; }", "Jane")
        handle.dispatch_event.assert_called_once_with("input")

    def test_tag_is_cached(self):
        handle = MagicMock()
        handle.evaluate.return_value = "select"
        element = PageElement(handle)

        assert element.tag == "select"
        assert element.tag == "select"
        assert handle.evaluate.call_count == 1

    def test_options_stripped(self):
        handle = MagicMock()
        handle.evaluate.side_effect = ["select", [["FL", " Florida "], ["", "Select"]]]

        assert PageElement(handle).options() == [("FL", "Florida"), ("", "Select")]

    def test_contains_passes_other_handle(self):
        handle, other = MagicMock(), MagicMock()
        handle.evaluate.return_value = True

        assert PageElement(handle).contains(PageElement(other)) is True
        assert handle.evaluate.call_args.args[1] is other

    def test_options_of_non_select(self):
        handle = MagicMock()
        handle.evaluate.return_value = "input"

        assert PageElement(handle).options() == []


# ============ PageDocument ============

class TestPageDocument:
    """Tests for the Playwright frame adapter."""

    def test_main_frame(self, browser):
        doc = browser.document()

        assert doc.host == "acme.com"
        assert doc.embedded is False

    def test_frame_document(self, browser):
        doc = browser.frame_document("greenhouse")

        assert doc.host == "boards.greenhouse.io"
        assert doc.embedded is True

    def test_frame_document_missing(self, browser):
        assert browser.frame_document("workday") is None

    def test_wait_uses_frame_clock(self):
        frame = make_frame("https://acme.com")

        PageDocument(frame).wait(2)

        frame.wait_for_timeout.assert_called_once_with(2000)


# ============ BrowserClient ============

class TestBrowserClient:
    """Tests for BrowserClient.open_page."""

    def test_open_page_failure(self, browser):
        browser.page.goto.side_effect = Exception("net::ERR_NAME_NOT_RESOLVED")

        with pytest.raises(DocumentError):
            browser.open_page("https://bad.example")

    def test_open_page(self, browser):
        browser.page.title.return_value = "Careers"

        browser.open_page("https://acme.com/careers/1")

        browser.page.goto.assert_called_once()
        browser.page.wait_for_timeout.assert_called_once()


# ============ fill_open_page ============

class TestFillOpenPage:
    """Tests for fill_open_page."""

    def test_fills_main_frame(self, browser):
        outcome = FillOutcome(STATUS_FILLED, strategy="generic")

        with patch.object(client, "trigger", return_value=outcome) as trigger:
            result = fill_open_page(browser, Profile())

        assert result is outcome
        assert trigger.call_args.args[0].frame is browser.page.main_frame

    def test_frame_mode_targets_embed(self, browser):
        with patch.object(client, "watch_for_embedded_form", return_value=True), \
                patch.object(client, "trigger") as trigger:
            fill_open_page(browser, Profile(), frame=True)

        assert trigger.call_args.args[0].host == "boards.greenhouse.io"

    def test_frame_mode_without_embed(self, browser):
        with pytest.raises(DocumentError):
            fill_open_page(browser, Profile(), frame=True)
