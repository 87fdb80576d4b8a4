"""
Tests for autofill/setter.py

The setter is the only write path: assign, then input/change/blur.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from autofill.dom import HtmlDocument
from autofill.setter import (
    KIND_CHECK,
    FillReport,
    Mutation,
    apply_mutation,
    set_checked,
    set_value,
)


# ============ Fixtures ============

@pytest.fixture
def doc():
    return HtmlDocument(
        '<input id="email" name="email">'
        '<input id="city" name="city" value="Austin">'
        '<select id="state" name="state">'
        '<option value="">Select...</option>'
        '<option value="FL">Florida</option>'
        '<option value="GA">Georgia</option>'
        '</select>'
        '<textarea id="summary"></textarea>'
        '<input type="checkbox" id="current" name="current">'
    )


# ============ set_value ============

class TestSetValue:
    """Tests for set_value."""

    def test_writes_and_dispatches_event_triple(self, doc):
        """Should assign the value and raise input, change, blur in order."""
        field = doc.query_selector("#email")
        report = FillReport()

        assert set_value(field, "jane@x.com", report, "email") is True
        assert field.value == "jane@x.com"
        assert doc.events_for(field) == ["input", "change", "blur"]
        assert all(ev.bubbles for ev in doc.events)
        assert report.sources() == ["email"]
        assert report.events == ["input", "change", "blur"]

    def test_same_value_is_noop(self, doc):
        """Should not write or dispatch when the value is unchanged."""
        field = doc.query_selector("#city")

        assert set_value(field, "Austin") is False
        assert doc.events == []

    def test_none_value_is_noop(self, doc):
        field = doc.query_selector("#email")

        assert set_value(field, None) is False
        assert field.value == ""
        assert doc.events == []

    def test_missing_element_is_noop(self):
        assert set_value(None, "x") is False

    def test_select_option(self, doc):
        """Should select the option carrying the value."""
        field = doc.query_selector("#state")

        set_value(field, "GA")

        assert field.value == "GA"

    def test_select_unknown_value_clears(self, doc):
        """Should leave no option selected for a value with no option."""
        field = doc.query_selector("#state")
        set_value(field, "GA")

        set_value(field, "ZZ")

        assert field.value == ""

    def test_textarea(self, doc):
        field = doc.query_selector("#summary")

        set_value(field, "Ten years of backend work")

        assert field.value == "Ten years of backend work"

    def test_numbers_are_stringified(self, doc):
        field = doc.query_selector("#email")

        set_value(field, 12345)

        assert field.value == "12345"


class TestSetChecked:
    """Tests for set_checked."""

    def test_checks_once(self, doc):
        """Should tick the box and raise a single change event."""
        box = doc.query_selector("#current")
        report = FillReport()

        assert set_checked(box, report, "experience.current") is True
        assert set_checked(box, report, "experience.current") is False
        assert box.checked is True
        assert doc.events_for(box) == ["change"]
        assert report.count == 1


# ============ apply_mutation ============

class TestApplyMutation:
    """Tests for apply_mutation."""

    def test_only_if_empty_skips_filled_field(self, doc):
        """Should re-read the live value and leave a filled field alone."""
        field = doc.query_selector("#city")

        assert apply_mutation(Mutation(field, "Miami", source="city")) is False
        assert field.value == "Austin"
        assert doc.events == []

    def test_overwrite_when_allowed(self, doc):
        field = doc.query_selector("#city")

        assert apply_mutation(Mutation(field, "Miami", only_if_empty=False)) is True
        assert field.value == "Miami"

    def test_check_kind(self, doc):
        box = doc.query_selector("#current")

        assert apply_mutation(Mutation(box, kind=KIND_CHECK)) is True
        assert box.checked is True

    def test_none_mutation(self):
        assert apply_mutation(None) is False
        assert apply_mutation(Mutation(None, "x")) is False


class TestFillReport:
    """Tests for FillReport.to_dict."""

    def test_to_dict_truncates_values(self, doc):
        report = FillReport()
        set_value(doc.query_selector("#summary"), "x" * 80, report, "summary")

        data = report.to_dict()

        assert data["fields_filled"] == 1
        assert data["filled_details"][0]["source"] == "summary"
        assert data["filled_details"][0]["field"] == "textarea#summary"
        assert len(data["filled_details"][0]["value"]) == 50
