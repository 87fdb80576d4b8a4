"""
Tests for the HTTP API in main.py

The profile store is swapped for a temp file and the browser is mocked, so
no Chromium is started.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient

import main
from autofill.errors import DocumentError
from autofill.runner import STATUS_BLOCKED, STATUS_FILLED, FillOutcome
from autofill.setter import FilledField, FillReport
from main import app
from storage.profile_store import ProfileStore

client = TestClient(app)


# ============ Fixtures ============

@pytest.fixture
def temp_store(tmp_path):
    """Point the API at a temporary profile file."""
    store = ProfileStore(tmp_path / "profile.json")
    with patch.object(main, "PROFILE_STORE", store):
        yield store


@pytest.fixture
def mock_browser():
    """Replace BrowserClient with a mock usable as a context manager."""
    browser = MagicMock()
    with patch.object(main, "BrowserClient") as client_cls:
        client_cls.return_value.__enter__.return_value = browser
        client_cls.return_value.__exit__.return_value = False
        yield client_cls, browser


# ============ Health ============

class TestHealth:
    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


# ============ Profile ============

class TestProfileEndpoints:
    """Tests for GET/PATCH /profile."""

    def test_empty_profile(self, temp_store):
        response = client.get("/profile")

        assert response.status_code == 200
        assert response.json() == {}

    def test_patch_merges(self, temp_store):
        client.patch("/profile", json={"fullName": "Jane Doe"})
        response = client.patch("/profile", json={"email": "jane@x.com"})

        assert response.status_code == 200
        assert response.json() == {"fullName": "Jane Doe", "email": "jane@x.com"}
        assert client.get("/profile").json() == {"fullName": "Jane Doe", "email": "jane@x.com"}

    def test_patch_unknown_key(self, temp_store):
        """Should answer 400 and store nothing."""
        response = client.patch("/profile", json={"fullName": "Jane Doe", "shoeSize": "9"})

        assert response.status_code == 400
        assert "shoeSize" in response.json()["detail"]
        assert temp_store.load() == {}

    def test_patch_work_experience(self, temp_store):
        response = client.patch("/profile", json={"workExperience": [{"title": "Engineer"}]})

        assert response.json()["workExperience"] == [
            {"title": "Engineer", "current": False, "enabled": True}
        ]


# ============ Autofill ============

class TestAutofillEndpoint:
    """Tests for POST /autofill."""

    def test_fill(self, temp_store, mock_browser):
        client_cls, browser = mock_browser
        temp_store.save({"fullName": "Jane Doe"})
        report = FillReport([FilledField("first_name", 'input#fn[name="fn"]', "Jane", ["input", "change", "blur"])])
        outcome = FillOutcome(STATUS_FILLED, strategy="generic", report=report)

        with patch.object(main, "fill_open_page", return_value=outcome) as fill:
            response = client.post("/autofill", json={"url": "https://acme.com/apply", "headless": True})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "filled"
        assert data["fields_filled"] == 1
        assert data["filled_details"][0]["value"] == "Jane"
        client_cls.assert_called_once_with(headless=True)
        browser.open_page.assert_called_once_with("https://acme.com/apply")
        assert fill.call_args.args[1].first_name == "Jane"
        assert fill.call_args.kwargs == {"frame": False}

    def test_blocked(self, temp_store, mock_browser):
        outcome = FillOutcome(STATUS_BLOCKED, message="Please fill from the frame")

        with patch.object(main, "fill_open_page", return_value=outcome):
            response = client.post("/autofill", json={"url": "https://acme.com/careers/1"})

        assert response.status_code == 200
        assert response.json()["status"] == "blocked"
        assert response.json()["fields_filled"] == 0

    def test_page_failure(self, temp_store, mock_browser):
        _, browser = mock_browser
        browser.open_page.side_effect = DocumentError("Failed to open https://bad.example")

        response = client.post("/autofill", json={"url": "https://bad.example"})

        assert response.status_code == 502
        assert "Failed to open" in response.json()["detail"]

    def test_url_required(self):
        response = client.post("/autofill", json={"headless": True})

        assert response.status_code == 422
