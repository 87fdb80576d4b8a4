"""
Tests for autofill/cli.py

Only the offline dry-run command is exercised; `fill` needs a browser.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from autofill.cli import EXIT_BLOCKED, EXIT_ERROR, EXIT_OK, build_parser, main
from storage.profile_store import ProfileStore

FORM = """
<html><body><form>
  <label for="fn">First Name</label><input id="fn" name="fn" type="text">
  <label for="ln">Last Name</label><input id="ln" name="ln" type="text">
  <label for="em">Email Address</label><input id="em" name="em" type="text">
</form></body></html>
"""


# ============ Fixtures ============

@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "profile.json"
    ProfileStore(path).save({"fullName": "Jane Doe", "email": "jane@x.com"})
    return path


@pytest.fixture
def form_file(tmp_path):
    path = tmp_path / "form.html"
    path.write_text(FORM, encoding="utf-8")
    return path


# ============ dry-run ============

class TestDryRun:
    """Tests for the dry-run command."""

    def test_fills_and_writes_output(self, profile_file, form_file, tmp_path, capsys):
        out = tmp_path / "filled.html"

        code = main(["--profile", str(profile_file), "dry-run", str(form_file), "-o", str(out)])

        assert code == EXIT_OK
        html = out.read_text(encoding="utf-8")
        assert 'value="Jane"' in html
        assert 'value="Doe"' in html
        assert 'value="jane@x.com"' in html
        assert "Filled 3 fields (generic)" in capsys.readouterr().out

    def test_blocked_page(self, profile_file, tmp_path, capsys):
        page = tmp_path / "careers.html"
        page.write_text('<iframe id="grnhse_iframe" src="https://boards.greenhouse.io/embed/job_app"></iframe>')

        code = main(["--profile", str(profile_file), "dry-run", str(page), "--url", "https://acme.com/careers"])

        assert code == EXIT_BLOCKED
        assert "embedded frame" in capsys.readouterr().out

    def test_missing_file(self, profile_file, tmp_path, capsys):
        code = main(["--profile", str(profile_file), "dry-run", str(tmp_path / "nope.html")])

        assert code == EXIT_ERROR
        assert "Cannot read" in capsys.readouterr().out

    def test_url_selects_strategy(self, profile_file, form_file, capsys):
        code = main([
            "--profile", str(profile_file),
            "dry-run", str(form_file),
            "--url", "https://boards.greenhouse.io/acme/jobs/1",
        ])

        assert code == EXIT_OK
        assert "(greenhouse)" in capsys.readouterr().out


class TestParser:
    def test_fill_arguments(self):
        args = build_parser().parse_args(["fill", "https://acme.com/apply", "--frame", "--hold"])

        assert args.url == "https://acme.com/apply"
        assert args.frame is True
        assert args.hold is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
