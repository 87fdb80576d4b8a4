#!/usr/bin/env python3
"""
Autofill command line.

Usage:
    python -m autofill fill "https://boards.greenhouse.io/acme/jobs/123"
    python -m autofill fill "https://acme.com/careers/123" --frame     # fill the embedded Greenhouse form
    python -m autofill dry-run saved_form.html --url "https://acme.wd5.myworkdayjobs.com/..." -o filled.html
"""

import argparse
import logging
import sys
from pathlib import Path

from storage.profile_store import ProfileStore

from .config import HEADLESS, LOG_LEVEL, PROFILE_PATH
from .dom import HtmlDocument
from .errors import DocumentError
from .profile import load_profile
from .runner import STATUS_BLOCKED, STATUS_ERROR, FillOutcome, trigger

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_BLOCKED = 2


def print_outcome(outcome: FillOutcome):
    print("=" * 60)
    if outcome.status == STATUS_BLOCKED:
        print(f"⚠️ {outcome.message}")
        return
    if outcome.status == STATUS_ERROR:
        print(f"❌ Autofill error: {outcome.error}")

    for item in outcome.report.filled:
        value = item.value if len(item.value) <= 40 else item.value[:40] + "..."
        print(f"  ✅ {item.source:28s} {item.element} <- {value}")
    print(f"\n✅ Filled {outcome.fields_filled} fields ({outcome.strategy or 'no strategy'})")


def _exit_code(outcome: FillOutcome) -> int:
    if outcome.status == STATUS_BLOCKED:
        return EXIT_BLOCKED
    if outcome.status == STATUS_ERROR:
        return EXIT_ERROR
    return EXIT_OK


def cmd_fill(args) -> int:
    from .client import BrowserClient, fill_open_page

    profile = load_profile(ProfileStore(args.profile))

    with BrowserClient(headless=args.headless) as browser:
        try:
            browser.open_page(args.url)
            outcome = fill_open_page(browser, profile, frame=args.frame)
        except DocumentError as e:
            print(f"❌ {e}")
            return EXIT_ERROR
        print_outcome(outcome)

        if args.hold:
            input("\nPress Enter to close the browser...")

    return _exit_code(outcome)


def cmd_dry_run(args) -> int:
    profile = load_profile(ProfileStore(args.profile))

    try:
        document = HtmlDocument.from_file(args.file, url=args.url, embedded=args.embedded)
    except DocumentError as e:
        print(f"❌ {e}")
        return EXIT_ERROR

    outcome = trigger(document, profile)
    print_outcome(outcome)

    if args.output:
        Path(args.output).write_text(document.html(), encoding="utf-8")
        print(f"💾 Filled form saved: {args.output}")

    return _exit_code(outcome)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="autofill", description="Fill job application forms from your profile")
    parser.add_argument("--profile", type=Path, default=PROFILE_PATH, help="Profile JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    fill = sub.add_parser("fill", help="Open a page in Chromium and fill it")
    fill.add_argument("url")
    fill.add_argument("--headless", action="store_true", default=HEADLESS)
    fill.add_argument("--frame", action="store_true", help="Fill the embedded Greenhouse form")
    fill.add_argument("--hold", action="store_true", help="Keep the browser open for review")
    fill.set_defaults(func=cmd_fill)

    dry = sub.add_parser("dry-run", help="Fill a saved HTML page offline")
    dry.add_argument("file", type=Path)
    dry.add_argument("--url", default="", help="URL the page came from (selects the strategy)")
    dry.add_argument("--embedded", action="store_true", help="Treat the page as an embedded frame")
    dry.add_argument("-o", "--output", type=Path, help="Write the filled HTML here")
    dry.set_defaults(func=cmd_dry_run)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
