"""
Command line: run an audit, manage the saved draft, inspect submission history.
"""
import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .drafts import DraftStore
from .errors import GenerationError, ValidationError
from .history import HistoryLog
from .input_handler import validate_business_input
from .models import DRAFT_FIELDS
from .report import render_audit_report, render_history
from .session import GENERATION_FAILED_MESSAGE, MISSING_FIELDS_MESSAGE, AuditSession
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

CLEAR_CONFIRMATION = "Are you sure you want to clear all audit history? This cannot be undone."


def _make_client(args):
    if args.mock or os.getenv("LOGIC_TEST_MODE", "false").lower() == "true":
        from .mock_data import MockAuditClient
        return MockAuditClient()
    from .groq_client import GroqAuditClient
    return GroqAuditClient()


def _add_field_options(parser: argparse.ArgumentParser):
    parser.add_argument("--business-name", dest="business_name", help="e.g. \"Joe's Pizza\"")
    parser.add_argument("--location", help="e.g. \"Brooklyn, NY\"")
    parser.add_argument("--email", help="contact email for the submission")
    parser.add_argument("--phone", dest="phone_number", help="business phone number")


def _apply_fields(session: AuditSession, args):
    for name in DRAFT_FIELDS:
        value = getattr(args, name, None)
        if value is not None:
            session.update_field(name, value)


async def _audit_and_summarize(session: AuditSession, want_summary: bool):
    """Audit, then optionally summarize, on one event loop with one client."""
    summary = summary_error = None
    try:
        result = await session.run_audit()
        if want_summary:
            try:
                summary = await session.email_summary()
            except GenerationError as e:
                summary_error = e
    finally:
        close = getattr(session.client, "aclose", None)
        if close is not None:
            await close()
    return result, summary, summary_error


def cmd_audit(args, store: KeyValueStore) -> int:
    session = AuditSession(None, store)
    _apply_fields(session, args)

    try:
        # Fail on bad input before building an API client
        validate_business_input(session.draft.as_input_data())
        session.client = _make_client(args)
        result, summary, summary_error = asyncio.run(_audit_and_summarize(session, args.summary))
    except ValidationError as e:
        message = MISSING_FIELDS_MESSAGE if not session.draft.is_complete() else str(e)
        print(f"Error: {message}", file=sys.stderr)
        return 2
    except GenerationError as e:
        logger.debug("Audit failed", exc_info=True)
        print(f"Error: {session.error or GENERATION_FAILED_MESSAGE} ({e})", file=sys.stderr)
        return 1

    business_name = session.draft.business_name
    status = 0
    if summary_error is not None:
        print(f"Error: Failed to generate email summary. ({summary_error})", file=sys.stderr)
        status = 1

    if args.json:
        print(json.dumps({
            "businessName": business_name,
            "result": result.to_payload(),
            "summary": summary,
        }, indent=2, ensure_ascii=False))
    else:
        print(render_audit_report(result, business_name))
        if summary is not None:
            print(summary)
    return status


def cmd_draft(args, store: KeyValueStore) -> int:
    drafts = DraftStore(store)
    if args.draft_command == "set":
        session = AuditSession(None, store)
        _apply_fields(session, args)
        draft = session.draft
    elif args.draft_command == "clear":
        drafts.clear()
        print("Draft cleared.")
        return 0
    else:
        draft = drafts.load()

    print(json.dumps(draft.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    return 0


def cmd_history(args, store: KeyValueStore) -> int:
    history = HistoryLog(store)
    if args.history_command == "clear":
        if not args.yes:
            answer = input(f"{CLEAR_CONFIRMATION} [y/N] ")
            if answer.strip().lower() not in ("y", "yes"):
                print("History kept.")
                return 0
        history.clear()
        print("Audit history cleared.")
        return 0

    entries = history.list()
    if args.json:
        print(json.dumps([entry.to_payload() for entry in entries], indent=2, ensure_ascii=False))
    else:
        print(render_history(entries))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gbp-audit",
        description="AI-generated Google Business Profile audits",
    )
    parser.add_argument("--db", help="key/value store path (default: $DATABASE_PATH or gbp_audit.db)")
    sub = parser.add_subparsers(dest="command", required=True)

    audit = sub.add_parser("audit", help="run an audit; missing fields come from the saved draft")
    _add_field_options(audit)
    audit.add_argument("--summary", action="store_true", help="also generate a plain-text email summary")
    audit.add_argument("--json", action="store_true", help="print JSON instead of a text report")
    audit.add_argument("--mock", action="store_true", help="use deterministic offline data (no API call)")
    audit.set_defaults(handler=cmd_audit)

    draft = sub.add_parser("draft", help="show, edit or clear the saved form draft")
    draft_sub = draft.add_subparsers(dest="draft_command")
    draft_sub.add_parser("show", help="print the saved draft")
    _add_field_options(draft_sub.add_parser("set", help="update draft fields"))
    draft_sub.add_parser("clear", help="forget the saved draft")
    draft.set_defaults(handler=cmd_draft, draft_command="show")

    history = sub.add_parser("history", help="list or clear past submissions")
    history.add_argument("--json", action="store_true", help="print JSON instead of a table")
    history_sub = history.add_subparsers(dest="history_command")
    clear = history_sub.add_parser("clear", help="delete all submission history")
    clear.add_argument("--yes", action="store_true", help="skip the confirmation prompt")
    history.set_defaults(handler=cmd_history, history_command="list")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    args = build_parser().parse_args(argv)
    store = KeyValueStore(args.db or os.getenv("DATABASE_PATH"))
    return args.handler(args, store)


if __name__ == "__main__":
    sys.exit(main())
