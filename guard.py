#!/usr/bin/env python
"""
guard.py – unified CLI for KJV Guard

Commands:

  python guard.py quote "John 3:16"
      Print the exact KJV text of a verse or a whole chapter

  python guard.py parse "1jn 4:2"
      Show how a reference resolves (canonical book, chapter, verse)

  python guard.py books
      List the canonical book names in corpus order

  python guard.py check "some text"
      Run the Christ Test on a piece of text

  python guard.py digest
      Print the SHA-256 of the corpus (paste into KJVGUARD_CORPUS_SHA256)

  python guard.py status
      Show corpus source, digest lock, and counts

  python guard.py journal-add "Thankful today"
  python guard.py journal-list --limit 5
      Family journal (JSON file, newest first)

  python guard.py week-html 3 "Ps 23" "John 3:16" --out reports/week-3.html
  python guard.py week-pdf 3 "Ps 23" "John 3:16" --out reports/week-3.pdf
      Weekly printables

  python guard.py serve --port 3000
      Start the HTTP server

Common options (before the command):
  --corpus PATH    corpus file or directory (default: KJVGUARD_CORPUS or data/scripture-kjv.json)
  --digest HEX     expected SHA-256 of the corpus bytes
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from kjvguard import config
from kjvguard.context import configure, get_context
from kjvguard.errors import GuardError
from kjvguard.journal import Journal
from kjvguard.loader import compute_digest
from kjvguard.paths import REPORTS_DIR, ensure_basic_dirs
from kjvguard.pdfgen import DEFAULT_THEME, DEFAULT_TITLE, render_week_html, write_week_pdf
from kjvguard.policy import christ_test, is_rewrite_request, REWRITE_REFUSAL
from kjvguard.resolver import get_resolver, print_result
from kjvguard.status import print_status
from kjvguard.util import error, info, ok, warn


# ---------- Command handlers ----------


def cmd_quote(args: argparse.Namespace) -> None:
    resolver = get_resolver()
    for ref in args.refs:
        print_result(resolver.resolve(ref))


def cmd_parse(args: argparse.Namespace) -> None:
    parsed = get_resolver().parse(args.ref)
    info(f"{args.ref!r} -> {parsed.label()}")
    print(f"  book   : {parsed.book}")
    print(f"  chapter: {parsed.chapter if parsed.chapter is not None else '-'}")
    print(f"  verse  : {parsed.verse if parsed.verse is not None else '-'}")


def cmd_books(args: argparse.Namespace) -> None:
    books = get_resolver().list_books()
    info(f"{len(books)} book(s) in corpus:")
    for name in books:
        print(f"  - {name}")


def cmd_check(args: argparse.Namespace) -> None:
    """
    Christ Test on the given text; exits 1 when the text fails.
    """
    text = " ".join(args.text)
    if is_rewrite_request(text):
        warn(REWRITE_REFUSAL)
    verdict = christ_test(text)
    if verdict.ok:
        ok(verdict.reason)
    else:
        error(verdict.reason)
        sys.exit(1)


def cmd_digest(args: argparse.Namespace) -> None:
    path = config.resolve_corpus_path(args.corpus)
    if not path.exists():
        error(f"Corpus not found: {path}")
        sys.exit(1)
    info(f"SHA-256 of {path}:")
    print(compute_digest(path))


def cmd_status(args: argparse.Namespace) -> None:
    print_status(get_context())


def cmd_journal_add(args: argparse.Namespace) -> None:
    entry = Journal(args.journal).add(" ".join(args.text))
    ok(f"Journal entry {entry.id} saved at {entry.at}")


def cmd_journal_list(args: argparse.Namespace) -> None:
    entries = Journal(args.journal).entries()
    if not entries:
        warn("Journal is empty.")
        return
    for entry in entries[: args.limit]:
        print(f"[{entry.at}] {entry.text}")


def _week_output(args: argparse.Namespace, suffix: str) -> Path:
    if args.out:
        return Path(args.out)
    return REPORTS_DIR / f"week-{args.week}{suffix}"


def cmd_week_html(args: argparse.Namespace) -> None:
    html = render_week_html(args.week, args.theme, args.refs, args.title, get_resolver().quote)
    out = _week_output(args, ".html")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(html, encoding="utf-8")
    ok(f"HTML printable written: {out}")


def cmd_week_pdf(args: argparse.Namespace) -> None:
    write_week_pdf(
        _week_output(args, ".pdf"),
        args.week,
        args.theme,
        args.refs,
        args.title,
        get_resolver().quote,
    )


def cmd_serve(args: argparse.Namespace) -> None:
    from kjvguard.server import run

    run(host=args.host, port=args.port)


# ---------- Parser ----------


def _add_week_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("week", type=str, help="Week number or label, e.g. 3")
    p.add_argument("refs", nargs="+", type=str, help="References to quote, e.g. 'Ps 23' 'John 3:16'")
    p.add_argument("--theme", type=str, default=DEFAULT_THEME, help=f"Theme line (default: {DEFAULT_THEME})")
    p.add_argument("--title", type=str, default=DEFAULT_TITLE, help=f"Session title (default: {DEFAULT_TITLE})")
    p.add_argument("--out", type=str, default=None, help="Output path (default: reports/week-<week>.<ext>)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{config.APP_NAME} CLI (v{config.__version__})",
    )
    parser.add_argument(
        "--corpus",
        type=str,
        default=None,
        help="Corpus file or directory (default: KJVGUARD_CORPUS or data/scripture-kjv.json)",
    )
    parser.add_argument(
        "--digest",
        type=str,
        default=None,
        help="Expected SHA-256 of the corpus bytes (default: KJVGUARD_CORPUS_SHA256)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # quote
    p_quote = sub.add_parser("quote", help="Print exact KJV text for one or more references")
    p_quote.add_argument("refs", nargs="+", type=str, help="e.g. 'John 3:16', 'Ps 23', '1jn 4:2'")
    p_quote.set_defaults(func=cmd_quote)

    # parse
    p_parse = sub.add_parser("parse", help="Show how a reference resolves")
    p_parse.add_argument("ref", type=str, help="Reference string, e.g. 'Song 2:1'")
    p_parse.set_defaults(func=cmd_parse)

    # books
    p_books = sub.add_parser("books", help="List canonical book names in corpus order")
    p_books.set_defaults(func=cmd_books)

    # check
    p_check = sub.add_parser("check", help="Run the Christ Test on text")
    p_check.add_argument("text", nargs="+", type=str, help="Text to check")
    p_check.set_defaults(func=cmd_check)

    # digest
    p_digest = sub.add_parser("digest", help="Print the corpus SHA-256 for the integrity lock")
    p_digest.set_defaults(func=cmd_digest)

    # status
    p_status = sub.add_parser("status", help="Show corpus, digest, and count summary")
    p_status.set_defaults(func=cmd_status)

    # journal-add / journal-list
    p_jadd = sub.add_parser("journal-add", help="Add a journal entry")
    p_jadd.add_argument("text", nargs="+", type=str, help="Entry text")
    p_jadd.add_argument("--journal", type=str, default=None, help="Journal file (default: KJVGUARD_JOURNAL or data/journal.json)")
    p_jadd.set_defaults(func=cmd_journal_add)

    p_jlist = sub.add_parser("journal-list", help="List journal entries, newest first")
    p_jlist.add_argument("--limit", type=int, default=20, help="Max entries to show (default: 20)")
    p_jlist.add_argument("--journal", type=str, default=None, help="Journal file (default: KJVGUARD_JOURNAL or data/journal.json)")
    p_jlist.set_defaults(func=cmd_journal_list)

    # week-html / week-pdf
    p_whtml = sub.add_parser("week-html", help="Write the weekly printable as HTML")
    _add_week_args(p_whtml)
    p_whtml.set_defaults(func=cmd_week_html)

    p_wpdf = sub.add_parser("week-pdf", help="Write the weekly printable as PDF")
    _add_week_args(p_wpdf)
    p_wpdf.set_defaults(func=cmd_week_pdf)

    # serve
    p_serve = sub.add_parser("serve", help="Start the HTTP server")
    p_serve.add_argument("--host", type=str, default=None, help=f"Bind host (default: KJVGUARD_HOST or {config.DEFAULT_HOST})")
    p_serve.add_argument("--port", type=int, default=None, help=f"Bind port (default: PORT or {config.DEFAULT_PORT})")
    p_serve.set_defaults(func=cmd_serve)

    return parser


# ---------- Main ----------


def main(argv: Optional[List[str]] = None) -> None:
    ensure_basic_dirs()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure(
        config.resolve_corpus_path(args.corpus),
        config.resolve_expected_digest(args.digest),
    )
    try:
        args.func(args)
    except GuardError as e:
        error(e.reason)
        sys.exit(1)


if __name__ == "__main__":
    main()
