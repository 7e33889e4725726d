import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import guard
from kjvguard import context
from kjvguard.loader import compute_digest

from corpus_fixtures import GEN_1_1, JOHN_3_16, nested_data


class CliTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.corpus = Path(self.tmp.name) / "kjv.json"
        self.corpus.write_text(json.dumps(nested_data()), encoding="utf-8")
        self.dirs = mock.patch("guard.ensure_basic_dirs")
        self.dirs.start()

    def tearDown(self):
        self.dirs.stop()
        context.configure()
        self.tmp.cleanup()

    def run_cli(self, *argv):
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            guard.main(["--corpus", str(self.corpus), *argv])
        return out.getvalue(), err.getvalue()

    def test_quote(self):
        out, _ = self.run_cli("quote", "jn 3:16", "gen 1:1")
        self.assertIn("[KJV] John 3:16", out)
        self.assertIn(JOHN_3_16, out)
        self.assertIn(GEN_1_1, out)

    def test_unknown_book_exits_nonzero(self):
        with self.assertRaises(SystemExit) as cm:
            self.run_cli("quote", "Frodo 1:1")
        self.assertEqual(cm.exception.code, 1)

    def test_parse_and_books(self):
        out, _ = self.run_cli("parse", "1jn 4:2")
        self.assertIn("-> 1 John 4:2", out)
        out, _ = self.run_cli("books")
        self.assertIn("  - Song of Solomon", out)

    def test_digest(self):
        out, _ = self.run_cli("digest")
        self.assertEqual(out.strip().splitlines()[-1], compute_digest(self.corpus))

    def test_digest_lock_is_enforced(self):
        with self.assertRaises(SystemExit):
            self.run_cli("--digest", "0" * 64, "quote", "Gen 1:1")

    def test_corrupt_workbook_exits_cleanly(self):
        self.corpus = Path(self.tmp.name) / "kjv.xlsx"
        self.corpus.write_bytes(b"not a workbook")
        with self.assertRaises(SystemExit) as cm:
            self.run_cli("quote", "Gen 1:1")
        self.assertEqual(cm.exception.code, 1)

    def test_check(self):
        out, _ = self.run_cli("check", "Jesus", "Christ", "is", "Lord")
        self.assertIn("[ok] Pass", out)
        with self.assertRaises(SystemExit) as cm:
            self.run_cli("check", "there", "is", "no", "incarnation")
        self.assertEqual(cm.exception.code, 1)

    def test_status(self):
        out, _ = self.run_cli("status")
        self.assertIn("5 book(s)", out)
        self.assertIn("no integrity lock configured", out)

    def test_journal(self):
        journal = str(Path(self.tmp.name) / "journal.json")
        self.run_cli("journal-add", "first", "--journal", journal)
        self.run_cli("journal-add", "second", "--journal", journal)
        out, _ = self.run_cli("journal-list", "--journal", journal)
        lines = out.strip().splitlines()
        self.assertTrue(lines[0].endswith("] second"))
        self.assertTrue(lines[1].endswith("] first"))

    def test_week_outputs(self):
        html_out = Path(self.tmp.name) / "week-1.html"
        pdf_out = Path(self.tmp.name) / "week-1.pdf"
        self.run_cli("week-html", "1", "John 3:16", "--out", str(html_out))
        self.run_cli("week-pdf", "1", "John 3:16", "--out", str(pdf_out))
        self.assertIn(JOHN_3_16, html_out.read_text(encoding="utf-8"))
        self.assertTrue(pdf_out.read_bytes().startswith(b"%PDF"))


if __name__ == "__main__":
    unittest.main()
