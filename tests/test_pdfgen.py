import tempfile
import unittest
from pathlib import Path

from kjvguard.pdfgen import (
    CHECKLIST,
    build_week_pdf,
    pdf_filename,
    quote_text,
    render_week_html,
    write_week_pdf,
)
from kjvguard.resolver import Resolver

from corpus_fixtures import JOHN_3_1, JOHN_3_16, make_context


class WeekPrintableTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.quote = Resolver(make_context()).quote

    def test_html_quotes_exactly(self):
        html = render_week_html(3, "Love", ["John 3:16"], "Family Night", self.quote)
        self.assertIn(JOHN_3_16, html)
        self.assertIn("<strong>John 3:16</strong>", html)
        self.assertIn("Week 3 • Theme: Love", html)
        self.assertIn(CHECKLIST[0], html)
        self.assertIn("Christ is King", html)

    def test_chapter_rendered_as_numbered_run(self):
        html = render_week_html(1, "Family", ["John 3"], "Weekly Session", self.quote)
        self.assertIn(f"1. {JOHN_3_1} 16. ", html)

    def test_user_text_is_escaped(self):
        html = render_week_html("<b>1</b>", "<script>alert(1)</script>", [], "A & B", self.quote)
        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;", html)
        self.assertIn("A &amp; B", html)
        self.assertIn("&lt;b&gt;1&lt;/b&gt;", html)

    def test_quote_text(self):
        self.assertEqual(quote_text("verse"), "verse")
        self.assertEqual(quote_text({1: "a", 2: "b"}), "1. a 2. b")

    def test_pdf_bytes(self):
        pdf = build_week_pdf(2, "Grace & <Truth>", ["John 3:16", "Ps 23"], "Session", self.quote)
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_write_pdf(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = write_week_pdf(Path(tmp) / "reports" / "week.txt", 1, "Family", ["Gen 1:1"], "S", self.quote)
            self.assertEqual(out.suffix, ".pdf")
            self.assertTrue(out.read_bytes().startswith(b"%PDF"))

    def test_pdf_filename(self):
        self.assertEqual(pdf_filename(3), "week-3.pdf")
        self.assertEqual(pdf_filename(None), "week-study.pdf")
        self.assertEqual(pdf_filename(""), "week-study.pdf")

    def test_pdf_filename_is_header_safe(self):
        self.assertEqual(pdf_filename("第3週"), "week-3.pdf")
        self.assertEqual(pdf_filename('Week 2 "Grace"'), "week-Week-2-Grace.pdf")
        self.assertEqual(pdf_filename("週"), "week-study.pdf")


if __name__ == "__main__":
    unittest.main()
