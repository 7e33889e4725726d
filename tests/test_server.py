import inspect
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

from kjvguard import context, server
from kjvguard.server import app

from corpus_fixtures import GEN_1_1, JOHN_3_16, make_context


class ServerTests(unittest.TestCase):
    def setUp(self):
        context.set_context(make_context())
        self.tmp = tempfile.TemporaryDirectory()
        self.env = mock.patch.dict(
            os.environ, {"KJVGUARD_JOURNAL": str(Path(self.tmp.name) / "journal.json")}
        )
        self.env.start()
        self.client = TestClient(app)

    def tearDown(self):
        self.env.stop()
        self.tmp.cleanup()
        context.set_context(None)

    def test_health(self):
        r = self.client.get("/api/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"ok": True})

    def test_verse(self):
        r = self.client.get("/api/verse", params={"ref": "gen 1:1"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"ref": "gen 1:1", "version": "KJV", "text": GEN_1_1})

    def test_chapter(self):
        body = self.client.get("/api/verse", params={"ref": "John 3"}).json()
        self.assertEqual(list(body["text"]), ["1", "16", "17"])
        self.assertEqual(body["text"]["16"], JOHN_3_16)

    def test_status_mapping(self):
        cases = {
            "": 400,
            "John 3:": 400,
            "John": 400,
            "Frodo 1:1": 404,
            "John 99:1": 404,
        }
        for ref, status in cases.items():
            r = self.client.get("/api/verse", params={"ref": ref})
            self.assertEqual(r.status_code, status, ref)

    def test_error_body_has_kind(self):
        body = self.client.get("/api/verse", params={"ref": "Frodo 1:1"}).json()
        self.assertEqual(body["kind"], "book_not_found")
        self.assertIn("Frodo", body["error"])

    def test_parse(self):
        self.assertEqual(self.client.get("/api/parse", params={"ref": "jn 3:16"}).json()["type"], "single-verse")
        body = self.client.get("/api/parse", params={"ref": "ps 23"}).json()
        self.assertEqual(body["type"], "chapter")
        self.assertEqual(body["canonical"], "Psalms 23")

    def test_books_and_store(self):
        self.assertEqual(self.client.get("/api/books").json()["books"][0], "Genesis")
        store = self.client.get("/api/debug/store").json()
        self.assertTrue(store["ok"])
        self.assertEqual(store["books"], 5)

    def test_debug_has(self):
        body = self.client.get("/api/debug/has", params={"book": "jn", "chapter": "3", "verse": "16"}).json()
        self.assertEqual(body["book"], "John")
        self.assertTrue(body["hasBook"] and body["hasChapter"] and body["hasVerse"])
        self.assertEqual(body["sampleVerses"], ["1", "16", "17"])

        body = self.client.get("/api/debug/has", params={"book": "John", "chapter": "4"}).json()
        self.assertTrue(body["hasBook"])
        self.assertFalse(body["hasChapter"])
        self.assertFalse(body["hasVerse"])

    def test_check(self):
        r = self.client.post("/api/check", json={"text": "a different salvation"})
        self.assertEqual(r.json(), {"ok": False, "reason": "Fails Galatians 1:8 (another gospel)"})
        self.assertTrue(self.client.post("/api/check", json={}).json()["ok"])

    def test_journal(self):
        self.assertEqual(self.client.get("/api/journal").json(), [])
        r = self.client.post("/api/journal", json={"text": "first"})
        self.assertTrue(r.json()["ok"])
        self.client.post("/api/journal", json={"text": "second"})
        texts = [e["text"] for e in self.client.get("/api/journal").json()]
        self.assertEqual(texts, ["second", "first"])

    def test_week_html(self):
        r = self.client.post("/api/printables/week", json={"week": 4, "theme": "Love", "refs": ["John 3:16"]})
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.headers["content-type"].startswith("text/html"))
        self.assertIn(JOHN_3_16, r.text)

    def test_week_html_unknown_ref(self):
        r = self.client.post("/api/printables/week", json={"refs": ["Frodo 1:1"]})
        self.assertEqual(r.status_code, 404)

    def test_week_pdf(self):
        r = self.client.post("/api/printables/week.pdf", json={"week": 2, "refs": ["Gen 1:1"]})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.headers["content-type"], "application/pdf")
        self.assertEqual(r.headers["content-disposition"], 'attachment; filename="week-2.pdf"')
        self.assertTrue(r.content.startswith(b"%PDF"))

        r = self.client.post("/api/printables/week.pdf", json={"refs": []})
        self.assertIn('filename="week-study.pdf"', r.headers["content-disposition"])

    def test_week_pdf_non_latin_week(self):
        r = self.client.post("/api/printables/week.pdf", json={"week": "第3週", "refs": ["Gen 1:1"]})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.headers["content-disposition"], 'attachment; filename="week-3.pdf"')
        self.assertTrue(r.content.startswith(b"%PDF"))

    def test_blocking_handlers_run_in_threadpool(self):
        for handler in (server.journal_list, server.journal_add, server.printables_week, server.printables_week_pdf):
            self.assertFalse(inspect.iscoroutinefunction(handler), handler.__name__)

    def test_bad_refs(self):
        r = self.client.post("/api/printables/week", json={"refs": "John 3:16"})
        self.assertEqual(r.status_code, 400)


if __name__ == "__main__":
    unittest.main()
