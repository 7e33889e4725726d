import json
import threading
import tempfile
import time
import unittest
from pathlib import Path
from unittest import mock

from kjvguard import context
from kjvguard.errors import IntegrityError
from kjvguard.loader import compute_digest

from corpus_fixtures import GEN_1_1, make_context, nested_data


class LazyBuildTests(unittest.TestCase):
    def setUp(self):
        context.configure()

    def tearDown(self):
        context.configure()

    def test_concurrent_first_access_builds_once(self):
        calls = []
        lock = threading.Lock()

        def slow_build(corpus_path=None, expected_digest=None):
            with lock:
                calls.append(1)
            time.sleep(0.05)
            return make_context()

        results = []
        with mock.patch("kjvguard.context.build_context", side_effect=slow_build):
            threads = [
                threading.Thread(target=lambda: results.append(context.get_context()))
                for _ in range(8)
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        self.assertEqual(len(calls), 1)
        self.assertEqual(len(results), 8)
        self.assertTrue(all(r is results[0] for r in results))
        self.assertTrue(context.is_ready())

    def test_configure_resets(self):
        context.set_context(make_context())
        self.assertTrue(context.is_ready())
        context.configure()
        self.assertFalse(context.is_ready())


class FileBackedTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "kjv.json"
        self.path.write_text(json.dumps(nested_data()), encoding="utf-8")

    def tearDown(self):
        context.configure()
        self.tmp.cleanup()

    def test_configured_path_and_digest(self):
        context.configure(self.path, compute_digest(self.path))
        ctx = context.prewarm()
        self.assertEqual(ctx.source, str(self.path))
        self.assertEqual(ctx.corpus["Genesis"][1][1], GEN_1_1)
        self.assertEqual(ctx.index.lookup("gen"), "Genesis")

    def test_bad_digest_fails_startup(self):
        context.configure(self.path, "0" * 64)
        with self.assertRaises(IntegrityError):
            context.get_context()
        self.assertFalse(context.is_ready())

    def test_reload_swaps_and_keeps_old_snapshot(self):
        context.configure(self.path)
        old = context.get_context()

        other = Path(self.tmp.name) / "other.json"
        other.write_text(json.dumps({"Ruth": {"1": {"1": "Now it came to pass"}}}), encoding="utf-8")
        new = context.reload_context(other)

        self.assertIsNot(old, new)
        self.assertIs(context.get_context(), new)
        self.assertEqual(list(new.corpus), ["Ruth"])
        self.assertEqual(old.corpus["Genesis"][1][1], GEN_1_1)


if __name__ == "__main__":
    unittest.main()
