import unittest
from unittest import mock

from kjvguard.errors import PolicyBlockedError, RewriteRefusedError
from kjvguard.policy import DOCTRINAL_RULES, christ_test, enforce, is_rewrite_request


class RewriteRequestTests(unittest.TestCase):
    def test_detected(self):
        for text in (
            "Please paraphrase John 3:16",
            "Can you REWORD this verse?",
            "modernize Psalm 23",
            "simplify it for kids",
            "put it in your own words",
            "make it easier to read",
            "retell the story",
        ):
            self.assertTrue(is_rewrite_request(text), text)

    def test_plain_requests_pass(self):
        for text in ("Quote John 3:16", "What does Psalm 23 say?", "", None):
            self.assertFalse(is_rewrite_request(text), text)


class ChristTestTests(unittest.TestCase):
    def test_pass(self):
        verdict = christ_test("Jesus Christ is come in the flesh.")
        self.assertTrue(verdict.ok)
        self.assertEqual(verdict.to_dict(), {"ok": True, "reason": "Pass"})

    def test_denies_incarnation(self):
        verdict = christ_test("Some say Jesus did not come in the flesh.")
        self.assertFalse(verdict.ok)
        self.assertEqual(verdict.reason, "Fails 1 John 4:2-3 (denies Christ come in the flesh)")
        self.assertEqual(verdict.rule, "denies_incarnation")

    def test_another_gospel(self):
        verdict = christ_test("Here is an UPDATED GOSPEL for today")
        self.assertFalse(verdict.ok)
        self.assertEqual(verdict.reason, "Fails Galatians 1:8 (another gospel)")

    def test_first_rule_wins(self):
        verdict = christ_test("no incarnation, and a new gospel")
        self.assertEqual(verdict.rule, DOCTRINAL_RULES[0].name)

    def test_empty(self):
        self.assertTrue(christ_test("").ok)
        self.assertTrue(christ_test(None).ok)


class EnforceTests(unittest.TestCase):
    def test_passes_through(self):
        self.assertEqual(enforce("Quote John 3:16", lambda: "For God so loved the world"),
                         "For God so loved the world")

    def test_rewrite_refused_before_generation(self):
        generate = mock.Mock(return_value="text")
        with self.assertRaises(RewriteRefusedError) as cm:
            enforce("paraphrase John 3:16", generate)
        generate.assert_not_called()
        self.assertIn("only quotes exact KJV text", cm.exception.reason)

    def test_input_blocked(self):
        generate = mock.Mock(return_value="text")
        with self.assertRaises(PolicyBlockedError) as cm:
            enforce("teach me the new gospel", generate)
        generate.assert_not_called()
        self.assertEqual(cm.exception.direction, "input")
        self.assertTrue(cm.exception.reason.startswith("Blocked input: Fails Galatians 1:8"))

    def test_output_blocked(self):
        with self.assertRaises(PolicyBlockedError) as cm:
            enforce("Who is Jesus?", lambda: "Christ was not incarnate.")
        self.assertEqual(cm.exception.direction, "output")
        self.assertEqual(cm.exception.kind, "policy_blocked")


if __name__ == "__main__":
    unittest.main()
