import unittest

from kjvguard.books import CANONICAL_NAMES
from kjvguard.errors import BookNotFoundError, ReferenceMalformedError
from kjvguard.index import build_book_index
from kjvguard.model import ParsedReference
from kjvguard.reference import parse_reference, split_reference


class SplitReferenceTests(unittest.TestCase):
    def test_single_verse(self):
        self.assertEqual(split_reference("John 3:16"), ("John", 3, 16))

    def test_chapter_only(self):
        self.assertEqual(split_reference("  Ps 23 "), ("Ps", 23, None))

    def test_book_only(self):
        self.assertEqual(split_reference("John"), ("John", None, None))

    def test_numbered_and_multiword(self):
        self.assertEqual(split_reference("1John 4:2"), ("1John", 4, 2))
        self.assertEqual(split_reference("1 John 4 : 2"), ("1 John", 4, 2))
        self.assertEqual(split_reference("Song of Solomon 2:1"), ("Song of Solomon", 2, 1))

    def test_leading_zeros_are_base_ten(self):
        self.assertEqual(split_reference("Gen 01:010"), ("Gen", 1, 10))

    def test_malformed(self):
        for text in ("", "   ", "John 3:", "John 3:16-18", "3:16", "John 3:16a", "John: 3", "Gen 1:1, 2"):
            with self.assertRaises(ReferenceMalformedError, msg=text):
                split_reference(text)


class ParseReferenceTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.index = build_book_index(CANONICAL_NAMES)

    def test_resolves_book(self):
        self.assertEqual(
            parse_reference("1jn 4:2", self.index),
            ParsedReference(book="1 John", chapter=4, verse=2),
        )

    def test_spacing_case_and_periods(self):
        expected = parse_reference("1 John 4:2", self.index)
        for text in ("1John 4:2", "1 JOHN 4:2", "1 Jn. 4:2", "I John 4:2", "first john 4:2"):
            self.assertEqual(parse_reference(text, self.index), expected, text)

    def test_chapter_and_book_only(self):
        self.assertEqual(parse_reference("Ps 23", self.index), ParsedReference("Psalms", 23, None))
        self.assertEqual(parse_reference("John", self.index), ParsedReference("John"))

    def test_unknown_book_is_not_malformed(self):
        with self.assertRaises(BookNotFoundError) as cm:
            parse_reference("Frodo 1:1", self.index)
        self.assertNotIsInstance(cm.exception, ReferenceMalformedError)
        self.assertEqual(cm.exception.kind, "book_not_found")
        self.assertEqual(cm.exception.ref, "Frodo 1:1")

    def test_malformed_before_lookup(self):
        with self.assertRaises(ReferenceMalformedError):
            parse_reference("Frodo 1:", self.index)

    def test_label(self):
        self.assertEqual(parse_reference("song 2:1", self.index).label(), "Song of Solomon 2:1")
        self.assertEqual(parse_reference("ps 23", self.index).label(), "Psalms 23")


if __name__ == "__main__":
    unittest.main()
