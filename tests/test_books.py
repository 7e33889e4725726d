import unittest

from kjvguard.books import (
    ABBREVIATIONS,
    CANON,
    CANONICAL_NAMES,
    SOURCE_ABBREVIATIONS,
    canonical_case,
    translate_source_abbrev,
)


class CanonTests(unittest.TestCase):
    def test_sixty_six_books(self):
        self.assertEqual(len(CANON), 66)
        self.assertEqual(len(set(CANONICAL_NAMES)), 66)
        self.assertEqual(len({b.code for b in CANON}), 66)

    def test_testaments(self):
        self.assertEqual(CANON[38].name, "Malachi")
        self.assertEqual(CANON[38].testament, "OT")
        self.assertEqual(CANON[39].name, "Matthew")
        self.assertEqual(CANON[39].testament, "NT")

    def test_abbreviation_table_covers_canon_in_order(self):
        self.assertEqual(tuple(ABBREVIATIONS), CANONICAL_NAMES)
        for name, abbrevs in ABBREVIATIONS.items():
            self.assertTrue(abbrevs, name)

    def test_numbered_variants(self):
        cor = ABBREVIATIONS["1 Corinthians"]
        for spelling in ("1 Cor", "I Cor", "First Corinthians", "1st Cor", "1CO"):
            self.assertIn(spelling, cor)
        self.assertIn("III John", ABBREVIATIONS["3 John"])


class SourceAbbreviationTests(unittest.TestCase):
    def test_one_code_per_book(self):
        self.assertEqual(len(SOURCE_ABBREVIATIONS), 66)
        self.assertEqual(set(SOURCE_ABBREVIATIONS.values()), set(CANONICAL_NAMES))

    def test_translate(self):
        self.assertEqual(translate_source_abbrev("gn"), "Genesis")
        self.assertEqual(translate_source_abbrev("1jo"), "1 John")
        self.assertEqual(translate_source_abbrev(" RE "), "Revelation")

    def test_source_codes_differ_from_scholarly_ones(self):
        self.assertEqual(translate_source_abbrev("jn"), "Jonah")
        self.assertEqual(translate_source_abbrev("jud"), "Judges")
        self.assertIsNone(translate_source_abbrev("zz"))


class CanonicalCaseTests(unittest.TestCase):
    def test_known_names(self):
        self.assertEqual(canonical_case("song of solomon"), "Song of Solomon")
        self.assertEqual(canonical_case("  1   JOHN "), "1 John")

    def test_unknown_name_kept(self):
        self.assertEqual(canonical_case(" Frodo  Baggins "), "Frodo Baggins")


if __name__ == "__main__":
    unittest.main()
