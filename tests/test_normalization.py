import unittest

from gift_lookup.models.lookup import NormalizedIdentity
from gift_lookup.utils.normalization import (
    InvalidLookupRequest, normalize_identity, normalize_last_name, normalize_postcode
)


class TestNormalization(unittest.TestCase):
    def test_last_name_trimmed_and_lowercased(self):
        self.assertEqual(normalize_last_name("  Smith "), "smith")
        self.assertEqual(normalize_last_name("O'Brien"), "o'brien")

    def test_postcode_spaces_and_hyphens_removed(self):
        self.assertEqual(normalize_postcode("SW1A 1-AA"), "SW1A1AA")
        self.assertEqual(normalize_postcode("sw1a1aa"), "SW1A1AA")
        self.assertEqual(normalize_postcode(" ab1\t2cd "), "AB12CD")

    def test_missing_values_normalize_to_empty(self):
        self.assertEqual(normalize_last_name(None), "")
        self.assertEqual(normalize_postcode(None), "")

    def test_identity_is_case_whitespace_and_hyphen_insensitive(self):
        self.assertEqual(
            normalize_identity("O'Brien", "sw1a 1aa"),
            normalize_identity("o'brien", "SW1A-1AA"),
        )

    def test_normalization_is_idempotent(self):
        once = normalize_identity("  Smith ", "ab1 2-cd")
        twice = normalize_identity(once.last, once.postcode)
        self.assertEqual(once, twice)
        self.assertEqual(once, NormalizedIdentity(last="smith", postcode="AB12CD"))

    def test_blank_fields_rejected(self):
        for last_name, postcode in [("", "AB1 2CD"), ("Smith", ""), ("   ", "AB1"), ("Smith", None), (None, None)]:
            with self.assertRaises(InvalidLookupRequest):
                normalize_identity(last_name, postcode)


if __name__ == '__main__':
    unittest.main()
