"""Unit tests for app.services.validation: field rules and lenient page/limit parsing."""

import unittest

from app.services.validation import (
    coerce_positive_int,
    normalize_email,
    normalize_search,
    parse_book_id,
    validate_book_changes,
    validate_new_book,
    validate_registration,
)


class TestValidateRegistration(unittest.TestCase):
    """Registration needs all three fields; username and email are normalized."""

    def test_valid_input_is_normalized(self) -> None:
        result = validate_registration("  alice ", "  Alice@Example.COM ", " pw ")
        self.assertTrue(result.ok)
        self.assertEqual(result.values["username"], "alice")
        self.assertEqual(result.values["email"], "alice@example.com")
        # Passwords are not trimmed.
        self.assertEqual(result.values["password"], " pw ")

    def test_missing_fields_reported_individually(self) -> None:
        result = validate_registration(None, "", "")
        self.assertFalse(result.ok)
        self.assertEqual(
            sorted(e.field for e in result.errors), ["email", "password", "username"]
        )

    def test_whitespace_only_username_is_missing(self) -> None:
        result = validate_registration("   ", "a@b.c", "pw")
        self.assertEqual([e.field for e in result.errors], ["username"])

    def test_long_username_has_no_cap(self) -> None:
        result = validate_registration("u" * 1000, "a@b.c", "pw")
        self.assertTrue(result.ok)
        self.assertEqual(len(result.values["username"]), 1000)

    def test_normalize_email_non_string(self) -> None:
        self.assertEqual(normalize_email(None), "")
        self.assertEqual(normalize_email(" X@Y.Z "), "x@y.z")


class TestValidateNewBook(unittest.TestCase):
    """Creation requires title, author and a truthy year."""

    def test_valid_book(self) -> None:
        result = validate_new_book("  Dune ", " Frank Herbert ", 1965)
        self.assertTrue(result.ok)
        self.assertEqual(result.values, {"title": "Dune", "author": "Frank Herbert", "year": 1965})

    def test_year_omitted_fails(self) -> None:
        result = validate_new_book("Dune", "Frank Herbert", None)
        self.assertEqual([e.field for e in result.errors], ["year"])

    def test_year_zero_counts_as_missing(self) -> None:
        result = validate_new_book("Dune", "Frank Herbert", 0)
        self.assertFalse(result.ok)
        self.assertEqual(result.errors[0].message, "year is required")

    def test_non_numeric_year_fails(self) -> None:
        for year in ("1965", True, float("inf"), float("nan")):
            with self.subTest(year=year):
                result = validate_new_book("Dune", "Frank Herbert", year)
                self.assertEqual(result.errors[0].message, "year must be a number")

    def test_fractional_year_allowed(self) -> None:
        self.assertEqual(validate_new_book("Almanac", "Anon", 1999.5).values["year"], 1999.5)

    def test_long_title_has_no_cap(self) -> None:
        self.assertTrue(validate_new_book("T" * 300, "A", 2000).ok)

    def test_negative_year_allowed(self) -> None:
        self.assertTrue(validate_new_book("Odyssey", "Homer", -700).ok)

    def test_blank_title_fails(self) -> None:
        result = validate_new_book("  ", "Homer", 1)
        self.assertEqual([e.field for e in result.errors], ["title"])


class TestValidateBookChanges(unittest.TestCase):
    """Updates only check the keys they carry."""

    def test_empty_changes_ok(self) -> None:
        result = validate_book_changes({})
        self.assertTrue(result.ok)
        self.assertEqual(result.values, {})

    def test_partial_update(self) -> None:
        result = validate_book_changes({"year": 2010})
        self.assertEqual(result.values, {"year": 2010})

    def test_year_can_be_cleared_or_zero(self) -> None:
        self.assertEqual(validate_book_changes({"year": None}).values, {"year": None})
        self.assertEqual(validate_book_changes({"year": 0}).values, {"year": 0})

    def test_year_may_be_fractional_not_text(self) -> None:
        self.assertEqual(validate_book_changes({"year": 2010.25}).values, {"year": 2010.25})
        self.assertFalse(validate_book_changes({"year": "2010"}).ok)

    def test_title_cannot_be_emptied_or_nulled(self) -> None:
        self.assertFalse(validate_book_changes({"title": ""}).ok)
        self.assertFalse(validate_book_changes({"title": None}).ok)

    def test_author_is_trimmed(self) -> None:
        self.assertEqual(validate_book_changes({"author": " Le Guin "}).values, {"author": "Le Guin"})

    def test_unknown_keys_ignored(self) -> None:
        self.assertEqual(validate_book_changes({"isbn": "123"}).values, {})


class TestParseBookId(unittest.TestCase):
    def test_well_formed(self) -> None:
        self.assertEqual(parse_book_id("42"), 42)
        self.assertEqual(parse_book_id(3), 3)

    def test_malformed(self) -> None:
        for raw in ("abc", "", "-1", "0", "1.5", " 4", "²", None, True, 0):
            with self.subTest(raw=raw):
                self.assertIsNone(parse_book_id(raw))


class TestCoercePositiveInt(unittest.TestCase):
    """Missing, zero and non-numeric fall back to the default; negatives become 1."""

    def test_defaults(self) -> None:
        self.assertEqual(coerce_positive_int(None, 1), 1)
        self.assertEqual(coerce_positive_int(None, 5), 5)
        self.assertEqual(coerce_positive_int("abc", 5), 5)
        self.assertEqual(coerce_positive_int("0", 5), 5)

    def test_negative_floored_to_one(self) -> None:
        self.assertEqual(coerce_positive_int("-3", 5), 1)
        self.assertEqual(coerce_positive_int(-1, 1), 1)

    def test_leading_integer_parsed(self) -> None:
        self.assertEqual(coerce_positive_int("3abc", 1), 3)
        self.assertEqual(coerce_positive_int("2.7", 1), 2)
        self.assertEqual(coerce_positive_int(" 4", 1), 4)

    def test_plain_values(self) -> None:
        self.assertEqual(coerce_positive_int("10", 5), 10)
        self.assertEqual(coerce_positive_int(2, 5), 2)


class TestNormalizeSearch(unittest.TestCase):
    def test_trim_and_empty(self) -> None:
        self.assertEqual(normalize_search("  gatsby "), "gatsby")
        self.assertEqual(normalize_search("   "), "")
        self.assertEqual(normalize_search(None), "")


if __name__ == "__main__":
    unittest.main()
