import unittest

from stackedroll.core.importer import (
    EmptyInputError,
    NoValidRowsError,
    StackedRollImportError,
    parse_import,
)
from stackedroll.core.names import normalize, separate_values


class NameTests(unittest.TestCase):
    def test_normalize(self) -> None:
        self.assertEqual(normalize("  FooBar "), "foobar")
        self.assertEqual(normalize(normalize("  FooBar ")), "foobar")
        self.assertEqual(normalize(None), "")
        self.assertEqual(normalize(12), "")

    def test_separate_values(self) -> None:
        self.assertEqual(separate_values("Foobar,240,Barfoo"), ["Foobar", "240", "Barfoo"])
        self.assertEqual(separate_values("Foobar\t240\tBarfoo"), ["Foobar", "240", "Barfoo"])
        self.assertEqual(separate_values("Foobar   240 Barfoo"), ["Foobar", "240", "Barfoo"])
        self.assertEqual(separate_values("Foobar, 240, Barfoo\r"), ["Foobar", "240", "Barfoo"])
        self.assertEqual(separate_values("Foobar,,Barfoo"), ["Foobar", "", "Barfoo"])
        self.assertEqual(separate_values("   "), [])


class ImporterTests(unittest.TestCase):
    def test_basic_import(self) -> None:
        result = parse_import("Foobar,240,Barfoo", now=1700000000)
        self.assertEqual(result.points, {"foobar": 240})
        self.assertEqual(result.aliases, {"barfoo": "foobar"})
        self.assertEqual(result.metadata.imported_at, 1700000000)
        self.assertEqual(result.metadata.import_string, "Foobar,240,Barfoo")

    def test_mixed_separators_and_blank_lines(self) -> None:
        raw = "Alice\t120\tAli\n\nBob 80\r\nCarl, 12.7, Carlito, Carlos\n"
        result = parse_import(raw, now=1)
        self.assertEqual(result.points, {"alice": 120, "bob": 80, "carl": 12})
        self.assertEqual(
            result.aliases,
            {"ali": "alice", "carlito": "carl", "carlos": "carl"},
        )
        self.assertEqual(result.skipped_lines, [])

    def test_blank_input_is_rejected(self) -> None:
        for raw in ["", "   ", "\n\t\n"]:
            with self.subTest(raw=raw):
                with self.assertRaises(EmptyInputError):
                    parse_import(raw)

    def test_no_valid_rows(self) -> None:
        with self.assertRaises(NoValidRowsError) as ctx:
            parse_import("onlyname,notanumber")
        self.assertIn("no header row", str(ctx.exception))
        self.assertIsInstance(ctx.exception, StackedRollImportError)

    def test_header_row_is_skipped(self) -> None:
        result = parse_import("Name,Points,Aliases\nFoo,10")
        self.assertEqual(result.points, {"foo": 10})
        self.assertEqual(result.skipped_lines, [1])

    def test_first_occurrence_of_player_wins(self) -> None:
        result = parse_import("Foo,10\nFOO,20")
        self.assertEqual(result.points, {"foo": 10})
        self.assertEqual(result.skipped_lines, [2])

    def test_negative_points_are_clamped(self) -> None:
        result = parse_import("Foo,-10")
        self.assertEqual(result.points, {"foo": 0})

    def test_first_alias_claim_wins(self) -> None:
        result = parse_import("Foo,10,Twink\nBar,5,Twink,Other")
        self.assertEqual(result.aliases, {"twink": "foo", "other": "bar"})

    def test_alias_cannot_be_an_earlier_player(self) -> None:
        result = parse_import("Bar,5\nFoo,10,Bar")
        self.assertEqual(result.aliases, {})

    def test_alias_cannot_be_a_later_player(self) -> None:
        result = parse_import("Foo,10,Bar\nBar,5")
        self.assertEqual(result.points, {"foo": 10, "bar": 5})
        self.assertEqual(result.aliases, {})

    def test_aliases_of_rejected_lines_are_ignored(self) -> None:
        result = parse_import("Foo,abc,Twink\nBar,5")
        self.assertEqual(result.points, {"bar": 5})
        self.assertEqual(result.aliases, {})


if __name__ == "__main__":
    unittest.main()
