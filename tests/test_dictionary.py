import tempfile
import unittest
from pathlib import Path

from crossfill.core.exceptions import DictionaryLoadError
from crossfill.data.dictionary import DictionaryConfig, WordDictionary
from crossfill.data.normalization import normalize_word


class DictionaryTests(unittest.TestCase):
    def test_normalize_word_strips_and_uppercases(self) -> None:
        self.assertEqual(normalize_word("  cat \n"), "CAT")
        self.assertEqual(normalize_word(""), "")

    def test_words_grouped_by_length_and_deduplicated(self) -> None:
        dictionary = WordDictionary.from_words(["dog", "Cat", "CAT", "ox", "bird"])
        self.assertEqual(dictionary.lookup(3), ("CAT", "DOG"))
        self.assertEqual(dictionary.lookup(2), ("OX",))
        self.assertEqual(dictionary.lookup(4), ("BIRD",))
        self.assertEqual(dictionary.lengths(), [2, 3, 4])
        self.assertEqual(len(dictionary), 4)

    def test_lookup_unknown_length_is_empty(self) -> None:
        dictionary = WordDictionary.from_words(["cat"])
        self.assertEqual(dictionary.lookup(7), ())

    def test_contains_is_case_insensitive(self) -> None:
        dictionary = WordDictionary.from_words(["cat"])
        self.assertTrue(dictionary.contains("cat"))
        self.assertTrue(dictionary.contains("CAT"))
        self.assertFalse(dictionary.contains("CATS"))

    def test_load_skips_blank_and_comment_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            sample = Path(tmpdir) / "words.txt"
            sample.write_text("# pets\ncat\n\n  dog  \nDog\r\nmouse\n", encoding="utf-8")

            dictionary = WordDictionary.load(sample)
            self.assertEqual(dictionary.lookup(3), ("CAT", "DOG"))
            self.assertEqual(dictionary.lookup(5), ("MOUSE",))
            self.assertEqual(len(dictionary), 3)

    def test_length_limits_drop_words(self) -> None:
        dictionary = WordDictionary.from_words(
            ["a", "to", "cat", "bird"], min_length=2, max_length=3
        )
        self.assertEqual(dictionary.lengths(), [2, 3])

    def test_missing_file_is_configuration_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(DictionaryLoadError):
                WordDictionary(DictionaryConfig(path=Path(tmpdir) / "missing.txt"))

    def test_undecodable_file_is_configuration_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            sample = Path(tmpdir) / "words.txt"
            sample.write_bytes(b"\xff\xfe\xfa\n")
            with self.assertRaises(DictionaryLoadError):
                WordDictionary(DictionaryConfig(path=sample, encoding="ascii"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
