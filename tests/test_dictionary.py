import random
import tempfile
import unittest
from pathlib import Path

from wordtravel.data.dictionary import DictionaryConfig, WordDictionary
from wordtravel.data.normalization import clean_word


class NormalizationTests(unittest.TestCase):
    def test_clean_word_lowercases_plain_words(self) -> None:
        self.assertEqual(clean_word("  Cat "), "cat")

    def test_clean_word_rejects_non_letters(self) -> None:
        self.assertEqual(clean_word("x-y"), "")
        self.assertEqual(clean_word("c4t"), "")
        self.assertEqual(clean_word(""), "")


class InMemoryDictionaryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dictionary = WordDictionary.from_words(["cat", "dog"])

    def test_lookup_is_case_insensitive(self) -> None:
        self.assertTrue(self.dictionary.is_valid_word("CAT"))
        self.assertTrue(self.dictionary.is_valid_word("Dog"))

    def test_rejects_unknown_and_unsupported_lengths(self) -> None:
        self.assertFalse(self.dictionary.is_valid_word("owl"))
        self.assertFalse(self.dictionary.is_valid_word("ca"))
        self.assertFalse(self.dictionary.is_valid_word(""))

    def test_available_lengths_only_lists_loaded_sets(self) -> None:
        self.assertEqual(self.dictionary.get_available_lengths(), [3])
        self.assertEqual(self.dictionary.get_word_count(3), 2)
        self.assertEqual(self.dictionary.get_word_count(4), 0)
        self.assertEqual(self.dictionary.get_word_count(), 2)

    def test_random_word_for_missing_length_is_none(self) -> None:
        self.assertIsNone(self.dictionary.get_random_word(4))
        self.assertIn(self.dictionary.get_random_word(3), {"cat", "dog"})

    def test_words_of_length_returns_a_copy(self) -> None:
        words = self.dictionary.get_words_of_length(3)
        words.append("zzz")
        self.assertEqual(sorted(self.dictionary.get_words_of_length(3)), ["cat", "dog"])
        self.assertEqual(self.dictionary.get_words_of_length(7), [])

    def test_duplicates_are_collapsed(self) -> None:
        dictionary = WordDictionary.from_words(["cat", "CAT", " cat "])
        self.assertEqual(dictionary.get_word_count(3), 1)

    def test_partitions_strictly_by_length(self) -> None:
        dictionary = WordDictionary.from_words(["cat", "frog", "toolongword"])
        self.assertEqual(dictionary.get_available_lengths(), [3, 4])
        self.assertEqual(dictionary.get_words_of_length(4), ["frog"])


class DictionaryLifecycleTests(unittest.TestCase):
    def test_empty_before_initialize(self) -> None:
        dictionary = WordDictionary(DictionaryConfig(words=["cat"]))
        self.assertFalse(dictionary.is_valid_word("cat"))
        self.assertEqual(dictionary.get_word_count(), 0)
        self.assertIsNone(dictionary.get_random_word(3))
        self.assertEqual(dictionary.get_available_lengths(), [])

    def test_initialize_is_idempotent(self) -> None:
        dictionary = WordDictionary(DictionaryConfig(words=["cat", "dog"]))
        dictionary.initialize()
        dictionary.initialize()
        self.assertEqual(dictionary.get_word_count(3), 2)

    def test_seeded_random_word_is_reproducible(self) -> None:
        words = ["cat", "dog", "owl", "bee", "ant"]
        first = WordDictionary.from_words(words, rng=random.Random(7))
        second = WordDictionary.from_words(words, rng=random.Random(7))
        picks = [first.get_random_word(3) for _ in range(5)]
        self.assertEqual(picks, [second.get_random_word(3) for _ in range(5)])


class WordFileTests(unittest.TestCase):
    def test_loads_word_files_from_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir)
            (path / "words_3.txt").write_text(
                "# three letters\nCat\n\ndog\nx-y\nfrog\n", encoding="utf-8"
            )
            dictionary = WordDictionary(DictionaryConfig(path=path, lengths=(3, 4)))
            with self.assertLogs("wordtravel.data.dictionary", level="WARNING") as logs:
                dictionary.initialize()

        self.assertTrue(any("words_4.txt" in line for line in logs.output))
        self.assertEqual(sorted(dictionary.get_words_of_length(3)), ["cat", "dog"])
        self.assertEqual(dictionary.get_words_of_length(4), ["frog"])
        self.assertEqual(dictionary.get_available_lengths(), [3, 4])

    def test_missing_directory_yields_empty_dictionary(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            dictionary = WordDictionary(DictionaryConfig(path=Path(tmpdir) / "missing"))
            with self.assertLogs("wordtravel.data.dictionary", level="WARNING"):
                dictionary.initialize()
        self.assertEqual(dictionary.get_word_count(), 0)
        self.assertFalse(dictionary.is_valid_word("cat"))


class BundledDictionaryTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.dictionary = WordDictionary(DictionaryConfig(rng=random.Random(3)))
        cls.dictionary.initialize()

    def test_loads_every_supported_length(self) -> None:
        self.assertEqual(self.dictionary.get_available_lengths(), [3, 4, 5, 6])
        for length in (3, 4, 5, 6):
            self.assertGreater(self.dictionary.get_word_count(length), 0)

    def test_contains_common_words(self) -> None:
        for word in ("cat", "dog", "run", "word", "apple", "garden"):
            self.assertTrue(self.dictionary.is_valid_word(word), word)
        self.assertFalse(self.dictionary.is_valid_word("verylongword"))

    def test_random_words_have_requested_length(self) -> None:
        for length in (3, 4, 5, 6):
            word = self.dictionary.get_random_word(length)
            self.assertIsNotNone(word)
            assert word is not None
            self.assertEqual(len(word), length)
            self.assertTrue(self.dictionary.is_valid_word(word))
        self.assertIsNone(self.dictionary.get_random_word(2))
        self.assertIsNone(self.dictionary.get_random_word(7))

    def test_random_words_vary(self) -> None:
        picks = {self.dictionary.get_random_word(3) for _ in range(20)}
        self.assertGreater(len(picks), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
