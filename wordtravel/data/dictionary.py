"""Length-indexed word lists used as the spelling oracle."""

from __future__ import annotations

import random
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..core.constants import SUPPORTED_WORD_LENGTHS
from ..utils.logger import get_logger
from .normalization import clean_word


LOGGER = get_logger(__name__)

BUNDLED_WORDS_DIR = Path(__file__).resolve().parent / "words"


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading."""

    path: Path | str | None = None
    lengths: Sequence[int] = SUPPORTED_WORD_LENGTHS
    words: Optional[Iterable[str]] = None
    rng: Optional[random.Random] = None


class WordDictionary:
    """Word sets partitioned strictly by letter count.

    Nothing here raises: missing data simply yields empty lists, zero counts
    or ``None``. Lookups before :meth:`initialize` see an empty dictionary.
    """

    def __init__(self, config: Optional[DictionaryConfig] = None) -> None:
        self.config = config or DictionaryConfig()
        self._rng = self.config.rng or random.Random()
        self._words_by_length: Dict[int, List[str]] = defaultdict(list)
        self._surfaces_by_length: Dict[int, Set[str]] = defaultdict(set)
        self._loaded = False

    @classmethod
    def from_words(cls, words: Iterable[str], rng: Optional[random.Random] = None) -> "WordDictionary":
        """Build and initialize a dictionary from an in-memory word list."""

        dictionary = cls(DictionaryConfig(words=list(words), rng=rng))
        dictionary.initialize()
        return dictionary

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def initialize(self) -> None:
        if self._loaded:
            return
        if self.config.words is not None:
            self._hydrate(self.config.words)
        else:
            source = Path(self.config.path) if self.config.path is not None else BUNDLED_WORDS_DIR
            for length in self.config.lengths:
                self._hydrate(self._read_word_file(source / f"words_{length}.txt"))
        self._loaded = True
        LOGGER.info(
            "Dictionary loaded: %s words across lengths %s",
            self.get_word_count(),
            self.get_available_lengths(),
        )

    @staticmethod
    def _read_word_file(path: Path) -> List[str]:
        if not path.exists():
            LOGGER.warning("Missing word list: %s", path)
            return []
        entries: List[str] = []
        for line in path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            entries.append(line)
        return entries

    def _hydrate(self, words: Iterable[str]) -> None:
        allowed = set(self.config.lengths)
        for raw in words:
            word = clean_word(raw)
            if not word or len(word) not in allowed:
                continue
            surfaces = self._surfaces_by_length[len(word)]
            if word in surfaces:
                continue
            surfaces.add(word)
            self._words_by_length[len(word)].append(word)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def is_valid_word(self, word: str) -> bool:
        if not word:
            return False
        surfaces = self._surfaces_by_length.get(len(word))
        if not surfaces:
            return False
        return word.lower() in surfaces

    def get_random_word(self, length: int) -> Optional[str]:
        words = self._words_by_length.get(length)
        if not words:
            return None
        return self._rng.choice(words)

    def get_words_of_length(self, length: int) -> List[str]:
        return list(self._words_by_length.get(length, []))

    def get_word_count(self, length: Optional[int] = None) -> int:
        if length is not None:
            return len(self._surfaces_by_length.get(length, ()))
        return sum(len(words) for words in self._surfaces_by_length.values())

    def get_available_lengths(self) -> List[int]:
        return sorted(length for length, words in self._surfaces_by_length.items() if words)
