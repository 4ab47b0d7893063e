"""Word list loading and per-length candidate pools."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import normalize_word


LOGGER = get_logger(__name__)

COMMENT_PREFIX = "#"


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and filtering."""

    path: Path | str
    min_length: int = 1
    max_length: Optional[int] = None
    encoding: str = "utf-8"


class WordDictionary:
    """Groups a flat word list into immutable pools keyed by word length.

    Each pool is deduplicated and sorted once at build time. Pools are handed
    out as tuples and reused directly as the initial domain of every slot of
    that length, so their order is part of the search behaviour.
    """

    def __init__(self, config: DictionaryConfig, words: Optional[Iterable[str]] = None) -> None:
        self.config = config
        self._pools: Dict[int, Tuple[str, ...]] = {}
        self._members: Dict[int, Set[str]] = {}
        if words is None:
            words = self._read_lines()
        self._build(words)

    @classmethod
    def load(cls, path: Path | str) -> "WordDictionary":
        return cls(DictionaryConfig(path=path))

    @classmethod
    def from_words(cls, words: Iterable[str], **options) -> "WordDictionary":
        """Build an in-memory dictionary, mostly useful for tests and tooling."""

        return cls(DictionaryConfig(path="<memory>", **options), words=words)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _read_lines(self) -> List[str]:
        source = Path(self.config.path)
        if not source.exists():
            raise DictionaryLoadError(f"Missing dictionary file: {source}")
        try:
            text = source.read_text(encoding=self.config.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryLoadError(f"Unable to read dictionary {source}: {exc}") from exc
        return text.splitlines()

    def _build(self, lines: Iterable[str]) -> None:
        grouped: Dict[int, Set[str]] = defaultdict(set)
        for line in lines:
            word = normalize_word(line)
            if not word or word.startswith(COMMENT_PREFIX):
                continue
            if not self._accepts_length(len(word)):
                continue
            grouped[len(word)].add(word)

        self._members = dict(grouped)
        self._pools = {length: tuple(sorted(words)) for length, words in grouped.items()}
        LOGGER.info(
            "Dictionary ready: %d words across %d lengths",
            len(self),
            len(self._pools),
        )

    def _accepts_length(self, length: int) -> bool:
        if length < self.config.min_length:
            return False
        return self.config.max_length is None or length <= self.config.max_length

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def lookup(self, length: int) -> Tuple[str, ...]:
        return self._pools.get(length, ())

    def contains(self, word: str) -> bool:
        normalized = normalize_word(word)
        return normalized in self._members.get(len(normalized), ())

    def lengths(self) -> List[int]:
        return sorted(self._pools)

    def __len__(self) -> int:
        return sum(len(pool) for pool in self._pools.values())
