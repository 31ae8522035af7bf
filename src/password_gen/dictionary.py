"""
WordDictionary: Words, separators and character universes.

The dictionary is read-only once built and may be shared between
generators. Character universes are static lookups; full Unicode is
never materialized and is sampled by index instead.
"""

import logging
import string
import unicodedata
from collections.abc import Sequence
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

import yaml

from .models import CharSetKind, ConfigurationError

logger = logging.getLogger(__name__)


DEFAULT_DICTIONARY_PATH = Path(__file__).parent / "data" / "dictionary.yaml"

# Surrogate block, not valid scalar values
SURROGATE_START = 0xD800
SURROGATE_END = 0xDFFF
UNICODE_MAX = 0x10FFFF
UNICODE_SCALAR_COUNT = UNICODE_MAX + 1 - (SURROGATE_END - SURROGATE_START + 1)

_ASCII_PRINTABLE = "".join(chr(c) for c in range(0x20, 0x7F))
# Latin-1 without the C1 control block
_ASCII_EXTENDED = _ASCII_PRINTABLE + "".join(chr(c) for c in range(0xA0, 0x100))

_default_dictionary: Optional["WordDictionary"] = None


def is_control(ch: str) -> bool:
    """True for control characters (Unicode category Cc)."""
    return unicodedata.category(ch) == "Cc"


def scalar_from_index(index: int) -> str:
    """
    Map an index in [0, UNICODE_SCALAR_COUNT) to a Unicode scalar value.

    Indexes at or above the surrogate block are shifted past it, so a
    uniform index gives a uniform scalar.
    """
    if not 0 <= index < UNICODE_SCALAR_COUNT:
        raise ValueError(f"Scalar index out of range: {index}")
    if index >= SURROGATE_START:
        index += SURROGATE_END - SURROGATE_START + 1
    return chr(index)


class UnicodeScalars(Sequence):
    """
    Every Unicode scalar value as a lazy sequence.

    Indexing goes through scalar_from_index, so rng.choice() draws
    uniformly without building a list of a million characters.
    """

    def __len__(self) -> int:
        return UNICODE_SCALAR_COUNT

    def __getitem__(self, index):
        if isinstance(index, slice):
            raise TypeError("UnicodeScalars does not support slicing")
        if index < 0:
            index += UNICODE_SCALAR_COUNT
        try:
            return scalar_from_index(index)
        except ValueError:
            raise IndexError(f"Scalar index out of range: {index}") from None

    def __repr__(self) -> str:
        return f"UnicodeScalars({UNICODE_SCALAR_COUNT})"


UNICODE_SCALARS = UnicodeScalars()

CHARACTER_UNIVERSES: Dict[CharSetKind, Sequence[str]] = {
    CharSetKind.ASCII: _ASCII_PRINTABLE,
    CharSetKind.ASCII_EXTENDED: _ASCII_EXTENDED,
    CharSetKind.UNICODE: UNICODE_SCALARS,
    CharSetKind.NUMBERS: string.digits,
    CharSetKind.ALPHANUMERIC: string.ascii_letters + string.digits,
}


class WordDictionary:
    """
    Words and separator tokens for passphrase generation.

    Both sequences must be non-empty, contain no empty entries and share
    no tokens. Violations are reported when the dictionary is built.
    """

    def __init__(self, words: Iterable[str], separators: Iterable[str]):
        self._words: Tuple[str, ...] = tuple(words)
        self._separators: Tuple[str, ...] = tuple(separators)
        self._validate()

    def _validate(self) -> None:
        for name, entries in (("words", self._words), ("separators", self._separators)):
            if not entries:
                raise ConfigurationError(f"Dictionary has no {name}")
            for entry in entries:
                if not isinstance(entry, str) or not entry:
                    raise ConfigurationError(
                        f"Dictionary {name} contain an empty or non-string entry: {entry!r}"
                    )

        overlap = set(self._words) & set(self._separators)
        if overlap:
            raise ConfigurationError(
                f"Dictionary words and separators overlap: {sorted(overlap)}"
            )

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "WordDictionary":
        """
        Load a dictionary from a YAML file.

        The document needs top-level `words` and `separators` lists.
        Without a path the bundled dictionary is used.

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        path = Path(path) if path is not None else DEFAULT_DICTIONARY_PATH

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read dictionary {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed dictionary {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Dictionary {path} is not a mapping")

        words = data.get("words") or []
        separators = data.get("separators") or []
        if not isinstance(words, list) or not isinstance(separators, list):
            raise ConfigurationError(
                f"Dictionary {path}: words and separators must be lists"
            )

        dictionary = cls(words=words, separators=separators)
        logger.debug(
            "Loaded dictionary %s (%d words, %d separators)",
            path, len(dictionary.words), len(dictionary.separators),
        )
        return dictionary

    @classmethod
    def default(cls) -> "WordDictionary":
        """Shared instance of the bundled dictionary, loaded on first use."""
        global _default_dictionary
        if _default_dictionary is None:
            _default_dictionary = cls.load()
        return _default_dictionary

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    @property
    def separators(self) -> Tuple[str, ...]:
        return self._separators

    @staticmethod
    def universe(char_set: CharSetKind) -> Sequence[str]:
        """
        Get the base character universe for a character set.

        UNICODE gives the lazy UNICODE_SCALARS sequence; the other sets
        give a plain string.

        Raises:
            ValueError: For PASSPHRASE (word based, no character universe)
        """
        try:
            return CHARACTER_UNIVERSES[char_set]
        except KeyError:
            raise ValueError(f"No character universe for {char_set.value}") from None

    def __repr__(self) -> str:
        return (
            f"WordDictionary(words={len(self._words)}, "
            f"separators={len(self._separators)})"
        )
