"""
Data models for password generation.

A request is a character-set family plus two policy flags. Requests carry
no behavior beyond dict conversion; constraint checking happens at
generation time.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class PasswordGenError(Exception):
    """Base exception for password generation errors."""
    pass


class ParseError(PasswordGenError, ValueError):
    """Raised when a token or serialized request cannot be parsed."""
    pass


class ConfigurationError(PasswordGenError):
    """Raised when a request, dictionary or setting can never be satisfied."""
    pass


# Accepted spellings for each character set (after normalization)
_CHARSET_ALIASES = {
    "ascii": "ascii",
    "asciiextended": "asciiextended",
    "unicode": "unicode",
    "numbers": "numbers",
    "alphanumeric": "alphanumeric",
    "passphrase": "passphrase",
    "xkcd": "passphrase",
}


class CharSetKind(Enum):
    """The set of characters or words a password is drawn from."""
    ASCII = "ascii"
    ASCII_EXTENDED = "asciiextended"
    UNICODE = "unicode"
    NUMBERS = "numbers"
    ALPHANUMERIC = "alphanumeric"
    PASSPHRASE = "passphrase"    # words + separator, "xkcd" style

    @classmethod
    def parse(cls, token: str) -> "CharSetKind":
        """
        Parse a character set name.

        Matching is case-insensitive and ignores hyphens, underscores and
        surrounding whitespace, so "AsciiExtended", "ascii-extended" and
        "ASCII_EXTENDED" are equivalent. "xkcd" is an alias for passphrase.

        Raises:
            ParseError: If the token names no known character set
        """
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            raise ParseError(f"Unrecognized character set: {token!r}")

        key = token.strip().lower().replace("-", "").replace("_", "")
        value = _CHARSET_ALIASES.get(key)
        if value is None:
            raise ParseError(f"Unrecognized character set: {token!r}")
        return cls(value)

    @property
    def is_passphrase(self) -> bool:
        return self is CharSetKind.PASSPHRASE


@dataclass(frozen=True)
class GenerationRequest:
    """Options passed to PasswordGenerator.generate."""
    # Characters in the password, or words in a passphrase
    length: int
    char_set: CharSetKind
    # Restrict output to alphanumeric characters
    alphanumeric_only: bool = False
    # Generally better left off
    include_whitespace: bool = False

    @property
    def is_passphrase(self) -> bool:
        return self.char_set.is_passphrase

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (enum as its string value)."""
        return {
            "length": self.length,
            "char_set": self.char_set.value,
            "alphanumeric_only": self.alphanumeric_only,
            "include_whitespace": self.include_whitespace,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationRequest":
        """
        Build a request from a dictionary produced by to_dict.

        Values go through the same schema as persisted requests: char_set
        may be any token accepted by CharSetKind.parse, flags accept the
        usual boolean spellings ("false", "0", "yes") and default to False.

        Raises:
            ParseError: If a field is missing or holds an invalid value
        """
        from .serialization import request_from_dict

        return request_from_dict(data)
