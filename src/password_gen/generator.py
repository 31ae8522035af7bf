"""
PasswordGenerator: Turn a randomness source into passwords and passphrases.

Each generator owns its randomness source. It is not safe to call
generate() on one instance from several threads at once; build one
generator per thread and share the read-only dictionary instead.
"""

import logging
import random
import secrets
from typing import List, Optional, Sequence

from .dictionary import WordDictionary, is_control
from .models import CharSetKind, ConfigurationError, GenerationRequest

logger = logging.getLogger(__name__)


# Consecutive rejected draws before a Unicode request is declared unsatisfiable
MAX_CONSECUTIVE_REJECTIONS = 10_000


def is_acceptable(ch: str, request: GenerationRequest) -> bool:
    """Check a candidate character against the request's policy flags."""
    if is_control(ch):
        return False
    if not request.include_whitespace and ch.isspace():
        return False
    if request.alphanumeric_only and not ch.isalnum():
        return False
    return True


class PasswordGenerator:
    """
    Generates passwords that match a GenerationRequest.

    Holds the randomness source so it is reused across calls, and the
    dictionary so it is loaded once.
    """

    def __init__(
        self,
        dictionary: Optional[WordDictionary] = None,
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the generator.

        Args:
            dictionary: Word dictionary (default: bundled dictionary)
            random_seed: Seed for reproducibility. Seeded generators are
                deterministic and not suitable for real credentials.
            rng: Explicit randomness source, overrides random_seed
        """
        self.dictionary = dictionary if dictionary is not None else WordDictionary.default()

        if rng is not None:
            self.rng = rng
        elif random_seed is not None:
            self.rng = random.Random(random_seed)
        else:
            self.rng = secrets.SystemRandom()

    def generate(self, request: GenerationRequest) -> str:
        """
        Generate a password matching the request.

        For PASSPHRASE, request.length is a word count and the result is
        longer than that. For the other sets the result holds exactly
        request.length characters.

        Raises:
            ConfigurationError: If no character satisfies the request's
                policy flags
        """
        if request.length <= 0:
            return ""

        logger.debug(
            "Generating %s password (length=%d, alphanumeric_only=%s, include_whitespace=%s)",
            request.char_set.value,
            request.length,
            request.alphanumeric_only,
            request.include_whitespace,
        )

        if request.char_set is CharSetKind.PASSPHRASE:
            return self._generate_passphrase(request)
        if request.char_set is CharSetKind.UNICODE:
            return self._generate_unicode(request)
        return self._generate_from_universe(request)

    def generate_many(self, request: GenerationRequest, count: int) -> List[str]:
        """Generate `count` independent passwords for the same request."""
        return [self.generate(request) for _ in range(count)]

    def _generate_from_universe(self, request: GenerationRequest) -> str:
        """Filter the universe once, then sample uniformly from what is left."""
        universe = self.dictionary.universe(request.char_set)
        allowed = [ch for ch in universe if is_acceptable(ch, request)]

        if not allowed:
            raise ConfigurationError(
                f"No {request.char_set.value} character satisfies the requested "
                f"constraints (alphanumeric_only={request.alphanumeric_only}, "
                f"include_whitespace={request.include_whitespace})"
            )

        return "".join(self.rng.choice(allowed) for _ in range(request.length))

    def _generate_unicode(self, request: GenerationRequest) -> str:
        """Rejection-sample over the full scalar range."""
        universe = self.dictionary.universe(CharSetKind.UNICODE)
        chars = []
        rejections = 0
        while len(chars) < request.length:
            ch = self.rng.choice(universe)
            if is_acceptable(ch, request):
                chars.append(ch)
                rejections = 0
                continue

            rejections += 1
            if rejections >= MAX_CONSECUTIVE_REJECTIONS:
                raise ConfigurationError(
                    f"No unicode character satisfied the requested constraints "
                    f"after {rejections} consecutive draws"
                )

        return "".join(chars)

    def _acceptable_tokens(
        self, tokens: Sequence[str], kind: str, request: GenerationRequest
    ) -> List[str]:
        """Dictionary tokens whose every character passes the policy flags."""
        allowed = [t for t in tokens if all(is_acceptable(ch, request) for ch in t)]
        if not allowed:
            raise ConfigurationError(
                f"No dictionary {kind} satisfy the requested constraints "
                f"(alphanumeric_only={request.alphanumeric_only}, "
                f"include_whitespace={request.include_whitespace})"
            )
        return allowed

    def _generate_passphrase(self, request: GenerationRequest) -> str:
        """Random words joined by one separator, each word uppercased on a coin flip."""
        word_count = request.length
        words = self._acceptable_tokens(self.dictionary.words, "words", request)

        # One separator for the whole passphrase, only needed between words
        separator = ""
        if word_count > 1:
            separators = self._acceptable_tokens(self.dictionary.separators, "separators", request)
            separator = self.rng.choice(separators)

        parts = []
        for i in range(word_count):
            word = self.rng.choice(words)
            if self.rng.random() < 0.5:
                word = word.upper()
            parts.append(word)
            if i < word_count - 1:
                parts.append(separator)

        return "".join(parts)
