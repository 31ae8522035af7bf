# -*- coding: utf-8 -*-
"""
Unit tests for PasswordGenerator.
"""

import random
import string
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from password_gen import dictionary as dictionary_module
from password_gen.dictionary import SURROGATE_END, SURROGATE_START, WordDictionary, is_control
from password_gen.generator import MAX_CONSECUTIVE_REJECTIONS, PasswordGenerator
from password_gen.models import CharSetKind, ConfigurationError, GenerationRequest


FIXTURES_DIR = Path(__file__).parent / "fixtures"

CHARACTER_SETS = [cs for cs in CharSetKind if cs is not CharSetKind.PASSPHRASE]


@pytest.fixture
def generator():
    return PasswordGenerator(random_seed=1234)


def _split_passphrase(password, separators):
    """Find the separator used in a passphrase and split on it."""
    used = [sep for sep in separators if sep in password]
    assert len(used) == 1, f"expected one separator in {password!r}, found {used}"
    return used[0], password.split(used[0])


class TestCharacterModes:
    """Tests for character-based generation."""

    @pytest.mark.parametrize("char_set", CHARACTER_SETS)
    @pytest.mark.parametrize("length", [0, 1, 10, 100])
    def test_correct_length(self, generator, char_set, length):
        password = generator.generate(GenerationRequest(length, char_set))
        assert len(password) == length

    def test_pin_is_digits(self, generator):
        for _ in range(20):
            password = generator.generate(GenerationRequest(4, CharSetKind.NUMBERS))
            assert all(ch in string.digits for ch in password)

    def test_alphanumeric(self, generator):
        password = generator.generate(GenerationRequest(200, CharSetKind.ALPHANUMERIC))
        assert all(ch.isalnum() for ch in password)

    @pytest.mark.parametrize("char_set", CHARACTER_SETS)
    def test_alphanumeric_only_flag(self, generator, char_set):
        request = GenerationRequest(200, char_set, alphanumeric_only=True)
        password = generator.generate(request)
        assert all(ch.isalnum() for ch in password)

    @pytest.mark.parametrize("char_set", CHARACTER_SETS)
    def test_whitespace_excluded_by_default(self, generator, char_set):
        password = generator.generate(GenerationRequest(500, char_set))
        assert not any(ch.isspace() for ch in password)

    def test_whitespace_included_when_requested(self, generator):
        request = GenerationRequest(2000, CharSetKind.ASCII, include_whitespace=True)
        assert " " in generator.generate(request)

    @pytest.mark.parametrize("char_set", CHARACTER_SETS)
    def test_never_control_characters(self, generator, char_set):
        request = GenerationRequest(500, char_set, include_whitespace=True)
        assert not any(is_control(ch) for ch in generator.generate(request))

    def test_ascii_stays_printable(self, generator):
        """10,000 ASCII characters never leave the printable range."""
        password = generator.generate(GenerationRequest(10_000, CharSetKind.ASCII))
        assert all(0x21 <= ord(ch) <= 0x7E for ch in password)

    def test_ascii_covers_the_universe(self, generator):
        password = generator.generate(GenerationRequest(10_000, CharSetKind.ASCII))
        assert set(password) == set(string.printable[:94])

    def test_ascii_extended_single_byte(self, generator):
        password = generator.generate(GenerationRequest(1000, CharSetKind.ASCII_EXTENDED))
        assert all(ord(ch) <= 0xFF for ch in password)
        assert any(ord(ch) > 0x7F for ch in password)

    def test_unicode_never_surrogates(self, generator):
        password = generator.generate(GenerationRequest(1000, CharSetKind.UNICODE))
        assert not any(SURROGATE_START <= ord(ch) <= SURROGATE_END for ch in password)
        password.encode("utf-8")

    def test_negative_length_is_empty(self, generator):
        assert generator.generate(GenerationRequest(-5, CharSetKind.ASCII)) == ""


class TestUnsatisfiableRequests:
    """Requests whose filters leave nothing to draw from fail fast."""

    def test_empty_filtered_universe(self, generator, monkeypatch):
        monkeypatch.setitem(dictionary_module.CHARACTER_UNIVERSES, CharSetKind.NUMBERS, " !?")
        request = GenerationRequest(5, CharSetKind.NUMBERS, alphanumeric_only=True)
        with pytest.raises(ConfigurationError, match="constraints"):
            generator.generate(request)

    def test_whitespace_only_universe(self, generator, monkeypatch):
        monkeypatch.setitem(dictionary_module.CHARACTER_UNIVERSES, CharSetKind.NUMBERS, " \t")
        with pytest.raises(ConfigurationError):
            generator.generate(GenerationRequest(5, CharSetKind.NUMBERS))

    def test_zero_length_skips_the_check(self, generator, monkeypatch):
        monkeypatch.setitem(dictionary_module.CHARACTER_UNIVERSES, CharSetKind.NUMBERS, " ")
        assert generator.generate(GenerationRequest(0, CharSetKind.NUMBERS)) == ""

    def test_unicode_rejection_bound(self):
        class AlwaysNull(random.Random):
            def choice(self, seq):
                return seq[0]

        generator = PasswordGenerator(rng=AlwaysNull())
        with pytest.raises(ConfigurationError, match=str(MAX_CONSECUTIVE_REJECTIONS)):
            generator.generate(GenerationRequest(1, CharSetKind.UNICODE))


class TestPassphrase:
    """Tests for word-based generation."""

    @pytest.fixture
    def custom_generator(self):
        dictionary = WordDictionary.load(FIXTURES_DIR / "custom_dictionary.yaml")
        return PasswordGenerator(dictionary=dictionary, random_seed=99)

    @pytest.mark.parametrize("words", [2, 3, 6])
    def test_words_joined_by_one_separator(self, generator, words):
        dictionary = generator.dictionary
        password = generator.generate(GenerationRequest(words, CharSetKind.PASSPHRASE))

        separator, segments = _split_passphrase(password, dictionary.separators)
        assert password.count(separator) == words - 1
        assert len(segments) == words
        for segment in segments:
            assert segment.lower() in dictionary.words

    def test_longer_than_word_count(self, generator):
        password = generator.generate(GenerationRequest(3, CharSetKind.PASSPHRASE))
        assert len(password) > 3

    def test_single_word_has_no_separator(self, custom_generator):
        password = custom_generator.generate(GenerationRequest(1, CharSetKind.PASSPHRASE))
        assert password.lower() in custom_generator.dictionary.words

    def test_zero_words(self, custom_generator):
        assert custom_generator.generate(GenerationRequest(0, CharSetKind.PASSPHRASE)) == ""

    def test_uses_custom_dictionary(self, custom_generator):
        password = custom_generator.generate(GenerationRequest(5, CharSetKind.PASSPHRASE))
        separator, segments = _split_passphrase(password, ("-", "+"))
        assert all(s.lower() in ("alpha", "bravo", "charlie", "delta", "echo") for s in segments)

    def test_words_are_lowercase_or_uppercase(self, custom_generator):
        password = custom_generator.generate(GenerationRequest(8, CharSetKind.PASSPHRASE))
        _, segments = _split_passphrase(password, ("-", "+"))
        for segment in segments:
            assert segment in (segment.lower(), segment.upper())

    def test_uppercase_decided_per_word(self, custom_generator):
        """Across many words both cases appear, so the flip is not global."""
        cases = set()
        for _ in range(20):
            password = custom_generator.generate(GenerationRequest(6, CharSetKind.PASSPHRASE))
            _, segments = _split_passphrase(password, ("-", "+"))
            cases.update(segment.isupper() for segment in segments)
        assert cases == {True, False}

    def test_separator_varies_between_passphrases(self, custom_generator):
        used = set()
        for _ in range(50):
            password = custom_generator.generate(GenerationRequest(3, CharSetKind.PASSPHRASE))
            separator, _ = _split_passphrase(password, ("-", "+"))
            used.add(separator)
        assert used == {"-", "+"}

    def test_alphanumeric_only_uses_alphanumeric_separator(self, generator):
        """The bundled digit separators keep passphrases alphanumeric."""
        request = GenerationRequest(3, CharSetKind.PASSPHRASE, alphanumeric_only=True)
        for _ in range(50):
            password = generator.generate(request)
            assert password.isalnum(), password

    def test_alphanumeric_only_keeps_one_separator(self, generator):
        dictionary = generator.dictionary
        request = GenerationRequest(4, CharSetKind.PASSPHRASE, alphanumeric_only=True)
        password = generator.generate(request)

        separator, segments = _split_passphrase(password, dictionary.separators)
        assert separator.isdigit()
        assert password.count(separator) == 3
        assert all(segment.lower() in dictionary.words for segment in segments)

    def test_alphanumeric_only_without_alphanumeric_separator(self, custom_generator):
        request = GenerationRequest(3, CharSetKind.PASSPHRASE, alphanumeric_only=True)
        with pytest.raises(ConfigurationError, match="separators"):
            custom_generator.generate(request)

    def test_alphanumeric_only_single_word_needs_no_separator(self, custom_generator):
        request = GenerationRequest(1, CharSetKind.PASSPHRASE, alphanumeric_only=True)
        assert custom_generator.generate(request).isalpha()

    def test_whitespace_separator_excluded_by_default(self):
        dictionary = WordDictionary(words=["alpha", "bravo"], separators=[" ", "-"])
        generator = PasswordGenerator(dictionary=dictionary, random_seed=5)
        for _ in range(20):
            password = generator.generate(GenerationRequest(3, CharSetKind.PASSPHRASE))
            assert " " not in password
            assert password.count("-") == 2


class TestRandomness:
    """Tests for the generator's randomness source."""

    def test_same_seed_same_output(self):
        request = GenerationRequest(32, CharSetKind.ASCII_EXTENDED)
        a = PasswordGenerator(random_seed=7)
        b = PasswordGenerator(random_seed=7)
        assert a.generate(request) == b.generate(request)

    def test_unseeded_uses_system_random(self):
        import secrets

        generator = PasswordGenerator()
        assert isinstance(generator.rng, secrets.SystemRandom)

    def test_explicit_rng_wins(self):
        rng = random.Random(1)
        generator = PasswordGenerator(random_seed=5, rng=rng)
        assert generator.rng is rng

    def test_source_is_reused_across_calls(self, generator):
        request = GenerationRequest(16, CharSetKind.ALPHANUMERIC)
        assert generator.generate(request) != generator.generate(request)

    def test_dictionary_shared_by_default(self):
        assert PasswordGenerator().dictionary is PasswordGenerator().dictionary

    def test_generate_many(self, generator):
        passwords = generator.generate_many(GenerationRequest(12, CharSetKind.NUMBERS), 5)
        assert len(passwords) == 5
        assert all(len(p) == 12 for p in passwords)
