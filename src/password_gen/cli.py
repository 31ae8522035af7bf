"""
Command-line entry point.

    password-gen 20 alphanumeric
    password-gen 4 xkcd --count 5
    password-gen --config request.yaml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_settings
from .dictionary import WordDictionary
from .generator import PasswordGenerator
from .models import CharSetKind, GenerationRequest, PasswordGenError
from .serialization import load_request, save_request

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="password-gen",
        description="Generate random passwords and passphrases",
    )
    parser.add_argument(
        "length",
        type=int,
        nargs="?",
        default=None,
        help="Number of characters, or words for passphrase (default: 16)",
    )
    parser.add_argument(
        "charset",
        nargs="?",
        default=None,
        help="ascii, asciiextended, unicode, numbers, alphanumeric, passphrase/xkcd (default: ascii)",
    )
    parser.add_argument(
        "--alphanumeric-only",
        action="store_true",
        default=None,
        help="Only use alphanumeric characters",
    )
    parser.add_argument(
        "--include-whitespace",
        action="store_true",
        default=None,
        help="Allow whitespace characters",
    )
    parser.add_argument(
        "--count", "-n",
        type=int,
        default=1,
        help="Number of passwords to print",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed (reproducible output, not for real credentials)",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=None,
        help="Path to a YAML word dictionary",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Load request options from a .json/.yaml file",
    )
    parser.add_argument(
        "--save-config",
        type=Path,
        default=None,
        help="Save the resolved request options to a .json/.yaml file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def resolve_request(args: argparse.Namespace, settings) -> GenerationRequest:
    """Combine CLI arguments, an optional request file and settings."""
    if args.config is not None:
        base = load_request(args.config)
    else:
        base = GenerationRequest(length=settings.length, char_set=settings.char_set)

    length = args.length if args.length is not None else base.length
    char_set = CharSetKind.parse(args.charset) if args.charset is not None else base.char_set

    return GenerationRequest(
        length=length,
        char_set=char_set,
        alphanumeric_only=(
            args.alphanumeric_only if args.alphanumeric_only is not None
            else base.alphanumeric_only
        ),
        include_whitespace=(
            args.include_whitespace if args.include_whitespace is not None
            else base.include_whitespace
        ),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point for password generation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.length is not None and args.length < 0:
        parser.error("length must not be negative")
    if args.count < 1:
        parser.error("--count must be at least 1")

    try:
        settings = load_settings()

        # Configure logging, stderr keeps stdout for passwords
        log_level = logging.DEBUG if args.verbose else settings.log_level_value
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stderr,
        )

        request = resolve_request(args, settings)

        dictionary_path = args.dictionary or settings.dictionary_path
        dictionary = WordDictionary.load(dictionary_path) if dictionary_path else None

        if args.save_config is not None:
            save_request(request, args.save_config)
            logger.info("Saved request options to %s", args.save_config)

        generator = PasswordGenerator(dictionary=dictionary, random_seed=args.seed)
        passwords = generator.generate_many(request, args.count)
    except PasswordGenError as e:
        print(f"password-gen: error: {e}", file=sys.stderr)
        return 1

    for password in passwords:
        print(password)
    return 0


if __name__ == "__main__":
    sys.exit(main())
