"""
Random password and passphrase generation.

Usage:
    from password_gen import PasswordGenerator, GenerationRequest, CharSetKind

    generator = PasswordGenerator()
    password = generator.generate(GenerationRequest(15, CharSetKind.ASCII))
    passphrase = generator.generate(GenerationRequest(4, CharSetKind.PASSPHRASE))
"""

from .models import (
    CharSetKind,
    GenerationRequest,
    PasswordGenError,
    ParseError,
    ConfigurationError,
)
from .dictionary import WordDictionary
from .generator import PasswordGenerator
from .serialization import (
    RequestSchema,
    request_to_json,
    request_from_dict,
    request_from_json,
    request_to_yaml,
    request_from_yaml,
    save_request,
    load_request,
)
from .config import Settings, load_settings

__all__ = [
    # Models
    "CharSetKind",
    "GenerationRequest",
    # Errors
    "PasswordGenError",
    "ParseError",
    "ConfigurationError",
    # Generation
    "WordDictionary",
    "PasswordGenerator",
    # Serialization
    "RequestSchema",
    "request_to_json",
    "request_from_dict",
    "request_from_json",
    "request_to_yaml",
    "request_from_yaml",
    "save_request",
    "load_request",
    # Settings
    "Settings",
    "load_settings",
]
