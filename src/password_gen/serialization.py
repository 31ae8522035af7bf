"""
Persist and restore generation requests as JSON or YAML.

Decoded documents are validated through a pydantic schema before a
GenerationRequest is built, so a persisted request always round-trips
to an identical value.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .models import CharSetKind, ConfigurationError, GenerationRequest, ParseError

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}


class RequestSchema(BaseModel):
    """Wire format of a GenerationRequest."""
    length: int = Field(ge=0, description="Characters, or words for passphrase")
    char_set: CharSetKind = Field(description="Character set name")
    alphanumeric_only: bool = False
    include_whitespace: bool = False

    @field_validator("char_set", mode="before")
    @classmethod
    def _parse_char_set(cls, value: Any) -> CharSetKind:
        # ParseError is a ValueError, so pydantic reports it as a validation error
        return CharSetKind.parse(value)

    @classmethod
    def from_request(cls, request: GenerationRequest) -> "RequestSchema":
        return cls(**request.to_dict())

    def to_request(self) -> GenerationRequest:
        return GenerationRequest(
            length=self.length,
            char_set=self.char_set,
            alphanumeric_only=self.alphanumeric_only,
            include_whitespace=self.include_whitespace,
        )


def request_from_dict(data: Any) -> GenerationRequest:
    """
    Validate a decoded mapping and build a request from it.

    Raises:
        ParseError: If data is not a mapping or not a valid request
    """
    if not isinstance(data, dict):
        raise ParseError(f"Expected a mapping, got {type(data).__name__}")
    try:
        return RequestSchema.model_validate(data).to_request()
    except ValidationError as e:
        raise ParseError(f"Invalid request: {e}") from e


def request_to_dict(request: GenerationRequest) -> Dict[str, Any]:
    return RequestSchema.from_request(request).model_dump(mode="json")


def request_to_json(request: GenerationRequest, indent: int = 2) -> str:
    """Encode a request as JSON."""
    return json.dumps(request_to_dict(request), indent=indent)


def request_from_json(text: str) -> GenerationRequest:
    """
    Decode a request from JSON.

    Raises:
        ParseError: If the text is not valid JSON or not a valid request
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    return request_from_dict(data)


def request_to_yaml(request: GenerationRequest) -> str:
    """Encode a request as YAML."""
    return yaml.safe_dump(request_to_dict(request), sort_keys=False)


def request_from_yaml(text: str) -> GenerationRequest:
    """
    Decode a request from YAML.

    Raises:
        ParseError: If the text is not valid YAML or not a valid request
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML: {e}") from e
    return request_from_dict(data)


def save_request(request: GenerationRequest, path: Union[str, Path]) -> Path:
    """
    Write a request to a .json, .yaml or .yml file.

    Raises:
        ParseError: If the file type is not supported
        ConfigurationError: If the file cannot be written
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in JSON_SUFFIXES:
        text = request_to_json(request)
    elif suffix in YAML_SUFFIXES:
        text = request_to_yaml(request)
    else:
        raise ParseError(f"Unsupported request file type: {path.suffix or path.name}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write request file {path}: {e}") from e
    return path


def load_request(path: Union[str, Path]) -> GenerationRequest:
    """
    Read a request from a .json, .yaml or .yml file.

    Raises:
        ParseError: If the file type is not supported or the content is invalid
        ConfigurationError: If the file cannot be read
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in JSON_SUFFIXES:
        decode = request_from_json
    elif suffix in YAML_SUFFIXES:
        decode = request_from_yaml
    else:
        raise ParseError(f"Unsupported request file type: {path.suffix or path.name}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read request file {path}: {e}") from e
    return decode(text)
