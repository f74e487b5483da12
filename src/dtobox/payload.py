"""Decoding of raw input payloads for :meth:`dtobox.Data.create`.

Payloads are JSON, YAML or TOML documents holding a mapping. Every mapping
key in the payload, at any depth, must be a string so that it can be
addressed by a dotted path.
"""

import json
import tomllib
from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any, Literal

import yaml

type PayloadFormat = Literal['json', 'yaml', 'toml']

SUFFIXES: dict[str, PayloadFormat] = {
    '.json': 'json',
    '.yaml': 'yaml',
    '.yml': 'yaml',
    '.toml': 'toml',
}


class PayloadError(ValueError):
    """Raised when a payload cannot be decoded into a mapping with string keys."""


def parse_payload(raw: str | bytes, payload_format: PayloadFormat = 'json') -> dict[str, Any]:
    """Decode ``raw`` into a mapping ready for validation.

    An empty YAML document decodes to an empty mapping.

    Raises
    ------
    PayloadError
        For unknown formats, malformed documents, documents that do not hold
        a mapping, and non-string keys such as YAML's ``1: one``.
    """
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8')

    try:
        match payload_format:
            case 'json':
                payload = json.loads(raw)
            case 'yaml':
                payload = yaml.safe_load(raw)
            case 'toml':
                payload = tomllib.loads(raw)
            case _:
                raise PayloadError(f'Unsupported payload format: {payload_format}')
    except (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError) as ex:
        raise PayloadError(f'Malformed {payload_format} payload: {ex}') from ex

    if payload is None and payload_format == 'yaml':
        payload = {}

    if not isinstance(payload, Mapping):
        raise PayloadError(f'Payload must hold a mapping, got {type(payload).__name__}')

    _check_keys(payload, None)
    return dict(payload)


def load_payload(path: str | PathLike[str] | Path) -> dict[str, Any]:
    """Read and decode the payload stored at ``path``, picking the format by suffix."""
    path = Path(path)
    payload_format = SUFFIXES.get(path.suffix.lower())
    if payload_format is None:
        raise PayloadError(
            f'Unsupported payload file type: {path.suffix}, supported extensions: {", ".join(SUFFIXES)}'
        )

    if not path.exists():
        raise FileNotFoundError(f'Payload file not found: {path}')

    return parse_payload(path.read_bytes(), payload_format)


def _check_keys(node: Any, location: str | None) -> None:
    if isinstance(node, Mapping):
        for key, inner in node.items():
            if not isinstance(key, str):
                raise PayloadError(f'Key {key!r} under "{location or "<root>"}" is not a string')
            _check_keys(inner, f'{location}.{key}' if location else key)
    elif isinstance(node, list):
        for index, inner in enumerate(node):
            _check_keys(inner, f'{location}.{index}' if location else str(index))
