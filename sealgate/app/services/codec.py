"""
Value codec for depth-1 field obfuscation

Every JSON value is serialized to compact JSON text and mapped to a single
base64 string. This is a reversible encoding, not confidentiality: anyone
can decode it. The Encryptor interface exists so an authenticated cipher
can replace it without touching the routes or the transform.
"""

import base64
import binascii
import json
import math
from abc import ABC, abstractmethod
from typing import Any


class _Absent:
    """Marker for a value that could not be decrypted."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "ABSENT"


# JSON null decodes to None, so failure needs its own marker
ABSENT = _Absent()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def dumps_compact(value: Any) -> str:
    """
    Render a JSON value as compact JSON text.

    Object keys keep their insertion order and non-ASCII characters are
    written as-is (no \\u escapes).

    Raises:
        ValueError: If value contains NaN or Infinity
    """
    return json.dumps(
        value,
        ensure_ascii=False,
        separators=(',', ':'),
        allow_nan=False
    )


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def loads_strict(data) -> Any:
    """
    Parse JSON text (str or UTF-8 bytes) into a value that can be
    serialized again.

    Rejects NaN and Infinity (literal or overflowing, e.g. 1e400), lone
    surrogate escapes such as "\\ud800", and nesting deeper than the
    interpreter can recurse.

    Raises:
        ValueError: If data is not valid JSON (JSONDecodeError and
            UnicodeError are both ValueError subclasses)
    """
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode('utf-8')
    try:
        value = json.loads(
            data,
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float
        )
        # Strings must be encodable as UTF-8 for encrypt and sign
        dumps_compact(value).encode('utf-8')
    except RecursionError:
        raise ValueError("JSON is nested too deeply")
    return value


class Encryptor(ABC):
    """Reversible transformation of a single JSON value."""

    @abstractmethod
    def encrypt(self, value: Any) -> Any:
        """Transform a JSON value into its encrypted form."""

    @abstractmethod
    def decrypt(self, value: Any) -> Any:
        """Recover a JSON value, or return ABSENT if value is not decryptable."""

    def decrypt_or(self, value: Any, default: Any) -> Any:
        """Decrypt value, falling back to default when it cannot be decrypted."""
        result = self.decrypt(value)
        if result is ABSENT:
            return default
        return result


class Base64Encryptor(Encryptor):
    """Encode JSON values as standard (padded) base64 of their JSON text."""

    def encrypt(self, value: Any) -> str:
        """
        Encode a JSON value as a base64 string.

        Args:
            value: Any JSON value (None, bool, int, float, str, list, dict)

        Returns:
            Base64 text of the value's compact UTF-8 JSON form
        """
        raw = dumps_compact(value).encode('utf-8')
        return base64.b64encode(raw).decode('ascii')

    def decrypt(self, value: Any) -> Any:
        """
        Decode a base64 string back into the JSON value it encodes.

        Args:
            value: Candidate encrypted value

        Returns:
            The decoded JSON value, or ABSENT when value is not a string,
            is not valid base64, or does not decode to valid JSON
        """
        if not isinstance(value, str):
            return ABSENT

        try:
            raw = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            return ABSENT

        # Only canonical text is accepted (no stray bits in the last group)
        if base64.b64encode(raw).decode('ascii') != value:
            return ABSENT

        try:
            return loads_strict(raw)
        except ValueError:
            return ABSENT


_default_encryptor = Base64Encryptor()


def get_encryptor() -> Encryptor:
    """Get the process-wide encryptor instance."""
    return _default_encryptor
