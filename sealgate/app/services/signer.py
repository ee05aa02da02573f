"""
Signature service for JSON objects

Signatures are HMAC-SHA256 over a canonical message built from the
object's top-level pairs:

    1. Render each pair as "<key>=<compact JSON value>;"
    2. Sort the rendered strings
    3. Concatenate them with no separator

Sorting makes the signature independent of top-level key order. Nested
objects are rendered as-is and are NOT re-sorted, so two payloads whose
nested objects differ only in key order sign differently. Changing this
would change the signature format and break existing signatures.
"""

import re
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from sealgate.app.config import Settings, get_settings
from sealgate.app.services.codec import dumps_compact


_HEX_RE = re.compile(r'[0-9a-fA-F]*')


class Signer(ABC):
    """Deterministic signatures over flat JSON objects."""

    @abstractmethod
    def sign(self, data: Dict[str, Any]) -> str:
        """Compute the signature of data."""

    @abstractmethod
    def verify(self, data: Dict[str, Any], signature: str) -> bool:
        """Check a candidate signature for data. Never raises."""


def canonical_message(data: Dict[str, Any]) -> str:
    """
    Build the canonical signing message for a flat object.

    Args:
        data: Object whose top-level pairs are signed

    Returns:
        Sorted, concatenated "key=value;" entries ("" for an empty object)

    Example:
        >>> canonical_message({"name": "Alice", "age": 30})
        'age=30;name="Alice";'
    """
    entries = [f"{key}={dumps_compact(value)};" for key, value in data.items()]
    entries.sort()
    return "".join(entries)


def _decode_hex(signature: Any) -> Optional[bytes]:
    """Decode a hex signature, or None if it is not well-formed hex."""
    if not isinstance(signature, str):
        return None
    if len(signature) % 2 != 0 or not _HEX_RE.fullmatch(signature):
        return None
    return bytes.fromhex(signature)


class HmacSigner(Signer):
    """HMAC-SHA256 signer holding a single shared secret."""

    def __init__(self, key: bytes):
        """
        Initialize the signer.

        Args:
            key: Shared secret (non-empty bytes)
        """
        if not isinstance(key, (bytes, bytearray)):
            raise TypeError("key must be bytes")
        if len(key) == 0:
            raise ValueError("key must not be empty")
        self._key = bytes(key)

    def __repr__(self):
        return "HmacSigner(key=***)"

    def _mac(self, data: Dict[str, Any]) -> hmac.HMAC:
        mac = hmac.HMAC(self._key, hashes.SHA256())
        mac.update(canonical_message(data).encode('utf-8'))
        return mac

    def sign(self, data: Dict[str, Any]) -> str:
        """
        Sign a flat JSON object.

        Args:
            data: Object to sign

        Returns:
            Lowercase hex HMAC-SHA256 digest (64 characters)
        """
        return self._mac(data).finalize().hex()

    def verify(self, data: Dict[str, Any], signature: str) -> bool:
        """
        Verify a hex signature against data in constant time.

        Args:
            data: Object that was signed
            signature: Candidate hex signature

        Returns:
            True if the signature matches, False otherwise (including
            malformed hex)
        """
        expected = _decode_hex(signature)
        if expected is None:
            return False

        try:
            self._mac(data).verify(expected)
        except InvalidSignature:
            return False
        return True


# Singleton instance for the application
_signer_instance = None
_signer_lock = threading.Lock()


def init_signer(settings: Optional[Settings] = None) -> Signer:
    """
    Build the singleton signer from settings. Called once at startup.

    Args:
        settings: Settings holding the secret key (default: environment)

    Returns:
        The process-wide signer
    """
    global _signer_instance
    settings = settings or get_settings()
    with _signer_lock:
        _signer_instance = HmacSigner(settings.secret_key_bytes())
        return _signer_instance


def get_signer() -> Signer:
    """Get the singleton signer, creating it from settings if needed."""
    global _signer_instance
    if _signer_instance is None:
        with _signer_lock:
            if _signer_instance is None:
                _signer_instance = HmacSigner(get_settings().secret_key_bytes())
    return _signer_instance


def reset_signer() -> None:
    """Drop the singleton so the next get_signer() reloads settings."""
    global _signer_instance
    with _signer_lock:
        _signer_instance = None
