"""
Depth-1 transform

Applies an operation to every top-level value of a JSON object, or to the
whole payload when it is not an object. Nested values travel as one opaque
unit with their whole subtree.
"""

from typing import Any, Callable, Optional

from sealgate.app.services.codec import Encryptor, get_encryptor


def apply_to_values(payload: Any, method: Callable[[Any], Any]) -> Any:
    """
    Apply method to each top-level value of payload.

    Args:
        payload: Parsed JSON value
        method: Operation applied per value

    Returns:
        A new dict with the same keys if payload is a dict,
        otherwise method(payload)
    """
    if isinstance(payload, dict):
        return {key: method(value) for key, value in payload.items()}
    return method(payload)


def encrypt_payload(payload: Any, encryptor: Optional[Encryptor] = None) -> Any:
    """Encrypt every top-level value of payload."""
    encryptor = encryptor or get_encryptor()
    return apply_to_values(payload, encryptor.encrypt)


def decrypt_payload(payload: Any, encryptor: Optional[Encryptor] = None) -> Any:
    """
    Decrypt every top-level value of payload.

    Values that cannot be decrypted are returned unchanged, so payloads
    mixing encrypted and plain fields are accepted.
    """
    encryptor = encryptor or get_encryptor()
    return apply_to_values(payload, lambda value: encryptor.decrypt_or(value, value))
