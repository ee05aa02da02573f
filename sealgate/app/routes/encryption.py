"""
Encryption routes for depth-1 field obfuscation
"""

from typing import Any

from fastapi import APIRouter, Depends

from sealgate.app.logging import get_logger
from sealgate.app.routes.body import json_body
from sealgate.app.services.transform import decrypt_payload, encrypt_payload

router = APIRouter(tags=["encryption"])

log = get_logger(__name__)


def _field_count(payload: Any) -> int:
    return len(payload) if isinstance(payload, dict) else 1


@router.post("/encrypt")
async def encrypt(payload: Any = Depends(json_body)):
    """
    Encrypt every top-level value of a JSON document.

    Objects keep their keys and each value becomes one opaque string;
    any other JSON value is encrypted as a single field.
    """
    result = encrypt_payload(payload)
    log.info("payload_encrypted", fields=_field_count(payload))
    return result


@router.post("/decrypt")
async def decrypt(payload: Any = Depends(json_body)):
    """
    Decrypt every top-level value of a JSON document.

    Values that were never encrypted (or fail to decode) are returned
    unchanged.
    """
    result = decrypt_payload(payload)
    log.info("payload_decrypted", fields=_field_count(payload))
    return result
