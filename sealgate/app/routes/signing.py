"""
Signing routes for HMAC signatures over JSON objects
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field

from sealgate.app.logging import get_logger
from sealgate.app.routes.body import json_body
from sealgate.app.services.signer import get_signer

router = APIRouter(tags=["signing"])

log = get_logger(__name__)


class SignatureResponse(BaseModel):
    """Signature of a signed JSON object."""
    signature: str = Field(..., description="Lowercase hex HMAC-SHA256")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "signature": "3b6f1c0e9d...c2a7"
            }
        }
    )


@router.post("/sign", response_model=SignatureResponse)
async def sign(payload: Any = Depends(json_body)):
    """
    Sign a JSON object.

    The signature does not depend on the order of the object's
    top-level keys.
    """
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="expected a JSON object")

    signature = get_signer().sign(payload)
    log.info("payload_signed", fields=len(payload))
    return SignatureResponse(signature=signature)


@router.post("/verify", status_code=204, response_class=Response)
async def verify(payload: Any = Depends(json_body)):
    """
    Verify a signature.

    Body: {"signature": "<hex>", "data": {...}}

    Returns 204 when the signature matches and 400 otherwise. The error
    does not say why verification failed.
    """
    signature = payload.get("signature") if isinstance(payload, dict) else None
    data = payload.get("data") if isinstance(payload, dict) else None

    if not isinstance(signature, str) or not isinstance(data, dict):
        log.info("verify_rejected", reason="malformed_request")
        raise HTTPException(
            status_code=400,
            detail="expected {\"signature\": string, \"data\": object}"
        )

    if not get_signer().verify(data, signature):
        log.info("signature_rejected", fields=len(data))
        raise HTTPException(status_code=400, detail="invalid signature")

    log.info("signature_verified", fields=len(data))
    return Response(status_code=204)
