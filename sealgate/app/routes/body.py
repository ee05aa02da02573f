"""
Request body dependency shared by the JSON routes
"""

from typing import Any

from fastapi import HTTPException, Request

from sealgate.app.services.codec import loads_strict


def _is_json_content_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


async def json_body(request: Request) -> Any:
    """
    Dependency returning the parsed JSON request body.

    Raises:
        HTTPException 415: Content-Type is not JSON
        HTTPException 400: Body is not valid JSON
    """
    if not _is_json_content_type(request.headers.get("content-type", "")):
        raise HTTPException(
            status_code=415,
            detail="Expected request with `Content-Type: application/json`"
        )

    raw = await request.body()
    try:
        return loads_strict(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body is not valid JSON")
