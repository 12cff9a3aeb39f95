"""
Request dependencies shared by the resource routers.

Services are created per application in ``create_app`` and kept on
``app.state``; these helpers fetch them for a route.  ``read_payload``
accepts a JSON or URL‑encoded form body and normalises it to a mapping
so that presence checks, not framework validation, decide the status
code.
"""

import json
from typing import Any, Dict, Iterable

from fastapi import Request
from fastapi.exceptions import RequestValidationError

from ..core.errors import ValidationFailed
from ..services.product_service import ProductService
from ..services.user_service import UserService


MISSING_PARAMETERS = "Please provide all the required parameters.."

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


async def read_payload(request: Request) -> Dict[str, Any]:
    """Return the request body as a dict.

    Form bodies are decoded with ``request.form()``; anything else is
    parsed as JSON.  An empty body, or JSON that is not an object,
    counts as an empty payload.  Malformed JSON raises
    ``RequestValidationError``, which the application answers with 400.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE:
        form = await request.form()
        return {key: value for key, value in form.items()}

    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise RequestValidationError(
            [
                {
                    "type": "json_invalid",
                    "loc": ("body", getattr(exc, "pos", 0)),
                    "msg": "JSON decode error",
                    "input": {},
                    "ctx": {"error": getattr(exc, "msg", str(exc))},
                }
            ],
            body=body.decode("utf-8", errors="replace"),
        ) from exc
    if isinstance(payload, dict):
        return payload
    return {}


def require_fields(payload: Dict[str, Any], fields: Iterable[str], status_code: int = 400) -> None:
    """Raise ``ValidationFailed`` unless every field is present and truthy."""
    if not all(payload.get(name) for name in fields):
        raise ValidationFailed(MISSING_PARAMETERS, status_code=status_code)
