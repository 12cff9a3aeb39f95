"""
User endpoints.

Registration, login, lookup, update, deletion and listing of user
accounts.  Every route answers with a one‑key JSON envelope such as
``{"user": ...}`` or ``{"error": ...}``.  Login only compares the
stored password; no token is issued.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from storefront_api.app.api.deps import get_user_service, read_payload, require_fields
from storefront_api.app.core.errors import ResourceNotFound, ValidationFailed
from storefront_api.app.schemas.user import LOGIN_FIELDS, USER_FIELDS
from storefront_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/users")
async def list_users(service: UserService = Depends(get_user_service)) -> Dict[str, Any]:
    """Return every user together with the total count.

    An empty store answers 404 rather than an empty list.
    """
    all_users = await service.find_all()
    if not all_users:
        raise ResourceNotFound("No users at this time..", key="msg")
    return {"total_user": len(all_users), "allUsers": all_users}


@router.get("/users/{user_id}")
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> Dict[str, Any]:
    user = await service.find_one(user_id)
    if user is None:
        raise ResourceNotFound("User not found!")
    return {"user": user}


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: Dict[str, Any] = Depends(read_payload),
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Register a new user.

    ``username``, ``email`` and ``password`` are all required, and the
    email must not belong to an existing account.
    """
    require_fields(payload, USER_FIELDS)
    new_user = await service.register(payload)
    if new_user is None:
        raise ValidationFailed("This email has already been registered..")
    return {"newUser": new_user}


@router.post("/login")
async def login_user(
    payload: Dict[str, Any] = Depends(read_payload),
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Check an email/password pair and return the matching user."""
    require_fields(payload, LOGIN_FIELDS)
    user = await service.find_by_email(payload["email"])
    if user is None:
        raise ResourceNotFound("No user exists with the email provided..")
    if not await service.compare_password(payload["email"], payload["password"]):
        raise ValidationFailed("Incorrect Password!")
    return {"user": user}


@router.put("/users/{user_id}", status_code=status.HTTP_201_CREATED)
async def update_user(
    user_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    service: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """Replace username, email and password of an existing user.

    Partial bodies are rejected with 401 and leave the record untouched.
    """
    require_fields(payload, USER_FIELDS, status_code=status.HTTP_401_UNAUTHORIZED)
    updated = await service.update(user_id, payload)
    if updated is None:
        raise ResourceNotFound(f"No user with id {user_id}")
    return {"updateUser": updated}


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Dict[str, Any]:
    if not await service.remove(user_id):
        raise ResourceNotFound("User does not exist")
    return {"msg": "User deleted"}
