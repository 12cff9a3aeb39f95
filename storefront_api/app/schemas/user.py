"""
Pydantic model for user records.

Field values are whatever the client sent: the service only checks
that they are present, so the attributes are typed ``Any``.  The stored
password is returned with the record, as it always has been.
"""

from typing import Any

from pydantic import BaseModel, Field


class User(BaseModel):
    """A registered user account."""

    id: str
    username: Any = Field(None, examples=["jdoe"])
    email: Any = Field(None, examples=["user@example.com"])
    password: Any = Field(None, examples=["secret"])


# Fields a client must supply on registration and on update.
USER_FIELDS = ("username", "email", "password")

# Fields a client must supply to log in.
LOGIN_FIELDS = ("email", "password")
