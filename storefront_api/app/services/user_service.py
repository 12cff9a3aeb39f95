"""
Business logic for users.

``UserService`` wraps the user ``RecordStore``.  Registration goes
through ``register``, which checks the email and inserts the record in
one store operation so that two concurrent registrations with the same
address cannot both succeed.  Store calls run in the thread pool, since
the store blocks on its lock and, when persisting, on file writes.

Passwords are stored and compared as given.  There is no hashing here;
callers that need it must add it in front of the service.
"""

import logging
from typing import Any, List, Mapping, Optional

from starlette.concurrency import run_in_threadpool

from ..core.store import RecordStore
from ..schemas.user import User


class UserService:
    """Operations on user accounts."""

    def __init__(self, store: RecordStore[User]) -> None:
        self.store = store

    async def find_all(self) -> List[User]:
        return await run_in_threadpool(self.store.find_all)

    async def find_one(self, user_id: str) -> Optional[User]:
        return await run_in_threadpool(self.store.find_one, user_id)

    async def find_by_email(self, email: Any) -> Optional[User]:
        """Return the user registered with ``email``, if any."""
        return await run_in_threadpool(self.store.find_by, "email", email)

    async def create(self, data: Mapping[str, Any]) -> User:
        """Store a user without checking for a duplicate email."""
        return await run_in_threadpool(self.store.create, data)

    async def register(self, data: Mapping[str, Any]) -> Optional[User]:
        """Create a user unless the email is already registered.

        Returns ``None`` for a duplicate email.
        """
        logger = logging.getLogger(__name__)
        user = await run_in_threadpool(self.store.create_unique, data, "email")
        if user is None:
            logger.info("Rejected registration for already registered email %s", data.get("email"))
        else:
            logger.info("Registered user %s (%s)", user.id, user.email)
        return user

    async def update(self, user_id: str, data: Mapping[str, Any]) -> Optional[User]:
        """Replace username, email and password of an existing user."""
        return await run_in_threadpool(self.store.update, user_id, data)

    async def remove(self, user_id: str) -> bool:
        return await run_in_threadpool(self.store.remove, user_id)

    async def compare_password(self, email: Any, password: Any) -> bool:
        """Check ``password`` against the stored one by plain equality.

        Unknown emails never match.
        """
        user = await run_in_threadpool(self.store.find_by, "email", email)
        if user is None:
            return False
        return user.password == password
