"""Access-layer dependencies.

Identity is supplied by the upstream gateway in the ``X-User-Id`` header,
with an optional ``X-User-Name`` display name. The service trusts it as
given and never authenticates on its own.
"""

from fastapi import Header, HTTPException

from event_scheduler.domain.models import User
from event_scheduler.repos.base import UserStore


class CurrentUser:
    """FastAPI dependency that resolves the caller and records them in *users*."""

    def __init__(self, users: UserStore) -> None:
        self._users = users

    def __call__(
        self,
        x_user_id: str | None = Header(default=None, alias="X-User-Id"),
        x_user_name: str | None = Header(default=None, alias="X-User-Name"),
    ) -> User:
        user_id = (x_user_id or "").strip()
        if not user_id:
            raise HTTPException(status_code=401, detail="Authentication invalid")
        name = (x_user_name or "").strip() or None
        return self._users.upsert(User(id=user_id, name=name))
