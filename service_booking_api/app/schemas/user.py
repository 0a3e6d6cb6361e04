"""
Pydantic models for user data.

``AuthenticatedUser`` is the identity attached to a request context.
Only ``role`` is interpreted by authorization checks; the remaining
profile fields are passed through untouched.
"""

from datetime import datetime
from typing import Optional

from .common import CamelModel


ADMIN_ROLE = "admin"
USER_ROLE = "user"


class AuthenticatedUser(CamelModel):
    """A user row as exposed to procedures and clients."""

    id: int
    open_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    login_method: Optional[str] = None
    # Any value other than ``admin`` is treated as a regular user.
    role: str = USER_ROLE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_signed_in: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE
