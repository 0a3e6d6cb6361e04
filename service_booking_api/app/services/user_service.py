"""
Data access for users.

Users are identified by an external ``open_id`` issued by the login
provider.  ``upsert_user`` is called when a session is issued;
``get_user_by_open_id`` and ``mark_signed_in`` are used by the request
context provider on every authenticated request.  The queries run in
the FastAPI threadpool.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from ..core.config import settings
from ..core.db import get_connection
from ..rpc.errors import StorageError
from ..schemas.user import ADMIN_ROLE, USER_ROLE, AuthenticatedUser


USER_COLUMNS = "id, open_id, name, email, login_method, role, created_at, updated_at, last_signed_in"


class UserService:
    """Service for reading and upserting users."""

    @classmethod
    async def get_user_by_open_id(cls, open_id: str) -> Optional[AuthenticatedUser]:
        return await run_in_threadpool(cls._select_user, open_id)

    @classmethod
    def _select_user(cls, open_id: str) -> Optional[AuthenticatedUser]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE open_id = ?",
                (open_id,),
            ).fetchone()
            if not row:
                return None
            return AuthenticatedUser(**dict(row))
        except sqlite3.Error as exc:
            raise StorageError("Failed to load user") from exc
        finally:
            conn.close()

    @classmethod
    async def upsert_user(
        cls,
        open_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        login_method: Optional[str] = None,
        role: Optional[str] = None,
    ) -> AuthenticatedUser:
        return await run_in_threadpool(cls._upsert_user, open_id, name, email, login_method, role)

    @classmethod
    def _upsert_user(
        cls,
        open_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        login_method: Optional[str] = None,
        role: Optional[str] = None,
    ) -> AuthenticatedUser:
        """Create a user or update the profile of an existing one.

        Profile fields left as ``None`` keep their stored value.  The
        role is only changed when ``role`` is given, except for the
        configured owner (``settings.owner_open_id``) who is always an
        administrator.
        """
        logger = logging.getLogger(__name__)
        if settings.owner_open_id and open_id == settings.owner_open_id:
            role = ADMIN_ROLE
        now = datetime.now(timezone.utc).isoformat()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO users (open_id, name, email, login_method, role, created_at, updated_at, last_signed_in)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(open_id) DO UPDATE SET
                    name = COALESCE(excluded.name, users.name),
                    email = COALESCE(excluded.email, users.email),
                    login_method = COALESCE(excluded.login_method, users.login_method),
                    role = CASE WHEN ? IS NULL THEN users.role ELSE excluded.role END,
                    updated_at = excluded.updated_at,
                    last_signed_in = excluded.last_signed_in
                """,
                (open_id, name, email, login_method, role or USER_ROLE, now, now, now, role),
            )
            conn.commit()
            row = cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE open_id = ?",
                (open_id,),
            ).fetchone()
            logger.info("User %s upserted with role %s", open_id, row["role"])
            return AuthenticatedUser(**dict(row))
        except sqlite3.Error as exc:
            logger.error("Failed to upsert user %s: %s", open_id, exc)
            raise StorageError("Failed to save user") from exc
        finally:
            conn.close()

    @classmethod
    async def mark_signed_in(cls, open_id: str) -> None:
        await run_in_threadpool(cls._touch_signed_in, open_id)

    @classmethod
    def _touch_signed_in(cls, open_id: str) -> None:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE users SET last_signed_in = ? WHERE open_id = ?",
                (datetime.now(timezone.utc).isoformat(), open_id),
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError("Failed to update user sign-in time") from exc
        finally:
            conn.close()
