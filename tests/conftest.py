"""Shared fixtures: a fresh SQLite database per test and request contexts."""

from typing import Any, Dict, List

import pytest

from service_booking_api.app.core.config import settings
from service_booking_api.app.core.db import init_db
from service_booking_api.app.rpc.context import RequestContext
from service_booking_api.app.services.notification_service import NotificationService
from tests.helpers import make_user


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    db_path = tmp_path / "bookings.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    monkeypatch.setattr(settings, "notification_api_url", "")
    monkeypatch.setattr(settings, "notification_api_key", "")
    monkeypatch.setattr(settings, "owner_open_id", "")
    init_db()
    return db_path


@pytest.fixture
def public_ctx() -> RequestContext:
    return RequestContext(user=None)


@pytest.fixture
def user_ctx() -> RequestContext:
    return RequestContext(user=make_user())


@pytest.fixture
def admin_ctx() -> RequestContext:
    return RequestContext(user=make_user(role="admin", user_id=1, open_id="admin-user"))


@pytest.fixture
def sent_notifications(monkeypatch) -> List[Dict[str, Any]]:
    """Replace the owner channel with a recorder that always delivers."""
    sent: List[Dict[str, Any]] = []

    async def fake_notify_owner(title, content, transport=None):
        sent.append({"title": title, "content": content})
        return True

    monkeypatch.setattr(NotificationService, "notify_owner", staticmethod(fake_notify_owner))
    return sent
