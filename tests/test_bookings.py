import threading

import pytest

from service_booking_api.app.core.config import settings
from service_booking_api.app.routers.app_router import app_router
from service_booking_api.app.rpc.context import RequestContext
from service_booking_api.app.rpc.errors import (
    InvalidInputError,
    StorageError,
    UnauthenticatedError,
    UnauthorizedError,
)
from service_booking_api.app.schemas.booking import BookingRead, BookingStatus
from service_booking_api.app.services import booking_service, user_service
from service_booking_api.app.services.notification_service import NotificationService
from tests.helpers import JANE_DOE, WINDOWS_CLEANING, make_user


async def create_booking(payload=None):
    caller = app_router.create_caller(RequestContext(user=None))
    return await caller.bookings.create(dict(payload or WINDOWS_CLEANING))


async def admin_list():
    caller = app_router.create_caller(RequestContext(user=make_user(role="admin", user_id=1)))
    return await caller.bookings.list()


@pytest.mark.asyncio
async def test_public_caller_creates_pending_booking(public_ctx, sent_notifications):
    caller = app_router.create_caller(public_ctx)

    booking = await caller.bookings.create(dict(WINDOWS_CLEANING))

    assert isinstance(booking, BookingRead)
    assert booking.id >= 1
    assert booking.status == BookingStatus.PENDING
    assert booking.customer_id == 0
    assert booking.service_type == "Windows Cleaning"
    assert booking.service_date == "2026-02-20"
    assert booking.notes == "Please be careful with the windows"


@pytest.mark.asyncio
async def test_create_notifies_owner_with_summary(sent_notifications):
    await create_booking()

    assert len(sent_notifications) == 1
    notification = sent_notifications[0]
    assert notification["title"] == "New Booking Request"
    assert notification["content"] == (
        "New booking from John Doe\n"
        "Service: Windows Cleaning (3 Windows)\n"
        "Price: R60\n"
        "Phone: +27 71 359 3615\n"
        "Email: john@example.com"
    )


@pytest.mark.asyncio
async def test_create_ignores_client_supplied_status(sent_notifications):
    booking = await create_booking({**WINDOWS_CLEANING, "status": "completed", "customerId": 42})

    assert booking.status == BookingStatus.PENDING
    assert booking.customer_id == 0


@pytest.mark.asyncio
async def test_create_without_optional_fields(sent_notifications):
    booking = await create_booking(JANE_DOE)

    assert booking.service_date is None
    assert booking.notes is None
    assert booking.status == BookingStatus.PENDING


@pytest.mark.asyncio
async def test_create_rejects_missing_customer_name(sent_notifications):
    payload = {k: v for k, v in WINDOWS_CLEANING.items() if k != "customerName"}

    with pytest.raises(InvalidInputError) as excinfo:
        await create_booking(payload)

    assert excinfo.value.code == "BAD_REQUEST"
    assert excinfo.value.data["issues"][0]["loc"] == ["customerName"]
    assert await admin_list() == []
    assert sent_notifications == []


@pytest.mark.asyncio
async def test_create_rejects_empty_customer_name(sent_notifications):
    with pytest.raises(InvalidInputError):
        await create_booking({**JANE_DOE, "customerName": ""})

    assert await admin_list() == []


@pytest.mark.asyncio
async def test_create_rejects_non_text_price(sent_notifications):
    with pytest.raises(InvalidInputError):
        await create_booking({**WINDOWS_CLEANING, "price": 60})

    assert await admin_list() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["serviceDate", "notes"])
async def test_create_rejects_explicit_null_optional_field(field, sent_notifications):
    with pytest.raises(InvalidInputError) as excinfo:
        await create_booking({**WINDOWS_CLEANING, field: None})

    assert excinfo.value.data["issues"][0]["loc"] == [field]
    assert await admin_list() == []
    assert sent_notifications == []


@pytest.mark.asyncio
async def test_create_rejects_non_object_input(sent_notifications):
    with pytest.raises(InvalidInputError):
        await create_booking(["Windows Cleaning"])


@pytest.mark.asyncio
async def test_create_succeeds_when_notification_raises(monkeypatch):
    async def broken_notify_owner(title, content, transport=None):
        raise RuntimeError("channel down")

    monkeypatch.setattr(NotificationService, "notify_owner", staticmethod(broken_notify_owner))

    booking = await create_booking()

    assert booking.status == BookingStatus.PENDING
    assert [b.id for b in await admin_list()] == [booking.id]


@pytest.mark.asyncio
async def test_create_succeeds_when_notification_not_delivered(monkeypatch):
    async def undelivered(title, content, transport=None):
        return False

    monkeypatch.setattr(NotificationService, "notify_owner", staticmethod(undelivered))

    booking = await create_booking()

    assert booking.id >= 1


@pytest.mark.asyncio
async def test_create_succeeds_with_unconfigured_notification_channel():
    # conftest leaves the notification URL empty, so notify_owner raises.
    booking = await create_booking()

    assert booking.status == BookingStatus.PENDING


@pytest.mark.asyncio
async def test_storage_failure_fails_create_without_notification(tmp_path, monkeypatch, sent_notifications):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "uninitialised.db"))

    with pytest.raises(StorageError) as excinfo:
        await create_booking()

    assert excinfo.value.code == "STORAGE_ERROR"
    assert sent_notifications == []


@pytest.mark.asyncio
async def test_list_requires_authentication(public_ctx):
    with pytest.raises(UnauthenticatedError):
        await app_router.create_caller(public_ctx).bookings.list()


@pytest.mark.asyncio
async def test_list_rejects_non_admin(user_ctx):
    with pytest.raises(UnauthorizedError) as excinfo:
        await app_router.create_caller(user_ctx).bookings.list()

    assert excinfo.value.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_list_treats_unknown_roles_as_non_admin():
    ctx = RequestContext(user=make_user(role="editor"))

    with pytest.raises(UnauthorizedError):
        await app_router.create_caller(ctx).bookings.list()


@pytest.mark.asyncio
async def test_admin_lists_empty_collection(admin_ctx):
    assert await app_router.create_caller(admin_ctx).bookings.list() == []


@pytest.mark.asyncio
async def test_admin_lists_newest_first(admin_ctx, sent_notifications):
    first = await create_booking(WINDOWS_CLEANING)
    second = await create_booking(JANE_DOE)

    bookings = await app_router.create_caller(admin_ctx).bookings.list()

    assert [b.id for b in bookings] == [second.id, first.id]


@pytest.mark.asyncio
async def test_update_status_requires_authentication(public_ctx):
    with pytest.raises(UnauthenticatedError):
        await app_router.create_caller(public_ctx).bookings.updateStatus({"id": 1, "status": "confirmed"})


@pytest.mark.asyncio
async def test_non_admin_cannot_update_status(user_ctx, sent_notifications):
    booking = await create_booking()

    with pytest.raises(UnauthorizedError):
        await app_router.create_caller(user_ctx).bookings.updateStatus(
            {"id": booking.id, "status": "confirmed"}
        )

    [stored] = await admin_list()
    assert stored.status == BookingStatus.PENDING


@pytest.mark.asyncio
async def test_admin_confirms_booking(admin_ctx, sent_notifications):
    booking = await create_booking(JANE_DOE)
    caller = app_router.create_caller(admin_ctx)

    result = await caller.bookings.updateStatus({"id": booking.id, "status": "confirmed"})

    assert result == {"success": True}
    [stored] = await caller.bookings.list()
    assert stored.id == booking.id
    assert stored.status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_update_status_is_idempotent(admin_ctx, sent_notifications):
    booking = await create_booking()
    caller = app_router.create_caller(admin_ctx)

    first = await caller.bookings.updateStatus({"id": booking.id, "status": "completed"})
    second = await caller.bookings.updateStatus({"id": booking.id, "status": "completed"})

    assert first == second == {"success": True}
    [stored] = await caller.bookings.list()
    assert stored.status == BookingStatus.COMPLETED


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_status(admin_ctx, sent_notifications):
    booking = await create_booking()

    with pytest.raises(InvalidInputError):
        await app_router.create_caller(admin_ctx).bookings.updateStatus(
            {"id": booking.id, "status": "archived"}
        )

    [stored] = await admin_list()
    assert stored.status == BookingStatus.PENDING


@pytest.mark.asyncio
async def test_update_status_of_missing_booking_succeeds(admin_ctx):
    result = await app_router.create_caller(admin_ctx).bookings.updateStatus({"id": 999, "status": "cancelled"})

    assert result == {"success": True}
    assert await admin_list() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["1", True, 1.0])
async def test_update_status_rejects_non_integer_id(admin_ctx, sent_notifications, bad_id):
    booking = await create_booking()
    assert booking.id == 1

    with pytest.raises(InvalidInputError) as excinfo:
        await app_router.create_caller(admin_ctx).bookings.updateStatus({"id": bad_id, "status": "confirmed"})

    assert excinfo.value.data["issues"][0]["loc"] == ["id"]
    [stored] = await admin_list()
    assert stored.status == BookingStatus.PENDING


@pytest.mark.asyncio
async def test_storage_queries_run_off_the_event_loop_thread(admin_ctx, monkeypatch, sent_notifications):
    threads = []

    def tracking(connect):
        def get_connection():
            threads.append(threading.get_ident())
            return connect()

        return get_connection

    monkeypatch.setattr(booking_service, "get_connection", tracking(booking_service.get_connection))
    monkeypatch.setattr(user_service, "get_connection", tracking(user_service.get_connection))

    booking = await create_booking()
    await app_router.create_caller(admin_ctx).bookings.updateStatus({"id": booking.id, "status": "confirmed"})
    await admin_list()
    await user_service.UserService.upsert_user("customer-9")

    assert len(threads) == 4
    assert threading.get_ident() not in threads
