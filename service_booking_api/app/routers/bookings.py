"""
Booking procedures.

``create`` is public: it is the intake form customers submit without an
account.  ``list`` and ``updateStatus`` are protected and additionally
restricted to administrators by an inline role check performed before
any storage call.
"""

import logging
from typing import Dict, List

from ..rpc.context import RequestContext
from ..rpc.guards import ensure_admin, protected_procedure, public_procedure
from ..rpc.router import Router
from ..schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingRecord,
    BookingStatus,
    BookingStatusUpdate,
)
from ..services.booking_service import BookingService
from ..services.notification_service import NotificationService


logger = logging.getLogger(__name__)

NEW_BOOKING_TITLE = "New Booking Request"


def format_booking_notification(data: BookingCreate) -> str:
    return (
        f"New booking from {data.customer_name}\n"
        f"Service: {data.service_type} ({data.quantity})\n"
        f"Price: {data.price}\n"
        f"Phone: {data.customer_phone}\n"
        f"Email: {data.customer_email}"
    )


async def _notify_new_booking(booking: BookingRead, data: BookingCreate) -> None:
    # Delivery is best effort: the booking is already stored.
    try:
        delivered = await NotificationService.notify_owner(
            title=NEW_BOOKING_TITLE,
            content=format_booking_notification(data),
        )
    except Exception as exc:
        logger.warning("Owner notification for booking %s failed: %s", booking.id, exc)
        return
    if not delivered:
        logger.warning("Owner notification for booking %s was not delivered", booking.id)


@public_procedure.mutation(BookingCreate)
async def create(ctx: RequestContext, data: BookingCreate) -> BookingRead:
    """Store a booking request and notify the owner.

    The booking is always created as ``pending`` with ``customer_id``
    0.  The owner notification is awaited after the insert succeeds but
    its outcome never changes the result.
    """
    record = BookingRecord(
        customer_id=0,
        service_type=data.service_type,
        quantity=data.quantity,
        price=data.price,
        customer_name=data.customer_name,
        customer_email=data.customer_email,
        customer_phone=data.customer_phone,
        service_date=data.service_date,
        notes=data.notes,
        status=BookingStatus.PENDING,
    )
    booking = await BookingService.create_booking(record)
    await _notify_new_booking(booking, data)
    return booking


@protected_procedure.query()
async def list_bookings(ctx: RequestContext) -> List[BookingRead]:
    ensure_admin(ctx)
    return await BookingService.get_bookings()


@protected_procedure.mutation(BookingStatusUpdate)
async def update_status(ctx: RequestContext, data: BookingStatusUpdate) -> Dict[str, bool]:
    """Change a booking's status.

    Unknown ids are not reported: the call succeeds whether or not a
    booking was updated.
    """
    ensure_admin(ctx)
    await BookingService.update_booking_status(data.id, data.status)
    return {"success": True}


router = Router(
    {
        "create": create,
        "list": list_bookings,
        "updateStatus": update_status,
    }
)
