"""
Data access for service bookings.

The ``BookingService`` is the storage collaborator of the booking
procedures: it inserts new bookings, lists all of them and changes the
status of a single booking.  Every method opens its own connection and
closes it before returning.  Queries run in the FastAPI threadpool so
the event loop keeps serving other requests.  ``sqlite3`` failures
are raised as ``StorageError``.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import List

from fastapi.concurrency import run_in_threadpool

from ..core.db import get_connection
from ..rpc.errors import StorageError
from ..schemas.booking import BookingRead, BookingRecord, BookingStatus


BOOKING_COLUMNS = (
    "id, customer_id, service_type, quantity, price, customer_name, customer_email, "
    "customer_phone, service_date, notes, status, created_at, updated_at"
)


def _row_to_booking(row: sqlite3.Row) -> BookingRead:
    return BookingRead(**dict(row))


class BookingService:
    """Service for persisting bookings."""

    @classmethod
    async def create_booking(cls, record: BookingRecord) -> BookingRead:
        return await run_in_threadpool(cls._insert_booking, record)

    @classmethod
    async def get_bookings(cls) -> List[BookingRead]:
        """Return every booking, newest first."""
        return await run_in_threadpool(cls._select_bookings)

    @classmethod
    async def update_booking_status(cls, booking_id: int, status: BookingStatus) -> None:
        await run_in_threadpool(cls._update_status, booking_id, status)

    @classmethod
    def _insert_booking(cls, record: BookingRecord) -> BookingRead:
        """Insert ``record`` and return the stored booking.

        The returned ``BookingRead`` carries the identifier assigned by
        the database and is read back after the insert, so it reflects
        exactly what was persisted.
        """
        logger = logging.getLogger(__name__)
        now = datetime.now(timezone.utc).isoformat()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO bookings (
                    customer_id, service_type, quantity, price, customer_name,
                    customer_email, customer_phone, service_date, notes, status,
                    created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.customer_id,
                    record.service_type,
                    record.quantity,
                    record.price,
                    record.customer_name,
                    record.customer_email,
                    record.customer_phone,
                    record.service_date,
                    record.notes,
                    BookingStatus(record.status).value,
                    now,
                    now,
                ),
            )
            booking_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                f"SELECT {BOOKING_COLUMNS} FROM bookings WHERE id = ?",
                (booking_id,),
            ).fetchone()
            logger.info("Booking %s created for %s", booking_id, record.service_type)
            return _row_to_booking(row)
        except sqlite3.Error as exc:
            logger.error("Failed to create booking: %s", exc)
            raise StorageError("Failed to create booking") from exc
        finally:
            conn.close()

    @classmethod
    def _select_bookings(cls) -> List[BookingRead]:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            rows = cursor.execute(
                f"SELECT {BOOKING_COLUMNS} FROM bookings ORDER BY created_at DESC, id DESC"
            ).fetchall()
            return [_row_to_booking(row) for row in rows]
        except sqlite3.Error as exc:
            logging.getLogger(__name__).error("Failed to list bookings: %s", exc)
            raise StorageError("Failed to list bookings") from exc
        finally:
            conn.close()

    @classmethod
    def _update_status(cls, booking_id: int, status: BookingStatus) -> None:
        """Set the status of a booking.

        Updating an id that does not exist is a no‑op; it is logged as a
        warning but not reported to the caller.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE bookings SET status = ?, updated_at = ? WHERE id = ?",
                (
                    BookingStatus(status).value,
                    datetime.now(timezone.utc).isoformat(),
                    booking_id,
                ),
            )
            conn.commit()
            if cursor.rowcount == 0:
                logger.warning("Status update for unknown booking %s ignored", booking_id)
            else:
                logger.info("Booking %s status set to %s", booking_id, BookingStatus(status).value)
        except sqlite3.Error as exc:
            logger.error("Failed to update booking %s: %s", booking_id, exc)
            raise StorageError(f"Failed to update booking {booking_id}") from exc
        finally:
            conn.close()
