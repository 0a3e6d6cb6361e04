"""Shared test data and factories."""

from datetime import datetime, timezone

from service_booking_api.app.schemas.user import AuthenticatedUser


WINDOWS_CLEANING = {
    "serviceType": "Windows Cleaning",
    "quantity": "3 Windows",
    "price": "R60",
    "customerName": "John Doe",
    "customerEmail": "john@example.com",
    "customerPhone": "+27 71 359 3615",
    "serviceDate": "2026-02-20",
    "notes": "Please be careful with the windows",
}

JANE_DOE = {
    "serviceType": "Windows Cleaning",
    "quantity": "3 Windows",
    "price": "R60",
    "customerName": "Jane Doe",
    "customerEmail": "jane@example.com",
    "customerPhone": "+27 82 843 4110",
}


def make_user(role: str = "user", user_id: int = 2, open_id: str = "regular-user") -> AuthenticatedUser:
    now = datetime.now(timezone.utc)
    return AuthenticatedUser(
        id=user_id,
        open_id=open_id,
        email=f"{open_id}@example.com",
        name=open_id.replace("-", " ").title(),
        login_method="token",
        role=role,
        created_at=now,
        updated_at=now,
        last_signed_in=now,
    )
