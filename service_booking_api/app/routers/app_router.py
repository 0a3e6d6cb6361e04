"""
Top‑level procedure router.

Aggregates the domain routers under their namespace names.  When a new
domain is added, register its router here; the transport serves every
procedure reachable from ``app_router``.
"""

from ..rpc.router import Router
from . import auth, bookings, system


app_router = Router(
    {
        "system": system.router,
        "auth": auth.router,
        "bookings": bookings.router,
    }
)
