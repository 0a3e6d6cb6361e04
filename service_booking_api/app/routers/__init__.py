"""
Procedure groups.

Each module in this package defines a ``router`` for one domain
(``bookings``, ``auth``, ``system``).  They are composed into
``app_router`` in ``app_router.py``, which the transport serves.
"""
