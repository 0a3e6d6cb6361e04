"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Procedures are grouped by domain under ``routers``
(``bookings``, ``auth``, ``system``) and composed into a single
``app_router``.  The ``rpc`` subpackage holds the generic procedure,
router and transport machinery; ``services`` holds storage and the
owner notification channel.
"""

from .main import app  # noqa: F401
