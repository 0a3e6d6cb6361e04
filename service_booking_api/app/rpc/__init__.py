"""
Typed remote procedure call layer.

Procedures (``procedures``) validate their input with pydantic models
and run behind authorization middlewares (``guards``).  Routers
(``router``) compose procedures into one dotted namespace which the
transport (``transport``) exposes over a single HTTP endpoint.
Errors returned to clients are defined in ``errors``.
"""
