"""
Per‑call request context.

A ``RequestContext`` is built once per request by
``core.security.get_request_context`` and passed explicitly to every
procedure.  ``user`` is ``None`` for anonymous callers.  ``request``
and ``response`` are the transport handles; they are ``None`` when a
procedure is invoked through a server‑side caller.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request, Response

from ..schemas.user import AuthenticatedUser


@dataclass
class RequestContext:
    user: Optional[AuthenticatedUser] = None
    request: Optional[Request] = None
    response: Optional[Response] = None
