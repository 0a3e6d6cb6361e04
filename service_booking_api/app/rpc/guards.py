"""
Authorization guards.

``require_user`` and ``require_admin`` are procedure middlewares; they
run after input validation and before the handler.  ``ensure_admin``
is the inline check used inside protected booking handlers, and must
be called before any storage call.
"""

from .context import RequestContext
from .errors import NOT_ADMIN_ERR_MSG, UnauthenticatedError, UnauthorizedError
from .procedures import ProcedureBuilder


def require_user(ctx: RequestContext) -> RequestContext:
    if ctx.user is None:
        raise UnauthenticatedError()
    return ctx


def require_admin(ctx: RequestContext) -> RequestContext:
    if ctx.user is None or not ctx.user.is_admin:
        raise UnauthorizedError(NOT_ADMIN_ERR_MSG)
    return ctx


def ensure_admin(ctx: RequestContext) -> None:
    """Raise ``UnauthorizedError`` unless the caller's role is ``admin``."""
    if ctx.user is None or not ctx.user.is_admin:
        raise UnauthorizedError("Unauthorized")


public_procedure = ProcedureBuilder()
protected_procedure = public_procedure.use(require_user)
admin_procedure = protected_procedure.use(require_admin)
