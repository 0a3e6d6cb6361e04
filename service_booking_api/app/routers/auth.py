"""Session procedures: who am I, and log out."""

from typing import Dict, Optional

from ..core.config import settings
from ..rpc.context import RequestContext
from ..rpc.guards import public_procedure
from ..rpc.router import Router
from ..schemas.user import AuthenticatedUser


@public_procedure.query()
async def me(ctx: RequestContext) -> Optional[AuthenticatedUser]:
    return ctx.user


@public_procedure.mutation()
async def logout(ctx: RequestContext) -> Dict[str, bool]:
    """Clear the session cookie.

    Tokens are stateless, so logging out only removes the cookie from
    the client; a bearer token stays valid until it expires.
    """
    if ctx.response is not None:
        secure = ctx.request is not None and ctx.request.url.scheme == "https"
        ctx.response.delete_cookie(
            settings.session_cookie_name,
            path="/",
            secure=secure,
            httponly=True,
            samesite="none" if secure else "lax",
        )
    return {"success": True}


router = Router({"me": me, "logout": logout})
