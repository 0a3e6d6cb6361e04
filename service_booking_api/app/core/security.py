"""
Session tokens and the per‑request authentication context.

Session tokens are JSON Web Tokens signed with HMAC‑SHA256 and
base64url encoding.  The token subject (``sub``) is the user's
``open_id``; ``exp`` holds the expiration time as a UNIX timestamp.
Clients send the token either in the session cookie or in an
``Authorization: Bearer`` header.

``get_request_context`` is the FastAPI dependency that turns a request
into a ``RequestContext``.  Authentication problems never fail the
request here: the caller is simply anonymous, and protected procedures
reject it later.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict, Optional

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..rpc.context import RequestContext
from ..rpc.errors import StorageError
from ..schemas.user import AuthenticatedUser
from .config import settings


logger = logging.getLogger(__name__)


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_session_token(open_id: str, expires_delta: Optional[int] = None, **claims: Any) -> str:
    """Create a signed session token for ``open_id``.

    Parameters
    ----------
    open_id : str
        Identity of the user; stored as the ``sub`` claim.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.session_expire_minutes * 60``.
    **claims
        Extra claims to embed (for example ``name``).

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    payload: Dict[str, Any] = dict(claims)
    payload["sub"] = open_id
    exp_seconds = expires_delta if expires_delta is not None else settings.session_expire_minutes * 60
    payload["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_session_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a session token.

    Returns the payload if the signature matches, the token has not
    expired and it carries a ``sub`` claim; otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict) or not data.get("sub"):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        return None
    return data


async def authenticate_token(token: Optional[str]) -> Optional[AuthenticatedUser]:
    """Resolve a session token to a stored user.

    Returns ``None`` for a missing, invalid or expired token, for an
    unknown subject and when storage is unavailable.
    """
    if not token:
        return None
    payload = decode_session_token(token)
    if payload is None:
        return None
    from ..services.user_service import UserService

    open_id = str(payload["sub"])
    try:
        user = await UserService.get_user_by_open_id(open_id)
        if user is not None:
            await UserService.mark_signed_in(open_id)
    except StorageError as exc:
        logger.warning("Could not authenticate session for %s: %s", open_id, exc)
        return None
    return user


bearer_scheme = HTTPBearer(auto_error=False)


async def get_request_context(
    request: Request,
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> RequestContext:
    """Dependency building the context for one RPC request.

    A bearer token takes precedence over the session cookie.
    """
    token = credentials.credentials if credentials else request.cookies.get(settings.session_cookie_name)
    user = await authenticate_token(token)
    return RequestContext(user=user, request=request, response=response)
