"""
Error taxonomy for remote procedure calls.

Every failure surfaced to a client is an ``RPCError`` subclass.  Each
class carries a stable ``code`` and the HTTP status the transport uses
when returning it, so clients can tell the kinds apart without parsing
messages.
"""

from typing import Any, Dict, Optional


UNAUTHED_ERR_MSG = "Please login (10001)"
NOT_ADMIN_ERR_MSG = "You do not have required permission (10002)"


class RPCError(Exception):
    """Base class for errors returned to RPC clients.

    Parameters
    ----------
    message : Optional[str]
        Human readable description.  Defaults to ``default_message``.
    data : Optional[dict]
        Extra structured detail merged into the error payload (for
        example validation issues).
    """

    code = "INTERNAL_SERVER_ERROR"
    http_status = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, data: Optional[Dict[str, Any]] = None) -> None:
        self.message = message or self.default_message
        self.data = data or {}
        super().__init__(self.message)

    def to_dict(self, path: Optional[str] = None) -> Dict[str, Any]:
        """Serialize the error into the transport's ``error`` shape."""
        data: Dict[str, Any] = {"code": self.code, "httpStatus": self.http_status}
        if path is not None:
            data["path"] = path
        data.update(self.data)
        return {"message": self.message, "code": self.code, "data": data}


class InvalidInputError(RPCError):
    """The request payload failed schema or type validation."""

    code = "BAD_REQUEST"
    http_status = 400
    default_message = "Invalid input"


class UnauthenticatedError(RPCError):
    """A protected procedure was called without an identity."""

    code = "UNAUTHORIZED"
    http_status = 401
    default_message = UNAUTHED_ERR_MSG


class UnauthorizedError(RPCError):
    """The caller is authenticated but lacks the required role."""

    code = "FORBIDDEN"
    http_status = 403
    default_message = "Unauthorized"


class NotFoundError(RPCError):
    code = "NOT_FOUND"
    http_status = 404
    default_message = "Not found"


class MethodNotSupportedError(RPCError):
    code = "METHOD_NOT_SUPPORTED"
    http_status = 405
    default_message = "Method not supported"


class StorageError(RPCError):
    """The persistence layer failed to complete an operation."""

    code = "STORAGE_ERROR"
    http_status = 500
    default_message = "Storage failure"
