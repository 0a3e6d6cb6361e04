"""
HTTP transport for the procedure router.

All procedures share one endpoint, ``/{path}``, mounted under
``/api/trpc`` by ``create_app``:

* queries are called with ``GET`` and a JSON encoded ``input`` query
  parameter;
* mutations are called with ``POST`` and a JSON body.

Successful calls return ``{"result": {"data": ...}}``.  Failed calls
return the error's HTTP status and ``{"error": {...}}`` as produced by
``RPCError.to_dict``.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.encoders import jsonable_encoder

from ..core.security import get_request_context
from ..routers.app_router import app_router
from .context import RequestContext
from .errors import InvalidInputError, MethodNotSupportedError, RPCError
from .procedures import MUTATION, QUERY
from .router import Router


logger = logging.getLogger(__name__)


def _decode_json(raw: Union[str, bytes, None]) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
        raise InvalidInputError("Input is not valid JSON") from exc


async def dispatch(
    rpc_router: Router,
    path: str,
    kind: str,
    ctx: RequestContext,
    response: Response,
    raw_input: Any = None,
) -> Dict[str, Any]:
    """Run one call and build the response envelope.

    ``kind`` is the procedure kind allowed by the HTTP method used.
    """
    try:
        procedure = rpc_router.resolve(path)
        if procedure.kind != kind:
            raise MethodNotSupportedError(
                f'Unsupported {"GET" if kind == QUERY else "POST"} request to {procedure.kind} procedure at path "{path}"'
            )
        result = await rpc_router.call(path, ctx, raw_input)
    except RPCError as exc:
        if exc.http_status >= 500:
            logger.error("Procedure %s failed: %s", path, exc.message)
        else:
            logger.info("Procedure %s rejected (%s): %s", path, exc.code, exc.message)
        response.status_code = exc.http_status
        return {"error": exc.to_dict(path=path)}
    return {"result": {"data": jsonable_encoder(result, by_alias=True)}}


router = APIRouter()


@router.get("/{path}")
async def handle_query(
    path: str,
    response: Response,
    raw: Optional[str] = Query(None, alias="input", description="JSON encoded procedure input"),
    ctx: RequestContext = Depends(get_request_context),
) -> Dict[str, Any]:
    """Call a query procedure."""
    try:
        raw_input = _decode_json(raw)
    except InvalidInputError as exc:
        response.status_code = exc.http_status
        return {"error": exc.to_dict(path=path)}
    return await dispatch(app_router, path, QUERY, ctx, response, raw_input)


@router.post("/{path}")
async def handle_mutation(
    path: str,
    request: Request,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
) -> Dict[str, Any]:
    """Call a mutation procedure with the JSON request body as input."""
    try:
        raw_input = _decode_json(await request.body())
    except InvalidInputError as exc:
        response.status_code = exc.http_status
        return {"error": exc.to_dict(path=path)}
    return await dispatch(app_router, path, MUTATION, ctx, response, raw_input)
