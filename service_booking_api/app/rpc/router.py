"""
Router composition.

A ``Router`` is a lookup table from names to procedures or nested
routers.  Nested routers form a single dotted namespace such as
``bookings.updateStatus``.  Routers carry no per‑request state; the
context is supplied on every call.
"""

import logging
from typing import Any, Dict, Mapping, Union

from .context import RequestContext
from .errors import NotFoundError, RPCError
from .procedures import Procedure


logger = logging.getLogger(__name__)


class Router:
    """Named group of procedures and sub‑routers."""

    def __init__(self, routes: Mapping[str, Union[Procedure, "Router"]]) -> None:
        for name, route in routes.items():
            if not name or "." in name:
                raise ValueError(f"Invalid route name {name!r}")
            if not isinstance(route, (Procedure, Router)):
                raise TypeError(f"Route {name!r} must be a Procedure or Router, got {type(route).__name__}")
        self._routes: Dict[str, Union[Procedure, Router]] = dict(routes)

    def procedures(self, prefix: str = "") -> Dict[str, Procedure]:
        """Return every procedure keyed by its full dotted path."""
        flat: Dict[str, Procedure] = {}
        for name, route in self._routes.items():
            path = f"{prefix}.{name}" if prefix else name
            if isinstance(route, Router):
                flat.update(route.procedures(path))
            else:
                flat[path] = route
        return flat

    def resolve(self, path: str) -> Procedure:
        """Find the procedure registered under ``path``.

        Raises
        ------
        NotFoundError
            If no procedure exists on that path.
        """
        node: Union[Procedure, Router] = self
        for part in path.split("."):
            if not isinstance(node, Router) or part not in node._routes:
                raise NotFoundError(f'No procedure found on path "{path}"')
            node = node._routes[part]
        if not isinstance(node, Procedure):
            raise NotFoundError(f'No procedure found on path "{path}"')
        return node

    async def call(self, path: str, ctx: RequestContext, raw_input: Any = None) -> Any:
        """Dispatch a call by name.

        ``RPCError`` subclasses propagate unchanged.  Any other exception
        is logged and re‑raised as a generic ``RPCError`` so clients never
        see internal details.
        """
        procedure = self.resolve(path)
        try:
            return await procedure.invoke(ctx, raw_input)
        except RPCError:
            raise
        except Exception as exc:
            logger.exception("Unhandled error in procedure %s", path)
            raise RPCError() from exc

    def create_caller(self, ctx: RequestContext) -> "Caller":
        """Return a server‑side caller bound to ``ctx``.

        ``await router.create_caller(ctx).bookings.list()`` is equivalent
        to ``await router.call("bookings.list", ctx)``.
        """
        return Caller(self, ctx)


class Caller:
    """Attribute‑style access to a router's procedures."""

    def __init__(self, router: Router, ctx: RequestContext, path: str = "") -> None:
        self._router = router
        self._ctx = ctx
        self._path = path

    def __getattr__(self, name: str) -> "Caller":
        if name.startswith("_"):
            raise AttributeError(name)
        path = f"{self._path}.{name}" if self._path else name
        return Caller(self._router, self._ctx, path)

    async def __call__(self, raw_input: Any = None) -> Any:
        return await self._router.call(self._path, self._ctx, raw_input)
