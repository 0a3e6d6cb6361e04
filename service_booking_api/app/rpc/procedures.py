"""
Procedure definitions.

A ``Procedure`` couples an async handler with its kind (``query`` or
``mutation``), an optional pydantic input model and a chain of
context middlewares.  Procedures are declared with a
``ProcedureBuilder``::

    @public_procedure.mutation(BookingCreate)
    async def create(ctx, data):
        ...

Invocation order is fixed: the raw input is validated first, then the
middlewares run (authorization), then the handler.  A failure at any
step stops the call before later steps execute.
"""

import json
from typing import Any, Awaitable, Callable, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from .context import RequestContext
from .errors import InvalidInputError


QUERY = "query"
MUTATION = "mutation"

Middleware = Callable[[RequestContext], RequestContext]
Handler = Callable[..., Awaitable[Any]]


def _summarize_issues(issues: list) -> str:
    parts = []
    for issue in issues:
        location = ".".join(str(part) for part in issue.get("loc", ())) or "input"
        parts.append(f"{location}: {issue.get('msg')}")
    return "; ".join(parts) or "Invalid input"


class Procedure:
    """A single named remote operation."""

    def __init__(
        self,
        handler: Handler,
        kind: str,
        input_model: Optional[Type[BaseModel]] = None,
        middlewares: Tuple[Middleware, ...] = (),
    ) -> None:
        self.handler = handler
        self.kind = kind
        self.input_model = input_model
        self.middlewares = middlewares

    def __repr__(self) -> str:
        return f"<Procedure {self.kind} {self.handler.__name__}>"

    def parse_input(self, raw_input: Any) -> Optional[BaseModel]:
        """Validate ``raw_input`` against the declared input model.

        Procedures without an input model ignore whatever was sent.
        Validation failures are raised as ``InvalidInputError`` whose
        ``data`` carries the individual issues.
        """
        if self.input_model is None:
            return None
        try:
            return self.input_model.model_validate(raw_input)
        except ValidationError as exc:
            issues = json.loads(exc.json(include_url=False))
            raise InvalidInputError(_summarize_issues(issues), data={"issues": issues}) from exc

    async def invoke(self, ctx: RequestContext, raw_input: Any = None) -> Any:
        parsed = self.parse_input(raw_input)
        for middleware in self.middlewares:
            ctx = middleware(ctx)
        if self.input_model is None:
            return await self.handler(ctx)
        return await self.handler(ctx, parsed)


class ProcedureBuilder:
    """Factory for procedures sharing a middleware chain.

    ``use`` returns a new builder with one more middleware; builders
    are immutable so module level builders can be shared safely.
    """

    def __init__(self, middlewares: Tuple[Middleware, ...] = ()) -> None:
        self.middlewares = middlewares

    def use(self, middleware: Middleware) -> "ProcedureBuilder":
        return ProcedureBuilder(self.middlewares + (middleware,))

    def query(self, input_model: Optional[Type[BaseModel]] = None) -> Callable[[Handler], Procedure]:
        return self._build(QUERY, input_model)

    def mutation(self, input_model: Optional[Type[BaseModel]] = None) -> Callable[[Handler], Procedure]:
        return self._build(MUTATION, input_model)

    def _build(self, kind: str, input_model: Optional[Type[BaseModel]]) -> Callable[[Handler], Procedure]:
        def decorator(handler: Handler) -> Procedure:
            return Procedure(handler, kind, input_model, self.middlewares)

        return decorator
