"""Generic REST controller built from whatever a model service implements.

``rest.attach_service("/notes", NoteService)`` inspects ``NoteService`` once
and returns a ``RestController`` holding ten routes. Routes backed by a
contract method the service lacks answer 501. Bulk and item shapes the
contract never defines answer 405. The service instance itself is resolved
from the ``ServiceContainer`` on every request.
"""

from __future__ import annotations

import inspect
import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from api.deps import get_services
from services.container import ServiceContainer
from services.contract import (
    CREATE_ONE,
    GET_BY_ID,
    LIST,
    REMOVE_BY_ID,
    REPLACE_BY_ID,
    UPDATE_BY_ID,
    detect_operations,
)
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

ID_PARAM = "id"

COLLECTION_METHODS = ("GET", "POST")
ITEM_METHODS = ("GET", "PUT", "PATCH", "DELETE")


@dataclass
class RequestContext:
    params: Dict[str, Any] = field(default_factory=dict)
    query: Optional[Dict[str, Any]] = None
    body: Any = None
    request: Optional[Request] = None

    @classmethod
    async def from_request(cls, request: Request, read_body: bool = True) -> "RequestContext":
        query = dict(request.query_params) if request.query_params else None
        raw_body = await request.body() if read_body else b""
        body = None
        if raw_body:
            try:
                body = json.loads(raw_body)
            except ValueError as exc:
                raise HTTPException(status_code=400, detail="Request body is not valid JSON.") from exc
        return cls(params=dict(request.path_params), query=query, body=body, request=request)


Handler = Callable[[RequestContext, ServiceContainer], Awaitable[Response]]


@dataclass(frozen=True)
class RouteDescriptor:
    http_method: str
    path: str
    handler: Handler
    operation: Optional[str] = None
    needs_body: bool = False


def not_implemented() -> Response:
    return JSONResponse(status_code=status.HTTP_501_NOT_IMPLEMENTED, content={"detail": "Not Implemented"})


def method_not_allowed(allowed: Tuple[str, ...]) -> Response:
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"detail": "Method Not Allowed"},
        headers={"Allow": ", ".join(allowed)},
    )


def not_found(exc: NotFoundError) -> Response:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc) or "Not Found"})


def ok(result: Any, status_code: int = status.HTTP_200_OK) -> Response:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(result))


def no_content(_: Any = None) -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _list_args(ctx: RequestContext) -> tuple:
    return (ctx.query or {},)


def _id_args(ctx: RequestContext) -> tuple:
    return (ctx.params.get(ID_PARAM),)


def _body_args(ctx: RequestContext) -> tuple:
    return (ctx.body,)


def _id_body_args(ctx: RequestContext) -> tuple:
    return (ctx.params.get(ID_PARAM), ctx.body)


def _as_list(result: Any) -> Response:
    if result is None:
        return ok([])
    if isinstance(result, (list, tuple, Mapping, str, bytes)):
        return ok(result)
    return ok(list(result))


def _created(result: Any) -> Response:
    return ok(result, status.HTTP_201_CREATED)


BODY_EXTRACTORS = (_body_args, _id_body_args)

# operation key -> (http method, item path?, contract method, argument extractor, result mapper)
CAPABILITY_ROUTES = {
    "getAll": ("GET", False, LIST, _list_args, _as_list),
    "getById": ("GET", True, GET_BY_ID, _id_args, ok),
    "postAll": ("POST", False, CREATE_ONE, _body_args, _created),
    "putById": ("PUT", True, REPLACE_BY_ID, _id_body_args, ok),
    "patchById": ("PATCH", True, UPDATE_BY_ID, _id_body_args, ok),
    "deleteById": ("DELETE", True, REMOVE_BY_ID, _id_args, no_content),
}

DISALLOWED_ROUTES = {
    "postById": ("POST", True),
    "putAll": ("PUT", False),
    "patchAll": ("PATCH", False),
    "deleteAll": ("DELETE", False),
}

ROUTE_KEYS = (
    "getAll",
    "getById",
    "postAll",
    "postById",
    "putAll",
    "putById",
    "patchAll",
    "patchById",
    "deleteAll",
    "deleteById",
)


def _unsupported_handler() -> Handler:
    async def handler(ctx: RequestContext, services: ServiceContainer) -> Response:
        return not_implemented()

    return handler


def _disallowed_handler(allowed: Tuple[str, ...]) -> Handler:
    async def handler(ctx: RequestContext, services: ServiceContainer) -> Response:
        return method_not_allowed(allowed)

    return handler


def _operation_handler(
    service_type: type,
    operation: str,
    extract: Callable[[RequestContext], tuple],
    respond: Callable[[Any], Response],
) -> Handler:
    async def handler(ctx: RequestContext, services: ServiceContainer) -> Response:
        service = services.resolve(service_type)
        method = getattr(service, operation, None)
        if not callable(method):
            logger.warning("%s.%s disappeared after attach.", service_type.__name__, operation)
            return not_implemented()

        try:
            if inspect.iscoroutinefunction(method):
                result = await method(*extract(ctx))
            else:
                # plain functions may block, keep them off the event loop
                result = await run_in_threadpool(method, *extract(ctx))
            if inspect.isawaitable(result):
                result = await result
        except NotFoundError as exc:
            logger.info("%s.%s raised NotFoundError: %s", service_type.__name__, operation, exc)
            return not_found(exc)
        return respond(result)

    return handler


class RestController:
    """Route table produced by a single ``attach_service`` call."""

    def __init__(
        self,
        base_path: str,
        service_type: type,
        routes: Mapping[str, RouteDescriptor],
        supported_operations: frozenset,
    ) -> None:
        self.base_path = base_path
        self.service_type = service_type
        self.supported_operations = supported_operations
        self._routes = MappingProxyType(dict(routes))

    @property
    def routes(self) -> Mapping[str, RouteDescriptor]:
        return self._routes

    def get_route(self, key: str) -> RouteDescriptor:
        return self._routes[key]

    def as_router(self, **router_kwargs: Any) -> APIRouter:
        """Mount every route on a new ``APIRouter``.

        The container comes from ``api.deps.get_services`` so applications and
        tests can swap it through ``dependency_overrides``.
        """
        router = APIRouter(**router_kwargs)
        for key in ROUTE_KEYS:
            descriptor = self._routes[key]
            router.add_api_route(
                descriptor.path,
                _endpoint(descriptor),
                methods=[descriptor.http_method],
                name=f"{self.service_type.__name__}.{key}",
                include_in_schema=descriptor.operation is not None,
            )
        return router


def _endpoint(descriptor: RouteDescriptor):
    async def endpoint(request: Request, services: ServiceContainer = Depends(get_services)) -> Response:
        ctx = await RequestContext.from_request(request, read_body=descriptor.needs_body)
        return await descriptor.handler(ctx, services)

    return endpoint


def _paths(base_path: str) -> Tuple[str, str]:
    base = base_path.rstrip("/")
    return f"{base}/", f"{base}/{{{ID_PARAM}}}"


class RestControllerFactory:
    def attach_service(self, base_path: str, service_type: type) -> RestController:
        supported = detect_operations(service_type)
        collection_path, item_path = _paths(base_path)
        logger.debug(
            "Attaching %s at %s with operations: %s",
            service_type.__name__,
            collection_path,
            ", ".join(sorted(supported)) or "none",
        )

        routes: Dict[str, RouteDescriptor] = {}
        for key, (http_method, is_item, operation, extract, respond) in CAPABILITY_ROUTES.items():
            path = item_path if is_item else collection_path
            if operation in supported:
                handler = _operation_handler(service_type, operation, extract, respond)
                needs_body = extract in BODY_EXTRACTORS
            else:
                handler = _unsupported_handler()
                needs_body = False
            routes[key] = RouteDescriptor(http_method, path, handler, operation, needs_body)

        for key, (http_method, is_item) in DISALLOWED_ROUTES.items():
            path = item_path if is_item else collection_path
            allowed = ITEM_METHODS if is_item else COLLECTION_METHODS
            routes[key] = RouteDescriptor(http_method, path, _disallowed_handler(allowed))

        return RestController(base_path, service_type, routes, supported)


rest = RestControllerFactory()
