# Shared helpers for REST controller tests.
# Handler-level tests build a RequestContext by hand, mounted tests go through TestClient.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.rest import RequestContext, rest
from main import register_error_handlers
from services import ServiceContainer


class EmptyService:
    """Service implementing none of the optional operations."""


def make_context(
    *,
    params: dict[str, Any] | None = None,
    query: dict[str, Any] | None = None,
    body: Any = None,
) -> RequestContext:
    return RequestContext(params=params or {}, query=query, body=body)


@contextmanager
def rest_test_client(
    service_type: type,
    *,
    base_path: str = "/",
    services: ServiceContainer | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient for an app exposing only ``service_type``'s controller."""

    app = FastAPI()
    app.state.services = services or ServiceContainer()
    app.router.redirect_slashes = False
    register_error_handlers(app)
    app.include_router(rest.attach_service(base_path, service_type).as_router())

    with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
        yield client
