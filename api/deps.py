from __future__ import annotations

from fastapi import Request

from services import ServiceContainer


def get_services(request: Request) -> ServiceContainer:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("No ServiceContainer configured on app.state.services.")
    return services
