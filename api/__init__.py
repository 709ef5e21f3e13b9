from api.rest import RequestContext, RestController, RestControllerFactory, RouteDescriptor

__all__ = [
    "RequestContext",
    "RestController",
    "RestControllerFactory",
    "RouteDescriptor",
]
