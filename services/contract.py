"""Optional capabilities a model service may expose to the REST controller.

A service never has to inherit from anything here. The controller factory
probes the service class for each method name in ``SERVICE_OPERATIONS`` and
only wires the routes whose method exists. The protocols below document the
expected call shapes; each method may be a plain function or a coroutine.
"""

from __future__ import annotations

from typing import Any, Awaitable, Dict, Iterable, Protocol, Tuple, Union, runtime_checkable

Query = Dict[str, Any]
MaybeAwaitable = Union[Any, Awaitable[Any]]

LIST = "list"
GET_BY_ID = "get_by_id"
CREATE_ONE = "create_one"
REPLACE_BY_ID = "replace_by_id"
UPDATE_BY_ID = "update_by_id"
REMOVE_BY_ID = "remove_by_id"

SERVICE_OPERATIONS: Tuple[str, ...] = (
    LIST,
    GET_BY_ID,
    CREATE_ONE,
    REPLACE_BY_ID,
    UPDATE_BY_ID,
    REMOVE_BY_ID,
)


@runtime_checkable
class SupportsList(Protocol):
    def list(self, query: Query) -> Union[Iterable[Any], Awaitable[Iterable[Any]]]: ...


@runtime_checkable
class SupportsGetById(Protocol):
    def get_by_id(self, id: Any) -> MaybeAwaitable: ...


@runtime_checkable
class SupportsCreateOne(Protocol):
    def create_one(self, data: Any) -> MaybeAwaitable: ...


@runtime_checkable
class SupportsReplaceById(Protocol):
    def replace_by_id(self, id: Any, data: Any) -> MaybeAwaitable: ...


@runtime_checkable
class SupportsUpdateById(Protocol):
    def update_by_id(self, id: Any, data: Any) -> MaybeAwaitable: ...


@runtime_checkable
class SupportsRemoveById(Protocol):
    def remove_by_id(self, id: Any) -> Union[None, Awaitable[None]]: ...


def has_operation(service_type: type, name: str) -> bool:
    return callable(getattr(service_type, name, None))


def detect_operations(service_type: type) -> frozenset:
    """Return the contract methods ``service_type`` declares as callables."""
    return frozenset(name for name in SERVICE_OPERATIONS if has_operation(service_type, name))
