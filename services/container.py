from __future__ import annotations

import logging
from typing import Any, Dict, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ServiceContainer:
    """Holds one service instance per service type.

    Instances are created on first ``resolve`` by calling the type with no
    arguments, unless one was bound beforehand with ``register``.
    """

    def __init__(self) -> None:
        self._instances: Dict[type, Any] = {}

    def register(self, service_type: Type[T], instance: T) -> T:
        self._instances[service_type] = instance
        return instance

    def resolve(self, service_type: Type[T]) -> T:
        if service_type not in self._instances:
            logger.debug("Instantiating service %s", service_type.__name__)
            self._instances[service_type] = service_type()
        return self._instances[service_type]

    def __contains__(self, service_type: object) -> bool:
        return service_type in self._instances
