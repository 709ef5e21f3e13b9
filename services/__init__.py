from services.container import ServiceContainer
from services.contract import SERVICE_OPERATIONS, detect_operations
from services.exceptions import NotFoundError, ServiceError, ValidationError
from services.memory import InMemoryModelService, NoteService

__all__ = [
    "NotFoundError",
    "ServiceError",
    "ValidationError",
    "ServiceContainer",
    "SERVICE_OPERATIONS",
    "detect_operations",
    "InMemoryModelService",
    "NoteService",
]
