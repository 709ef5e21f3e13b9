from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from services.exceptions import NotFoundError, ValidationError

PAGINATION_KEYS = ("limit", "offset")


def _as_dict(data: Any) -> Dict[str, Any]:
    if data is None:
        return {}
    if hasattr(data, "model_dump"):
        return data.model_dump()
    if isinstance(data, Mapping):
        return dict(data)
    raise ValidationError(f"Expected an object payload, got {type(data).__name__}.")


def _as_int(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Expected an integer, got {value!r}.") from exc
    if number < 0:
        raise ValidationError(f"Expected a non-negative integer, got {number}.")
    return number


@dataclass
class InMemoryModelService:
    """Dict-backed model service implementing every optional operation.

    Entities are plain dicts keyed by their ``id`` field. Reads return copies
    so callers cannot mutate stored state.
    """

    entity_name: str = "Entity"
    partition_key: str = "id"
    default_limit: int = 100
    items: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def _missing(self, item_id: Any) -> NotFoundError:
        return NotFoundError(f"{self.entity_name} with id={item_id} was not found.")

    def get_required_item(self, item_id: Any) -> Dict[str, Any]:
        item = self.items.get(str(item_id))
        if item is None:
            raise self._missing(item_id)
        return item

    async def list(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        filters = {key: value for key, value in query.items() if key not in PAGINATION_KEYS}
        limit = _as_int(query.get("limit"), self.default_limit)
        offset = _as_int(query.get("offset"), 0)

        matching = [
            item
            for item in self.items.values()
            if all(str(item.get(key)) == str(value) for key, value in filters.items())
        ]
        return [copy.deepcopy(item) for item in matching[offset : offset + limit]]

    async def get_by_id(self, item_id: Any) -> Dict[str, Any]:
        return copy.deepcopy(self.get_required_item(item_id))

    async def create_one(self, data: Any) -> Dict[str, Any]:
        payload = _as_dict(data)
        raw_id = payload.pop(self.partition_key, None)
        item_id = str(raw_id if raw_id is not None else uuid4())
        if item_id in self.items:
            raise ValidationError(f"{self.entity_name} with id={item_id} already exists.")
        item = {self.partition_key: item_id, **payload}
        self.items[item_id] = item
        return copy.deepcopy(item)

    async def replace_by_id(self, item_id: Any, data: Any) -> Dict[str, Any]:
        self.get_required_item(item_id)
        payload = _as_dict(data)
        payload.pop(self.partition_key, None)
        item = {self.partition_key: str(item_id), **payload}
        self.items[str(item_id)] = item
        return copy.deepcopy(item)

    async def update_by_id(self, item_id: Any, data: Any) -> Dict[str, Any]:
        existing = self.get_required_item(item_id)
        updates = _as_dict(data)
        updates.pop(self.partition_key, None)
        merged = {**existing, **updates}
        self.items[str(item_id)] = merged
        return copy.deepcopy(merged)

    async def remove_by_id(self, item_id: Any) -> None:
        if self.items.pop(str(item_id), None) is None:
            raise self._missing(item_id)

    def seed(self, entities: Optional[List[Mapping[str, Any]]] = None) -> None:
        for entity in entities or []:
            payload = dict(entity)
            raw_id = payload.pop(self.partition_key, None)
            item_id = str(raw_id if raw_id is not None else uuid4())
            self.items[item_id] = {self.partition_key: item_id, **payload}


@dataclass
class NoteService(InMemoryModelService):
    entity_name: str = "Note"
