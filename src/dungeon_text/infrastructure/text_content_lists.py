from __future__ import annotations

from typing import Callable, Generic, Iterator, Sequence, TypeVar

from dungeon_text.domain.errors import TextContentError
from dungeon_text.domain.models.text_line import TextLine
from dungeon_text.domain.models.text_trigger import TextTriggerBinding, TextTriggerType


T = TypeVar("T")


class IdIndexedList(Generic[T]):
    """Ordered content list that rejects blank and duplicate ids up front."""

    def __init__(self, items: Sequence[T], id_of: Callable[[T], str], label: str) -> None:
        if items is None:
            raise TextContentError(f"{label} list is required")
        if not str(label or "").strip():
            raise ValueError("label is required")
        self.label = label
        self._items: tuple[T, ...] = tuple(items)
        self._by_id = self._build_index(self._items, id_of, label)

    @staticmethod
    def _build_index(items: Sequence[T], id_of: Callable[[T], str], label: str) -> dict[str, T]:
        by_id: dict[str, T] = {}
        for index, item in enumerate(items):
            if item is None:
                raise TextContentError(f"{label} list cannot contain empty entries (index {index})")
            item_id = id_of(item)
            if not str(item_id or "").strip():
                raise TextContentError(f"{label} id cannot be empty (index {index})")
            if item_id in by_id:
                raise TextContentError(f"Duplicate {label} id detected: {item_id}")
            by_id[item_id] = item
        return by_id

    @staticmethod
    def _require_id(item_id: str) -> None:
        if not str(item_id or "").strip():
            raise ValueError("id cannot be empty")

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    def contains_id(self, item_id: str) -> bool:
        self._require_id(item_id)
        return item_id in self._by_id

    def try_get_by_id(self, item_id: str) -> T | None:
        self._require_id(item_id)
        return self._by_id.get(item_id)

    def get_by_id(self, item_id: str) -> T:
        self._require_id(item_id)
        if item_id not in self._by_id:
            raise KeyError(f"{self.label} not found: {item_id}")
        return self._by_id[item_id]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)


class TextLineList(IdIndexedList[TextLine]):
    def __init__(self, lines: Sequence[TextLine]) -> None:
        super().__init__(lines, lambda line: line.id, "TextLine")


class TextTriggerBindingList(IdIndexedList[TextTriggerBinding]):
    def __init__(self, bindings: Sequence[TextTriggerBinding]) -> None:
        super().__init__(bindings, lambda binding: binding.id, "TextTriggerBinding")
        self._by_trigger: dict[TextTriggerType, list[TextTriggerBinding]] = {}
        for binding in self.items:
            self._by_trigger.setdefault(binding.trigger_type, []).append(binding)

    def get_by_trigger_type(self, trigger_type: TextTriggerType) -> tuple[TextTriggerBinding, ...]:
        return tuple(self._by_trigger.get(trigger_type, ()))
