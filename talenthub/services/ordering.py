# talenthub/services/ordering.py

import logging
from typing import Any, Callable, Generic, List, Optional, TypeVar

from talenthub.core.exceptions import ReorderError, StoreError
from talenthub.schemas.assessment import CamelModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=CamelModel)


class OrderedCollectionView(Generic[T]):
    """
    In-memory list of items with an `order` field, reordered optimistically.

    A move is applied to the view first, then one update per item whose
    position changed is persisted. If any write fails the view is rebuilt
    from the store (`resync`) and ReorderError is raised; there is no
    per-item compensation.
    """

    def __init__(
        self,
        load: Callable[[], List[T]],
        persist_order: Callable[[str, int], Optional[Any]],
        name: str = "items",
    ):
        self._load = load
        self._persist_order = persist_order
        self.name = name
        self.items: List[T] = []

    def load(self) -> List[T]:
        self.items = sorted(self._load(), key=lambda item: item.order)
        return self.items

    def resync(self) -> List[T]:
        """Discard the optimistic state and reload the authoritative list."""
        logger.warning(f"Resynchronising {self.name} from the store")
        return self.load()

    def move(self, from_index: int, to_index: int) -> List[T]:
        if not (0 <= from_index < len(self.items)) or not (0 <= to_index < len(self.items)):
            raise IndexError(f"Cannot move item {from_index} to {to_index} in {len(self.items)} {self.name}")
        if from_index == to_index:
            return self.items

        previous = {item.id: item.order for item in self.items}
        items = list(self.items)
        items.insert(to_index, items.pop(from_index))
        self.items = [item.model_copy(update={"order": i}) for i, item in enumerate(items)]

        changed = [item for item in self.items if previous[item.id] != item.order]
        try:
            for item in changed:
                if self._persist_order(item.id, item.order) is None:
                    raise StoreError(f"{item.id} no longer exists")
        except StoreError as e:
            self.resync()
            raise ReorderError(f"Failed to reorder {self.name}: {e}") from e

        logger.info(f"Reordered {self.name}: moved {from_index} to {to_index}, {len(changed)} updated")
        return self.items
