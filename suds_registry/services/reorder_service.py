"""Reordering of SUDS types, categories and activity definitions.

Every move swaps one item with its neighbour in the order the caller
currently sees and persists the result with a single atomic write. Nothing
in memory is changed ahead of the write: the next snapshot from the store is
the only source of truth for what moved, so a failed write needs no local
rollback. Moving the first item up or the last item down is a no-op.

Concurrent moves on the same collection from different sessions are not
serialized; the batch committed last wins.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TypeVar

from suds_registry.schemas.catalog import Direction
from suds_registry.schemas.suds_type import SudsType
from suds_registry.services.base import StoreService
from suds_registry.services.errors import ReorderError
from suds_registry.store.base import UpdateOperation
from suds_registry.store.collections import (
    APP_SETTINGS,
    CATEGORIES_DOCUMENT,
    DEFINITIONS_DOCUMENT,
    SUDS_TYPES,
)
from suds_registry.store.errors import DocumentStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TOWARDS_START = frozenset({Direction.UP, Direction.LEFT})


@dataclass(frozen=True)
class ReorderResult:
    moved: bool
    order: list[str]


def swap_adjacent(items: Sequence[T], index: int, direction: Direction) -> list[T] | None:
    """Return a copy with items[index] swapped towards direction, or None if it cannot move."""
    if not 0 <= index < len(items):
        return None

    target = index - 1 if direction in _TOWARDS_START else index + 1
    if not 0 <= target < len(items):
        return None

    reordered = list(items)
    reordered[index], reordered[target] = reordered[target], reordered[index]
    return reordered


def with_provisional_order(suds_types: Iterable[SudsType]) -> list[SudsType]:
    """Sort SUDS types for display, filling a missing order from fetch position.

    The provisional value is never written back by this function.
    """
    provisional = [
        suds_type
        if suds_type.order is not None
        else suds_type.model_copy(update={"order": position, "order_is_provisional": True})
        for position, suds_type in enumerate(suds_types)
    ]
    return sorted(provisional, key=lambda suds_type: suds_type.order)


class ReorderService(StoreService):
    """Moves items within the three independently ordered collections."""

    async def move_installation_type(
        self,
        suds_type_id: str,
        direction: Direction,
        current_order: Sequence[SudsType],
    ) -> ReorderResult:
        """Swap a SUDS type with its neighbour and persist the changed positions.

        Only items whose stored order differs from their new index (or that
        have no stored order) are written, all in one batch.
        """
        ids = [suds_type.id for suds_type in current_order]
        index = ids.index(suds_type_id) if suds_type_id in ids else -1

        reordered = swap_adjacent(current_order, index, direction)
        if reordered is None:
            logger.debug(f"SUDS type move skipped: id={suds_type_id} direction={direction.value}")
            return ReorderResult(moved=False, order=ids)

        operations = [
            UpdateOperation(SUDS_TYPES, suds_type.id, {"order": position})
            for position, suds_type in enumerate(reordered)
            if suds_type.order != position or suds_type.order_is_provisional
        ]

        try:
            await self.store.execute_batch(operations)
        except DocumentStoreError as exc:
            logger.warning(f"SUDS type reorder failed: id={suds_type_id} error={exc}")
            raise ReorderError("The new SUDS type order could not be saved") from exc

        return ReorderResult(moved=True, order=[suds_type.id for suds_type in reordered])

    async def move_category(
        self,
        name: str,
        direction: Direction,
        current_categories: Sequence[str],
    ) -> ReorderResult:
        """Swap a category with its neighbour and rewrite the whole category list."""
        index = current_categories.index(name) if name in current_categories else -1

        reordered = swap_adjacent(current_categories, index, direction)
        if reordered is None:
            return ReorderResult(moved=False, order=list(current_categories))

        try:
            await self.store.set_document(
                APP_SETTINGS, CATEGORIES_DOCUMENT, {"categories": reordered}
            )
        except DocumentStoreError as exc:
            logger.warning(f"Category reorder failed: category={name} error={exc}")
            raise ReorderError(f"Category {name!r} could not be moved") from exc

        return ReorderResult(moved=True, order=reordered)

    async def move_activity_definition(
        self,
        category: str,
        activity_name: str,
        direction: Direction,
        current_definitions: Mapping[str, Sequence[str]],
    ) -> ReorderResult:
        """Swap an activity name within its category and rewrite the whole definition map."""
        names = list(current_definitions.get(category, ()))
        index = names.index(activity_name) if activity_name in names else -1

        reordered = swap_adjacent(names, index, direction)
        if reordered is None:
            return ReorderResult(moved=False, order=names)

        updated = {key: list(values) for key, values in current_definitions.items()}
        updated[category] = reordered

        try:
            await self.store.set_document(APP_SETTINGS, DEFINITIONS_DOCUMENT, updated)
        except DocumentStoreError as exc:
            logger.warning(
                f"Activity reorder failed: category={category} activity={activity_name} error={exc}"
            )
            raise ReorderError(f"Activity {activity_name!r} could not be moved") from exc

        return ReorderResult(moved=True, order=reordered)
