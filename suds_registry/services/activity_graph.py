"""Display ordering of maintenance activities and their dependents.

Everything here is a pure function over already-loaded records, so it can be
called at any time, including while writes to the same collections are in
flight.

For one SUDS type the display order is:

1. Only records with ``applies`` set take part.
2. Records named in another applicable record's ``dependentActivities`` are
   "claimed"; the unclaimed ones are roots.
3. Roots are sorted by (category position, activity position), both taken
   from the configured orderings; unknown values sort last, ties keep
   encounter order.
4. Each root is emitted, followed depth-first by its dependents, sorted the
   same way and flagged as dependents.

A record is emitted at most once. References to ids that are not applicable
records of the same SUDS type are ignored. Records that are only reachable
through a dependency cycle are emitted after the regular roots so that no
applicable record is ever dropped.
"""

import sys
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from suds_registry.schemas.activity import CatalogEntry, MaintenanceActivity
from suds_registry.schemas.suds_type import SudsType

CATALOG_ID_SEPARATOR = "/"

_UNKNOWN_POSITION = sys.maxsize


@dataclass(frozen=True)
class DisplayEntry:
    record: MaintenanceActivity
    is_dependent: bool


def _positions(values: Iterable[str]) -> dict[str, int]:
    positions: dict[str, int] = {}
    for index, value in enumerate(values):
        positions.setdefault(value, index)
    return positions


class ActivityOrdering:
    """Sort key built from category order and per-category definition order."""

    def __init__(
        self,
        category_order: Sequence[str],
        definition_order: Mapping[str, Sequence[str]],
    ):
        self._categories = _positions(category_order)
        self._definitions = {
            category: _positions(names) for category, names in definition_order.items()
        }

    def key(self, record: MaintenanceActivity) -> tuple[int, int]:
        category_position = self._categories.get(record.category, _UNKNOWN_POSITION)
        activity_position = self._definitions.get(record.category, {}).get(
            record.activity_name, _UNKNOWN_POSITION
        )
        return (category_position, activity_position)

    def sort(self, records: Iterable[MaintenanceActivity]) -> list[MaintenanceActivity]:
        return sorted(records, key=self.key)


def _emit_with_dependents(
    root: MaintenanceActivity,
    applicable_by_id: Mapping[str, MaintenanceActivity],
    ordering: ActivityOrdering,
    emitted: set[str],
    output: list[DisplayEntry],
) -> None:
    """Append root and, depth-first, its not yet emitted dependents."""
    stack: list[tuple[MaintenanceActivity, bool]] = [(root, False)]

    while stack:
        record, is_dependent = stack.pop()
        if record.id in emitted:
            continue

        emitted.add(record.id)
        output.append(DisplayEntry(record=record, is_dependent=is_dependent))

        dependents = ordering.sort(
            applicable_by_id[dependent_id]
            for dependent_id in record.dependent_activities
            if dependent_id in applicable_by_id
        )
        # Reversed so the first dependent is popped (and fully walked) first
        stack.extend((dependent, True) for dependent in reversed(dependents))


def resolve_display_order(
    suds_type_id: str,
    records: Iterable[MaintenanceActivity],
    category_order: Sequence[str],
    definition_order: Mapping[str, Sequence[str]],
) -> list[DisplayEntry]:
    """Return the applicable activities of one SUDS type in display order."""
    applicable = [
        record for record in records if record.suds_type_id == suds_type_id and record.applies
    ]
    applicable_by_id = {record.id: record for record in applicable}
    claimed = {
        dependent_id for record in applicable for dependent_id in record.dependent_activities
    }

    ordering = ActivityOrdering(category_order, definition_order)
    emitted: set[str] = set()
    output: list[DisplayEntry] = []

    roots = ordering.sort(record for record in applicable if record.id not in claimed)
    for root in roots:
        _emit_with_dependents(root, applicable_by_id, ordering, emitted, output)

    # Claimed records never reached from a root sit on a dependency cycle
    for record in ordering.sort(applicable):
        if record.id not in emitted:
            _emit_with_dependents(record, applicable_by_id, ordering, emitted, output)

    return output


def catalog_id(suds_type_id: str, category: str, activity_name: str) -> str:
    return CATALOG_ID_SEPARATOR.join((suds_type_id, category, activity_name))


def parse_catalog_id(value: str) -> tuple[str, str, str]:
    """Split a catalog id into (suds_type_id, category, activity_name).

    Raises:
        ValueError: If the value is not a well-formed catalog id
    """
    parts = value.split(CATALOG_ID_SEPARATOR)
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"Malformed catalog id: {value!r}")
    return parts[0], parts[1], parts[2]


def build_flat_activity_catalog(
    suds_types: Iterable[SudsType],
    categories: Sequence[str],
    definitions_by_category: Mapping[str, Sequence[str]],
) -> list[CatalogEntry]:
    """Every (SUDS type, category, defined activity) combination.

    Entries exist whether or not an activity record has been created for the
    combination; they are what the dependency editor offers for selection.
    """
    return [
        CatalogEntry(
            id=catalog_id(suds_type.id, category, activity_name),
            suds_type_id=suds_type.id,
            suds_type_name=suds_type.name,
            category=category,
            activity_name=activity_name,
        )
        for suds_type in suds_types
        for category in categories
        for activity_name in definitions_by_category.get(category, ())
    ]


def activity_names_by_category(
    categories: Sequence[str],
    definitions_by_category: Mapping[str, Sequence[str]],
    records: Iterable[MaintenanceActivity],
) -> dict[str, list[str]]:
    """Column names per category: defined names in order, then names only found on records."""
    columns = {category: list(definitions_by_category.get(category, ())) for category in categories}
    for record in records:
        names = columns.get(record.category)
        if names is not None and record.activity_name not in names:
            names.append(record.activity_name)
    return columns
