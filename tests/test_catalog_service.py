"""Tests for category and activity definition management."""

import pytest

from suds_registry.schemas.suds_type import SudsType
from suds_registry.services.activity_service import ActivityService
from suds_registry.services.catalog_service import CatalogService, to_sentence_case
from suds_registry.services.errors import DuplicateError, InvalidInputError, NotFoundError
from suds_registry.store.collections import APP_SETTINGS, CATEGORIES_DOCUMENT, DEFINITIONS_DOCUMENT
from suds_registry.store.sql_store import SqlDocumentStore


@pytest.mark.parametrize(
    "value,expected",
    [("cLEAN drain ", "Clean drain"), ("siega", "Siega"), ("  PODA DE ÁRBOLES", "Poda de árboles")],
)
def test_to_sentence_case(value: str, expected: str):
    assert to_sentence_case(value) == expected


async def test_categories_default_to_empty(store: SqlDocumentStore):
    service = CatalogService(store)

    assert await service.get_categories() == []
    assert await service.get_definitions() == {}


async def test_add_category_appends_to_the_end(
    store: SqlDocumentStore, seeded_catalog: dict[str, list[str]]
):
    categories = await CatalogService(store).add_category("  Estructura ")

    assert categories == ["Limpieza", "Vegetación", "Inspección", "Estructura"]
    assert await CatalogService(store).get_categories() == categories


@pytest.mark.parametrize("name,error", [("Limpieza", DuplicateError), ("   ", InvalidInputError), ("A/B", InvalidInputError)])
async def test_add_category_rejects_bad_names(
    store: SqlDocumentStore, seeded_catalog: dict[str, list[str]], name: str, error: type[Exception]
):
    with pytest.raises(error):
        await CatalogService(store).add_category(name)


async def test_add_activity_definition_normalizes_name(
    store: SqlDocumentStore, seeded_catalog: dict[str, list[str]]
):
    name = await CatalogService(store).add_activity_definition("Inspección", "revisión DE ARQUETAS")

    assert name == "Revisión de arquetas"
    definitions = await CatalogService(store).get_definitions()
    assert definitions["Inspección"] == ["Revisión visual", "Revisión de arquetas"]


async def test_add_activity_definition_errors(
    store: SqlDocumentStore, seeded_catalog: dict[str, list[str]]
):
    service = CatalogService(store)

    with pytest.raises(NotFoundError):
        await service.add_activity_definition("Antigua", "Alfa")
    with pytest.raises(DuplicateError):
        await service.add_activity_definition("Vegetación", "SIEGA")
    with pytest.raises(InvalidInputError):
        await service.add_activity_definition("Vegetación", "Siega/poda")


async def test_rename_activity_definition_renames_records(
    store: SqlDocumentStore, seeded_catalog: dict[str, list[str]], suds_type: SudsType
):
    activity = await ActivityService(store).toggle_applies(suds_type.id, "Vegetación", "Poda")

    renamed = await CatalogService(store, "editor@example.com").rename_activity_definition(
        "Vegetación", "Poda", "poda de formación"
    )

    assert renamed == "Poda de formación"
    definitions = await CatalogService(store).get_definitions()
    assert definitions["Vegetación"] == ["Siega", "Poda de formación", "Riego"]
    record = await ActivityService(store).get_activity(activity.id)
    assert record.activity_name == "Poda de formación"
    assert record.last_updated_by == "editor@example.com"


async def test_rename_to_same_name_is_a_no_op(
    store: SqlDocumentStore, seeded_catalog: dict[str, list[str]]
):
    assert await CatalogService(store).rename_activity_definition("Vegetación", "Poda", "PODA") == "Poda"


async def test_rename_errors(store: SqlDocumentStore, seeded_catalog: dict[str, list[str]]):
    service = CatalogService(store)

    with pytest.raises(NotFoundError):
        await service.rename_activity_definition("Vegetación", "Tala", "Desbroce")
    with pytest.raises(DuplicateError):
        await service.rename_activity_definition("Vegetación", "Poda", "siega")


async def test_legacy_names_are_compared_in_sentence_case(store: SqlDocumentStore):
    await store.set_document(APP_SETTINGS, CATEGORIES_DOCUMENT, {"categories": ["Limpieza"]})
    await store.set_document(
        APP_SETTINGS, DEFINITIONS_DOCUMENT, {"Limpieza": ["sweep drains", "Retirada de residuos"]}
    )
    service = CatalogService(store)

    with pytest.raises(DuplicateError):
        await service.add_activity_definition("Limpieza", "Sweep drains")
    with pytest.raises(DuplicateError):
        await service.rename_activity_definition("Limpieza", "Retirada de residuos", "SWEEP DRAINS")

    normalized = await service.rename_activity_definition("Limpieza", "sweep drains", "sweep drains")

    assert normalized == "Sweep drains"
    definitions = await service.get_definitions()
    assert definitions["Limpieza"] == ["Sweep drains", "Retirada de residuos"]


async def test_delete_activity_definition_removes_records_and_links(
    store: SqlDocumentStore, seeded_catalog: dict[str, list[str]], suds_type: SudsType
):
    activities = ActivityService(store)
    prune = await activities.toggle_applies(suds_type.id, "Vegetación", "Poda")
    mow = await activities.toggle_applies(suds_type.id, "Vegetación", "Siega")
    await store.update_document("maintenanceActivities", mow.id, {"dependentActivities": [prune.id]})

    await CatalogService(store).delete_activity_definition("Vegetación", "Poda")

    assert "Poda" not in (await CatalogService(store).get_definitions())["Vegetación"]
    remaining = await activities.list_activities(suds_type.id)
    assert [record.id for record in remaining] == [mow.id]
    assert remaining[0].dependent_activities == []


async def test_delete_category_removes_definitions_and_records(
    store: SqlDocumentStore, seeded_catalog: dict[str, list[str]], suds_type: SudsType
):
    activities = ActivityService(store)
    litter = await activities.toggle_applies(suds_type.id, "Limpieza", "Retirada de residuos")
    mow = await activities.toggle_applies(suds_type.id, "Vegetación", "Siega")
    await store.update_document("maintenanceActivities", litter.id, {"dependentActivities": [mow.id]})

    await CatalogService(store).delete_category("Vegetación")

    service = CatalogService(store)
    assert await service.get_categories() == ["Limpieza", "Inspección"]
    assert "Vegetación" not in await service.get_definitions()
    remaining = await activities.list_activities()
    assert [record.id for record in remaining] == [litter.id]
    assert remaining[0].dependent_activities == []


async def test_delete_unknown_category(store: SqlDocumentStore, seeded_catalog: dict[str, list[str]]):
    with pytest.raises(NotFoundError):
        await CatalogService(store).delete_category("Antigua")
