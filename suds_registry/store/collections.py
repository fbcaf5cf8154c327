"""Collection and settings-document names (schema-in-code).

The document store has no DDL per collection; collections exist as soon as a
document is written to them. These constants are the single source of truth
for the persisted layout.
"""

SUDS_TYPES = "sudsTypes"
CONTRACTS = "contracts"
MAINTENANCE_ACTIVITIES = "maintenanceActivities"
APP_SETTINGS = "appSettings"

# Single documents inside APP_SETTINGS
CATEGORIES_DOCUMENT = "maintenanceCategories"
DEFINITIONS_DOCUMENT = "definedActivityNames"

SUBSCRIBABLE_COLLECTIONS = frozenset(
    {SUDS_TYPES, CONTRACTS, MAINTENANCE_ACTIVITIES, APP_SETTINGS}
)
