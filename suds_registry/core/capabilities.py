"""Role-based edit capabilities.

Every write endpoint asks the same question, "may this role edit this kind
of data?", through `can_edit_collection`.
"""

from enum import Enum


class Role(str, Enum):
    """User roles; values match the role names stored for users."""

    EDITOR_PRINCIPAL = "editor_principal"
    EDITOR = "editor"
    PROPOSAL = "propuesta"
    VALIDATOR = "validador"
    READER = "lector"


class EditScope(str, Enum):
    SUDS_TYPES = "suds_types"
    CONTRACTS = "contracts"
    CATEGORIES = "categories"
    ACTIVITY_DEFINITIONS = "activity_definitions"
    ACTIVITY_RECORDS = "activity_records"
    VALIDATION = "validation"


_CAPABILITIES: dict[Role, frozenset[EditScope]] = {
    Role.EDITOR_PRINCIPAL: frozenset(EditScope),
    Role.EDITOR: frozenset(EditScope) - {EditScope.VALIDATION},
    Role.PROPOSAL: frozenset({EditScope.ACTIVITY_RECORDS}),
    Role.VALIDATOR: frozenset({EditScope.VALIDATION}),
    Role.READER: frozenset(),
}


def can_edit_collection(role: Role, scope: EditScope) -> bool:
    return scope in _CAPABILITIES.get(role, frozenset())
