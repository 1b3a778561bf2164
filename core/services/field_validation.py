# =============================================================================
# core/services/field_validation.py - Form Field Definition Validator
# =============================================================================
# Validates the field list of a subcategory. Rules are applied per field, in
# input order, and the first violation is raised:
#   1. name must be non-blank                 -> FieldNameRequiredError
#   2. fieldType must be present and known    -> FieldTypeRequiredError / FieldTypeInvalidError
#   3. choice types need at least one option  -> OptionsRequiredError
#
# Pure function of its input: no store access, no logging side effects.
# =============================================================================

from typing import Any, Iterable, Mapping

from app.exceptions import (
    FieldNameRequiredError,
    FieldTypeInvalidError,
    FieldTypeRequiredError,
    OptionsRequiredError,
)
from core.models.taxonomy import CHOICE_FIELD_TYPES, FieldDefinitionInput, FieldType

ALLOWED_FIELD_TYPES = [t.value for t in FieldType]


def _as_mapping(field: FieldDefinitionInput | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(field, FieldDefinitionInput):
        return field.model_dump()
    return {
        "name": field.get("name"),
        "field_type": field.get("field_type", field.get("fieldType")),
        "options": field.get("options"),
        "required": field.get("required", False),
    }


def _clean_options(options: Any) -> list[str]:
    if not options:
        return []
    return [str(o).strip() for o in options if o is not None and str(o).strip()]


def validate_field(field: FieldDefinitionInput | Mapping[str, Any], index: int = 0) -> dict[str, Any]:
    """
    Validate one field definition.

    Args:
        field: Request model or raw dict (camelCase or snake_case keys)
        index: Position in the list, reported back in error details

    Returns:
        Normalized field dict ready for storage:
        {"name", "field_type", "options", "required"}

    Raises:
        FieldDefinitionError subclass for the first rule that fails
    """
    data = _as_mapping(field)

    name = (data.get("name") or "").strip()
    if not name:
        raise FieldNameRequiredError(index)

    raw_type = (data.get("field_type") or "").strip()
    if not raw_type:
        raise FieldTypeRequiredError(index, ALLOWED_FIELD_TYPES)
    try:
        field_type = FieldType(raw_type)
    except ValueError:
        raise FieldTypeInvalidError(index, raw_type, ALLOWED_FIELD_TYPES)

    options = _clean_options(data.get("options"))
    if field_type in CHOICE_FIELD_TYPES and not options:
        raise OptionsRequiredError(index, field_type.value)

    return {
        "name": name,
        "field_type": field_type.value,
        "options": options,
        "required": bool(data.get("required", False)),
    }


def validate_fields(fields: Iterable[FieldDefinitionInput | Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Validate an ordered list of field definitions.

    Used identically on create and on full update - the whole replacement
    list is re-validated, never a diff.

    Returns:
        The normalized list, in input order
    """
    return [validate_field(field, index) for index, field in enumerate(fields)]
