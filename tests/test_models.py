# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the API schemas to ensure:
# - camelCase and snake_case input are both accepted
# - Unknown keys are rejected on requests
# - Responses serialize to camelCase
# - Default values work as expected
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    CategoryCreate,
    CategoryResponse,
    CustomerInput,
    CustomerRecord,
    FieldDefinition,
    FieldType,
    FormUpsert,
    SubcategoryCreate,
    SubcategoryResponse,
    TemplateCreate,
    TemplateType,
    TemplateUpdate,
)


class TestRequestModels:

    def test_camel_and_snake_case(self):
        camel = SubcategoryCreate.model_validate(
            {"name": "Leak", "categoryId": "c1", "fields": [{"name": "A", "fieldType": "text"}]}
        )
        snake = SubcategoryCreate.model_validate(
            {"name": "Leak", "category_id": "c1", "fields": [{"name": "A", "field_type": "text"}]}
        )

        assert camel == snake
        assert camel.fields[0].field_type == "text"

    def test_fields_are_required_on_subcategory(self):
        with pytest.raises(ValidationError):
            SubcategoryCreate.model_validate({"name": "Leak", "categoryId": "c1"})

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            CategoryCreate.model_validate({"name": "Plumbing", "isActive": True})

    def test_strings_trimmed(self):
        assert CategoryCreate(name="  Plumbing ").name == "Plumbing"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            CategoryCreate(name="   ")

    def test_form_id_optional(self):
        assert FormUpsert(name="Intake", url="https://x.example.com").id is None

    def test_template_type_default(self):
        assert TemplateCreate().type == TemplateType.ALERT

    def test_template_update_tracks_sent_keys(self):
        update = TemplateUpdate.model_validate({"subject": "New"})
        assert update.model_dump(exclude_unset=True) == {"subject": "New"}

    def test_customer_input_partial(self):
        body = CustomerInput.model_validate({"serviceCategoryUrl": "example.com"})
        assert body.model_dump(exclude_unset=True) == {"service_category_url": "example.com"}


class TestResponseModels:

    def test_category_serializes_camel_case(self):
        category = CategoryResponse.model_validate({
            "id": "c1",
            "name": "Plumbing",
            "is_active": False,
            "created_by": {"id": "u1", "name": "Ada", "email": "ada@example.com"},
            "created_at": "2024-01-15T10:30:00+00:00",
        })

        data = category.model_dump(by_alias=True)

        assert data["isActive"] is False
        assert data["createdBy"]["name"] == "Ada"
        assert "createdAt" in data

    def test_subcategory_fields(self):
        sub = SubcategoryResponse.model_validate({
            "id": "s1",
            "name": "Leak",
            "category_id": "c1",
            "fields": [{"name": "Day", "field_type": "radio", "options": ["Mon"], "required": True}],
        })

        assert sub.fields[0].field_type == FieldType.RADIO
        assert sub.model_dump(by_alias=True)["fields"][0]["fieldType"] == "radio"

    def test_field_definition_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            FieldDefinition(name="X", field_type="blob")


class TestCustomerRecord:

    def test_requires_core_fields(self):
        with pytest.raises(ValidationError):
            CustomerRecord.model_validate({"name": "Jane"})

    def test_url_must_be_http(self):
        with pytest.raises(ValidationError):
            CustomerRecord.model_validate({
                "name": "Jane",
                "phone": "1",
                "address": {"line1": "1 Main St", "city": "Springfield", "state": "IL"},
                "service_category_url": "ftp://example.com",
            })

    def test_optional_fields(self):
        record = CustomerRecord.model_validate({
            "name": "Jane",
            "phone": "1",
            "address": {"line1": "1 Main St", "city": "Springfield", "state": "IL"},
        })

        assert record.email is None
        assert record.address.zip is None
