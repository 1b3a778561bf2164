# =============================================================================
# tests/test_taxonomy_service.py - Category / Subcategory Service Tests
# =============================================================================
# Exercises CategoryService and SubcategoryService against the in-memory
# store from tests/fakes.py.
#
# Run with: poetry run pytest tests/test_taxonomy_service.py -v
# =============================================================================

import pytest

from app.exceptions import (
    CategoryNotFoundError,
    DuplicateNameError,
    FieldTypeInvalidError,
    HasDependentsError,
    NotFoundError,
    OptionsRequiredError,
)
from core.services.taxonomy_service import (
    CATEGORY_TABLE,
    SUBCATEGORY_TABLE,
    CategoryService,
    SubcategoryService,
    annotate_actors,
)

OLD_TIMESTAMP = "2020-01-01T00:00:00+00:00"
FIELDS = [{"name": "Location", "fieldType": "text", "required": True}]


# =============================================================================
# Categories
# =============================================================================

class TestCreateCategory:

    def test_creates_active_category(self, db, admin_user):
        category = CategoryService.create_category("Plumbing", actor_id=admin_user["id"])

        assert category["name"] == "Plumbing"
        assert category["description"] == ""
        assert category["is_active"] is True
        assert len(db.rows(CATEGORY_TABLE)) == 1

    def test_creator_is_resolved(self, db, admin_user):
        category = CategoryService.create_category("Plumbing", actor_id=admin_user["id"])

        assert category["created_by"] == {
            "id": admin_user["id"],
            "name": "Ada Admin",
            "email": "ada@example.com",
        }
        assert category["updated_by"] is None

    def test_name_is_trimmed(self, db, admin_user):
        category = CategoryService.create_category("  Roofing  ", actor_id=admin_user["id"])
        assert category["name"] == "Roofing"

    def test_duplicate_name_rejected(self, db, admin_user):
        CategoryService.create_category("Plumbing", actor_id=admin_user["id"])

        with pytest.raises(DuplicateNameError) as exc_info:
            CategoryService.create_category("Plumbing", actor_id=admin_user["id"])

        assert exc_info.value.message == "Form category already exists"
        assert len(db.rows(CATEGORY_TABLE)) == 1

    def test_names_are_case_sensitive(self, db, admin_user):
        CategoryService.create_category("Plumbing", actor_id=admin_user["id"])
        CategoryService.create_category("plumbing", actor_id=admin_user["id"])

        assert len(db.rows(CATEGORY_TABLE)) == 2


class TestListCategories:

    def test_newest_first(self, db, admin_user):
        for name in ("First", "Second", "Third"):
            CategoryService.create_category(name, actor_id=admin_user["id"])

        names = [c["name"] for c in CategoryService.list_categories()]

        assert names == ["Third", "Second", "First"]

    def test_empty(self, db):
        assert CategoryService.list_categories() == []

    def test_unknown_creator_keeps_id(self, db):
        db.seed(CATEGORY_TABLE, {"name": "Orphan", "created_by": "gone-user"})

        category = CategoryService.list_categories()[0]

        assert category["created_by"] == {"id": "gone-user", "name": None, "email": None}


class TestUpdateCategory:

    def test_updates_and_records_updater(self, db, sample_category, staff_user):
        updated = CategoryService.update_category(
            sample_category["id"],
            "Plumbing & Heating",
            actor_id=staff_user["id"],
            is_active=False,
        )

        assert updated["name"] == "Plumbing & Heating"
        assert updated["is_active"] is False
        assert updated["description"] == "Water and drainage jobs"
        assert updated["updated_by"]["name"] == "Sam Staff"

    def test_refreshes_updated_at(self, db, admin_user):
        category = db.seed(
            CATEGORY_TABLE,
            {"name": "Old", "created_at": OLD_TIMESTAMP, "updated_at": OLD_TIMESTAMP},
        )[0]

        updated = CategoryService.update_category(category["id"], "Old", actor_id=admin_user["id"])

        assert updated["updated_at"] != OLD_TIMESTAMP
        assert updated["created_at"] == OLD_TIMESTAMP

    def test_keeping_own_name_is_allowed(self, db, sample_category, admin_user):
        updated = CategoryService.update_category(
            sample_category["id"], "Plumbing", actor_id=admin_user["id"], description="New text"
        )
        assert updated["description"] == "New text"

    def test_taking_another_name_rejected(self, db, sample_category, admin_user):
        other = CategoryService.create_category("Electrical", actor_id=admin_user["id"])

        with pytest.raises(DuplicateNameError) as exc_info:
            CategoryService.update_category(other["id"], "Plumbing", actor_id=admin_user["id"])

        assert exc_info.value.message == "Form category with this name already exists"

    def test_missing_category(self, db, admin_user):
        with pytest.raises(NotFoundError):
            CategoryService.update_category("missing", "Name", actor_id=admin_user["id"])


class TestDeleteCategory:

    def test_deletes_empty_category(self, db, sample_category):
        CategoryService.delete_category(sample_category["id"])
        assert db.rows(CATEGORY_TABLE) == []

    def test_blocked_by_subcategories(self, db, sample_category, admin_user):
        SubcategoryService.create_subcategory(
            "Leak repair", sample_category["id"], FIELDS, actor_id=admin_user["id"]
        )

        with pytest.raises(HasDependentsError) as exc_info:
            CategoryService.delete_category(sample_category["id"])

        assert exc_info.value.message == (
            "Cannot delete category with existing subcategories. Please delete subcategories first."
        )
        assert len(db.rows(CATEGORY_TABLE)) == 1

    def test_deletable_after_subcategories_removed(self, db, sample_category, admin_user):
        sub = SubcategoryService.create_subcategory(
            "Leak repair", sample_category["id"], FIELDS, actor_id=admin_user["id"]
        )
        SubcategoryService.delete_subcategory(sub["id"])

        CategoryService.delete_category(sample_category["id"])

        assert db.rows(CATEGORY_TABLE) == []

    def test_missing_category(self, db):
        with pytest.raises(NotFoundError):
            CategoryService.delete_category("missing")


# =============================================================================
# Subcategories
# =============================================================================

class TestCreateSubcategory:

    def test_creates_with_normalized_fields(self, db, sample_category, admin_user):
        sub = SubcategoryService.create_subcategory(
            "Leak repair",
            sample_category["id"],
            [
                {"name": "Location", "fieldType": "text", "required": True},
                {"name": "Urgency", "fieldType": "radio", "options": [" Low ", "High"]},
            ],
            actor_id=admin_user["id"],
        )

        assert sub["category"] == {"id": sample_category["id"], "name": "Plumbing"}
        assert sub["fields"][1] == {
            "name": "Urgency",
            "field_type": "radio",
            "options": ["Low", "High"],
            "required": False,
        }
        assert sub["created_by"]["id"] == admin_user["id"]

    def test_unknown_category(self, db, admin_user):
        with pytest.raises(CategoryNotFoundError) as exc_info:
            SubcategoryService.create_subcategory("X", "missing", FIELDS, actor_id=admin_user["id"])

        assert exc_info.value.code == "CATEGORY_NOT_FOUND"
        assert exc_info.value.status_code == 404

    def test_category_is_checked_before_fields(self, db, admin_user):
        with pytest.raises(CategoryNotFoundError):
            SubcategoryService.create_subcategory(
                "X", "missing", [{"name": "Bad", "fieldType": "nope"}], actor_id=admin_user["id"]
            )

    def test_duplicate_in_same_category(self, db, sample_category, admin_user):
        SubcategoryService.create_subcategory("Leak repair", sample_category["id"], FIELDS, actor_id=admin_user["id"])

        with pytest.raises(DuplicateNameError) as exc_info:
            SubcategoryService.create_subcategory(
                "Leak repair", sample_category["id"], FIELDS, actor_id=admin_user["id"]
            )

        assert exc_info.value.message == (
            "Form subcategory with this name already exists in the selected category"
        )

    def test_same_name_in_other_category(self, db, sample_category, admin_user):
        other = CategoryService.create_category("Electrical", actor_id=admin_user["id"])
        SubcategoryService.create_subcategory("Inspection", sample_category["id"], FIELDS, actor_id=admin_user["id"])
        SubcategoryService.create_subcategory("Inspection", other["id"], FIELDS, actor_id=admin_user["id"])

        assert len(db.rows(SUBCATEGORY_TABLE)) == 2

    def test_invalid_field_stores_nothing(self, db, sample_category, admin_user):
        with pytest.raises(OptionsRequiredError):
            SubcategoryService.create_subcategory(
                "Survey",
                sample_category["id"],
                [{"name": "Pick one", "fieldType": "select"}],
                actor_id=admin_user["id"],
            )

        assert db.rows(SUBCATEGORY_TABLE) == []


class TestListAndGetSubcategories:

    def test_filter_by_category(self, db, sample_category, admin_user):
        other = CategoryService.create_category("Electrical", actor_id=admin_user["id"])
        SubcategoryService.create_subcategory("Leak", sample_category["id"], FIELDS, actor_id=admin_user["id"])
        SubcategoryService.create_subcategory("Wiring", other["id"], FIELDS, actor_id=admin_user["id"])

        only_plumbing = SubcategoryService.list_subcategories(category_id=sample_category["id"])

        assert [s["name"] for s in only_plumbing] == ["Leak"]
        assert len(SubcategoryService.list_subcategories()) == 2

    def test_get_annotates_parent(self, db, sample_category, admin_user):
        sub = SubcategoryService.create_subcategory("Leak", sample_category["id"], FIELDS, actor_id=admin_user["id"])

        fetched = SubcategoryService.get_subcategory(sub["id"])

        assert fetched["category"]["name"] == "Plumbing"
        assert fetched["fields"][0]["name"] == "Location"

    def test_get_missing(self, db):
        with pytest.raises(NotFoundError):
            SubcategoryService.get_subcategory("missing")


class TestUpdateSubcategory:

    def test_replaces_field_list(self, db, sample_category, admin_user, staff_user):
        sub = SubcategoryService.create_subcategory("Leak", sample_category["id"], FIELDS, actor_id=admin_user["id"])

        updated = SubcategoryService.update_subcategory(
            sub["id"],
            "Leak",
            sample_category["id"],
            [{"name": "Floor", "fieldType": "number"}],
            actor_id=staff_user["id"],
        )

        assert [f["name"] for f in updated["fields"]] == ["Floor"]
        assert updated["updated_by"]["id"] == staff_user["id"]

    def test_invalid_replacement_fields(self, db, sample_category, admin_user):
        sub = SubcategoryService.create_subcategory("Leak", sample_category["id"], FIELDS, actor_id=admin_user["id"])

        with pytest.raises(FieldTypeInvalidError):
            SubcategoryService.update_subcategory(
                sub["id"], "Leak", sample_category["id"], [{"name": "X", "fieldType": "blob"}],
                actor_id=admin_user["id"],
            )

        assert db.rows(SUBCATEGORY_TABLE)[0]["fields"][0]["name"] == "Location"

    def test_move_into_conflicting_category(self, db, sample_category, admin_user):
        other = CategoryService.create_category("Electrical", actor_id=admin_user["id"])
        SubcategoryService.create_subcategory("Inspection", other["id"], FIELDS, actor_id=admin_user["id"])
        sub = SubcategoryService.create_subcategory("Inspection", sample_category["id"], FIELDS, actor_id=admin_user["id"])

        with pytest.raises(DuplicateNameError):
            SubcategoryService.update_subcategory(
                sub["id"], "Inspection", other["id"], FIELDS, actor_id=admin_user["id"]
            )

    def test_move_to_missing_category(self, db, sample_category, admin_user):
        sub = SubcategoryService.create_subcategory("Leak", sample_category["id"], FIELDS, actor_id=admin_user["id"])

        with pytest.raises(CategoryNotFoundError):
            SubcategoryService.update_subcategory(sub["id"], "Leak", "missing", FIELDS, actor_id=admin_user["id"])

    def test_missing_subcategory(self, db, sample_category, admin_user):
        with pytest.raises(NotFoundError):
            SubcategoryService.update_subcategory(
                "missing", "Leak", sample_category["id"], FIELDS, actor_id=admin_user["id"]
            )


class TestDeleteSubcategory:

    def test_deletes(self, db, sample_category, admin_user):
        sub = SubcategoryService.create_subcategory("Leak", sample_category["id"], FIELDS, actor_id=admin_user["id"])

        SubcategoryService.delete_subcategory(sub["id"])

        assert db.rows(SUBCATEGORY_TABLE) == []

    def test_missing(self, db):
        with pytest.raises(NotFoundError):
            SubcategoryService.delete_subcategory("missing")


class TestAnnotateActors:

    def test_one_users_lookup_for_batch(self, db, admin_user, staff_user):
        records = [
            {"created_by": admin_user["id"], "updated_by": staff_user["id"]},
            {"created_by": staff_user["id"], "updated_by": None},
        ]
        db.calls.clear()

        annotate_actors(records)

        assert db.calls == [("users", "select")]
        assert records[0]["updated_by"]["name"] == "Sam Staff"
        assert records[1]["updated_by"] is None
