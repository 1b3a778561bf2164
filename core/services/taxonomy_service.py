# =============================================================================
# core/services/taxonomy_service.py - Form Taxonomy Business Logic
# =============================================================================
# Manages the two-level form taxonomy:
# - CategoryService: categories, unique by name, deletable only when empty
# - SubcategoryService: subcategories, unique by (name, category_id), each
#   carrying a validated list of field definitions
#
# Records returned to callers are annotated:
# - created_by / updated_by are resolved to {id, name, email}
# - subcategories get their parent as category = {id, name}
#
# Subcategory create/update does existence check -> uniqueness check -> write
# as separate round-trips. The unique index on the table is what finally
# rejects a concurrent duplicate; that error is mapped to DuplicateNameError.
# =============================================================================

import logging
from typing import Any, Iterable
from uuid import UUID

from app.exceptions import (
    CategoryNotFoundError,
    DuplicateNameError,
    HasDependentsError,
    NotFoundError,
)
from core.models.taxonomy import FieldDefinitionInput
from core.services.field_validation import validate_fields
from lib.supabase_client import SupabaseClient, UniqueViolationError
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

CATEGORY_TABLE = "form_categories"
SUBCATEGORY_TABLE = "form_subcategories"


# =============================================================================
# Annotation helpers
# =============================================================================

def _user_ref(user_id: Any, users: dict[str, dict[str, Any]]) -> dict[str, Any] | None:
    if not user_id:
        return None
    user = users.get(str(user_id))
    if user:
        return {"id": str(user["id"]), "name": user.get("name"), "email": user.get("email")}
    return {"id": str(user_id), "name": None, "email": None}


def annotate_actors(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Replace created_by / updated_by ids with user identities.

    One users lookup for the whole batch.
    """
    user_ids = {
        r.get(key)
        for r in records
        for key in ("created_by", "updated_by")
        if r.get(key)
    }
    users = SupabaseClient.fetch_users(user_ids)
    for record in records:
        record["created_by"] = _user_ref(record.get("created_by"), users)
        record["updated_by"] = _user_ref(record.get("updated_by"), users)
    return records


def _annotate_categories(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    category_ids = {r.get("category_id") for r in records if r.get("category_id")}
    categories = SupabaseClient.fetch_by_ids(CATEGORY_TABLE, category_ids, columns="id, name")
    for record in records:
        parent = categories.get(str(record.get("category_id")))
        record["category"] = {"id": str(parent["id"]), "name": parent.get("name")} if parent else None
    return records


class CategoryService:
    """
    Service for form category operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def _name_taken(name: str, exclude_id: str | None = None) -> bool:
        """Case-sensitive exact-match lookup, optionally ignoring one record."""
        client = SupabaseClient.get_client()
        query = client.table(CATEGORY_TABLE).select("id").eq("name", name)
        if exclude_id:
            query = query.neq("id", exclude_id)
        response = query.limit(1).execute()
        return bool(response.data)

    @staticmethod
    def get_category(category_id: str | UUID) -> dict[str, Any]:
        """
        Get a raw category by ID.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        category = SupabaseClient.fetch_by_id(CATEGORY_TABLE, category_id)
        if not category:
            raise NotFoundError("Form category", str(category_id))
        return category

    @staticmethod
    def list_categories() -> list[dict[str, Any]]:
        """
        List all categories, newest first, with creator/updater identity.
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(CATEGORY_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list categories: {e}")
            raise

        return annotate_actors(response.data or [])

    @staticmethod
    def create_category(
        name: str,
        actor_id: str | UUID,
        description: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a category.

        Args:
            name: Category name (unique, case-sensitive)
            actor_id: The user creating the category
            description: Optional description (stored as "" when omitted)

        Returns:
            Created category dict, annotated

        Raises:
            DuplicateNameError: If a category with this name exists
        """
        name = name.strip()
        if CategoryService._name_taken(name):
            raise DuplicateNameError("Form category already exists", details={"name": name})

        now = utc_now_iso()
        data = {
            "name": name,
            "description": (description or "").strip(),
            "is_active": True,
            "created_by": str(actor_id),
            "created_at": now,
            "updated_at": now,
        }

        try:
            category = SupabaseClient.insert(CATEGORY_TABLE, data)
        except UniqueViolationError:
            raise DuplicateNameError("Form category already exists", details={"name": name})

        logger.info(f"Created category: {category['id']} ({name}) by user: {actor_id}")
        return annotate_actors([category])[0]

    @staticmethod
    def update_category(
        category_id: str | UUID,
        name: str,
        actor_id: str | UUID,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> dict[str, Any]:
        """
        Update a category.

        Only re-checks name uniqueness when the name actually changes.
        description / is_active are left untouched when None.

        Raises:
            NotFoundError: If the category doesn't exist
            DuplicateNameError: If the new name belongs to another category
        """
        category_id = str(category_id)
        category = CategoryService.get_category(category_id)

        name = name.strip()
        if name != category["name"] and CategoryService._name_taken(name, exclude_id=category_id):
            raise DuplicateNameError(
                "Form category with this name already exists",
                details={"name": name},
            )

        update_data: dict[str, Any] = {
            "name": name,
            "updated_by": str(actor_id),
            "updated_at": utc_now_iso(),
        }
        if description is not None:
            update_data["description"] = description.strip()
        if is_active is not None:
            update_data["is_active"] = is_active

        try:
            updated = SupabaseClient.update(CATEGORY_TABLE, category_id, update_data)
        except UniqueViolationError:
            raise DuplicateNameError(
                "Form category with this name already exists",
                details={"name": name},
            )

        if not updated:
            raise NotFoundError("Form category", category_id)

        logger.info(f"Updated category: {category_id} by user: {actor_id}")
        return annotate_actors([updated])[0]

    @staticmethod
    def delete_category(category_id: str | UUID) -> None:
        """
        Delete a category that owns no subcategories.

        Raises:
            NotFoundError: If the category doesn't exist
            HasDependentsError: If any subcategory references it
        """
        category_id = str(category_id)
        CategoryService.get_category(category_id)

        client = SupabaseClient.get_client()
        response = (
            client.table(SUBCATEGORY_TABLE)
            .select("id", count="exact")
            .eq("category_id", category_id)
            .limit(1)
            .execute()
        )
        dependents = response.count if response.count is not None else len(response.data or [])
        if dependents:
            raise HasDependentsError(
                "Cannot delete category with existing subcategories. Please delete subcategories first.",
                details={"category_id": category_id, "subcategory_count": dependents},
            )

        if not SupabaseClient.delete(CATEGORY_TABLE, category_id):
            raise NotFoundError("Form category", category_id)

        logger.info(f"Deleted category: {category_id}")


class SubcategoryService:
    """
    Service for form subcategory operations.
    """

    @staticmethod
    def _annotate(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return annotate_actors(_annotate_categories(records))

    @staticmethod
    def _require_category(category_id: str) -> dict[str, Any]:
        category = SupabaseClient.fetch_by_id(CATEGORY_TABLE, category_id, columns="id, name")
        if not category:
            raise CategoryNotFoundError(category_id)
        return category

    @staticmethod
    def _name_taken(name: str, category_id: str, exclude_id: str | None = None) -> bool:
        """Is (name, category_id) used by another subcategory?"""
        client = SupabaseClient.get_client()
        query = (
            client.table(SUBCATEGORY_TABLE)
            .select("id")
            .eq("name", name)
            .eq("category_id", category_id)
        )
        if exclude_id:
            query = query.neq("id", exclude_id)
        response = query.limit(1).execute()
        return bool(response.data)

    @staticmethod
    def _duplicate(name: str, category_id: str) -> DuplicateNameError:
        return DuplicateNameError(
            "Form subcategory with this name already exists in the selected category",
            details={"name": name, "category_id": category_id},
        )

    @staticmethod
    def list_subcategories(category_id: str | UUID | None = None) -> list[dict[str, Any]]:
        """
        List subcategories, newest first, optionally for one category.
        """
        client = SupabaseClient.get_client()
        query = client.table(SUBCATEGORY_TABLE).select("*")
        if category_id:
            query = query.eq("category_id", str(category_id))

        try:
            response = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to list subcategories: {e}")
            raise

        return SubcategoryService._annotate(response.data or [])

    @staticmethod
    def get_subcategory(subcategory_id: str | UUID) -> dict[str, Any]:
        """
        Get an annotated subcategory by ID.

        Raises:
            NotFoundError: If the subcategory doesn't exist
        """
        subcategory = SupabaseClient.fetch_by_id(SUBCATEGORY_TABLE, subcategory_id)
        if not subcategory:
            raise NotFoundError("Form subcategory", str(subcategory_id))
        return SubcategoryService._annotate([subcategory])[0]

    @staticmethod
    def create_subcategory(
        name: str,
        category_id: str | UUID,
        fields: Iterable[FieldDefinitionInput | dict[str, Any]],
        actor_id: str | UUID,
        description: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a subcategory.

        Checks run in this order: parent category exists, (name, category)
        is free, every field definition is valid.

        Raises:
            CategoryNotFoundError: If category_id doesn't resolve
            DuplicateNameError: If the name is used in this category
            FieldDefinitionError: First invalid field definition
        """
        name = name.strip()
        category_id = str(category_id)

        SubcategoryService._require_category(category_id)
        if SubcategoryService._name_taken(name, category_id):
            raise SubcategoryService._duplicate(name, category_id)
        normalized_fields = validate_fields(fields)

        now = utc_now_iso()
        data = {
            "name": name,
            "category_id": category_id,
            "description": (description or "").strip(),
            "is_active": True,
            "fields": normalized_fields,
            "created_by": str(actor_id),
            "created_at": now,
            "updated_at": now,
        }

        try:
            subcategory = SupabaseClient.insert(SUBCATEGORY_TABLE, data)
        except UniqueViolationError:
            raise SubcategoryService._duplicate(name, category_id)

        logger.info(
            f"Created subcategory: {subcategory['id']} ({name}) in category: {category_id} "
            f"with {len(normalized_fields)} fields"
        )
        return SubcategoryService._annotate([subcategory])[0]

    @staticmethod
    def update_subcategory(
        subcategory_id: str | UUID,
        name: str,
        category_id: str | UUID,
        fields: Iterable[FieldDefinitionInput | dict[str, Any]],
        actor_id: str | UUID,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> dict[str, Any]:
        """
        Replace a subcategory's name, parent, and field list.

        Raises:
            NotFoundError: If the subcategory doesn't exist
            CategoryNotFoundError: If the target category doesn't resolve
            DuplicateNameError: If (name, category) belongs to another subcategory
            FieldDefinitionError: First invalid field definition
        """
        subcategory_id = str(subcategory_id)
        category_id = str(category_id)
        name = name.strip()

        subcategory = SupabaseClient.fetch_by_id(SUBCATEGORY_TABLE, subcategory_id)
        if not subcategory:
            raise NotFoundError("Form subcategory", subcategory_id)

        SubcategoryService._require_category(category_id)

        moved_or_renamed = (
            name != subcategory["name"]
            or category_id != str(subcategory["category_id"])
        )
        if moved_or_renamed and SubcategoryService._name_taken(name, category_id, exclude_id=subcategory_id):
            raise SubcategoryService._duplicate(name, category_id)

        normalized_fields = validate_fields(fields)

        update_data: dict[str, Any] = {
            "name": name,
            "category_id": category_id,
            "fields": normalized_fields,
            "updated_by": str(actor_id),
            "updated_at": utc_now_iso(),
        }
        if description is not None:
            update_data["description"] = description.strip()
        if is_active is not None:
            update_data["is_active"] = is_active

        try:
            updated = SupabaseClient.update(SUBCATEGORY_TABLE, subcategory_id, update_data)
        except UniqueViolationError:
            raise SubcategoryService._duplicate(name, category_id)

        if not updated:
            raise NotFoundError("Form subcategory", subcategory_id)

        logger.info(f"Updated subcategory: {subcategory_id} by user: {actor_id}")
        return SubcategoryService._annotate([updated])[0]

    @staticmethod
    def delete_subcategory(subcategory_id: str | UUID) -> None:
        """
        Delete a subcategory.

        Forms do not reference subcategories, so there is nothing that can
        block the delete.

        Raises:
            NotFoundError: If the subcategory doesn't exist
        """
        subcategory_id = str(subcategory_id)
        if not SupabaseClient.delete(SUBCATEGORY_TABLE, subcategory_id):
            raise NotFoundError("Form subcategory", subcategory_id)

        logger.info(f"Deleted subcategory: {subcategory_id}")
