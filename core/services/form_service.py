# =============================================================================
# core/services/form_service.py - Form Registry Business Logic
# =============================================================================
# Flat CRUD over named, URL-keyed forms. Name and url are checked for
# collisions jointly with a single "name OR url" query.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import DuplicateNameError, NotFoundError
from lib.supabase_client import SupabaseClient, UniqueViolationError, quote_filter_value
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

FORM_TABLE = "forms"
DUPLICATE_MESSAGE = "A form with this name or URL already exists"


class FormService:
    """
    Service for the form registry.
    """

    @staticmethod
    def _collides(name: str, url: str, exclude_id: str | None = None) -> bool:
        client = SupabaseClient.get_client()
        query = (
            client.table(FORM_TABLE)
            .select("id")
            .or_(f"name.eq.{quote_filter_value(name)},url.eq.{quote_filter_value(url)}")
        )
        if exclude_id:
            query = query.neq("id", exclude_id)
        response = query.limit(1).execute()
        return bool(response.data)

    @staticmethod
    def list_forms() -> list[dict[str, Any]]:
        """List all forms ordered by name."""
        client = SupabaseClient.get_client()
        response = client.table(FORM_TABLE).select("*").order("name").execute()
        return response.data or []

    @staticmethod
    def create_form(name: str, url: str) -> dict[str, Any]:
        """
        Create a form.

        Raises:
            DuplicateNameError: If another form already uses this name or url
        """
        name, url = name.strip(), url.strip()
        if FormService._collides(name, url):
            raise DuplicateNameError(DUPLICATE_MESSAGE, details={"name": name, "url": url})

        now = utc_now_iso()
        try:
            form = SupabaseClient.insert(
                FORM_TABLE,
                {"name": name, "url": url, "created_at": now, "updated_at": now},
            )
        except UniqueViolationError as e:
            raise DuplicateNameError(DUPLICATE_MESSAGE, details={"field": e.field})

        logger.info(f"Created form: {form['id']} ({name})")
        return form

    @staticmethod
    def update_form(form_id: str | UUID, name: str, url: str) -> dict[str, Any]:
        """
        Rename / re-point a form.

        Raises:
            NotFoundError: If the form doesn't exist
            DuplicateNameError: If another form already uses this name or url
        """
        form_id = str(form_id)
        name, url = name.strip(), url.strip()

        if not SupabaseClient.fetch_by_id(FORM_TABLE, form_id, columns="id"):
            raise NotFoundError("Form", form_id)

        if FormService._collides(name, url, exclude_id=form_id):
            raise DuplicateNameError(DUPLICATE_MESSAGE, details={"name": name, "url": url})

        try:
            form = SupabaseClient.update(
                FORM_TABLE,
                form_id,
                {"name": name, "url": url, "updated_at": utc_now_iso()},
            )
        except UniqueViolationError as e:
            raise DuplicateNameError(DUPLICATE_MESSAGE, details={"field": e.field})

        if not form:
            raise NotFoundError("Form", form_id)

        logger.info(f"Updated form: {form_id}")
        return form

    @staticmethod
    def delete_form(form_id: str | UUID) -> None:
        """
        Raises:
            NotFoundError: If the form doesn't exist
        """
        form_id = str(form_id)
        if not SupabaseClient.delete(FORM_TABLE, form_id):
            raise NotFoundError("Form", form_id)
        logger.info(f"Deleted form: {form_id}")
