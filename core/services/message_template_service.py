# =============================================================================
# core/services/message_template_service.py - Message Template Business Logic
# =============================================================================
# Template CRUD and a side-effect-free "test send". Real delivery (email/SMS)
# is out of scope, so the test send only logs and echoes the template.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import MissingFieldsError, NotFoundError, ValidationFailedError
from core.models.message_template import TemplateType
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

TEMPLATE_TABLE = "message_templates"
REQUIRED_FIELDS = ("name", "subject", "content")


class MessageTemplateService:
    """
    Service for message templates.
    """

    @staticmethod
    def list_templates() -> list[dict[str, Any]]:
        """List all templates, newest first."""
        client = SupabaseClient.get_client()
        response = (
            client.table(TEMPLATE_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    @staticmethod
    def get_template(template_id: str | UUID) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: If the template doesn't exist
        """
        template = SupabaseClient.fetch_by_id(TEMPLATE_TABLE, template_id)
        if not template:
            raise NotFoundError("Message template", str(template_id))
        return template

    @staticmethod
    def create_template(
        name: str | None,
        subject: str | None,
        content: str | None,
        template_type: TemplateType | str = TemplateType.ALERT,
    ) -> dict[str, Any]:
        """
        Create a template.

        Raises:
            MissingFieldsError: If name, subject or content is absent or blank
        """
        values = {"name": name, "subject": subject, "content": content}
        missing = [field for field in REQUIRED_FIELDS if not (values[field] or "").strip()]
        if missing:
            raise MissingFieldsError(missing)

        now = utc_now_iso()
        data = {
            **{field: values[field].strip() for field in REQUIRED_FIELDS},
            "type": TemplateType(template_type).value,
            "created_at": now,
            "updated_at": now,
        }
        template = SupabaseClient.insert(TEMPLATE_TABLE, data)

        logger.info(f"Created message template: {template['id']} ({data['name']})")
        return template

    @staticmethod
    def update_template(template_id: str | UUID, changes: dict[str, Any]) -> dict[str, Any]:
        """
        Partially update a template.

        Only keys present in `changes` are written. A key that is present but
        blank is rejected rather than silently ignored.

        Raises:
            NotFoundError: If the template doesn't exist
            ValidationFailedError: If a provided required field is blank
        """
        template_id = str(template_id)

        errors = {
            field: f"{field} cannot be empty"
            for field in REQUIRED_FIELDS
            if field in changes and not (changes[field] or "").strip()
        }
        if "type" in changes and changes["type"] is None:
            errors["type"] = "type cannot be empty"
        if errors:
            raise ValidationFailedError(errors)

        update_data: dict[str, Any] = {
            field: changes[field].strip() for field in REQUIRED_FIELDS if field in changes
        }
        if "type" in changes:
            update_data["type"] = TemplateType(changes["type"]).value
        update_data["updated_at"] = utc_now_iso()

        template = SupabaseClient.update(TEMPLATE_TABLE, template_id, update_data)
        if not template:
            raise NotFoundError("Message template", template_id)

        logger.info(f"Updated message template: {template_id} ({', '.join(sorted(changes)) or 'no fields'})")
        return template

    @staticmethod
    def delete_template(template_id: str | UUID) -> None:
        """
        Raises:
            NotFoundError: If the template doesn't exist
        """
        template_id = str(template_id)
        if not SupabaseClient.delete(TEMPLATE_TABLE, template_id):
            raise NotFoundError("Message template", template_id)
        logger.info(f"Deleted message template: {template_id}")

    @staticmethod
    def send_test(template_id: str | UUID, recipient: str | None = None) -> dict[str, Any]:
        """
        Pretend to send a template.

        Nothing is dispatched; the subject/content are logged and echoed
        back as confirmation.

        Raises:
            NotFoundError: If the template doesn't exist
        """
        template = MessageTemplateService.get_template(template_id)
        to = recipient or "test@example.com"

        logger.info(f"Test message would be sent to {to} with template: {template['id']} ({template['subject']})")
        return {
            "success": True,
            "message": "Test message sent successfully",
            "to": to,
            "template": {
                "subject": template["subject"],
                "content": template["content"],
            },
        }
