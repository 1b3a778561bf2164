# =============================================================================
# tests/test_message_template_service.py - Message Template Service Tests
# =============================================================================
# Run with: poetry run pytest tests/test_message_template_service.py -v
# =============================================================================

import pytest

from app.exceptions import MissingFieldsError, NotFoundError, ValidationFailedError
from core.models import TemplateType
from core.services.message_template_service import TEMPLATE_TABLE, MessageTemplateService


@pytest.fixture
def template(db):
    return MessageTemplateService.create_template(
        "Visit reminder",
        "Your visit tomorrow",
        "Hi, we'll see you at 9am.",
        template_type=TemplateType.NOTIFICATION,
    )


class TestCreateTemplate:

    def test_creates(self, template):
        assert template["name"] == "Visit reminder"
        assert template["type"] == "NOTIFICATION"

    def test_type_defaults_to_alert(self, db):
        created = MessageTemplateService.create_template("Outage", "Service outage", "We are down.")
        assert created["type"] == "ALERT"

    def test_missing_fields_listed(self, db):
        with pytest.raises(MissingFieldsError) as exc_info:
            MessageTemplateService.create_template("Name only", None, "   ")

        assert exc_info.value.details == {"missing": ["subject", "content"]}
        assert exc_info.value.status_code == 400
        assert db.rows(TEMPLATE_TABLE) == []

    def test_names_need_not_be_unique(self, db):
        MessageTemplateService.create_template("Same", "A", "a")
        MessageTemplateService.create_template("Same", "B", "b")

        assert len(MessageTemplateService.list_templates()) == 2


class TestUpdateTemplate:

    def test_partial_update(self, template):
        updated = MessageTemplateService.update_template(template["id"], {"subject": "New subject"})

        assert updated["subject"] == "New subject"
        assert updated["name"] == "Visit reminder"
        assert updated["type"] == "NOTIFICATION"

    def test_change_type(self, template):
        updated = MessageTemplateService.update_template(template["id"], {"type": TemplateType.PROMOTIONAL})
        assert updated["type"] == "PROMOTIONAL"

    def test_empty_update_refreshes_timestamp_only(self, db):
        stored = db.seed(
            TEMPLATE_TABLE,
            {
                "name": "N",
                "subject": "S",
                "content": "C",
                "type": "ALERT",
                "updated_at": "2020-01-01T00:00:00+00:00",
            },
        )[0]

        updated = MessageTemplateService.update_template(stored["id"], {})

        assert updated["name"] == "N"
        assert updated["updated_at"] != "2020-01-01T00:00:00+00:00"

    @pytest.mark.parametrize("field", ["name", "subject", "content"])
    def test_blank_required_field_rejected(self, template, field):
        with pytest.raises(ValidationFailedError) as exc_info:
            MessageTemplateService.update_template(template["id"], {field: "  "})

        assert field in exc_info.value.errors

    def test_null_type_rejected(self, template):
        with pytest.raises(ValidationFailedError):
            MessageTemplateService.update_template(template["id"], {"type": None})

    def test_missing(self, db):
        with pytest.raises(NotFoundError):
            MessageTemplateService.update_template("missing", {"name": "X"})


class TestDeleteTemplate:

    def test_deletes(self, db, template):
        MessageTemplateService.delete_template(template["id"])
        assert db.rows(TEMPLATE_TABLE) == []

    def test_missing(self, db):
        with pytest.raises(NotFoundError):
            MessageTemplateService.delete_template("missing")


class TestSendTest:

    def test_echoes_template(self, template):
        result = MessageTemplateService.send_test(template["id"], recipient="ops@example.com")

        assert result == {
            "success": True,
            "message": "Test message sent successfully",
            "to": "ops@example.com",
            "template": {
                "subject": "Your visit tomorrow",
                "content": "Hi, we'll see you at 9am.",
            },
        }

    def test_default_recipient(self, template):
        assert MessageTemplateService.send_test(template["id"])["to"] == "test@example.com"

    def test_does_not_modify_template(self, db, template):
        before = db.rows(TEMPLATE_TABLE)

        MessageTemplateService.send_test(template["id"])

        assert db.rows(TEMPLATE_TABLE) == before

    def test_missing(self, db):
        with pytest.raises(NotFoundError):
            MessageTemplateService.send_test("missing")
