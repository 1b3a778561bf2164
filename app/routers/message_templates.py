# =============================================================================
# app/routers/message_templates.py - Message Template Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_current_user
from core.models import (
    MessageResponse,
    SendTestResponse,
    TemplateCreate,
    TemplateResponse,
    TemplateUpdate,
)
from core.services.message_template_service import MessageTemplateService

router = APIRouter()


@router.get("", response_model=list[TemplateResponse])
def list_templates():
    """List all message templates, newest first."""
    return MessageTemplateService.list_templates()


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(
    request: TemplateCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a message template.

    Fails with MISSING_FIELDS (400) unless name, subject and content are all given.
    """
    return MessageTemplateService.create_template(
        request.name,
        request.subject,
        request.content,
        template_type=request.type,
    )


@router.put("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: Annotated[str, Path(description="Template id")],
    request: TemplateUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Partially update a template. Keys missing from the body are left untouched.
    """
    return MessageTemplateService.update_template(template_id, request.model_dump(exclude_unset=True))


@router.delete("/{template_id}", response_model=MessageResponse)
def delete_template(
    template_id: Annotated[str, Path(description="Template id")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete a message template."""
    MessageTemplateService.delete_template(template_id)
    return MessageResponse(message="Message template deleted successfully", id=template_id)


@router.post("/{template_id}/test", response_model=SendTestResponse)
def send_test_message(
    template_id: Annotated[str, Path(description="Template id")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Simulate sending the template to the current user.

    Nothing is delivered; the subject and content are echoed back.
    """
    return MessageTemplateService.send_test(template_id, recipient=user.email)
