# =============================================================================
# app/routers/forms.py - Form Registry Endpoints
# =============================================================================
# POST /forms creates a form, or updates one when the body carries an `id`
# (kept for existing admin UI clients). PUT /forms/{id} is the explicit update.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from core.models import FormResponse, FormUpdate, FormUpsert, MessageResponse
from core.services.form_service import FormService

router = APIRouter()


@router.get("", response_model=list[FormResponse])
def list_forms():
    """List all forms ordered by name."""
    return FormService.list_forms()


@router.post("", response_model=FormResponse)
def create_or_update_form(
    request: FormUpsert,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a form, or update the form named by `id`.

    Fails with DUPLICATE_NAME (400) if another form uses the name or url.
    """
    if request.id:
        return FormService.update_form(request.id, request.name, request.url)
    return FormService.create_form(request.name, request.url)


@router.put("/{form_id}", response_model=FormResponse)
def update_form(
    form_id: Annotated[str, Path(description="Form id")],
    request: FormUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Rename or re-point a form."""
    return FormService.update_form(form_id, request.name, request.url)


@router.delete("/{form_id}", response_model=MessageResponse)
def delete_form(
    form_id: Annotated[str, Path(description="Form id")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete a form."""
    FormService.delete_form(form_id)
    return MessageResponse(message="Form removed", id=form_id)
