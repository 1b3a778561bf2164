# =============================================================================
# app/routers/subcategories.py - Form Subcategory Endpoints
# =============================================================================
# Reads are public; create/update need an authenticated user, delete needs
# an admin. Field definitions are validated by the service so each rule
# reports its own error code.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, get_current_user, require_roles
from core.models import MessageResponse, SubcategoryCreate, SubcategoryResponse, SubcategoryUpdate
from core.services.taxonomy_service import SubcategoryService

router = APIRouter()


@router.get("", response_model=list[SubcategoryResponse])
def list_subcategories(
    category_id: Annotated[str | None, Query(alias="categoryId", description="Only this category")] = None,
):
    """
    List subcategories, newest first, optionally filtered by category.
    """
    return SubcategoryService.list_subcategories(category_id=category_id)


@router.get("/{subcategory_id}", response_model=SubcategoryResponse)
def get_subcategory(
    subcategory_id: Annotated[str, Path(description="Subcategory id")],
):
    """Get one subcategory with its parent category and field definitions."""
    return SubcategoryService.get_subcategory(subcategory_id)


@router.post("", response_model=SubcategoryResponse)
def create_subcategory(
    request: SubcategoryCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a subcategory.

    Errors:
    - CATEGORY_NOT_FOUND (404): categoryId doesn't exist
    - DUPLICATE_NAME (400): name already used in that category
    - FIELD_* / OPTIONS_REQUIRED (400): first invalid field definition
    """
    return SubcategoryService.create_subcategory(
        request.name,
        category_id=request.category_id,
        fields=request.fields,
        actor_id=user.id,
        description=request.description,
    )


@router.put("/{subcategory_id}", response_model=SubcategoryResponse)
def update_subcategory(
    subcategory_id: Annotated[str, Path(description="Subcategory id")],
    request: SubcategoryUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Replace a subcategory. The field list is replaced and re-validated as a whole.
    """
    return SubcategoryService.update_subcategory(
        subcategory_id,
        request.name,
        category_id=request.category_id,
        fields=request.fields,
        actor_id=user.id,
        description=request.description,
        is_active=request.is_active,
    )


@router.delete("/{subcategory_id}", response_model=MessageResponse)
def delete_subcategory(
    subcategory_id: Annotated[str, Path(description="Subcategory id")],
    user: AuthUser = Depends(require_roles("admin")),
):
    """Delete a subcategory."""
    SubcategoryService.delete_subcategory(subcategory_id)
    return MessageResponse(message="Form subcategory removed", id=subcategory_id)
