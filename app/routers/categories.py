# =============================================================================
# app/routers/categories.py - Form Category Endpoints
# =============================================================================
# Listing is public; creating and updating need an authenticated user,
# deleting needs an admin.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user, require_roles
from core.models import CategoryCreate, CategoryResponse, CategoryUpdate, MessageResponse
from core.services.taxonomy_service import CategoryService

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
def list_categories():
    """
    List all form categories, newest first.

    createdBy / updatedBy are resolved to {id, name, email}.
    """
    return CategoryService.list_categories()


@router.post("", response_model=CategoryResponse)
def create_category(
    request: CategoryCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a form category.

    Fails with DUPLICATE_NAME (400) if the name is already used.
    """
    return CategoryService.create_category(
        request.name,
        actor_id=user.id,
        description=request.description,
    )


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: Annotated[str, Path(description="Category id")],
    request: CategoryUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update a form category's name, description or active flag.
    """
    return CategoryService.update_category(
        category_id,
        request.name,
        actor_id=user.id,
        description=request.description,
        is_active=request.is_active,
    )


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: Annotated[str, Path(description="Category id")],
    user: AuthUser = Depends(require_roles("admin")),
):
    """
    Delete a form category.

    Blocked with HAS_DEPENDENTS (400) while subcategories reference it.
    """
    CategoryService.delete_category(category_id)
    return MessageResponse(message="Form category removed", id=category_id)
