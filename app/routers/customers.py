# =============================================================================
# app/routers/customers.py - Customer Directory Endpoints
# =============================================================================
# Responses omit null fields, so a cleared serviceCategoryUrl is absent from
# the returned record rather than present as null.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from core.models import CustomerInput, CustomerResponse, CustomerSearchResult, MessageResponse
from core.services.customer_service import CustomerService

router = APIRouter()


@router.get("", response_model=list[CustomerResponse], response_model_exclude_none=True)
def list_customers():
    """List all customers, newest first."""
    return CustomerService.list_customers()


# Declared before /{customer_id} so "search" isn't captured as an id
@router.get("/search", response_model=list[CustomerSearchResult], response_model_exclude_none=True)
def search_customers(
    q: Annotated[str | None, Query(description="Text to match against name, phone, email and address")] = None,
):
    """
    Search customers.

    Case-insensitive substring match, at most 10 results.
    Fails with QUERY_REQUIRED (400) when q is empty.
    """
    return CustomerService.search_customers(q)


@router.get("/{customer_id}", response_model=CustomerResponse, response_model_exclude_none=True)
def get_customer(
    customer_id: Annotated[str, Path(description="Customer id")],
):
    """Get one customer."""
    return CustomerService.get_customer(customer_id)


@router.post(
    "",
    response_model=CustomerResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_customer(
    request: CustomerInput,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a customer.

    Errors:
    - VALIDATION_FAILED (400): details.fields maps each bad field to a message
    - DUPLICATE_KEY (400): details.field names the duplicated contact field
    """
    return CustomerService.create_customer(request.model_dump(exclude_unset=True))


@router.put("/{customer_id}", response_model=CustomerResponse, response_model_exclude_none=True)
def update_customer(
    customer_id: Annotated[str, Path(description="Customer id")],
    request: CustomerInput,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update a customer. Only the fields sent are changed.
    """
    return CustomerService.update_customer(customer_id, request.model_dump(exclude_unset=True))


@router.delete("/{customer_id}", response_model=MessageResponse)
def delete_customer(
    customer_id: Annotated[str, Path(description="Customer id")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete a customer."""
    CustomerService.delete_customer(customer_id)
    return MessageResponse(message="Customer deleted successfully", id=customer_id)
