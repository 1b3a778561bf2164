# =============================================================================
# core/services/customer_service.py - Customer Directory Business Logic
# =============================================================================
# Customer CRUD plus free-text search.
#
# Before any write the serviceCategoryUrl is normalized:
#   ""              -> None (the column is cleared)
#   "example.com"   -> "https://example.com"
#   "http://x.com"  -> unchanged
# a blank email becomes None, and the full record is validated against
# CustomerRecord, so that failures come back as a per-field message map
# (ValidationFailedError).
#
# Phone and email are unique. They are checked here before the write, and
# the unique indexes in supabase/migrations catch concurrent writers.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from app.config import settings
from app.exceptions import (
    DuplicateKeyError,
    NotFoundError,
    QueryRequiredError,
    ValidationFailedError,
    field_error_map,
)
from core.models.customer import CustomerRecord
from lib.supabase_client import (
    SupabaseClient,
    UniqueViolationError,
    escape_like,
    quote_filter_value,
)
from lib.utils import strip_or_none, utc_now_iso

logger = logging.getLogger(__name__)

CUSTOMER_TABLE = "customers"
SEARCH_COLUMNS = (
    "name",
    "phone",
    "email",
    "address->>line1",
    "address->>city",
    "address->>state",
)
SEARCH_PROJECTION = "id, name, phone, email, address"
RECORD_FIELDS = tuple(CustomerRecord.model_fields)
UNIQUE_FIELDS = ("phone", "email")


def normalize_service_category_url(value: str | None) -> str | None:
    """
    Normalize a service category URL.

    Example:
        normalize_service_category_url("example.com")   # "https://example.com"
        normalize_service_category_url("  ")            # None
    """
    url = strip_or_none(value)
    if url is None:
        return None
    if not url.startswith("http"):
        url = f"https://{url}"
    return url


def validate_customer(data: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a complete customer record.

    Returns:
        The record as a storage dict (snake_case keys)

    Raises:
        ValidationFailedError: With one message per offending field
    """
    try:
        record = CustomerRecord.model_validate(data)
    except ValidationError as e:
        errors = field_error_map(e.errors(), default_key="customer")
        for field, message in errors.items():
            logger.info(f"Customer validation failed - {field}: {message}")
        raise ValidationFailedError(errors)
    return record.model_dump()


class CustomerService:
    """
    Service for the customer directory.
    """

    @staticmethod
    def _prepare(data: dict[str, Any]) -> dict[str, Any]:
        prepared = dict(data)
        if "service_category_url" in prepared:
            prepared["service_category_url"] = normalize_service_category_url(
                prepared["service_category_url"]
            )
        if "email" in prepared:
            prepared["email"] = strip_or_none(prepared["email"])
        return prepared

    @staticmethod
    def _check_unique(record: dict[str, Any], exclude_id: str | None = None) -> None:
        """
        Raise DuplicateKeyError if another customer already uses one of
        the record's unique contact fields. Phone is reported first.
        """
        values = {f: record[f] for f in UNIQUE_FIELDS if record.get(f) is not None}
        if not values:
            return

        filters = ",".join(f"{f}.eq.{quote_filter_value(v)}" for f, v in values.items())
        query = (
            SupabaseClient.get_client()
            .table(CUSTOMER_TABLE)
            .select(", ".join(values))
            .or_(filters)
        )
        if exclude_id:
            query = query.neq("id", exclude_id)
        clashes = query.execute().data or []

        for field, value in values.items():
            if any(str(row.get(field)) == str(value) for row in clashes):
                logger.warning(f"Duplicate customer {field}")
                raise DuplicateKeyError(field)

    @staticmethod
    def list_customers() -> list[dict[str, Any]]:
        """List all customers, newest first."""
        client = SupabaseClient.get_client()
        response = (
            client.table(CUSTOMER_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    @staticmethod
    def get_customer(customer_id: str | UUID) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: If the customer doesn't exist
        """
        customer = SupabaseClient.fetch_by_id(CUSTOMER_TABLE, customer_id)
        if not customer:
            raise NotFoundError("Customer", str(customer_id))
        return customer

    @staticmethod
    def search_customers(query: str | None, limit: int | None = None) -> list[dict[str, Any]]:
        """
        Case-insensitive substring search across name, phone, email and
        address line1/city/state.

        Args:
            query: Text to look for
            limit: Max results (defaults to CUSTOMER_SEARCH_LIMIT)

        Returns:
            Up to `limit` customers projected to id/name/phone/email/address

        Raises:
            QueryRequiredError: If the query is missing or blank
        """
        text = (query or "").strip()
        if not text:
            raise QueryRequiredError()

        pattern = quote_filter_value(f"%{escape_like(text)}%")
        filters = ",".join(f"{column}.ilike.{pattern}" for column in SEARCH_COLUMNS)

        client = SupabaseClient.get_client()
        response = (
            client.table(CUSTOMER_TABLE)
            .select(SEARCH_PROJECTION)
            .or_(filters)
            .limit(limit or settings.CUSTOMER_SEARCH_LIMIT)
            .execute()
        )
        results = response.data or []
        logger.debug(f"Customer search '{text}' matched {len(results)} records")
        return results

    @staticmethod
    def create_customer(data: dict[str, Any]) -> dict[str, Any]:
        """
        Create a customer.

        Args:
            data: Snake_case fields from the request body

        Raises:
            ValidationFailedError: If the record is invalid
            DuplicateKeyError: If a unique contact field is already used
        """
        record = validate_customer(CustomerService._prepare(data))
        CustomerService._check_unique(record)

        now = utc_now_iso()
        record["created_at"] = now
        record["updated_at"] = now

        try:
            customer = SupabaseClient.insert(CUSTOMER_TABLE, record)
        except UniqueViolationError as e:
            logger.warning(f"Duplicate customer {e.field}")
            raise DuplicateKeyError(e.field)

        logger.info(f"Created customer: {customer['id']}")
        return customer

    @staticmethod
    def update_customer(customer_id: str | UUID, changes: dict[str, Any]) -> dict[str, Any]:
        """
        Apply the provided fields to a customer and re-validate the result.

        Fields not present in `changes` keep their stored value; address is
        replaced as a whole.

        Raises:
            NotFoundError: If the customer doesn't exist
            ValidationFailedError: If the merged record is invalid
            DuplicateKeyError: If a unique contact field is already used
        """
        customer_id = str(customer_id)
        existing = CustomerService.get_customer(customer_id)

        merged = {field: existing.get(field) for field in RECORD_FIELDS}
        merged.update(CustomerService._prepare(changes))
        record = validate_customer(merged)

        update_data = {field: record[field] for field in RECORD_FIELDS if field in changes}
        CustomerService._check_unique(
            {f: update_data[f] for f in UNIQUE_FIELDS if f in update_data}, exclude_id=customer_id
        )
        update_data["updated_at"] = utc_now_iso()

        try:
            customer = SupabaseClient.update(CUSTOMER_TABLE, customer_id, update_data)
        except UniqueViolationError as e:
            logger.warning(f"Duplicate customer {e.field} on update of {customer_id}")
            raise DuplicateKeyError(e.field)

        if not customer:
            raise NotFoundError("Customer", customer_id)

        logger.info(f"Updated customer: {customer_id}")
        return customer

    @staticmethod
    def delete_customer(customer_id: str | UUID) -> None:
        """
        Raises:
            NotFoundError: If the customer doesn't exist
        """
        customer_id = str(customer_id)
        if not SupabaseClient.delete(CUSTOMER_TABLE, customer_id):
            raise NotFoundError("Customer", customer_id)
        logger.info(f"Deleted customer: {customer_id}")
