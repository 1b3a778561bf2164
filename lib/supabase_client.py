# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase (PostgREST) operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the record-level helpers shared by every service:
# - Fetch one record by id, or many records by a list of ids
# - Insert / update / delete a single record by id
# - User lookup for the Access Guard and creator/updater annotation
#
# Unique-constraint violations are surfaced as UniqueViolationError so that
# services can map them onto their own DuplicateName/DuplicateKey errors.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   category = SupabaseClient.fetch_by_id("form_categories", category_id)
# =============================================================================

from __future__ import annotations

import logging
import re
from typing import Any, Iterable
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST / Postgres error codes we care about
NO_ROWS_CODE = "PGRST116"
UNIQUE_VIOLATION_CODE = "23505"
INVALID_TEXT_REPRESENTATION_CODE = "22P02"

_KEY_DETAIL_PATTERN = re.compile(r"Key \(([^)]+)\)=")
_CONSTRAINT_PATTERN = re.compile(r'unique constraint "(?:[a-z]+_)*?([a-z]+)_key"')

USER_COLUMNS = "id, name, email"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class UniqueViolationError(SupabaseClientError):
    """Raised when a write violates a unique index. `field` names the offending column."""

    def __init__(self, table: str, field: str, error: str):
        super().__init__(
            message=f"Duplicate value for {table}.{field}: {error}",
            code="UNIQUE_VIOLATION",
            details={"table": table, "field": field},
        )
        self.table = table
        self.field = field


def _error_code(exc: Exception) -> str | None:
    return getattr(exc, "code", None)


def unique_violation_field(exc: APIError) -> str | None:
    """
    Extract the column name from a Postgres unique-violation error.

    Postgres reports `Key (phone)=(555-0100) already exists.` in details;
    compound keys come back as `Key (name, category_id)=...` and are
    reported by their first column.
    """
    if _error_code(exc) != UNIQUE_VIOLATION_CODE:
        return None

    detail = getattr(exc, "details", None) or ""
    match = _KEY_DETAIL_PATTERN.search(str(detail))
    if match:
        return match.group(1).split(",")[0].strip()

    match = _CONSTRAINT_PATTERN.search(getattr(exc, "message", None) or str(exc))
    if match:
        return match.group(1)
    return "value"


def quote_filter_value(value: str) -> str:
    """
    Quote a value for use inside a PostgREST `or=(...)` filter.

    Commas, dots and parentheses are reserved in that syntax, so values are
    wrapped in double quotes with backslash escaping.
    """
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def escape_like(value: str) -> str:
    """
    Escape LIKE/ILIKE wildcards so `value` matches literally.

    Example:
        escape_like("100%_off")   # "100\\%\\_off"
    """
    return str(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        row = SupabaseClient.insert("forms", {"name": "Intake", "url": "https://..."})
        SupabaseClient.delete("forms", row["id"])
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_by_id(
        cls,
        table: str,
        record_id: str | UUID,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single record by ID.

        Args:
            table: Table name
            record_id: The record UUID
            columns: PostgREST column list

        Returns:
            Record dict, or None if not found (or the id is not a valid UUID)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        record_id_str = cls._normalize_uuid(record_id)

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("id", record_id_str)
                .single()
                .execute()
            )

            return response.data

        except APIError as e:
            if _error_code(e) in (NO_ROWS_CODE, INVALID_TEXT_REPRESENTATION_CODE):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} record: {e}",
                code="FETCH_RECORD_FAILED",
                details={"table": table, "id": record_id_str}
            )

    @classmethod
    def fetch_by_ids(
        cls,
        table: str,
        record_ids: Iterable[str | UUID],
        columns: str = "*",
    ) -> dict[str, dict[str, Any]]:
        """
        Fetch several records in one round-trip, keyed by id.

        Missing ids are simply absent from the result.
        """
        ids = sorted({cls._normalize_uuid(r) for r in record_ids if r})
        if not ids:
            return {}

        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .in_("id", ids)
                .execute()
            )
        except APIError as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table} records: {e}",
                code="FETCH_RECORDS_FAILED",
                details={"table": table, "ids": ids}
            )

        return {str(row["id"]): row for row in response.data or []}

    @classmethod
    def fetch_user(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """Fetch a user (including role) for the Access Guard."""
        return cls.fetch_by_id("users", user_id, columns="id, name, email, role, password_changed_at")

    @classmethod
    def fetch_users(cls, user_ids: Iterable[str | UUID]) -> dict[str, dict[str, Any]]:
        """Fetch the public identity ({id, name, email}) of several users."""
        return cls.fetch_by_ids("users", user_ids, columns=USER_COLUMNS)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def _raise_write_error(cls, table: str, action: str, e: APIError) -> None:
        field = unique_violation_field(e)
        if field:
            raise UniqueViolationError(table, field, str(e))
        raise SupabaseClientError(
            message=f"Failed to {action} {table} record: {e}",
            code=f"{action.upper()}_RECORD_FAILED",
            details={"table": table}
        )

    @classmethod
    def insert(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a record and return it with generated columns.

        Raises:
            UniqueViolationError: If a unique index rejects the row
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()
        except APIError as e:
            cls._raise_write_error(table, "insert", e)

        if response.data:
            return response.data[0]
        raise SupabaseClientError(
            message="Insert returned no data",
            code="INSERT_NO_DATA",
            details={"table": table}
        )

    @classmethod
    def update(
        cls,
        table: str,
        record_id: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a record by id.

        Returns:
            The updated record, or None if no row matched
        """
        client = cls.get_client()
        record_id_str = cls._normalize_uuid(record_id)

        try:
            response = (
                client.table(table)
                .update(data)
                .eq("id", record_id_str)
                .execute()
            )
        except APIError as e:
            if _error_code(e) == INVALID_TEXT_REPRESENTATION_CODE:
                return None
            cls._raise_write_error(table, "update", e)

        return response.data[0] if response.data else None

    @classmethod
    def delete(cls, table: str, record_id: str | UUID) -> bool:
        """
        Delete a record by id.

        Returns:
            True if a row was removed
        """
        client = cls.get_client()
        record_id_str = cls._normalize_uuid(record_id)

        try:
            response = (
                client.table(table)
                .delete()
                .eq("id", record_id_str)
                .execute()
            )
        except APIError as e:
            if _error_code(e) == INVALID_TEXT_REPRESENTATION_CODE:
                return False
            raise SupabaseClientError(
                message=f"Failed to delete {table} record: {e}",
                code="DELETE_RECORD_FAILED",
                details={"table": table, "id": record_id_str}
            )

        return bool(response.data)
