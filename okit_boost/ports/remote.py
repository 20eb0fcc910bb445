"""
Remote Backend Port Interfaces.

Protocol-based interfaces for the hosted database/auth service.
Implementations: PostgREST/GoTrue over HTTP (production), in-memory (dev/tests).

All implementations report transport and service failures as RemoteServiceError.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from okit_boost.domain.entities import AuthSession, AuthUser, Row


class RemoteServiceError(Exception):
    """Remote backend call failed."""

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


class AuthExchangeError(RemoteServiceError):
    """Authorization code could not be exchanged for a session."""


class TablePort(Protocol):
    """
    Table access on the remote relational service.

    Filters are equality predicates combined with AND. `offset` and
    `limit` page through the rows after ordering.
    """

    def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
        columns: str = "*",
    ) -> list[Row]:
        """Return matching rows."""
        ...

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Insert a row and return it as stored."""
        ...

    def update(
        self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]
    ) -> list[Row]:
        """Update matching rows and return them."""
        ...

    def delete(self, table: str, *, filters: Mapping[str, Any]) -> None:
        """Delete matching rows."""
        ...

    def count(self, table: str, *, filters: Mapping[str, Any] | None = None) -> int:
        """Count matching rows."""
        ...


class AuthPort(Protocol):
    """User authentication on the remote service."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Resolve the user owning an access token, or None if the token is not valid."""
        ...

    def exchange_code_for_session(self, code: str, code_verifier: str | None = None) -> AuthSession:
        """
        Exchange an OAuth/magic-link authorization code for a session.

        Raises:
            AuthExchangeError: If the code is rejected
        """
        ...


class RowNotFoundError(RemoteServiceError):
    """A single-row operation matched no row."""

    def __init__(self, table: str, filters: Mapping[str, Any]):
        super().__init__(f"no row in {table} matching {dict(filters)}", code="PGRST116")
        self.table = table
        self.filters = dict(filters)


def single_row(rows: list[Row], table: str, filters: Mapping[str, Any]) -> Row:
    """Return the only row of a single-row result, raising RowNotFoundError if empty."""
    if not rows:
        raise RowNotFoundError(table, filters)
    return rows[0]
