"""
In-Memory Remote Backend (development and tests).

Implements TablePort and AuthPort over plain dicts so the API can run
without the hosted service. Rows are copied on the way in and out, so
callers never share mutable state with the store.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from okit_boost.domain.entities import AuthSession, AuthUser, Row
from okit_boost.ports.remote import AuthExchangeError


def _matches(row: Row, filters: Mapping[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(row.get(key) == value for key, value in filters.items())


def _project(row: Row, columns: str) -> Row:
    if columns.strip() == "*":
        return copy.deepcopy(row)
    wanted = [c.strip() for c in columns.split(",") if c.strip()]
    return {c: copy.deepcopy(row.get(c)) for c in wanted}


class InMemoryTables:
    """TablePort backed by a dict of row lists."""

    def __init__(self, seed: Mapping[str, list[Row]] | None = None) -> None:
        self._tables: dict[str, list[Row]] = {}
        for table, rows in (seed or {}).items():
            for row in rows:
                self.insert(table, row)

    def _rows(self, table: str) -> list[Row]:
        return self._tables.setdefault(table, [])

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
        rows = [r for r in self._rows(table) if _matches(r, filters)]
        if order_by:
            present = [r for r in rows if r.get(order_by) is not None]
            missing = [r for r in rows if r.get(order_by) is None]
            present.sort(key=lambda r: r[order_by], reverse=descending)
            # Nulls sort last ascending, first descending
            rows = missing + present if descending else present + missing
        rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        return [_project(r, columns) for r in rows]

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        stored = copy.deepcopy(dict(row))
        stored.setdefault("id", str(uuid4()))
        stored.setdefault("created_at", datetime.now(UTC).isoformat())
        self._rows(table).append(stored)
        return copy.deepcopy(stored)

    def update(
        self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]
    ) -> list[Row]:
        updated: list[Row] = []
        for row in self._rows(table):
            if _matches(row, filters):
                row.update(copy.deepcopy(dict(values)))
                updated.append(copy.deepcopy(row))
        return updated

    def delete(self, table: str, *, filters: Mapping[str, Any]) -> None:
        self._tables[table] = [r for r in self._rows(table) if not _matches(r, filters)]

    def count(self, table: str, *, filters: Mapping[str, Any] | None = None) -> int:
        return sum(1 for r in self._rows(table) if _matches(r, filters))


class InMemoryAuth:
    """AuthPort backed by registered tokens and one-shot authorization codes."""

    def __init__(self) -> None:
        self._users_by_token: dict[str, AuthUser] = {}
        self._sessions_by_code: dict[str, AuthSession] = {}

    def register_token(self, access_token: str, user: AuthUser) -> None:
        self._users_by_token[access_token] = user

    def register_code(self, code: str, user: AuthUser) -> AuthSession:
        """Prepare a code that exchanges to a fresh session for `user`."""
        session = AuthSession(
            access_token=f"at-{uuid4().hex}",
            refresh_token=f"rt-{uuid4().hex}",
            expires_in=3600,
            user=user,
        )
        self._sessions_by_code[code] = session
        return session

    def get_user(self, access_token: str) -> AuthUser | None:
        return self._users_by_token.get(access_token)

    def exchange_code_for_session(self, code: str, code_verifier: str | None = None) -> AuthSession:
        session = self._sessions_by_code.pop(code, None)
        if session is None:
            raise AuthExchangeError("invalid or expired authorization code", code="invalid_grant")
        if session.user is not None:
            self._users_by_token[session.access_token] = session.user
        return session
