"""
AccountService - Caller identity and user profiles.

Identity comes from the remote auth service; profile rows live in the
`profiles` table and are created on first access.
"""

from __future__ import annotations

from datetime import UTC, datetime

from okit_boost.constants import USER_ROLES
from okit_boost.domain.entities import AuthSession, AuthUser, Row
from okit_boost.ports.remote import AuthPort, TablePort, single_row

PROFILES = "profiles"


class AccountService:
    def __init__(self, tables: TablePort, auth: AuthPort) -> None:
        self._tables = tables
        self._auth = auth

    def resolve_user(self, access_token: str | None) -> AuthUser | None:
        """The user behind an access token, or None when absent or invalid."""
        if not access_token:
            return None
        return self._auth.get_user(access_token)

    def exchange_code(self, code: str, code_verifier: str | None = None) -> AuthSession:
        return self._auth.exchange_code_for_session(code, code_verifier)

    def get_profile(self, user_id: str) -> Row | None:
        rows = self._tables.select(PROFILES, filters={"id": user_id}, limit=1)
        return rows[0] if rows else None

    def get_or_create_profile(self, user: AuthUser) -> Row:
        profile = self.get_profile(user.id)
        if profile is not None:
            return profile
        return self._tables.insert(
            PROFILES,
            {
                "id": user.id,
                "email": user.email,
                "full_name": user.display_name(),
                "role": USER_ROLES["USER"],
            },
        )

    def update_profile(self, user_id: str, full_name: str | None, phone: str | None) -> Row:
        filters = {"id": user_id}
        updates = {
            "full_name": full_name,
            "phone": phone,
            "updated_at": datetime.now(UTC).isoformat(),
        }
        rows = self._tables.update(PROFILES, updates, filters=filters)
        return single_row(rows, PROFILES, filters)

    def is_admin(self, user_id: str) -> bool:
        rows = self._tables.select(PROFILES, filters={"id": user_id}, columns="role", limit=1)
        return bool(rows) and rows[0].get("role") == USER_ROLES["ADMIN"]
