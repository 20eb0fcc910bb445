from typing import Any

from pydantic import BaseModel, Field

# Rows of the remote tables are plain dicts owned by the remote schema.
Row = dict[str, Any]

# --- Auth ---


class AuthUser(BaseModel):
    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    def display_name(self) -> str:
        """Best-effort full name used when creating a profile."""
        meta = self.user_metadata
        name = meta.get("full_name") or meta.get("name")
        if name:
            return str(name)
        if self.email:
            return self.email.split("@")[0]
        return ""


class AuthSession(BaseModel):
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"
    user: AuthUser | None = None
