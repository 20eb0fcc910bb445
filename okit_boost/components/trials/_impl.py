"""
TrialService - Free trial requests.

A trial request moves through pending -> approved/rejected -> delivered;
admins drive the transitions by patching the row.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from okit_boost.constants import TRIAL_STATUS
from okit_boost.domain.entities import AuthUser, Row
from okit_boost.domain.errors import DuplicateRequest, InvalidRequest
from okit_boost.ports.remote import TablePort, single_row

TRIAL_REQUESTS = "trial_requests"

REQUIRED_FIELDS = ("name", "email", "phone", "platform", "service", "target_link")
FORM_FIELDS = REQUIRED_FIELDS + ("notes",)
CHECK_COLUMNS = "id,status,created_at,email,user_id"
SUMMARY_COLUMNS = "id,status,created_at,platform,service"


class TrialService:
    def __init__(self, tables: TablePort) -> None:
        self._tables = tables

    def list_trials(self, status: str | None = None) -> list[Row]:
        """All requests, newest first; `status` of None or 'all' disables filtering."""
        filters = {"status": status} if status and status != "all" else None
        return self._tables.select(
            TRIAL_REQUESTS, filters=filters, order_by="created_at", descending=True
        )

    def list_user_trials(self, user_id: str) -> list[Row]:
        return self._tables.select(
            TRIAL_REQUESTS,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True,
        )

    def find_existing(self, user_id: str, email: str) -> Row | None:
        """The caller's earlier request, matched by account first, then by email."""
        for filters in ({"user_id": user_id}, {"email": email}):
            rows = self._tables.select(
                TRIAL_REQUESTS, filters=filters, columns=CHECK_COLUMNS, limit=1
            )
            if rows:
                return rows[0]
        return None

    def list_user_trial_summaries(self, user_id: str) -> list[Row]:
        return self._tables.select(
            TRIAL_REQUESTS,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True,
            columns=SUMMARY_COLUMNS,
        )

    def update_trial(self, trial_id: str, values: Mapping[str, Any]) -> Row:
        filters = {"id": trial_id}
        return single_row(
            self._tables.update(TRIAL_REQUESTS, values, filters=filters), TRIAL_REQUESTS, filters
        )

    def delete_trial(self, trial_id: str) -> None:
        self._tables.delete(TRIAL_REQUESTS, filters={"id": trial_id})

    def submit(self, user: AuthUser, data: Mapping[str, Any]) -> Row:
        """
        Submit a trial request for an authenticated user.

        Raises:
            InvalidRequest: A required field is missing or empty
            DuplicateRequest: A request already exists for this email
        """
        for field in REQUIRED_FIELDS:
            if not data.get(field):
                raise InvalidRequest(f"Le champ {field} est requis", field=field)

        existing = self._tables.select(
            TRIAL_REQUESTS, filters={"email": data["email"]}, columns="id", limit=1
        )
        if existing:
            raise DuplicateRequest("Vous avez déjà fait une demande d'essai.")

        row = {
            "user_id": user.id,
            **{field: data[field] for field in REQUIRED_FIELDS},
            "notes": data.get("notes") or None,
            "status": TRIAL_STATUS["PENDING"],
        }
        return self._tables.insert(TRIAL_REQUESTS, row)

    def submit_form(self, form: Mapping[str, Any]) -> Row:
        """Insert a request straight from form fields, without checks."""
        return self._tables.insert(
            TRIAL_REQUESTS, {field: form.get(field) for field in FORM_FIELDS}
        )
