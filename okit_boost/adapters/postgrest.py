"""
Hosted Backend Adapter (PostgREST tables + GoTrue auth over HTTP).

Implements TablePort and AuthPort against a Supabase-compatible project:
- tables:  {url}/rest/v1/{table}
- auth:    {url}/auth/v1/...

Every httpx or HTTP-level failure is reported as RemoteServiceError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from okit_boost.config.models import RemoteConfig
from okit_boost.domain.entities import AuthSession, AuthUser, Row
from okit_boost.ports.remote import AuthExchangeError, RemoteServiceError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _encode_value(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


def _filter_params(filters: Mapping[str, Any] | None) -> dict[str, str]:
    return {key: _encode_value(value) for key, value in (filters or {}).items()}


def _raise_for_response(response: httpx.Response) -> None:
    """Translate a non-2xx response into RemoteServiceError."""
    if response.is_success:
        return
    code = None
    message = response.text or response.reason_phrase
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        code = body.get("code") or body.get("error")
        message = (
            body.get("message")
            or body.get("msg")
            or body.get("error_description")
            or message
        )
    raise RemoteServiceError(str(message), code=code, status_code=response.status_code)


def _json_body(
    response: httpx.Response, error_cls: type[RemoteServiceError] = RemoteServiceError
) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise error_cls(
            f"unreadable response body from {response.request.url.path}",
            status_code=response.status_code,
        ) from e


def _rows(response: httpx.Response, table: str) -> list[Row]:
    """Decode a PostgREST representation: a JSON array of objects."""
    body = _json_body(response)
    if not isinstance(body, list) or not all(isinstance(row, dict) for row in body):
        raise RemoteServiceError(
            f"{table} returned {type(body).__name__} instead of a row list",
            status_code=response.status_code,
        )
    return body


def _model(
    response: httpx.Response,
    model: type[ModelT],
    error_cls: type[RemoteServiceError] = RemoteServiceError,
) -> ModelT:
    body = _json_body(response, error_cls)
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise error_cls(
            f"unexpected {model.__name__} payload: {e.error_count()} validation errors",
            status_code=response.status_code,
        ) from e


def _parse_content_range(header: str | None) -> int:
    """Extract the total from a Content-Range header like '0-24/57' or '*/57'."""
    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


class PostgrestTables:
    """TablePort over the PostgREST HTTP interface."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def _request(self, method: str, table: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s /rest/v1/%s params=%s", method, table, kwargs.get("params"))
        try:
            response = self._client.request(method, f"/rest/v1/{table}", **kwargs)
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"{method} {table} failed: {e}") from e
        _raise_for_response(response)
        return response

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
        params = {"select": columns, **_filter_params(filters)}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)
        if offset:
            params["offset"] = str(offset)
        response = self._request("GET", table, params=params)
        return _rows(response, table)

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        response = self._request(
            "POST",
            table,
            json=dict(row),
            headers={"Prefer": "return=representation"},
        )
        rows = _rows(response, table)
        if not rows:
            raise RemoteServiceError(f"insert into {table} returned no row")
        return rows[0]

    def update(
        self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]
    ) -> list[Row]:
        response = self._request(
            "PATCH",
            table,
            params=_filter_params(filters),
            json=dict(values),
            headers={"Prefer": "return=representation"},
        )
        return _rows(response, table)

    def delete(self, table: str, *, filters: Mapping[str, Any]) -> None:
        self._request("DELETE", table, params=_filter_params(filters))

    def count(self, table: str, *, filters: Mapping[str, Any] | None = None) -> int:
        response = self._request(
            "HEAD",
            table,
            params={"select": "*", **_filter_params(filters)},
            headers={"Prefer": "count=exact"},
        )
        return _parse_content_range(response.headers.get("content-range"))


class GoTrueAuth:
    """AuthPort over the GoTrue HTTP interface."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def get_user(self, access_token: str) -> AuthUser | None:
        try:
            response = self._client.get(
                "/auth/v1/user",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"auth user lookup failed: {e}") from e

        if response.status_code in (401, 403):
            return None
        _raise_for_response(response)
        return _model(response, AuthUser)

    def exchange_code_for_session(self, code: str, code_verifier: str | None = None) -> AuthSession:
        payload: dict[str, str] = {"auth_code": code}
        if code_verifier:
            payload["code_verifier"] = code_verifier
        try:
            response = self._client.post(
                "/auth/v1/token",
                params={"grant_type": "pkce"},
                json=payload,
            )
        except httpx.HTTPError as e:
            raise AuthExchangeError(f"code exchange failed: {e}") from e

        try:
            _raise_for_response(response)
        except RemoteServiceError as e:
            raise AuthExchangeError(e.message, code=e.code, status_code=e.status_code) from e
        return _model(response, AuthSession, AuthExchangeError)


def create_http_client(
    config: RemoteConfig, transport: httpx.BaseTransport | None = None
) -> httpx.Client:
    """Build the shared httpx client carrying the project API key."""
    if not config.url:
        raise ValueError("remote.url is empty. Set OKIT_SUPABASE_URL")
    return httpx.Client(
        base_url=config.url.rstrip("/"),
        timeout=config.timeout_seconds,
        transport=transport,
        headers={
            "apikey": config.anon_key,
            "Authorization": f"Bearer {config.anon_key}",
            "Accept": "application/json",
        },
    )
