"""Row store port over the hosted service's REST API (PostgREST)."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Sequence
from uuid import UUID

from nexar.application.ports import Filter, FilterOperator, OrderBy, RowStorePort
from nexar.infrastructure.remote.http import (
    RemoteHttpClient,
    ensure_rows,
    json_body,
    json_rows,
)

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"

_CONTENT_RANGE_TOTAL = re.compile(r"/(\d+)$")

Params = list[tuple[str, str]]


class RemoteRowStoreAdapter(RowStorePort):
    """Translates row store calls into PostgREST query strings."""

    def __init__(self, http: RemoteHttpClient):
        self._http = http

    async def select(
        self,
        collection: str,
        *,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        any_of: Sequence[Filter] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params: Params = [("select", columns)]
        params += _filter_params(filters)
        if any_of:
            params.append(("or", _or_group(any_of)))
        if order_by is not None:
            direction = "desc" if order_by.descending else "asc"
            params.append(("order", f"{order_by.column}.{direction}"))
        if limit is not None:
            params.append(("limit", str(limit)))

        response = await self._http.request("GET", _path(collection), params=params)
        return json_rows(response, collection)

    async def select_one(
        self,
        collection: str,
        *,
        columns: str = "*",
        filters: Sequence[Filter] = (),
    ) -> dict[str, Any] | None:
        rows = await self.select(collection, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def insert(
        self,
        collection: str,
        row: Mapping[str, Any],
    ) -> dict[str, Any]:
        response = await self._http.request(
            "POST",
            _path(collection),
            json=encode_row(row),
            headers={"Prefer": "return=representation"},
        )
        body = json_body(response, collection)
        if isinstance(body, dict):
            return body
        rows = ensure_rows(body, collection)
        return rows[0] if rows else dict(encode_row(row))

    async def update(
        self,
        collection: str,
        values: Mapping[str, Any],
        *,
        filters: Sequence[Filter],
    ) -> list[dict[str, Any]]:
        response = await self._http.request(
            "PATCH",
            _path(collection),
            params=_filter_params(filters),
            json=encode_row(values),
            headers={"Prefer": "return=representation"},
        )
        return json_rows(response, collection)

    async def delete(
        self,
        collection: str,
        *,
        filters: Sequence[Filter],
    ) -> None:
        await self._http.request(
            "DELETE",
            _path(collection),
            params=_filter_params(filters),
        )

    async def count(
        self,
        collection: str,
        *,
        filters: Sequence[Filter] = (),
    ) -> int:
        response = await self._http.request(
            "HEAD",
            _path(collection),
            params=[("select", "*"), *_filter_params(filters)],
            headers={"Prefer": "count=exact"},
        )
        match = _CONTENT_RANGE_TOTAL.search(response.headers.get("content-range", ""))
        return int(match.group(1)) if match else 0


def _path(collection: str) -> str:
    return f"{REST_PATH}/{collection}"


def _filter_params(filters: Sequence[Filter]) -> Params:
    return [(f.column, f"{f.operator.value}.{_format_operand(f)}") for f in filters]


def _or_group(filters: Sequence[Filter]) -> str:
    terms = [f"{f.column}.{f.operator.value}.{_format_operand(f)}" for f in filters]
    return f"({','.join(terms)})"


def _format_operand(f: Filter) -> str:
    if f.operator == FilterOperator.IN:
        return f"({','.join(format_value(v) for v in f.value)})"
    return format_value(f.value)


def format_value(value: Any) -> str:
    """Render a filter operand the way PostgREST expects it in a query string."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def encode_value(value: Any) -> Any:
    """Convert a domain value into its JSON form."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    if isinstance(value, Mapping):
        return encode_row(value)
    return value


def encode_row(row: Mapping[str, Any]) -> dict[str, Any]:
    return {key: encode_value(value) for key, value in row.items()}
