"""Thin client for the Airtable REST API (read-only).

Records are turned into domain objects by the ``serializer`` passed by the
caller, which must expose ``deserialize(airtable_record)``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, TypeVar
from urllib.parse import quote

import requests

from pix_api.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T", covariant=True)


class AirtableSerializer(Protocol[T]):
    def deserialize(self, airtable_record: dict[str, Any]) -> T: ...


class AirtableError(Exception):
    """Airtable could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AirtableRecordNotFound(AirtableError):
    def __init__(self, table_name: str, record_id: str) -> None:
        super().__init__(f"Enregistrement '{record_id}' introuvable dans la table '{table_name}'", 404)
        self.table_name = table_name
        self.record_id = record_id


def _headers() -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if settings.AIRTABLE_API_KEY:
        headers["Authorization"] = f"Bearer {settings.AIRTABLE_API_KEY}"
    return headers


def _table_url(table_name: str) -> str:
    return f"{settings.AIRTABLE_API_URL}/{settings.AIRTABLE_BASE}/{quote(table_name)}"


def _get(url: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
    try:
        response = requests.get(
            url,
            headers=_headers(),
            params=params,
            timeout=settings.AIRTABLE_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        logger.error("Erreur de connexion à Airtable: %s", exc)
        raise AirtableError(f"Airtable injoignable: {exc}") from exc
    return response


def _raise_for_status(response: requests.Response) -> None:
    if response.status_code >= 400:
        logger.error("Réponse Airtable en erreur (%s): %s", response.status_code, response.text)
        raise AirtableError(
            f"Airtable a répondu {response.status_code}",
            status_code=response.status_code,
        )


def get_record(table_name: str, record_id: str, serializer: AirtableSerializer[T]) -> T:
    """Fetch one record of ``table_name`` by its Airtable id."""

    logger.info("Airtable: lecture de %s/%s", table_name, record_id)
    response = _get(f"{_table_url(table_name)}/{quote(record_id)}")

    if response.status_code == 404:
        raise AirtableRecordNotFound(table_name, record_id)
    _raise_for_status(response)

    return serializer.deserialize(response.json())


def get_records(
    table_name: str,
    query: Optional[dict[str, Any]],
    serializer: AirtableSerializer[T],
) -> list[T]:
    """Fetch every record of ``table_name`` matching ``query``.

    ``query`` is sent as-is as query-string parameters (``view``,
    ``filterByFormula``, ``maxRecords``...). Airtable pages its results; the
    ``offset`` it returns is followed until exhaustion.
    """

    url = _table_url(table_name)
    params: dict[str, Any] = {"pageSize": settings.AIRTABLE_PAGE_SIZE}
    params.update(query or {})

    records: list[T] = []
    page = 0
    while True:
        page += 1
        logger.info("Airtable: liste de %s (page %s)", table_name, page)
        response = _get(url, params=params)
        _raise_for_status(response)

        payload = response.json()
        records.extend(serializer.deserialize(record) for record in payload.get("records", []))

        offset = payload.get("offset")
        if not offset:
            break
        params = {**params, "offset": offset}

    return records
