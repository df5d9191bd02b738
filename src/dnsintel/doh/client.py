"""DNS-over-HTTPS JSON client."""

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from dnsintel.core.config import get_settings
from dnsintel.core.exceptions import (
    MalformedResponseError,
    QueryTimeoutError,
    TransportError,
)
from dnsintel.core.logging import get_logger
from dnsintel.doh.types import query_type_param
from dnsintel.infrastructure.http import HTTPClient
from dnsintel.models.dns import DoHQuestion, DoHResponse, ResolvedRecord

DOH_JSON_MEDIA_TYPE = "application/dns-json"

logger = get_logger("doh_client")


def _parse_records(entries: Any) -> list[ResolvedRecord]:
    if not isinstance(entries, list):
        raise TypeError(f"expected a list of records, got {type(entries).__name__}")
    return [
        ResolvedRecord(
            name=entry.get("name", ""),
            type=entry.get("type", 0),
            ttl=entry.get("TTL", 0),
            data=entry.get("data", ""),
        )
        for entry in entries
    ]


def parse_doh_payload(data: Any) -> DoHResponse:
    """Decode a DoH JSON payload into a ``DoHResponse``.

    A missing ``Status`` means NOERROR. Every other missing field gets an
    empty or false default; fields present with the wrong shape raise
    ``MalformedResponseError``.
    """
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"DoH payload is not a JSON object: {type(data).__name__}"
        )

    try:
        status = data.get("Status")
        authority = data.get("Authority")
        additional = data.get("Additional")
        return DoHResponse(
            status=0 if status is None else status,
            question=[
                DoHQuestion(name=q.get("name", ""), type=q.get("type", 0))
                for q in data.get("Question") or []
            ],
            answer=_parse_records(data.get("Answer") or []),
            authority=_parse_records(authority) if authority is not None else None,
            additional=_parse_records(additional) if additional is not None else None,
            ad=data.get("AD") or False,
            cd=data.get("CD") or False,
            tc=data.get("TC") or False,
            rd=data.get("RD") or False,
            ra=data.get("RA") or False,
        )
    except (PydanticValidationError, TypeError, AttributeError) as e:
        raise MalformedResponseError(f"Unexpected DoH payload shape: {e}") from e


class DoHClient:
    """Issues single queries against DoH JSON endpoints."""

    def __init__(self, http: HTTPClient) -> None:
        self._http = http
        self.settings = get_settings()

    async def query(
        self,
        endpoint: str,
        domain: str,
        record_type: str | int = "A",
        timeout_ms: int | None = None,
    ) -> DoHResponse:
        """Query one endpoint for one name and record type.

        The deadline is hard: the in-flight request is cancelled once
        ``timeout_ms`` elapses and ``QueryTimeoutError`` is raised.
        """
        timeout_ms = timeout_ms or self.settings.doh_timeout_ms
        params = {"name": domain, "type": query_type_param(record_type)}

        try:
            return await asyncio.wait_for(
                self._fetch(endpoint, params, timeout_ms),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError as e:
            logger.debug("doh_query_timeout", endpoint=endpoint, domain=domain)
            raise QueryTimeoutError(
                f"Request timeout after {timeout_ms}ms",
                timeout_ms=timeout_ms,
            ) from e

    async def _fetch(
        self,
        endpoint: str,
        params: dict[str, str],
        timeout_ms: int,
    ) -> DoHResponse:
        try:
            response = await self._http.get(
                endpoint,
                params=params,
                headers={"Accept": DOH_JSON_MEDIA_TYPE},
                timeout=timeout_ms / 1000,
            )
        except httpx.TimeoutException as e:
            raise QueryTimeoutError(
                f"Request timeout after {timeout_ms}ms",
                timeout_ms=timeout_ms,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"DoH response is not valid JSON: {e}") from e

        return parse_doh_payload(data)
