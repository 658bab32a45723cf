"""HTTP client for the records backend.

Talks to one REST collection:

    GET    {base_url}?part={part}   list records of a part
    POST   {base_url}               create, body {name, age, part}
    PATCH  {base_url}/{id}          update, body {name, age, part}
    DELETE {base_url}/{id}          delete

Every method is a coroutine and raises NetworkFailure or BadResponseShape
on failure. Catching and degrading is the caller's job (see SyncController).

CRITICAL: This module must have NO UI dependencies.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .errors import BadResponseShape, NetworkFailure
from .models import Part, Record, record_from_dict, records_from_list

logger = logging.getLogger(__name__)

__all__ = ["RecordsApi"]


class RecordsApi:
    """Async client for the records collection.

    Uses an injected httpx.AsyncClient when given (tests pass one with a
    MockTransport), otherwise owns one until aclose().
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "RecordsApi":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _record_url(self, record_id: int) -> str:
        return f"{self._base_url}/{record_id}"

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send one request and require a 2xx answer.

        Raises:
            NetworkFailure: On transport errors and non-2xx status codes
        """
        try:
            response = await self._http_client.request(method, url, params=params, json=json)
        except httpx.HTTPError as e:
            raise NetworkFailure(url, str(e) or type(e).__name__) from e

        if not response.is_success:
            reason = response.reason_phrase
            try:
                body = response.json()
                if isinstance(body, dict) and body.get("error"):
                    reason = str(body["error"])
            except ValueError:
                pass
            raise NetworkFailure(url, reason, status_code=response.status_code)
        return response

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise BadResponseShape(str(response.request.url), f"body is not JSON: {e}") from e

    async def list_records(self, part: Part) -> List[Record]:
        """Fetch the records of one part, in the order the server sends them.

        Raises:
            NetworkFailure: If the request fails
            BadResponseShape: If the body is not an array of records
        """
        response = await self._request("GET", self._base_url, params={"part": part.value})
        data = self._decode_json(response)
        try:
            records = records_from_list(data)
        except (TypeError, KeyError, ValueError) as e:
            raise BadResponseShape(str(response.request.url), f"not a list of records ({e})") from e
        logger.info(f"Fetched {len(records)} record(s) for part '{part.value}'")
        return records

    async def create_record(self, payload: Dict[str, Any]) -> Optional[Record]:
        """Create a record. The server assigns the id.

        Returns:
            The created record if the server echoed one back, else None
        """
        response = await self._request("POST", self._base_url, json=payload)
        logger.info(f"Created record '{payload.get('name')}'")
        return self._optional_record(response)

    async def update_record(self, record_id: int, payload: Dict[str, Any]) -> Optional[Record]:
        """Update a record by id.

        Returns:
            The updated record if the server echoed one back, else None
        """
        response = await self._request("PATCH", self._record_url(record_id), json=payload)
        logger.info(f"Updated record {record_id}")
        return self._optional_record(response)

    async def delete_record(self, record_id: int) -> None:
        """Delete a record by id. Any response body is ignored."""
        await self._request("DELETE", self._record_url(record_id))
        logger.info(f"Deleted record {record_id}")

    @staticmethod
    def _optional_record(response: httpx.Response) -> Optional[Record]:
        # The mutation succeeded either way; the body is informational
        if not response.content:
            return None
        try:
            return record_from_dict(response.json())
        except (TypeError, KeyError, ValueError) as e:
            logger.debug(f"Ignoring unexpected body from {response.request.url}: {e}")
            return None
