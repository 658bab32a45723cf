"""Orchestrates remote calls and keeps local state consistent with the backend.

Rules this module enforces:
- The cache is only written from the fetch path, and only with the answer
  to the most recently issued fetch.
- Mutations never touch the cache directly. A successful create, update or
  delete is followed by a full refetch of the selected part.
- Remote errors are caught here, logged, and returned as an OperationResult.
  The latest failure is kept in last_error for the presentation layer.

CRITICAL: This module must have NO UI dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .api_client import RecordsApi
from .errors import BadResponseShape, NetworkFailure
from .models import Part, Record
from .record_cache import RecordCache
from .state import DraftState, Editing, FilterState
from .validation import ValidationError, validate_new_record, validate_part

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Why an operation did not succeed."""

    NONE = "none"
    VALIDATION = "validation"
    NETWORK = "network"
    BAD_RESPONSE = "bad_response"
    NO_EDIT_DRAFT = "no_edit_draft"
    STALE = "stale"


@dataclass
class OperationResult:
    """Result of one controller operation.

    Attributes:
        success: Whether the operation did what was asked
        kind: Error category, ErrorKind.NONE on success
        message: Human-readable description of the failure
        remote_calls: Number of HTTP requests the operation issued
        refresh: Result of the refetch that followed a mutation, if any
    """

    success: bool
    kind: ErrorKind = ErrorKind.NONE
    message: str = ""
    remote_calls: int = 0
    refresh: Optional["OperationResult"] = None

    @classmethod
    def failed(cls, kind: ErrorKind, message: str, remote_calls: int = 0) -> "OperationResult":
        return cls(success=False, kind=kind, message=message, remote_calls=remote_calls)


class SyncController:
    """Single entry point for everything the user can do.

    Attributes:
        api: Remote records API
        cache: Local mirror of the selected part
        filter: Selected part
        drafts: Create/edit form state
        last_error: Most recent failure, cleared by the next success
    """

    def __init__(
        self,
        api: RecordsApi,
        part: Part = Part.WEB,
        cache: Optional[RecordCache] = None,
    ) -> None:
        self.api = api
        self.cache = cache if cache is not None else RecordCache()
        self.filter = FilterState(part)
        self.drafts = DraftState()
        self.last_error: Optional[OperationResult] = None

    @property
    def part(self) -> Part:
        return self.filter.part

    def _record(self, result: OperationResult) -> OperationResult:
        if result.success:
            self.last_error = None
        elif result.kind is not ErrorKind.STALE:
            self.last_error = result
        return result

    def _rejected(self, error: ValidationError) -> OperationResult:
        logger.warning(f"Validation failed: {error.field} - {error.message}")
        return self._record(OperationResult.failed(ErrorKind.VALIDATION, str(error)))

    # ===== Fetch path =====

    async def refresh(self) -> OperationResult:
        """Fetch the selected part and replace the cache with the answer.

        On failure the cache is emptied. If another fetch was issued while
        this one was in flight, its outcome is discarded (kind STALE).
        """
        part = self.filter.part
        ticket = self.cache.begin_fetch(part)
        try:
            records = await self.api.list_records(part)
        except BadResponseShape as e:
            logger.error(f"Fetch of part '{part.value}' returned bad data: {e}")
            if not self.cache.fail(ticket, part):
                return OperationResult.failed(ErrorKind.STALE, "superseded by a newer fetch", 1)
            return self._record(OperationResult.failed(ErrorKind.BAD_RESPONSE, str(e), 1))
        except NetworkFailure as e:
            logger.error(f"Fetch of part '{part.value}' failed: {e}")
            if not self.cache.fail(ticket, part):
                return OperationResult.failed(ErrorKind.STALE, "superseded by a newer fetch", 1)
            return self._record(OperationResult.failed(ErrorKind.NETWORK, str(e), 1))

        if not self.cache.commit(ticket, part, records):
            return OperationResult.failed(ErrorKind.STALE, "superseded by a newer fetch", 1)
        return self._record(OperationResult(success=True, remote_calls=1))

    async def select_part(self, part: Union[Part, str]) -> OperationResult:
        """User picked a part: switch the filter and refetch."""
        try:
            part = validate_part(part)
        except ValidationError as e:
            return self._rejected(e)
        if self.filter.select(part):
            logger.info(f"Selected part '{part.value}'")
        return await self.refresh()

    async def _refresh_after(self, result: OperationResult) -> OperationResult:
        result.refresh = await self.refresh()
        result.remote_calls += result.refresh.remote_calls
        return result

    # ===== Mutations =====

    async def create(self) -> OperationResult:
        """Submit the create-draft.

        Invalid input is rejected before any request is sent. On success the
        draft is cleared and the selected part is refetched; the created
        record itself is never inserted into the cache.
        """
        if self.drafts.is_editing:
            return self._rejected(ValidationError("mode", "finish or cancel the current edit first"))
        draft = self.drafts.create_draft
        try:
            payload = validate_new_record(draft.name, draft.age, draft.part)
        except ValidationError as e:
            return self._rejected(e)

        try:
            await self.api.create_record(payload)
        except NetworkFailure as e:
            logger.error(f"Create failed: {e}")
            return self._record(OperationResult.failed(ErrorKind.NETWORK, str(e), 1))

        self.drafts.reset_create(draft)
        self.last_error = None
        return await self._refresh_after(OperationResult(success=True, remote_calls=1))

    async def update(self) -> OperationResult:
        """Submit the edit-draft. No-op without one."""
        if not isinstance(self.drafts.mode, Editing):
            logger.warning("Update requested with no record being edited")
            return self._record(
                OperationResult.failed(ErrorKind.NO_EDIT_DRAFT, "no record is being edited")
            )
        submitted = self.drafts.mode
        record = submitted.record
        try:
            payload = validate_new_record(record.name, record.age, record.part)
        except ValidationError as e:
            return self._rejected(e)

        try:
            await self.api.update_record(record.id, payload)
        except NetworkFailure as e:
            logger.error(f"Update of record {record.id} failed: {e}")
            return self._record(OperationResult.failed(ErrorKind.NETWORK, str(e), 1))

        self.drafts.finish_edit(submitted)
        self.last_error = None
        return await self._refresh_after(OperationResult(success=True, remote_calls=1))

    async def delete(self, record_id: int) -> OperationResult:
        """Delete a record by id, then refetch. No confirmation step."""
        try:
            await self.api.delete_record(record_id)
        except NetworkFailure as e:
            logger.error(f"Delete of record {record_id} failed: {e}")
            return self._record(OperationResult.failed(ErrorKind.NETWORK, str(e), 1))

        if isinstance(self.drafts.mode, Editing) and self.drafts.mode.record.id == record_id:
            self.drafts.cancel_edit()
        self.last_error = None
        return await self._refresh_after(OperationResult(success=True, remote_calls=1))

    # ===== Form handling (no network) =====

    def select_for_edit(self, record: Union[Record, int]) -> OperationResult:
        """Copy a cached record into the edit-draft."""
        if not isinstance(record, Record):
            found = self.cache.get(record)
            if found is None:
                return self._rejected(ValidationError("id", f"record {record} is not in the list"))
            record = found
        self.drafts.select_for_edit(record)
        return OperationResult(success=True)

    def cancel_edit(self) -> OperationResult:
        """Leave edit mode without saving."""
        if not self.drafts.cancel_edit():
            return OperationResult.failed(ErrorKind.NO_EDIT_DRAFT, "no record is being edited")
        return OperationResult(success=True)

    def set_field(self, field: str, text: str) -> OperationResult:
        """Type into a shared form field (see DraftState.set_field)."""
        try:
            self.drafts.set_field(field, text)
        except ValidationError as e:
            return self._rejected(e)
        return OperationResult(success=True)
