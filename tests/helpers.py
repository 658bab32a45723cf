"""Test helpers for Roster tests.

ScriptedApi stands in for RecordsApi inside a single event loop, so tests
can count remote calls, inject failures, and hold a fetch open to resolve
requests out of order.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from roster.core.errors import NetworkFailure
from roster.core.models import Part, Record

ANN = Record(id=1, name="Ann", age=22, part=Part.WEB)

BASE_URL = "http://backend.test/users"


class ScriptedApi:
    """In-memory RecordsApi double.

    Attributes:
        records: Server-side records, insertion order
        calls: (operation, argument) for every call received
        gates: Per-part events; a list call for a gated part waits on it
        mutation_gates: Operation name -> event a create/update/delete waits on
        failures: Operation name -> exception to raise on the next call
    """

    def __init__(self, records: Optional[List[Record]] = None) -> None:
        self.records: List[Record] = list(records or [])
        self.calls: List[Tuple[str, Any]] = []
        self.gates: Dict[Part, asyncio.Event] = {}
        self.mutation_gates: Dict[str, asyncio.Event] = {}
        self.failures: Dict[str, Exception] = {}
        self._next_id = max((r.id for r in self.records), default=0) + 1

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def fail_next(self, operation: str, error: Optional[Exception] = None) -> None:
        self.failures[operation] = error or NetworkFailure(BASE_URL, "connection refused")

    def _maybe_fail(self, operation: str) -> None:
        error = self.failures.pop(operation, None)
        if error is not None:
            raise error

    def hold(self, part: Part) -> asyncio.Event:
        """Make list calls for part wait until the returned event is set."""
        gate = asyncio.Event()
        self.gates[part] = gate
        return gate

    def hold_mutation(self, operation: str) -> asyncio.Event:
        """Make the next create/update/delete wait until the returned event is set."""
        gate = asyncio.Event()
        self.mutation_gates[operation] = gate
        return gate

    async def _wait_for_release(self, operation: str) -> None:
        gate = self.mutation_gates.pop(operation, None)
        if gate is not None:
            await gate.wait()

    async def list_records(self, part: Part) -> List[Record]:
        self.calls.append(("list", part))
        gate = self.gates.get(part)
        if gate is not None:
            await gate.wait()
        self._maybe_fail("list")
        return [r for r in self.records if r.part is part]

    async def create_record(self, payload: Dict[str, Any]) -> Record:
        self.calls.append(("create", payload))
        await self._wait_for_release("create")
        self._maybe_fail("create")
        record = Record(
            id=self._next_id,
            name=payload["name"],
            age=payload["age"],
            part=Part(payload["part"]),
        )
        self._next_id += 1
        self.records.append(record)
        return record

    async def update_record(self, record_id: int, payload: Dict[str, Any]) -> Record:
        self.calls.append(("update", record_id))
        await self._wait_for_release("update")
        self._maybe_fail("update")
        for i, record in enumerate(self.records):
            if record.id == record_id:
                updated = replace(
                    record, name=payload["name"], age=payload["age"], part=Part(payload["part"])
                )
                self.records[i] = updated
                return updated
        raise NetworkFailure(f"{BASE_URL}/{record_id}", "Not Found", status_code=404)

    async def delete_record(self, record_id: int) -> None:
        self.calls.append(("delete", record_id))
        await self._wait_for_release("delete")
        self._maybe_fail("delete")
        self.records = [r for r in self.records if r.id != record_id]


def write_config(config_dir: Path, data: Dict[str, Any]) -> Path:
    """Write config.json into config_dir and return its path."""
    config_file = config_dir / "config.json"
    with open(config_file, "w") as f:
        json.dump(data, f, indent=2)
    return config_file
