"""Integration tests against the fake HTTP backend.

These run RecordsApi over real HTTP to a local Flask server and check
the results independently with requests.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from roster.core.api_client import RecordsApi
from roster.core.models import Part, Record
from roster.core.sync_controller import ErrorKind, SyncController
from roster.core.view import table_view
from tests.fake_backend import RecordStore, run_fake_backend


def fetch_independently(backend_url: str, part: str) -> List[Dict[str, Any]]:
    resp = requests.get(backend_url, params={"part": part}, timeout=5)
    resp.raise_for_status()
    return resp.json()


@pytest.mark.integration
class TestPartSwitching:
    @pytest.mark.asyncio
    async def test_web_ios_web(self, backend_url: str) -> None:
        async with RecordsApi(backend_url) as api:
            controller = SyncController(api, part=Part.WEB)
            await controller.refresh()
            assert controller.cache.records == (Record(id=1, name="Ann", age=22, part=Part.WEB),)

            await controller.select_part(Part.IOS)
            assert table_view(controller).empty

            await controller.select_part(Part.WEB)
            assert [r.to_dict() for r in controller.cache.records] == [
                {"id": 1, "name": "Ann", "age": 22, "part": "web"}
            ]


@pytest.mark.integration
class TestMutationsOverHttp:
    @pytest.mark.asyncio
    async def test_create_on_server_part(self, backend_url: str) -> None:
        async with RecordsApi(backend_url) as api:
            controller = SyncController(api, part=Part.SERVER)
            controller.set_field("name", "Bo")
            controller.set_field("age", "30")
            controller.set_field("part", "server")

            result = await controller.create()

            assert result.success
            assert controller.drafts.form_values() == ("", "", "")
            cached = [r.to_dict() for r in controller.cache.records]

        server_side = fetch_independently(backend_url, "server")
        assert cached == server_side
        assert any(r["name"] == "Bo" and r["age"] == 30 for r in server_side)

    @pytest.mark.asyncio
    async def test_update_and_delete(self, backend_url: str, backend_store: RecordStore) -> None:
        backend_store.create("Cy", 27, "web")

        async with RecordsApi(backend_url) as api:
            controller = SyncController(api, part=Part.WEB)
            await controller.refresh()

            controller.select_for_edit(1)
            controller.set_field("name", "Anna")
            assert (await controller.update()).success
            assert [r.name for r in controller.cache.records] == ["Anna", "Cy"]

            assert (await controller.delete(2)).success
            assert [r.id for r in controller.cache.records] == [1]

        assert [r["id"] for r in fetch_independently(backend_url, "web")] == [1]

    @pytest.mark.asyncio
    async def test_update_of_vanished_record(self, backend_url: str, backend_store: RecordStore) -> None:
        async with RecordsApi(backend_url) as api:
            controller = SyncController(api, part=Part.WEB)
            await controller.refresh()
            controller.select_for_edit(1)
            backend_store.delete(1)

            result = await controller.update()

            assert result.kind is ErrorKind.NETWORK
            assert "404" in result.message
            assert controller.drafts.is_editing


@pytest.mark.integration
class TestFakeBackendLifecycle:
    def test_port_released_on_exit(self) -> None:
        with run_fake_backend(RecordStore()) as url:
            assert requests.get(url, timeout=5).status_code == 200

        with pytest.raises(requests.ConnectionError):
            requests.get(url, timeout=2)


@pytest.mark.integration
class TestUnreachableBackend:
    @pytest.mark.asyncio
    async def test_connection_refused_empties_cache(self) -> None:
        # Port 9 (discard) is essentially never listening on localhost
        async with RecordsApi("http://127.0.0.1:9/users", timeout=2.0) as api:
            controller = SyncController(api)
            result = await controller.refresh()

        assert result.kind is ErrorKind.NETWORK
        assert controller.cache.is_empty
        assert controller.last_error is result
